"""Reviewer selection for pull requests from `r?` names and changed files."""

from __future__ import annotations

import random
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from urllib.parse import urlparse

from triageflow.models import FileDiff, Issue


@dataclass
class AssignConfig:
    """The `[assign]` section of the repository configuration."""

    owners: dict[str, list[str]] = field(default_factory=dict)
    adhoc_groups: dict[str, list[str]] = field(default_factory=dict)
    users_on_vacation: set[str] = field(default_factory=set)
    contributing_url: str | None = None

    def is_on_vacation(self, user: str) -> bool:
        """Whether ``user`` is listed as on vacation (case-insensitive)."""
        wanted = user.lower()
        return any(name.lower() == wanted for name in self.users_on_vacation)


class FindReviewerError(Exception):
    """No reviewer could be chosen from the requested names."""


class TeamNotFound(FindReviewerError):
    """A name that looks like a team or group is not known."""

    def __init__(self, team: str) -> None:
        super().__init__(team)
        self.team = team

    def __str__(self) -> str:
        return (
            f"Team or group `{self.team}` not found.\n"
            "\n"
            "rust-lang team names can be found at "
            "https://github.com/rust-lang/team/tree/master/teams.\n"
            "Reviewer group names can be found in `triagebot.toml` in this repo."
        )


class NoReviewer(FindReviewerError):
    """Expansion of the names produced nobody, e.g. because of a cyclic group."""

    def __init__(self, initial: Sequence[str]) -> None:
        super().__init__(list(initial))
        self.initial = list(initial)

    def __str__(self) -> str:
        return (
            f"No reviewers could be found from initial request `{','.join(self.initial)}`\n"
            "This repo may be misconfigured.\n"
            "Use `r?` to specify someone else to assign."
        )


class AllReviewersFiltered(FindReviewerError):
    """Every candidate was excluded (author, already assigned or on vacation)."""

    def __init__(self, initial: Sequence[str], filtered: Sequence[str]) -> None:
        super().__init__(list(initial), list(filtered))
        self.initial = list(initial)
        self.filtered = list(filtered)

    def __str__(self) -> str:
        return (
            f"Could not assign reviewer from: `{','.join(self.initial)}`.\n"
            f"User(s) `{','.join(self.filtered)}` are either the PR author, "
            "already assigned, or on vacation, "
            "and there are no other candidates.\n"
            "Use `r?` to specify someone else to assign."
        )


@dataclass(frozen=True)
class _OwnerPattern:
    regex: re.Pattern[str] | None
    negated: bool
    dir_only: bool


def _glob_to_regex(glob: str) -> str:
    out = []
    i = 0
    n = len(glob)
    while i < n:
        at_segment_start = i == 0 or glob[i - 1] == "/"
        if glob.startswith("**", i) and at_segment_start and (i + 2 == n or glob[i + 2] == "/"):
            if i + 2 == n:
                out.append(".*")
                i += 2
            else:
                out.append("(?:.*/)?")
                i += 3
            continue
        c = glob[i]
        if c == "*":
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            j = i + 1
            negate = j < n and glob[j] in "!^"
            if negate:
                j += 1
            start = j
            if j < n and glob[j] == "]":
                j += 1
            close = glob.find("]", j)
            if close < 0:
                raise ValueError(f"unclosed character class in {glob!r}")
            body = glob[start:close].replace("\\", "\\\\")
            out.append("[" + ("^" if negate else "") + body + "]")
            i = close + 1
            continue
        elif c == "\\":
            if i + 1 >= n:
                raise ValueError(f"dangling '\\' in {glob!r}")
            out.append(re.escape(glob[i + 1]))
            i += 2
            continue
        else:
            out.append(re.escape(c))
        i += 1
    return "".join(out)


@lru_cache(maxsize=512)
def _compile_owner_pattern(pattern: str) -> _OwnerPattern:
    line = pattern
    while line.endswith(" ") and not line.endswith("\\ "):
        line = line[:-1]
    if not line or line.startswith("#"):
        return _OwnerPattern(None, False, False)
    negated = line.startswith("!")
    if negated:
        line = line[1:]
    dir_only = line.endswith("/")
    if dir_only:
        line = line[:-1]
    anchored = "/" in line
    line = line.removeprefix("/")
    if not line:
        return _OwnerPattern(None, negated, dir_only)
    body = _glob_to_regex(line)
    if not anchored:
        body = "(?:.*/)?" + body
    return _OwnerPattern(re.compile(body), negated, dir_only)


def owner_pattern_matches(pattern: str, path: str) -> bool:
    """Whether a gitignore-style owners ``pattern`` covers ``path`` or a parent.

    Raises ``ValueError`` if the pattern is not a valid glob.
    """
    compiled = _compile_owner_pattern(pattern)
    if compiled.regex is None or compiled.negated:
        return False
    parts = [part for part in path.strip("/").split("/") if part]
    if not parts:
        return False
    for depth in range(len(parts), 0, -1):
        is_dir = depth < len(parts)
        if compiled.dir_only and not is_dir:
            continue
        if compiled.regex.fullmatch("/".join(parts[:depth])):
            return True
    return False


def _is_changed_line(line: str) -> bool:
    return (line.startswith("+") and not line.startswith("+++")) or (
        line.startswith("-") and not line.startswith("---")
    )


def find_reviewers_from_diff(config: AssignConfig, diff: Iterable[FileDiff]) -> list[str]:
    """Candidate reviewers from the owners whose paths see the most changes.

    The most deeply nested matching owner patterns of each file are weighted
    by the number of changed lines. Returns a sorted, deduplicated list,
    possibly empty. Raises ``ValueError`` for an invalid owner pattern.
    """
    counts: dict[str, int] = {}
    for file_diff in diff:
        depths: dict[str, int] = {}
        for owner_pattern in config.owners:
            try:
                matched = owner_pattern_matches(owner_pattern, file_diff.path)
            except ValueError as err:
                raise ValueError(f"owner file pattern `{owner_pattern}` is not valid") from err
            if matched:
                depths[owner_pattern] = len(owner_pattern.split("/"))
        deepest = max(depths.values(), default=0)
        longest = [p for p, depth in depths.items() if depth == deepest]
        changed = sum(1 for line in file_diff.diff.splitlines() if _is_changed_line(line))
        for owner_pattern in longest:
            counts[owner_pattern] = counts.get(owner_pattern, 0) + 1 + changed
    top = max(counts.values(), default=0)
    return sorted(
        {
            owner
            for owner_pattern, count in counts.items()
            if count == top
            for owner in config.owners[owner_pattern]
        }
    )


def _organization(issue: Issue) -> str:
    parts = [part for part in urlparse(issue.html_url).path.split("/") if part]
    return parts[0] if parts else ""


def candidate_reviewers_from_names(
    teams: Mapping[str, Iterable[str]],
    config: AssignConfig,
    issue: Issue,
    names: Sequence[str],
) -> set[str]:
    """Expand users, ad-hoc groups and teams into a set of eligible usernames.

    ``teams`` maps team names to the GitHub logins of their members. The PR
    author, current assignees and users on vacation are excluded.
    """
    candidates: set[str] = set()
    seen: set[str] = set()
    pending = list(names)
    filtered: list[str] = []
    org = _organization(issue)
    org_prefix = f"{org}/" if org else None
    author = issue.user.login.lower()
    assigned = {assignee.login.lower() for assignee in issue.assignees}

    def allowed(name: str) -> bool:
        lower = name.lower()
        ok = lower != author and not config.is_on_vacation(name) and lower not in assigned
        if not ok:
            filtered.append(name)
        return ok

    while pending:
        group_or_user = pending.pop().removeprefix("@")

        maybe_group = group_or_user.removeprefix(org_prefix) if org_prefix else group_or_user
        members = config.adhoc_groups.get(maybe_group)
        if members is not None:
            if maybe_group not in seen:
                seen.add(maybe_group)
                pending.extend(member for member in members if allowed(member))
            continue

        team = teams.get(group_or_user.removeprefix("rust-lang/"))
        if team is not None:
            candidates.update(member for member in team if allowed(member))
            continue

        if "/" in group_or_user:
            raise TeamNotFound(group_or_user)

        if allowed(group_or_user):
            candidates.add(group_or_user)

    if not candidates:
        if filtered:
            raise AllReviewersFiltered(names, filtered)
        raise NoReviewer(names)
    return candidates


def find_reviewer_from_names(
    teams: Mapping[str, Iterable[str]],
    config: AssignConfig,
    issue: Issue,
    names: Sequence[str],
    rng: random.Random | None = None,
) -> str:
    """Pick one reviewer at random from the candidates for ``names``."""
    candidates = sorted(candidate_reviewers_from_names(teams, config, issue, names))
    return (rng or random).choice(candidates)