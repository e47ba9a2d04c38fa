"""Building the periodic pull request that updates documentation submodules."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

WORK_REPO = "rustbot/rust"
DEST_REPO = "rust-lang/rust"
BRANCH_NAME = "docs-update"
TITLE = "Update books"

SUBMODULES = (
    "src/doc/book",
    "src/doc/edition-guide",
    "src/doc/embedded-book",
    "src/doc/nomicon",
    "src/doc/reference",
    "src/doc/rust-by-example",
    "src/doc/rustc-dev-guide",
)

_SCHEDULE_BASE = date(2015, 12, 10)


@dataclass(frozen=True)
class RecentCommit:
    """A commit in a submodule's history."""

    title: str
    committed_date: str
    pr_num: int | None = None


@dataclass(frozen=True)
class Update:
    """A submodule moved to a new commit, with the PR text describing it."""

    path: str
    new_hash: str
    pr_body: str


def is_update_week(today: date) -> bool:
    """Whether the job runs this week: every other week counted from the base date."""
    days = (today - _SCHEDULE_BASE).days
    weeks = abs(days) // 7
    return weeks % 2 == 0


def generate_pr_body(
    full_name: str, oldest: str, newest: str, commits: Sequence[RecentCommit]
) -> str:
    """The PR description section for one submodule.

    Raises ``ValueError`` if ``commits`` is empty.
    """
    if not commits:
        raise ValueError(
            f"unexpected empty set of commits for {full_name} oldest={oldest} newest={newest}"
        )
    lines = [
        f"## {full_name}\n",
        "\n",
        f"{len(commits)} commits in {oldest}..{newest}\n",
        f"{commits[0].committed_date} to {commits[-1].committed_date}\n",
        "\n",
    ]
    for commit in commits:
        suffix = f" ({full_name}#{commit.pr_num})" if commit.pr_num is not None else ""
        lines.append(f"- {commit.title}{suffix}\n")
    return "".join(lines)


def create_pr_body(updates: Iterable[Update]) -> str:
    """The full PR description from all submodule updates."""
    return "".join(f"{update.pr_body}\n" for update in updates)


def pr_head() -> str:
    """The ``owner:branch`` head of the update PR."""
    owner = WORK_REPO.split("/")[0]
    return f"{owner}:{BRANCH_NAME}"