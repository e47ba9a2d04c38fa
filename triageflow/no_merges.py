"""Notices about merge commits in pull requests."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from triageflow.models import Issue

_CHECKED_ACTIONS = frozenset({"opened", "synchronize", "ready_for_review"})


@dataclass
class NoMergesState:
    """What has already been reported for a pull request."""

    mentioned_merge_commits: set[str] = field(default_factory=set)
    no_merge_comments: list[str] = field(default_factory=list)
    added_labels: list[str] = field(default_factory=list)


def default_message(repository_name: str, default_branch: str) -> str:
    """The standard explanation of the no-merge policy with rebase instructions."""
    return (
        "\n"
        "There are merge commits (commits with multiple parents) in your changes. We have a "
        "[no merge policy](https://rustc-dev-guide.rust-lang.org/git.html#no-merge-policy) "
        "so these commits will need to be removed for this pull request to be merged.\n"
        "\n"
        "You can start a rebase with the following commands:\n"
        "```shell-session\n"
        "$ # rebase\n"
        f"$ git pull --rebase https://github.com/{repository_name}.git {default_branch}\n"
        "$ git push --force-with-lease\n"
        "```\n"
        "\n"
    )


def should_check(action: str, issue: Issue, exclude_titles: Iterable[str]) -> bool:
    """Whether an event on ``issue`` calls for a merge commit check.

    Only opening, pushing to or readying a PR counts; rollups, drafts and
    titles containing any of ``exclude_titles`` are skipped.
    """
    if action not in _CHECKED_ACTIONS:
        return False
    if issue.title.startswith("Rollup of") or issue.draft:
        return False
    return not any(segment in issue.title for segment in exclude_titles)


def merge_commits(commits: Iterable[object]) -> set[str]:
    """Hashes of the commits with more than one parent.

    Each commit has a ``sha`` and a sequence of ``parents``.
    """
    return {commit.sha for commit in commits if len(commit.parents) > 1}


def build_message(base_message: str, first_time: bool, commits: Iterable[str]) -> str:
    """Append the list of merge commits to ``base_message``."""
    since = "" if first_time else " (since this message was last posted)"
    lines = [f"The following commits are merge commits{since}:\n"]
    lines.extend(f"- {commit}\n" for commit in commits)
    return base_message + "".join(lines)