"""Merge conflict notices on pull requests."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

from triageflow.models import Label

MERGE_CONFLICTS_KEY = "merge-conflicts"

# Seconds to wait before re-checking a PR whose mergeable status is unknown.
UNKNOWN_RESCAN_DELAY = 60


class MergeableState(enum.Enum):
    """GitHub's view of whether a pull request can be merged."""

    MERGEABLE = "MERGEABLE"
    CONFLICTING = "CONFLICTING"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class MergeConflictInfo:
    """The mergeability of one open pull request."""

    number: int
    mergeable: MergeableState
    base_ref_name: str


@dataclass
class MergeConflictState:
    """Stored per PR: the node ID of the latest unresolved warning comment."""

    last_warned_comment: str | None = None


def conflict_message(possibly: str | None) -> str:
    """The comment posted when a PR becomes unmergeable.

    ``possibly`` names the change that probably caused the conflict.
    """
    hint = f" (possibly {possibly})" if possibly is not None else ""
    return (
        ":umbrella: "
        f"The latest upstream changes{hint} made this pull request unmergeable. "
        "Please [resolve the merge conflicts]"
        "(https://rustc-dev-guide.rust-lang.org/git.html#rebasing-and-conflicts)."
    )


def partition_prs(
    prs: Iterable[MergeConflictInfo], branch_name: str
) -> tuple[list[MergeConflictInfo], list[MergeConflictInfo]]:
    """Split the non-mergeable PRs against ``branch_name`` into conflicting and unknown."""
    conflicting: list[MergeConflictInfo] = []
    unknowns: list[MergeConflictInfo] = []
    for pr in prs:
        if pr.mergeable is MergeableState.MERGEABLE or pr.base_ref_name != branch_name:
            continue
        if pr.mergeable is MergeableState.CONFLICTING:
            conflicting.append(pr)
        else:
            unknowns.append(pr)
    return conflicting, unknowns


def label_changes(
    current_labels: Iterable[Label],
    add: Iterable[str],
    remove: Iterable[str],
    unless: Iterable[str],
) -> tuple[list[str], list[Label]]:
    """Labels to remove and to add for a new conflict.

    Nothing changes when the PR already carries any label in ``unless``.
    """
    current = {label.name for label in current_labels}
    if not current.isdisjoint(unless):
        return [], []
    return list(remove), [Label(name) for name in add]