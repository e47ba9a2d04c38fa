"""Helpers for milestoning merged pull requests with the release they land in."""

from __future__ import annotations

import re

_SUBPROJECT_RE = re.compile(r"Subproject commit ([0-9a-f]+)")
_MERGE_RE = re.compile(r"(?:Auto merge of|Merge pull request) #([0-9]+)|\(#([0-9]+)\)\Z")


def parse_submodule_range(diff: str) -> tuple[str, str]:
    """The old and new commit hashes of a submodule update diff.

    Raises ``ValueError`` unless the diff names exactly two commits.
    """
    hashes = _SUBPROJECT_RE.findall(diff)
    if len(hashes) != 2:
        raise ValueError(f"expected two submodule commits in diff, found {len(hashes)}")
    return hashes[0], hashes[1]


def merged_pr_number(message: str) -> int | None:
    """The PR number a merge commit message's first line refers to, if any."""
    lines = message.splitlines()
    first = lines[0] if lines else ""
    match = _MERGE_RE.search(first)
    if match is None:
        return None
    return int(match.group(1) or match.group(2))


def is_plausible_version(version: str) -> bool:
    """Whether a version string read from the repository looks usable."""
    return version.startswith("1.") or len(version) >= 8