"""Pings interested people when a pull request touches configured paths."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from triageflow.models import FileDiff, Issue


@dataclass
class MentionsPathConfig:
    """Message and people to notify for changes under one path."""

    message: str | None = None
    cc: list[str] = field(default_factory=list)


def _is_under(path: PurePosixPath, prefix: PurePosixPath) -> bool:
    return path.parts[: len(prefix.parts)] == prefix.parts


def _skip_issue(issue: Issue) -> bool:
    return (
        issue.title.startswith("Rollup of")
        or issue.draft
        or "[beta] backport" in issue.title
    )


def paths_to_mention(
    paths_config: Mapping[str, MentionsPathConfig],
    issue: Issue,
    files: Iterable[FileDiff],
) -> list[str]:
    """Configured paths touched by ``files`` whose mention would ping someone else.

    Rollups, draft PRs and beta backports never mention anyone.
    """
    if _skip_issue(issue):
        return []
    file_paths = [PurePosixPath(fd.path) for fd in files]
    result = []
    for path, config in paths_config.items():
        prefix = PurePosixPath(path)
        if not any(_is_under(p, prefix) for p in file_paths):
            continue
        if len(config.cc) == 1 and config.cc[0].lstrip("@") == issue.user.login:
            continue
        result.append(path)
    return result


def mention_message(
    paths_config: Mapping[str, MentionsPathConfig],
    to_mention: Iterable[str],
    already_mentioned: Collection[str],
) -> tuple[str, list[str]]:
    """The comment text for ``to_mention`` and the paths newly mentioned by it.

    Paths in ``already_mentioned`` are skipped. The text is empty when there
    is nothing new to mention.
    """
    seen = set(already_mentioned)
    parts = []
    newly = []
    for path in to_mention:
        if path in seen:
            continue
        config = paths_config[path]
        text = config.message if config.message is not None else f"Some changes occurred in {path}"
        if config.cc:
            text += f"\n\ncc {', '.join(config.cc)}"
        parts.append(text)
        seen.add(path)
        newly.append(path)
    return "\n\n".join(parts), newly