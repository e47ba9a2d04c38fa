"""Labels applied automatically on new PRs, pushes and label changes."""

from __future__ import annotations

import fnmatch
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from triageflow.models import FileDiff, Issue, Label

log = logging.getLogger(__name__)


@dataclass
class AutolabelLabelConfig:
    """When one label should be added automatically."""

    trigger_labels: list[str] = field(default_factory=list)
    exclude_labels: list[str] = field(default_factory=list)
    trigger_files: list[str] = field(default_factory=list)
    new_pr: bool = False
    new_issue: bool = False


@dataclass
class AutolabelConfig:
    """The `[autolabel]` section: label name to its settings."""

    labels: dict[str, AutolabelLabelConfig] = field(default_factory=dict)

    def get_by_trigger(self, label: str) -> list[tuple[str, AutolabelLabelConfig]]:
        """Labels whose trigger labels include ``label``."""
        return [(name, cfg) for name, cfg in self.labels.items() if label in cfg.trigger_labels]


def _compile_glob(pattern: str) -> re.Pattern[str]:
    i = 0
    while i < len(pattern):
        if pattern[i] == "[":
            j = i + 1
            if j < len(pattern) and pattern[j] == "!":
                j += 1
            if j < len(pattern) and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close < 0:
                raise ValueError(f"invalid range pattern in {pattern!r}")
            i = close + 1
        else:
            i += 1
    return re.compile(fnmatch.translate(pattern))


def _is_excluded(cfg: AutolabelLabelConfig, issue: Issue) -> bool:
    patterns = []
    for raw in cfg.exclude_labels:
        try:
            patterns.append(_compile_glob(raw))
        except ValueError as err:
            log.error("Invalid glob pattern: %s", err)
    return any(p.match(label.name) for label in issue.labels for p in patterns)


def labels_on_open_or_sync(
    config: AutolabelConfig,
    action: str,
    issue: Issue,
    files: Iterable[FileDiff] | None,
) -> list[Label]:
    """Labels to add when a PR or issue is opened or a PR is pushed to.

    ``action`` is ``"opened"`` or ``"synchronize"``; other actions add nothing.
    ``files`` is the PR's diff, or ``None`` when there is none.
    """
    if action not in ("opened", "synchronize"):
        return []
    file_list = list(files) if files is not None else None
    added: list[Label] = []
    for name, cfg in config.labels.items():
        if _is_excluded(cfg, issue):
            continue
        if file_list is not None:
            if any(fd.path.startswith(t) for t in cfg.trigger_files for fd in file_list):
                added.append(Label(name))
            if cfg.new_pr and action == "opened":
                added.append(Label(name))
        if not issue.is_pr and cfg.new_issue and action == "opened":
            added.append(Label(name))
    return added


def labels_on_labeled(config: AutolabelConfig, issue: Issue, applied_label: str) -> list[Label]:
    """Labels to add after ``applied_label`` was put on the issue."""
    return [
        Label(name)
        for name, cfg in config.get_by_trigger(applied_label)
        if not _is_excluded(cfg, issue)
    ]