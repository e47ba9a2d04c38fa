"""Zulip notifications triggered by label changes and closing or reopening."""

from __future__ import annotations

import enum
import fnmatch
import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from functools import lru_cache

from triageflow.models import Issue, Label

log = logging.getLogger(__name__)

ZULIP_TOPIC_LIMIT = 60


class NotificationType(enum.Enum):
    """What happened to the issue."""

    LABELED = "labeled"
    UNLABELED = "unlabeled"
    CLOSED = "closed"
    REOPENED = "reopened"


@dataclass
class NotifyZulipLabelConfig:
    """Notification settings for one label."""

    zulip_stream: int
    topic: str
    messages_on_add: list[str] = field(default_factory=list)
    messages_on_remove: list[str] = field(default_factory=list)
    messages_on_close: list[str] = field(default_factory=list)
    messages_on_reopen: list[str] = field(default_factory=list)
    required_labels: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class NotifyZulipInput:
    """A notification to send, and the label that triggered it."""

    notification_type: NotificationType
    label: Label


def _messages(config: NotifyZulipLabelConfig, kind: NotificationType) -> list[str]:
    return {
        NotificationType.LABELED: config.messages_on_add,
        NotificationType.UNLABELED: config.messages_on_remove,
        NotificationType.CLOSED: config.messages_on_close,
        NotificationType.REOPENED: config.messages_on_reopen,
    }[kind]


@lru_cache(maxsize=256)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a glob pattern, rejecting unterminated character classes."""
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


def has_all_required_labels(issue: Issue, config: NotifyZulipLabelConfig) -> bool:
    """Whether every required label pattern matches some label on the issue."""
    for required in config.required_labels:
        try:
            pattern = _compile_glob(required)
        except ValueError as err:
            log.error("Invalid glob pattern: %s", err)
            continue
        if not any(pattern.match(label.name) for label in issue.labels):
            return False
    return True


def parse_label_change(
    action: NotificationType,
    issue: Issue,
    label: Label,
    config: NotifyZulipLabelConfig,
) -> NotifyZulipInput | None:
    """Build the notification for a label being added or removed, if any."""
    if not has_all_required_labels(issue, config):
        return None
    if action in (NotificationType.LABELED, NotificationType.UNLABELED) and _messages(
        config, action
    ):
        return NotifyZulipInput(action, label)
    return None


def parse_close_reopen(
    action: NotificationType,
    issue: Issue,
    configs: Mapping[str, NotifyZulipLabelConfig],
) -> list[NotifyZulipInput]:
    """Build notifications for each configured label when an issue closes or reopens."""
    inputs = []
    for label in issue.labels:
        config = configs.get(label.name)
        if config is None or not has_all_required_labels(issue, config):
            continue
        if action in (NotificationType.CLOSED, NotificationType.REOPENED) and _messages(
            config, action
        ):
            inputs.append(NotifyZulipInput(action, label))
    return inputs


def replace_team_to_be_nominated(labels: Iterable[Label], msg: str) -> str:
    """Fill ``{team}`` from the issue's single team label, or prefer ``compiler``."""
    teams = [label.name[2:] for label in labels if label.name.startswith("T-")]
    if len(teams) == 1:
        return msg.replace("{team}", teams[0])
    if "compiler" in teams:
        return msg.replace("{team}", "compiler")
    return msg


def truncate_topic(topic: str) -> str:
    """Shorten a topic to Zulip's length limit, ending it with an ellipsis."""
    if len(topic) > ZULIP_TOPIC_LIMIT:
        return topic[: ZULIP_TOPIC_LIMIT - 1] + "…"
    return topic


def _fill(template: str, issue: Issue) -> str:
    return template.replace("{number}", str(issue.number)).replace("{title}", issue.title)


def render_topic(config: NotifyZulipLabelConfig, issue: Issue) -> str:
    """The Zulip topic for a notification about ``issue``."""
    return truncate_topic(_fill(config.topic, issue))


def render_messages(
    config: NotifyZulipLabelConfig,
    issue: Issue,
    notification_type: NotificationType,
) -> list[str]:
    """The Zulip messages to post for ``notification_type``."""
    labels: Sequence[Label] = issue.labels
    return [
        replace_team_to_be_nominated(labels, _fill(msg, issue))
        for msg in _messages(config, notification_type)
    ]