"""Plain data types describing GitHub issues, pull requests and their parts."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Label:
    """A label attached to an issue or pull request."""

    name: str


@dataclass(frozen=True)
class User:
    """A GitHub account."""

    login: str
    id: int = 0


@dataclass(frozen=True)
class FileDiff:
    """The diff of a single file in a pull request."""

    path: str
    diff: str = ""


@dataclass
class Issue:
    """An issue or pull request as seen in a webhook event."""

    number: int
    title: str
    user: User
    body: str = ""
    labels: list[Label] = field(default_factory=list)
    assignees: list[User] = field(default_factory=list)
    html_url: str = ""
    is_pr: bool = False
    draft: bool = False
    is_open: bool = True

    def contains_assignee(self, login: str) -> bool:
        """Whether ``login`` is among the assignees (case-insensitive)."""
        wanted = login.lower()
        return any(assignee.login.lower() == wanted for assignee in self.assignees)

    def has_label(self, name: str) -> bool:
        """Whether a label with exactly this name is applied."""
        return any(label.name == name for label in self.labels)