"""Pinging configured teams from a comment."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

NOT_TEAM_MEMBER_MESSAGE = "Only Rust team members can ping teams."


@dataclass(frozen=True)
class GithubTeam:
    """A GitHub team synchronised from the team repository."""

    org: str
    name: str


def ping_targets(
    github_teams: Iterable[GithubTeam] | None,
    members: Iterable[str],
    organization: str,
) -> list[str]:
    """The ``@`` mentions for a team.

    If the team has GitHub teams, those within ``organization`` are pinged;
    otherwise each member login is pinged individually.
    """
    if github_teams is not None:
        return [f"@{team.org}/{team.name}" for team in github_teams if team.org == organization]
    return [f"@{member}" for member in members]


def ping_comment(message: str, users: Sequence[str]) -> str:
    """The comment that pings ``users`` after the configured ``message``."""
    ping_msg = f"cc {' '.join(users)}" if users else "no known users to ping?"
    return f"{message}\n\n{ping_msg}"