"""Labels applied when team members nominate or approve issues and pull requests."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping

from triageflow.models import Label

NOT_TEAM_MEMBER_MESSAGE = (
    "Nominating and approving issues and pull requests is restricted to members of"
    "the Rust teams."
)


class Style(enum.Enum):
    """The kind of nomination requested."""

    DECISION = "decision"
    BETA = "beta"
    BETA_APPROVE = "beta-approve"


class NominateError(Exception):
    """A nomination that cannot be applied; the message is shown to the user."""


def nominate_labels(
    teams: Mapping[str, str],
    team: str,
    style: Style,
    current_labels: Iterable[Label],
    bot: str,
) -> list[Label]:
    """The labels to add for a nomination.

    ``teams`` maps nominatable team names to their labels. Raises
    ``NominateError`` when the nomination is not allowed.
    """
    if style is Style.BETA_APPROVE:
        if not any(label.name == "beta-nominated" for label in current_labels):
            raise NominateError(
                "This pull request is not beta-nominated, so it cannot be approved yet."
                f"Perhaps try to beta-nominate it by using `@{bot} beta-nominate <team>`?"
            )
        return [Label("beta-accepted")]

    if team not in teams:
        raise NominateError(
            f"This team (`{team}`) cannot be nominated for via this command;"
            "it may need to be added to `triagebot.toml` on the default branch."
        )
    style_label = "I-nominated" if style is Style.DECISION else "beta-nominated"
    return [Label(teams[team]), Label(style_label)]