"""Major change proposals: announcing, seconding, accepting and renaming."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from triageflow.models import Issue

ZULIP_TOPIC_LIMIT = 60


class Invocation(enum.Enum):
    """What an issue event means for a major change proposal."""

    NEW_PROPOSAL = "new_proposal"
    ACCEPTED_PROPOSAL = "accepted_proposal"
    RENAME = "rename"


@dataclass
class MajorChangeConfig:
    """The `[major-change]` section of the repository configuration."""

    enabling_label: str
    accept_label: str
    second_label: str
    meeting_label: str
    zulip_stream: int
    zulip_ping: str
    open_extra_text: str | None = None


def parse_invocation(
    config: MajorChangeConfig,
    action: str,
    issue: Issue,
    applied_label: str | None = None,
    previous_title: str | None = None,
) -> Invocation | None:
    """Classify an issue event.

    ``action`` is the webhook action name (``"opened"``, ``"edited"``,
    ``"labeled"``, ``"reopened"`` and so on). ``applied_label`` is the label
    added by a ``"labeled"`` event and ``previous_title`` the old title of an
    ``"edited"`` event that changed it.
    """
    if action == "edited" and previous_title is not None:
        # Renamed issues without the enabling label are ignored so that no
        # "feature not enabled" warning is produced.
        if issue.has_label(config.enabling_label):
            return Invocation.RENAME
        return None

    if action == "labeled" and applied_label == config.accept_label:
        return Invocation.ACCEPTED_PROPOSAL

    # Opening an issue with a label triggers both "opened" and "labeled";
    # only the label event announces a fresh proposal.
    if (action == "reopened" and issue.has_label(config.enabling_label)) or (
        action == "labeled" and applied_label == config.enabling_label
    ):
        return Invocation.NEW_PROPOSAL

    return None


def zulip_topic(title: str, topic_ref: str) -> str:
    """Join an issue title and its reference, keeping within Zulip's 60 characters."""
    keep = ZULIP_TOPIC_LIMIT - len(topic_ref) - 2
    if keep < 0:
        raise ValueError(f"topic reference {topic_ref!r} is too long for a Zulip topic")
    if len(title) > keep + 1:
        return f"{title[:keep]}… {topic_ref}"
    return f"{title} {topic_ref}"


def new_proposal_message(title: str, number: int, url: str) -> str:
    """Zulip announcement of a new proposal."""
    return (
        f"A new proposal has been announced: [{title} #{number}]({url}). It will be "
        "announced at the next meeting to try and draw attention to it, "
        "but usually MCPs are not discussed during triage meetings. If "
        "you think this would benefit from discussion amongst the "
        "team, consider proposing a design meeting."
    )


def accepted_message(number: int, url: str) -> str:
    """Zulip message for an accepted proposal."""
    return f"This proposal has been accepted: [#{number}]({url})."


def seconded_message(zulip_ping: str, number: int, url: str) -> str:
    """Zulip message for a seconded proposal."""
    return (
        f"@*{zulip_ping}*: Proposal [#{number}]({url}) has been seconded, "
        "and will be approved in 10 days if no objections are raised."
    )


def new_proposal_comment(open_extra_text: str | None, topic_url: str) -> str:
    """The comment posted on a newly opened proposal, pointing at its Zulip topic."""
    extra = open_extra_text or ""
    return (
        "This issue is not meant to be used for technical discussion. "
        "There is a Zulip [stream] for that. Use this issue to leave "
        "procedural comments, such as volunteering to review, indicating that you "
        "second the proposal (or third, etc), or raising a concern that you would "
        "like to be addressed. "
        "\n\n "
        "Concerns or objections to the proposal should be discussed on Zulip and formally "
        "registered here by adding a comment with the following syntax: "
        "\n "
        "``` "
        "\n "
        "@rfcbot concern reason-for-concern "
        "\n "
        "<description of the concern> "
        "\n "
        "``` "
        "\n "
        "Concerns can be lifted with: "
        "\n "
        "``` "
        "\n "
        "@rfcbot resolve reason-for-concern "
        "\n "
        "``` "
        "\n\n "
        "See documentation at [https://forge.rust-lang.org]"
        "(https://forge.rust-lang.org/compiler/mcp.html"
        "#what-kinds-of-comments-should-go-on-the-tracking-issue-in-compiler-team-repo) "
        f"\n\n{extra} "
        f"\n\n[stream]: {topic_url}"
    )