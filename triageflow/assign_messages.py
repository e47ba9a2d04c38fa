"""Welcome and warning messages posted when pull requests are opened or assigned."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from triageflow.models import FileDiff

NEW_USER_WELCOME_MESSAGE = (
    "Thanks for the pull request, and welcome! "
    "The Rust team is excited to review your changes, and you should hear from {who} "
    "some time within the next two weeks."
)

CONTRIBUTION_MESSAGE = (
    "Please see [the contribution "
    "instructions]({contributing_url}) for more information. Namely, in order to ensure the "
    "minimum review times lag, PR authors and assigned reviewers should ensure that the review "
    "label (`S-waiting-on-review` and `S-waiting-on-author`) stays updated, invoking these commands "
    "when appropriate:\n"
    "\n"
    "- `@{bot} author`: the review is finished, PR author should check the comments "
    "and take action accordingly\n"
    "- `@{bot} review`: the author is ready for a review, this PR will be queued again "
    "in the reviewer's queue"
)

WELCOME_WITH_REVIEWER = "@{assignee} (or someone else)"

WELCOME_WITHOUT_REVIEWER = "@Mark-Simulacrum (NB. this repo may be misconfigured)"

RETURNING_USER_WELCOME_MESSAGE = (
    "r? @{assignee}\n"
    "\n"
    "{bot} has assigned @{assignee}.\n"
    "They will have a look at your PR within the next two weeks and either review your PR or "
    "reassign to another reviewer.\n"
    "\n"
    "Use `r?` to explicitly pick a reviewer"
)

RETURNING_USER_WELCOME_MESSAGE_NO_REVIEWER = (
    "@{author}: no appropriate reviewer found, use `r?` to override"
)

ON_VACATION_WARNING = "{username} is on vacation. Please do not assign them to PRs."

NON_DEFAULT_BRANCH = (
    "Pull requests are usually filed against the {default} branch for this repo, "
    "but this one is against {target}. "
    "Please double check that you specified the right target!"
)

NON_DEFAULT_BRANCH_EXCEPTION = (
    "Pull requests targetting the {default} branch are usually filed against the {default} "
    "branch, but this one is against {target}. "
    "Please double check that you specified the right target!"
)

SUBMODULE_WARNING_MSG = "These commits modify **submodules**."

WARNING_HEADER = ":warning: **Warning** :warning:"

_SUBMODULE_RE = re.compile(r"\+Subproject\scommit\s")


@dataclass(frozen=True)
class WarnNonDefaultBranchException:
    """PRs whose title contains ``title`` are expected to target ``branch``."""

    title: str
    branch: str


def is_self_assign(assignee: str, pr_author: str) -> bool:
    """Whether the requested assignee is the PR author (case-insensitive)."""
    return assignee.lower() == pr_author.lower()


def on_vacation_msg(user: str) -> str:
    """Warning that ``user`` is on vacation and should not be assigned."""
    return ON_VACATION_WARNING.replace("{username}", user)


def new_user_welcome(assignee: str | None, contributing_url: str | None, bot: str) -> str:
    """Welcome message for a first-time contributor."""
    if assignee is not None:
        who = WELCOME_WITH_REVIEWER.replace("{assignee}", assignee)
    else:
        who = WELCOME_WITHOUT_REVIEWER
    welcome = NEW_USER_WELCOME_MESSAGE.replace("{who}", who)
    if contributing_url is not None:
        welcome += "\n\n" + CONTRIBUTION_MESSAGE.replace(
            "{contributing_url}", contributing_url
        ).replace("{bot}", bot)
    return welcome


def returning_user_welcome(assignee: str | None, author: str, bot: str) -> str:
    """Message for a returning contributor naming the chosen reviewer."""
    if assignee is not None:
        return RETURNING_USER_WELCOME_MESSAGE.replace("{assignee}", assignee).replace(
            "{bot}", bot
        )
    return RETURNING_USER_WELCOME_MESSAGE_NO_REVIEWER.replace("{author}", author)


def non_default_branch(
    exceptions: Iterable[WarnNonDefaultBranchException],
    title: str,
    target_branch: str,
    default_branch: str,
) -> str | None:
    """A warning if the PR targets a branch other than the expected one."""
    exception = next((e for e in exceptions if e.title in title), None)
    if exception is None:
        expected, template = default_branch, NON_DEFAULT_BRANCH
    else:
        expected, template = exception.branch, NON_DEFAULT_BRANCH_EXCEPTION
    if target_branch == expected:
        return None
    return template.replace("{default}", expected).replace("{target}", target_branch)


def modifies_submodule(diff: Iterable[FileDiff]) -> str | None:
    """A warning if any file diff updates a git submodule."""
    if any(_SUBMODULE_RE.search(file_diff.diff) for file_diff in diff):
        return SUBMODULE_WARNING_MSG
    return None


def warning_comment(warnings: Sequence[str]) -> str | None:
    """Combine warnings into one comment body, or ``None`` when there are none."""
    if not warnings:
        return None
    items = "\n".join(f"* {warning}" for warning in warnings)
    return f"{WARNING_HEADER}\n\n{items}"