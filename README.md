# triageflow

This package holds the decision logic for a triage bot that manages issues and
pull requests. Each module takes plain data, such as issues, labels, diffs and
configuration. It returns what the bot should do: which reviewer to pick, which
labels to add, who to mention and what text to post.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Modules

- `triageflow.models` defines the dataclasses `Label`, `User`, `FileDiff` and
  `Issue`. `Issue.contains_assignee` compares logins without regard to case.
  `Issue.has_label` needs an exact label name.
- `triageflow.assign_reviewers` holds `AssignConfig`, which covers owners,
  ad-hoc groups, users on vacation and the contributing URL. It also has:
  - `owner_pattern_matches`, which applies gitignore-style owner patterns.
  - `find_reviewers_from_diff`, which weights the most deeply nested matching
    owners by the number of changed lines.
  - `candidate_reviewers_from_names`, which expands users, groups and teams.
  - `find_reviewer_from_names`, which picks one candidate at random and takes
    an optional `random.Random`.

  When no reviewer can be found, these functions raise a subclass of
  `FindReviewerError`: `TeamNotFound`, `NoReviewer` or `AllReviewersFiltered`.
- `triageflow.assign_messages` has:
  - `is_self_assign` and `on_vacation_msg`.
  - The welcome messages `new_user_welcome` and `returning_user_welcome`.
  - The warnings `non_default_branch`, which uses
    `WarnNonDefaultBranchException`, and `modifies_submodule`.
  - `warning_comment`, which joins the warnings into a single comment.
- `triageflow.autolabel` has `AutolabelConfig` and `AutolabelLabelConfig`, with
  `AutolabelConfig.get_by_trigger`. It also has `labels_on_open_or_sync` and
  `labels_on_labeled`, which leave out any label whose exclude globs match a
  label already on the issue.
- `triageflow.mentions` has `MentionsPathConfig` and `paths_to_mention`. It
  never mentions anyone for rollups, drafts or beta backports. Its
  `mention_message` returns the comment text and the paths that comment newly
  mentions.
- `triageflow.no_merges` has `NoMergesState`, `default_message`,
  `should_check`, `merge_commits` and `build_message`.
- `triageflow.merge_conflicts` has `MergeableState`, `MergeConflictInfo`,
  `MergeConflictState`, `conflict_message`, `partition_prs` and
  `label_changes`.
- `triageflow.major_change` has `Invocation`, `MajorChangeConfig` and
  `parse_invocation`. It also has `zulip_topic`, which truncates to 60
  characters, and the message builders `new_proposal_message`,
  `accepted_message`, `seconded_message` and `new_proposal_comment`.
- `triageflow.notify_zulip` has:
  - `NotificationType`, `NotifyZulipLabelConfig` and `NotifyZulipInput`.
  - `has_all_required_labels`, `parse_label_change` and `parse_close_reopen`.
  - `replace_team_to_be_nominated`, `truncate_topic`, `render_topic` and
    `render_messages`.
- `triageflow.note` has `NoteDataEntry` and `NoteData`. `NoteData` offers
  `add_summary`, `get_url_from_title`, `remove_by_title` and `to_markdown`
  for the "Summary Notes" section.
- `triageflow.nominate` has `nominate_labels`, which takes a `Style` and
  raises `NominateError` when the nomination is not allowed.
- `triageflow.ping` has `GithubTeam`, `ping_targets` and `ping_comment`.
- `triageflow.milestone` has `parse_submodule_range`, `merged_pr_number` and
  `is_plausible_version`.
- `triageflow.docs_update` has `RecentCommit`, `Update`, `is_update_week`,
  `generate_pr_body`, `create_pr_body` and `pr_head`.

## Example

```python
import random

from triageflow.assign_reviewers import AssignConfig, find_reviewer_from_names
from triageflow.models import Issue, User

config = AssignConfig(adhoc_groups={"compiler": ["@alice", "@bob"]})
issue = Issue(number=1, title="Fix parser", user=User(login="carol", id=3))
reviewer = find_reviewer_from_names({}, config, issue, ["compiler"], random.Random(0))
```

## What this package does not do

triageflow only makes decisions and builds text. You supply the surrounding
parts yourself. In particular, it does not:

- Receive webhooks or run as a server.
- Call the GitHub or Zulip APIs.
- Parse bot commands out of comment bodies.
- Store state such as `NoMergesState` or `MergeConflictState`.
- Run scheduled jobs.
- Collect per-handler errors into a report for the user.