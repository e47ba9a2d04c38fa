import random

import pytest

from triageflow.assign_reviewers import (
    AllReviewersFiltered,
    AssignConfig,
    NoReviewer,
    TeamNotFound,
    candidate_reviewers_from_names,
    find_reviewer_from_names,
    find_reviewers_from_diff,
    owner_pattern_matches,
)
from triageflow.models import FileDiff, Issue, User


def make_issue(author="author", assignees=()):
    return Issue(
        number=1,
        title="Some change",
        user=User(author),
        assignees=[User(a) for a in assignees],
        html_url="https://github.com/rust-lang/rust/pull/1",
        is_pr=True,
    )


@pytest.mark.parametrize(
    "pattern,path,expected",
    [
        ("compiler", "compiler/rustc/src/lib.rs", True),
        ("compiler", "src/compiler/x.rs", True),
        ("/compiler", "compiler/x.rs", True),
        ("/compiler", "src/compiler/x.rs", False),
        ("*.md", "docs/README.md", True),
        ("*.md", "docs/README.rs", False),
        ("library/*", "library/core/src/lib.rs", True),
        ("foo/", "foo", False),
        ("foo/", "foo/bar.rs", True),
        ("src/**/tests", "src/a/b/tests/x.rs", True),
        ("!foo", "foo/bar.rs", False),
        ("# comment", "comment", False),
    ],
)
def test_owner_pattern_matches(pattern, path, expected):
    assert owner_pattern_matches(pattern, path) is expected


def test_owner_pattern_invalid():
    with pytest.raises(ValueError):
        owner_pattern_matches("[abc", "abc")


def test_diff_prefers_deepest_pattern():
    config = AssignConfig(
        owners={"compiler": ["@compiler"], "compiler/rustc_parse": ["@parser"]}
    )
    diff = [FileDiff("compiler/rustc_parse/src/lib.rs", "+a\n")]
    assert find_reviewers_from_diff(config, diff) == ["@parser"]


def test_diff_weighted_by_changed_lines():
    config = AssignConfig(owners={"a": ["alice"], "b": ["bob"]})
    diff = [
        FileDiff("a/x.rs", "--- a/x.rs\n+++ b/x.rs\n"),
        FileDiff("b/y.rs", "--- a/y.rs\n+++ b/y.rs\n+new line\n"),
    ]
    assert find_reviewers_from_diff(config, diff) == ["bob"]


def test_diff_tie_returns_sorted_union():
    config = AssignConfig(owners={"a": ["zed", "amy"], "b": ["amy", "bob"]})
    diff = [FileDiff("a/x.rs", "+x\n"), FileDiff("b/y.rs", "-y\n")]
    result = find_reviewers_from_diff(config, diff)
    assert result == sorted(set(result))
    assert set(result) == {"zed", "amy", "bob"}


def test_diff_empty_and_unmatched():
    config = AssignConfig(owners={"a": ["alice"]})
    assert find_reviewers_from_diff(config, []) == []
    assert find_reviewers_from_diff(config, [FileDiff("z/q.rs", "+x\n")]) == []


def test_diff_invalid_pattern():
    config = AssignConfig(owners={"[bad": ["alice"]})
    with pytest.raises(ValueError, match="is not valid"):
        find_reviewers_from_diff(config, [FileDiff("x.rs", "")])


def test_candidates_plain_user_strips_at():
    result = candidate_reviewers_from_names({}, AssignConfig(), make_issue(), ["@octocat"])
    assert result == {"octocat"}


def test_candidates_adhoc_group_nested_and_org_prefix():
    config = AssignConfig(adhoc_groups={"compiler": ["alice", "parser"], "parser": ["bob"]})
    result = candidate_reviewers_from_names({}, config, make_issue(), ["rust-lang/compiler"])
    assert result == {"alice", "bob"}


def test_candidates_team():
    teams = {"libs": ["carol", "dave"]}
    assert candidate_reviewers_from_names(teams, AssignConfig(), make_issue(), ["libs"]) == {
        "carol",
        "dave",
    }
    assert candidate_reviewers_from_names(
        teams, AssignConfig(), make_issue(), ["rust-lang/libs"]
    ) == {"carol", "dave"}


def test_candidates_unknown_team():
    with pytest.raises(TeamNotFound) as info:
        candidate_reviewers_from_names({}, AssignConfig(), make_issue(), ["foo/bar"])
    assert info.value.team == "foo/bar"
    assert str(info.value).startswith("Team or group `foo/bar` not found.")


def test_candidates_filters_author_assignee_vacation():
    teams = {"libs": ["Author", "carol", "dave", "erin"]}
    config = AssignConfig(users_on_vacation={"DAVE"})
    issue = make_issue(author="author", assignees=["erin"])
    assert candidate_reviewers_from_names(teams, config, issue, ["libs"]) == {"carol"}


def test_candidates_all_filtered():
    issue = make_issue(author="author")
    with pytest.raises(AllReviewersFiltered) as info:
        candidate_reviewers_from_names({"solo": ["author"]}, AssignConfig(), issue, ["solo"])
    assert info.value.initial == ["solo"]
    assert info.value.filtered == ["author"]
    assert "`author`" in str(info.value)


def test_candidates_cycle_is_no_reviewer():
    config = AssignConfig(adhoc_groups={"a": ["b"], "b": ["a"]})
    with pytest.raises(NoReviewer) as info:
        candidate_reviewers_from_names({}, config, make_issue(), ["a"])
    assert info.value.initial == ["a"]
    assert "No reviewers could be found from initial request `a`" in str(info.value)


def test_find_reviewer_picks_candidate():
    teams = {"libs": ["carol", "dave"]}
    for seed in range(5):
        chosen = find_reviewer_from_names(
            teams, AssignConfig(), make_issue(), ["libs"], random.Random(seed)
        )
        assert chosen in {"carol", "dave"}


def test_find_reviewer_propagates_error():
    with pytest.raises(TeamNotFound):
        find_reviewer_from_names({}, AssignConfig(), make_issue(), ["x/y"])


def test_is_on_vacation_case_insensitive():
    config = AssignConfig(users_on_vacation={"Jane"})
    assert config.is_on_vacation("jane") is True
    assert config.is_on_vacation("john") is False