from triageflow.autolabel import (
    AutolabelConfig,
    AutolabelLabelConfig,
    labels_on_labeled,
    labels_on_open_or_sync,
)
from triageflow.models import FileDiff, Issue, Label, User


def make_issue(labels=(), is_pr=True):
    return Issue(number=1, title="t", user=User("alice"), labels=list(labels), is_pr=is_pr)


def test_get_by_trigger():
    a = AutolabelLabelConfig(trigger_labels=["I-ICE"])
    b = AutolabelLabelConfig(trigger_labels=["other"])
    config = AutolabelConfig({"A-x": a, "A-y": b})
    assert config.get_by_trigger("I-ICE") == [("A-x", a)]


def test_trigger_files_prefix_match():
    config = AutolabelConfig({"A-docs": AutolabelLabelConfig(trigger_files=["src/doc"])})
    files = [FileDiff("src/doc/book/x.md")]
    assert labels_on_open_or_sync(config, "synchronize", make_issue(), files) == [Label("A-docs")]


def test_no_match_no_labels():
    config = AutolabelConfig({"A-docs": AutolabelLabelConfig(trigger_files=["src/doc"])})
    assert labels_on_open_or_sync(config, "opened", make_issue(), [FileDiff("lib.rs")]) == []


def test_new_pr_only_on_open():
    config = AutolabelConfig({"S-new": AutolabelLabelConfig(new_pr=True)})
    assert labels_on_open_or_sync(config, "opened", make_issue(), []) == [Label("S-new")]
    assert labels_on_open_or_sync(config, "synchronize", make_issue(), []) == []


def test_new_issue_for_non_pr():
    config = AutolabelConfig({"needs-triage": AutolabelLabelConfig(new_issue=True)})
    issue = make_issue(is_pr=False)
    assert labels_on_open_or_sync(config, "opened", issue, None) == [Label("needs-triage")]


def test_other_actions_ignored():
    config = AutolabelConfig({"S-new": AutolabelLabelConfig(new_pr=True)})
    assert labels_on_open_or_sync(config, "closed", make_issue(), []) == []


def test_exclude_glob_blocks_label():
    cfg = AutolabelLabelConfig(new_pr=True, exclude_labels=["T-*"])
    config = AutolabelConfig({"S-new": cfg})
    issue = make_issue(labels=[Label("T-compiler")])
    assert labels_on_open_or_sync(config, "opened", issue, []) == []


def test_invalid_exclude_glob_is_ignored():
    cfg = AutolabelLabelConfig(new_pr=True, exclude_labels=["[T-"])
    config = AutolabelConfig({"S-new": cfg})
    issue = make_issue(labels=[Label("[T-")])
    assert labels_on_open_or_sync(config, "opened", issue, []) == [Label("S-new")]


def test_labeled_applies_triggered_labels():
    config = AutolabelConfig(
        {
            "I-prioritize": AutolabelLabelConfig(trigger_labels=["regression-untriaged"]),
            "I-other": AutolabelLabelConfig(trigger_labels=["x"]),
        }
    )
    result = labels_on_labeled(config, make_issue(), "regression-untriaged")
    assert result == [Label("I-prioritize")]


def test_labeled_respects_exclusion():
    cfg = AutolabelLabelConfig(trigger_labels=["regression-untriaged"], exclude_labels=["P-*"])
    config = AutolabelConfig({"I-prioritize": cfg})
    issue = make_issue(labels=[Label("P-high")])
    assert labels_on_labeled(config, issue, "regression-untriaged") == []