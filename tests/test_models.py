from triageflow.models import FileDiff, Issue, Label, User


def _issue(**kwargs):
    return Issue(number=7, title="Fix things", user=User("author", 1), **kwargs)


def test_contains_assignee_matches_ignoring_case():
    issue = _issue(assignees=[User("Reviewer", 2)])
    assert issue.contains_assignee("reviewer")
    assert issue.contains_assignee("REVIEWER")


def test_contains_assignee_false_when_absent():
    issue = _issue(assignees=[User("reviewer", 2)])
    assert not issue.contains_assignee("author")
    assert not _issue().contains_assignee("reviewer")


def test_has_label_exact_name():
    issue = _issue(labels=[Label("T-compiler"), Label("A-docs")])
    assert issue.has_label("A-docs")
    assert not issue.has_label("t-compiler")
    assert not issue.has_label("T-")


def test_defaults_are_independent():
    first = _issue()
    second = _issue()
    first.labels.append(Label("x"))
    assert second.labels == []
    assert first.has_label("x")


def test_value_equality_of_small_types():
    assert Label("a") == Label("a")
    assert FileDiff("src/lib.rs", "+x") == FileDiff("src/lib.rs", "+x")
    assert {Label("a"), Label("a")} == {Label("a")}