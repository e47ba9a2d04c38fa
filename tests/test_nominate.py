import pytest

from triageflow.models import Label
from triageflow.nominate import NominateError, Style, nominate_labels

TEAMS = {"compiler": "T-compiler"}


def test_decision_nomination():
    assert nominate_labels(TEAMS, "compiler", Style.DECISION, [], "rustbot") == [
        Label("T-compiler"),
        Label("I-nominated"),
    ]


def test_beta_nomination():
    assert nominate_labels(TEAMS, "compiler", Style.BETA, [], "rustbot") == [
        Label("T-compiler"),
        Label("beta-nominated"),
    ]


def test_beta_approve_requires_nomination():
    with pytest.raises(NominateError) as info:
        nominate_labels(TEAMS, "compiler", Style.BETA_APPROVE, [Label("T-compiler")], "rustbot")
    assert "`@rustbot beta-nominate <team>`" in str(info.value)


def test_beta_approve_ignores_team_config():
    labels = [Label("beta-nominated")]
    assert nominate_labels({}, "anything", Style.BETA_APPROVE, labels, "rustbot") == [
        Label("beta-accepted")
    ]


def test_unknown_team():
    with pytest.raises(NominateError) as info:
        nominate_labels(TEAMS, "libs", Style.DECISION, [], "rustbot")
    assert "This team (`libs`) cannot be nominated" in str(info.value)