import pytest

from xmppstanza.stanza_errors import (
    NS_STANZAS,
    StanzaErrorCondition,
    error_condition_from_tag,
)


def test_conflict_lookup():
    condition = error_condition_from_tag("conflict")
    assert condition is StanzaErrorCondition.CONFLICT
    assert condition.group_error_name() == "conflict"


def test_invalid_from_tag_name():
    assert StanzaErrorCondition.INVALID_FROM.group_error_name() == "invalid-from"


@pytest.mark.parametrize("condition", list(StanzaErrorCondition))
def test_round_trip_plain(condition):
    assert error_condition_from_tag(condition.group_error_name()) is condition


@pytest.mark.parametrize("condition", list(StanzaErrorCondition))
def test_round_trip_namespaced(condition):
    assert condition.tag.startswith("{" + NS_STANZAS + "}")
    assert error_condition_from_tag(condition.tag) is condition


def test_conditions_are_distinct():
    names = [c.group_error_name() for c in StanzaErrorCondition]
    assert len(names) == len(set(names)) == 27
    assert [error_condition_from_tag(name) for name in names] == list(StanzaErrorCondition)


def test_unknown_condition_raises():
    with pytest.raises(ValueError, match="error is unknown"):
        error_condition_from_tag("not-a-condition")