import pytest
from fsmkit.automata.errors import MalformedEncoding
from fsmkit.automata.states import (
    DEAD,
    CompositeState,
    IdentifiedState,
    as_state,
    encode_state_set,
    parse_state_id,
    parse_state_ids,
    pretty_state_set,
)


def test_identified_state():
    assert IdentifiedState(3) == IdentifiedState(3)
    assert IdentifiedState(3) != IdentifiedState(4)
    assert IdentifiedState(1) < IdentifiedState(2)
    assert IdentifiedState(-1) < IdentifiedState(0)
    assert hash(IdentifiedState(3)) == hash(IdentifiedState(3))
    assert IdentifiedState(12).encode() == "12"
    assert str(IdentifiedState(12)) == "12"


@pytest.mark.parametrize("label", ["1", 1.0, None, True])
def test_identified_state_label_type(label):
    with pytest.raises(TypeError):
        IdentifiedState(label)


def test_composite_order_independent():
    s0, s1, s2 = IdentifiedState(0), IdentifiedState(1), IdentifiedState(2)
    a = CompositeState([s2, s0, s2])
    b = CompositeState({s0, s2})
    assert a == b
    assert hash(a) == hash(b)
    assert a.members == (s0, s2)
    assert a.encode() == "{0,2}"
    assert s0 in a
    assert s1 not in a
    assert len(a) == 2
    assert a != CompositeState([s0, s1])


def test_composite_ordering():
    s0, s1, s2 = IdentifiedState(0), IdentifiedState(1), IdentifiedState(2)
    assert CompositeState([s0, s1]) < CompositeState([s0, s2])
    assert CompositeState([s0]) < CompositeState([s0, s1])
    assert DEAD < CompositeState([s0])


def test_numeric_member_order():
    # Members sort by label value, not by their text
    states = [IdentifiedState(n) for n in (10, 9, 2)]
    assert CompositeState(states).encode() == "{2,9,10}"


def test_mixed_kinds():
    atomic = IdentifiedState(100)
    composite = CompositeState([IdentifiedState(0)])
    assert atomic < composite
    assert atomic != composite
    assert sorted([composite, atomic]) == [atomic, composite]


def test_nested_composite():
    inner1 = CompositeState([IdentifiedState(1)])
    inner0 = CompositeState([IdentifiedState(0)])
    outer = CompositeState([inner1, inner0])
    assert outer.encode() == "{{0},{1}}"


def test_dead_state():
    assert DEAD == CompositeState()
    assert DEAD.encode() == "{}"
    assert len(DEAD) == 0


def test_as_state():
    s = IdentifiedState(4)
    assert as_state(s) is s
    assert as_state(4) == s
    assert as_state(DEAD) is DEAD
    with pytest.raises(TypeError):
        as_state("4")


def test_state_set_rendering():
    states = {IdentifiedState(2), IdentifiedState(0), IdentifiedState(1)}
    assert encode_state_set(states) == "0 1 2"
    assert encode_state_set(states, encoder=lambda s: f"q{s.label}", sep=",") == "q0,q1,q2"
    assert pretty_state_set(states) == "{0, 1, 2}"
    assert pretty_state_set(()) == "{}"


def test_parse_state_ids():
    assert parse_state_ids(" 0 1  2 1") == [0, 1, 2]
    assert parse_state_ids("-1 +3") == [-1, 3]
    assert parse_state_ids("   ") == []
    assert parse_state_id(" 7 ") == 7


@pytest.mark.parametrize("text", ["", "x", "1.5", "0x1", "1 2"])
def test_parse_state_id_errors(text):
    with pytest.raises(MalformedEncoding):
        parse_state_id(text)
