import pytest
from fsmkit.automata.alphabet import EPSILON, Alphabet
from fsmkit.automata.errors import NotDeterministic, UndefinedReference
from fsmkit.automata.states import IdentifiedState
from fsmkit.automata.transitions import Transition, TransitionFunction, TransitionRelation

s0, s1, s2, s3 = (IdentifiedState(n) for n in range(4))


def _relation():
    return TransitionRelation(
        [
            Transition(s1, "b", s2),
            Transition(s0, "a", s1),
            Transition(s0, "a", s2),
            Transition(s0, EPSILON, s2),
            (s0, "a", s1),
        ]
    )


def test_at():
    rel = _relation()
    assert rel.at(s0, "a") == frozenset([s1, s2])
    assert rel.at(s0, EPSILON) == frozenset([s2])
    assert rel.at(s1, "b") == frozenset([s2])
    assert rel.at(s1, "a") == frozenset()
    assert rel.at(s3, "a") == frozenset()
    assert rel.at(s3, EPSILON) == frozenset()


def test_labels():
    rel = _relation()
    assert rel.labels(s0) == {"a", EPSILON}
    assert rel.labels(s3) == set()


def test_len_counts_distinct_transitions():
    assert len(_relation()) == 4
    assert len(TransitionRelation()) == 0


def test_sorted_transitions():
    rel = _relation()
    assert rel.transitions() == [
        (s0, EPSILON, s2),
        (s0, "a", s1),
        (s0, "a", s2),
        (s1, "b", s2),
    ]
    assert list(rel) == rel.transitions()


def test_equality():
    assert _relation() == _relation()
    assert hash(_relation()) == hash(_relation())
    assert _relation() != TransitionRelation([(s0, "a", s1)])


def test_verify():
    rel = _relation()
    rel.verify({s0, s1, s2}, Alphabet("ab"))

    with pytest.raises(UndefinedReference):
        rel.verify({s0, s1}, Alphabet("ab"))
    with pytest.raises(UndefinedReference):
        rel.verify({s1, s2}, Alphabet("ab"))
    with pytest.raises(UndefinedReference) as excinfo:
        rel.verify({s0, s1, s2}, Alphabet("a"))
    assert "'b'" in excinfo.value.message


def test_is_deterministic():
    assert not _relation().is_deterministic()
    assert TransitionRelation([(s0, "a", s1), (s0, "b", s0)]).is_deterministic()
    assert not TransitionRelation([(s0, EPSILON, s1)]).is_deterministic()


def test_encode():
    rel = _relation()
    assert rel.encode() == "0,ε,2;0,a,1;0,a,2;1,b,2"
    assert rel.encode(epsilon_token="$", transition_sep=" ; ") == "0,$,2 ; 0,a,1 ; 0,a,2 ; 1,b,2"
    assert rel.encode(state_encoder=lambda s: f"q{s.label}") == "q0,ε,q2;q0,a,q1;q0,a,q2;q1,b,q2"


def test_pretty():
    rel = TransitionRelation([(s0, EPSILON, s1), (s1, "a", s0)])
    assert rel.pretty() == "{(0, ε, 1), (1, a, 0)}"
    assert rel.pretty_name == "Δ"
    assert TransitionFunction().pretty_name == "δ"


def test_function_next_state():
    fn = TransitionFunction([(s0, "a", s1), (s1, "a", s1)])
    fn.verify({s0, s1}, Alphabet("a"))
    assert fn.next_state(s0, "a") == s1
    assert fn.next_state(s1, "a") == s1
    with pytest.raises(KeyError):
        fn.next_state(s0, "b")


def test_function_missing_transition():
    fn = TransitionFunction([(s0, "a", s1), (s1, "a", s1), (s0, "b", s0)])
    with pytest.raises(NotDeterministic):
        fn.verify({s0, s1}, Alphabet("ab"))


def test_function_multiple_destinations():
    fn = TransitionFunction([(s0, "a", s1), (s0, "a", s0), (s1, "a", s1)])
    with pytest.raises(NotDeterministic):
        fn.verify({s0, s1}, Alphabet("a"))


def test_function_epsilon():
    fn = TransitionFunction([(s0, "a", s1), (s1, "a", s1), (s1, EPSILON, s0)])
    with pytest.raises(NotDeterministic):
        fn.verify({s0, s1}, Alphabet("a"))


def test_function_checks_references_first():
    fn = TransitionFunction([(s0, "a", s3)])
    with pytest.raises(UndefinedReference):
        fn.verify({s0}, Alphabet("a"))


def test_function_next_state_unverified():
    # Without verify() a state can have several destinations or none
    fn = TransitionFunction([(s0, "a", s1), (s0, "a", s2), (s0, "b", s0)])
    with pytest.raises(KeyError):
        fn.next_state(s0, "a")
    with pytest.raises(KeyError):
        fn.next_state(s1, "a")
    assert fn.next_state(s0, "b") == s0


def test_function_state_without_transitions():
    fn = TransitionFunction([(s0, "a", s0)])
    with pytest.raises(NotDeterministic) as excinfo:
        fn.verify({s0, s1}, Alphabet("a"))
    assert "0 transitions" in excinfo.value.message


def test_function_empty_alphabet():
    TransitionFunction().verify({s0, s1}, Alphabet(""))
