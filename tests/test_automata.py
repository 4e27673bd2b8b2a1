from io import StringIO

import pytest
from fsmkit.automata.alphabet import EPSILON, Alphabet
from fsmkit.automata.errors import (
    AutomatonError,
    InvalidAlphabetSymbol,
    NotDeterministic,
    UndefinedReference,
)
from fsmkit.automata.fsa import DFA, NFA
from fsmkit.automata.states import IdentifiedState
from fsmkit.util.testing import all_strings


def _shortlex_key(s):
    return (len(s), s)


def _two_state_nfa():
    return NFA(
        [0, 1], "ab", [(0, "a", 0), (0, "b", 1), (1, "a", 0), (1, "b", 1)], 0, [1]
    )


def test_construction_with_plain_values():
    nfa = _two_state_nfa()
    assert nfa.states == {IdentifiedState(0), IdentifiedState(1)}
    assert nfa.alphabet == Alphabet("ab")
    assert nfa.initial == IdentifiedState(0)
    assert nfa.accepting == {IdentifiedState(1)}
    assert nfa.sorted_states == (IdentifiedState(0), IdentifiedState(1))
    assert len(nfa) == 2


def test_construction_copies_inputs():
    states = [0, 1]
    transitions = [(0, "a", 1)]
    accepting = {1}
    nfa = NFA(states, "a", transitions, 0, accepting)
    states.append(2)
    transitions.append((1, "a", 2))
    accepting.add(0)
    assert len(nfa) == 2
    assert len(nfa.transitions) == 1
    assert nfa.accepting == {IdentifiedState(1)}
    assert isinstance(nfa.states, frozenset)
    assert isinstance(nfa.accepting, frozenset)


def test_undeclared_initial():
    with pytest.raises(UndefinedReference):
        NFA([0, 1], "a", [], 2, [])


def test_undeclared_accepting():
    with pytest.raises(UndefinedReference) as excinfo:
        NFA([0, 1], "a", [], 0, [1, 5])
    assert "5" in excinfo.value.message


def test_undeclared_transition_state():
    with pytest.raises(UndefinedReference):
        NFA([0, 1], "a", [(0, "a", 9)], 0, [])


def test_undeclared_transition_symbol():
    with pytest.raises(UndefinedReference):
        NFA([0, 1], "a", [(0, "b", 1)], 0, [])


def test_invalid_alphabet():
    with pytest.raises(InvalidAlphabetSymbol):
        NFA([0], ["a", " "], [], 0, [])


def test_errors_share_a_base():
    for exc in (UndefinedReference, InvalidAlphabetSymbol, NotDeterministic):
        assert issubclass(exc, AutomatonError)


def test_dfa_must_be_total():
    with pytest.raises(NotDeterministic):
        DFA([0, 1], "ab", [(0, "a", 1), (1, "a", 1), (1, "b", 1)], 0, [1])


def test_dfa_must_be_deterministic():
    with pytest.raises(NotDeterministic):
        DFA([0, 1], "a", [(0, "a", 1), (0, "a", 0), (1, "a", 1)], 0, [1])


def test_dfa_has_no_epsilon():
    with pytest.raises(NotDeterministic):
        DFA([0, 1], "a", [(0, "a", 1), (1, "a", 1), (0, EPSILON, 1)], 0, [1])


def test_equality():
    assert _two_state_nfa() == _two_state_nfa()
    assert hash(_two_state_nfa()) == hash(_two_state_nfa())
    other = NFA([0, 1], "ab", [(0, "a", 0), (0, "b", 1), (1, "a", 0), (1, "b", 1)], 0, [0])
    assert _two_state_nfa() != other

    dfa = DFA([0, 1], "ab", [(0, "a", 0), (0, "b", 1), (1, "a", 0), (1, "b", 1)], 0, [1])
    assert dfa != _two_state_nfa()


def test_nfa_accepts():
    nfa = NFA([0, 1, 2], "ab", [(0, "a", 0), (0, "a", 1), (1, EPSILON, 2), (2, "b", 2)], 0, [2])
    assert nfa.accepts("a")
    assert nfa.accepts(["a", "b", "b"])
    assert not nfa.accepts("")
    assert not nfa.accepts("ba")
    assert nfa.compute("aab")


def test_invalid_input_symbol():
    nfa = _two_state_nfa()
    dfa = nfa.to_dfa()
    for fsa in (nfa, dfa):
        with pytest.raises(InvalidAlphabetSymbol):
            fsa.accepts("abc")
        with pytest.raises(InvalidAlphabetSymbol):
            fsa.accepts([EPSILON])


def test_invalid_symbol_after_dead_state():
    dfa = NFA([0, 1], "ab", [(0, "a", 1)], 0, [1]).to_dfa()
    assert not dfa.accepts("bb")
    with pytest.raises(InvalidAlphabetSymbol):
        dfa.accepts("bbx")


def test_generate():
    dfa = _two_state_nfa().to_dfa()
    assert list(dfa.generate(3)) == ["b", "ab", "bb", "aab", "abb", "bab", "bbb"]
    assert list(dfa.generate(0)) == []


def test_generate_matches_accepts():
    nfa = NFA(
        [0, 1, 2, 3], "abc", [(0, "a", 1), (1, "b", 1), (1, EPSILON, 2), (2, "c", 3)], 0, [1, 3]
    )
    generated = list(nfa.generate(4))
    assert generated == [w for w in all_strings("abc", 4) if nfa.accepts(w)]
    assert generated == sorted(generated, key=_shortlex_key)


def test_generate_empty_language():
    nfa = NFA([0, 1], "a", [(0, "a", 0)], 0, [1])
    assert list(nfa.generate(5)) == []


def test_generate_empty_string():
    nfa = NFA([0], "a", [], 0, [0])
    assert list(nfa.generate(3)) == [""]


def test_pretty_nfa():
    out = StringIO()
    NFA([0, 1], "ab", [(0, EPSILON, 1), (1, "b", 1)], 0, [1]).pretty(out)
    assert out.getvalue().splitlines() == [
        "K = {0, 1}",
        "Σ = {a, b}",
        "Δ = {(0, ε, 1), (1, b, 1)}",
        "s = 0",
        "A = {1}",
    ]


def test_pretty_dfa():
    out = StringIO()
    NFA([0], "a", [(0, "a", 0)], 0, []).to_dfa().pretty(out)
    assert out.getvalue().splitlines() == [
        "K = {{}, {0}}",
        "Σ = {a}",
        "δ = {({}, a, {}), ({0}, a, {0})}",
        "s = {0}",
        "A = {}",
    ]


def test_repr():
    assert repr(_two_state_nfa()) == "<NFA 0 1/a b/0,a,0;0,b,1;1,a,0;1,b,1/0/1>"
