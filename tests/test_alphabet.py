import pytest
from fsmkit.automata.alphabet import EPSILON, Alphabet, symbol_key
from fsmkit.automata.errors import InvalidAlphabetSymbol


def test_order_and_duplicates():
    sigma = Alphabet("bacab")
    assert list(sigma) == ["b", "a", "c"]
    assert len(sigma) == 3
    assert sigma.encode() == "b a c"
    assert sigma.pretty() == "{b, a, c}"


def test_membership():
    sigma = Alphabet(["x", "y"])
    assert "x" in sigma
    assert "z" not in sigma
    assert EPSILON not in sigma


def test_with_epsilon():
    sigma = Alphabet("ab")
    assert sigma.with_epsilon == (EPSILON, "a", "b")
    assert sigma.with_epsilon is sigma.with_epsilon


def test_sorted():
    sigma = Alphabet("cab")
    assert list(sigma.sorted()) == ["a", "b", "c"]
    assert list(sigma) == ["c", "a", "b"]


def test_equality():
    assert Alphabet("ab") == Alphabet(["a", "b"])
    assert Alphabet("ab") != Alphabet("ba")
    assert hash(Alphabet("ab")) == hash(Alphabet("aab"))


def test_coerce():
    sigma = Alphabet("ab")
    assert Alphabet.coerce(sigma) is sigma
    assert Alphabet.coerce("ab") == sigma


@pytest.mark.parametrize("symbol", [" ", "\t", "\n", "ab", "", 1, None, EPSILON])
def test_invalid_symbols(symbol):
    with pytest.raises(InvalidAlphabetSymbol):
        Alphabet(["a", symbol])


def test_check():
    sigma = Alphabet("ab")
    sigma.check("a")
    with pytest.raises(InvalidAlphabetSymbol) as excinfo:
        sigma.check("c")
    assert "'c'" in excinfo.value.message
    with pytest.raises(InvalidAlphabetSymbol):
        sigma.check(EPSILON)


def test_symbol_key():
    labels = ["b", EPSILON, "a"]
    assert sorted(labels, key=symbol_key) == [EPSILON, "a", "b"]
