from random import Random

from fsmkit.codec.plaintext import encode, parse
from fsmkit.util.testing import all_strings, nth_from_last_nfa, path_accepts, random_nfa


def test_blowup():
    n = 12
    nfa = nth_from_last_nfa(n)
    dfa = nfa.to_dfa()
    assert len(dfa.reachable_states()) == 2**n

    rand = Random(0)
    for _ in range(2000):
        w = "".join(rand.choice("ab") for _ in range(rand.randint(0, 40)))
        assert dfa.accepts(w) == (len(w) >= n and w[-n] == "a")


def test_many_random_conversions():
    for seed in range(300):
        nfa = random_nfa(size=8, alphabet="abc", density=0.1, epsilon_density=0.05, seed=seed)
        dfa = parse(encode(nfa)).to_dfa()
        canonic = dfa.remove_unreachable_states().to_canonical_form()
        for w in all_strings("abc", 5):
            expected = path_accepts(nfa, w)
            assert dfa.accepts(w) == expected
            assert canonic.accepts(w) == expected
