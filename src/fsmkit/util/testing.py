# Copyright 2012 Matt Chaput. All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
#    1. Redistributions of source code must retain the above copyright notice,
#       this list of conditions and the following disclaimer.
#
#    2. Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY MATT CHAPUT ``AS IS'' AND ANY EXPRESS OR
# IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO
# EVENT SHALL MATT CHAPUT OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
# LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA,
# OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of Matt Chaput.

"""
Helpers for testing automata: enumerating input strings, an independent
brute-force acceptance check, and generators for sample automata.
"""

import random
from itertools import product

from fsmkit.automata.alphabet import EPSILON
from fsmkit.automata.fsa import NFA


def all_strings(alphabet, max_length):
    """
    Yields every string over `alphabet` of length 0 to `max_length`, shortest
    first.
    """

    symbols = sorted(alphabet)
    for length in range(max_length + 1):
        for chars in product(symbols, repeat=length):
            yield "".join(chars)


def path_accepts(nfa, string):
    """
    Returns True if there is a path through `nfa` from the initial state to
    an accepting state that reads exactly `string`, with any number of
    EPSILON moves in between.

    This searches the (state, position) pairs directly instead of using
    epsilon closures or subset construction, so it can be used to check
    them.
    """

    transitions = nfa.transitions
    stack = [(nfa.initial, 0)]
    seen = set()
    while stack:
        config = stack.pop()
        if config in seen:
            continue
        seen.add(config)

        state, pos = config
        if pos == len(string) and state in nfa.accepting:
            return True
        for dest in transitions.at(state, EPSILON):
            stack.append((dest, pos))
        if pos < len(string):
            for dest in transitions.at(state, string[pos]):
                stack.append((dest, pos + 1))
    return False


def random_nfa(
    size=5, alphabet="ab", density=0.25, epsilon_density=0.1, accepting_ratio=0.3, seed=None
):
    """
    Returns a randomly generated NFA with states 0 to `size` - 1.

    Args:
        size (int): The number of states.
        alphabet (str): The input symbols.
        density (float): The probability of each possible symbol transition.
        epsilon_density (float): The probability of each possible epsilon
            transition between two different states.
        accepting_ratio (float): The probability of each state being
            accepting.
        seed: Seed for the random number generator, to make the result
            repeatable.
    """

    rand = random.Random(seed)
    states = list(range(size))
    transitions = []
    for src in states:
        for dest in states:
            for symbol in alphabet:
                if rand.random() < density:
                    transitions.append((src, symbol, dest))
            if src != dest and rand.random() < epsilon_density:
                transitions.append((src, EPSILON, dest))
    accepting = [s for s in states if rand.random() < accepting_ratio]
    return NFA(states, alphabet, transitions, 0, accepting)


def nth_from_last_nfa(n, alphabet="ab", symbol="a"):
    """
    Returns an NFA with n + 1 states that accepts the strings whose n-th
    symbol from the end is `symbol`. Any DFA for this language needs at least
    2 ** n states, which makes it a worst case for subset construction.
    """

    transitions = [(0, s, 0) for s in alphabet]
    transitions.append((0, symbol, 1))
    for i in range(1, n):
        transitions.extend((i, s, i + 1) for s in alphabet)
    return NFA(range(n + 1), alphabet, transitions, 0, [n])
