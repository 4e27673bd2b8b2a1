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

import sys
from collections import deque

from cached_property import cached_property
from loguru import logger

from fsmkit.automata.alphabet import EPSILON, Alphabet
from fsmkit.automata.errors import UndefinedReference
from fsmkit.automata.states import (
    DEAD,
    CompositeState,
    IdentifiedState,
    State,
    as_state,
    pretty_state_set,
)
from fsmkit.automata.transitions import Transition, TransitionFunction, TransitionRelation
from fsmkit.util import now

# Algorithms
#
# These are plain functions over an automaton's parts. The ones that build a
# new automaton take the class to build as their `factory` argument, so the
# same code serves both NFA and DFA.


def epsilon_closure(relation, states):
    """
    Returns the smallest set containing `states` that is closed under EPSILON
    transitions.

    Each state is expanded at most once: a destination is only added to the
    worklist the first time it joins the result, so epsilon cycles terminate.

    Args:
        relation (TransitionRelation): The transitions to follow.
        states (iterable): The states to start from.

    Returns:
        frozenset: The closure.

    Example:
        >>> rel = TransitionRelation([(s0, EPSILON, s1), (s1, EPSILON, s0)])
        >>> sorted(epsilon_closure(rel, [s0]))
        [IdentifiedState(0), IdentifiedState(1)]
    """

    closure = set(states)
    frontier = list(closure)
    while frontier:
        state = frontier.pop()
        for dest in relation.at(state, EPSILON):
            if dest not in closure:
                closure.add(dest)
                frontier.append(dest)
    return frozenset(closure)


def move(relation, states, label):
    """
    Returns the epsilon closure of the states reachable from any of `states`
    by one transition on `label`.
    """

    dests = set()
    for state in states:
        dests.update(relation.at(state, label))
    return epsilon_closure(relation, dests)


def reachable_states(fsa):
    """
    Returns the set of states of `fsa` that can be reached from its initial
    state by any sequence of symbol or EPSILON transitions.

    The search proceeds in rounds: each round follows every label from the
    states found in the previous round, and the search stops when a round
    finds nothing new.
    """

    transitions = fsa.transitions
    labels = fsa.alphabet_with_epsilon

    reachable = set()
    newly_reachable = {fsa.initial}
    while newly_reachable:
        reachable.update(newly_reachable)
        found = set()
        for state in newly_reachable:
            for label in labels:
                for dest in transitions.at(state, label):
                    if dest not in reachable:
                        found.add(dest)
        newly_reachable = found
    return frozenset(reachable)


def prune(fsa, factory):
    """
    Returns a copy of `fsa` without its unreachable states.

    Only transitions with both ends reachable are kept, and the accepting
    states are intersected with the reachable set. The initial state is
    always kept. The accepted language does not change.

    Args:
        fsa (NFA): The automaton to prune.
        factory (callable): Called with ``(states, alphabet, transitions,
            initial, accepting)`` to build the result, usually ``NFA`` or
            ``DFA``.
    """

    reachable = reachable_states(fsa)
    transitions = [
        t for t in fsa.transitions.triples() if t.src in reachable and t.dest in reachable
    ]
    accepting = fsa.accepting.intersection(reachable)

    logger.debug(
        "Pruned {} unreachable states of {}", len(fsa.states) - len(reachable), len(fsa.states)
    )
    return factory(reachable, fsa.alphabet, transitions, fsa.initial, accepting)


def canonicalize(fsa, factory):
    """
    Returns a renumbered copy of `fsa` in which the states are labelled 0, 1,
    2, ... in depth-first discovery order from the initial state.

    The traversal uses an explicit stack. From each state it follows EPSILON
    first and then the symbols in code point order, and visits the
    destinations of each label in sorted order. A state gets its new label
    the first time it is discovered. States that are never discovered are
    dropped, along with their transitions, even if they are accepting. The
    resulting alphabet is sorted.

    Two automata that are isomorphic under this traversal encode identically
    after canonicalization, and canonicalizing a canonical automaton gives
    back the same encoding. This does not merge equivalent states, so two
    automata that accept the same language can still differ.

    Args:
        fsa (NFA): The automaton to renumber.
        factory (callable): Builds the result, see :func:`prune`.
    """

    alphabet = fsa.alphabet.sorted()
    labels = alphabet.with_epsilon
    transitions = fsa.transitions

    mapping = {fsa.initial: IdentifiedState(0)}
    stack = [fsa.initial]
    canonic_transitions = []
    while stack:
        top = stack.pop()
        for label in labels:
            for dest in sorted(transitions.at(top, label)):
                if dest not in mapping:
                    mapping[dest] = IdentifiedState(len(mapping))
                    stack.append(dest)
                canonic_transitions.append(Transition(mapping[top], label, mapping[dest]))

    accepting = [mapping[s] for s in fsa.accepting if s in mapping]

    logger.debug("Renumbered {} of {} states", len(mapping), len(fsa.states))
    return factory(
        mapping.values(), alphabet, canonic_transitions, mapping[fsa.initial], accepting
    )


def subset_construction(nfa):
    """
    Converts an NFA (which may have EPSILON transitions) into an equivalent
    total DFA.

    Each DFA state is a :class:`CompositeState` holding the set of NFA states
    the NFA could be in. Sets are discovered breadth-first from the epsilon
    closure of the initial state. For every discovered set and every symbol,
    the destination is the closure of the symbol move. An empty move goes to
    the :data:`DEAD` state, which loops to itself on every symbol and is
    always part of the result, even when nothing reaches it.

    A composite state is accepting if it contains at least one accepting NFA
    state. The DFA accepts a string exactly when some path through the NFA,
    with EPSILON moves in between, reads that string and ends in an
    accepting state.

    Args:
        nfa (NFA): The automaton to convert.

    Returns:
        DFA: The converted automaton, over the same alphabet.
    """

    t = now()
    relation = nfa.transitions
    alphabet = nfa.alphabet

    initial = CompositeState(epsilon_closure(relation, [nfa.initial]))
    worklist = deque([initial])
    seen = {initial}
    processed = set()
    accepting = set()
    transitions = []

    while worklist:
        current = worklist.popleft()
        if current in processed:
            continue
        processed.add(current)

        if not nfa.accepting.isdisjoint(current.members):
            accepting.add(current)

        for label in alphabet:
            target = move(relation, current.members, label)
            if not target:
                transitions.append(Transition(current, label, DEAD))
                continue

            dest = CompositeState(target)
            transitions.append(Transition(current, label, dest))
            if dest not in seen:
                seen.add(dest)
                worklist.append(dest)

    for label in alphabet:
        transitions.append(Transition(DEAD, label, DEAD))
    states = seen | {DEAD}

    dfa = DFA(states, alphabet, transitions, initial, accepting)
    logger.debug(
        "Converted NFA with {} states to DFA with {} states in {:0.6f}s",
        len(nfa), len(dfa), now() - t,
    )
    return dfa


# Automata


class NFA:
    """
    A non-deterministic finite automaton.

    An NFA is made of a set of states, an :class:`Alphabet`, a
    :class:`TransitionRelation` that may have several destinations per
    (state, symbol) pair and may use EPSILON as a label, an initial state,
    and a set of accepting states.

    Instances are immutable. The constructor copies everything it is given,
    and the operations that transform an automaton return a new one.

    Attributes:
        states (frozenset): The states of the automaton.
        alphabet (Alphabet): The input symbols.
        transitions (TransitionRelation): The transitions.
        initial (State): The initial state.
        accepting (frozenset): The accepting states.

    Example:
        >>> nfa = NFA([0, 1, 2], "a", [(0, EPSILON, 1), (1, "a", 2)], 0, [2])
        >>> nfa.accepts("a")
        True
        >>> dfa = nfa.to_dfa()
        >>> dfa.initial.encode()
        '{0,1}'
    """

    relation_class = TransitionRelation

    def __init__(self, states, alphabet, transitions, initial, accepting=()):
        """
        Builds and validates an automaton.

        States may be given as :class:`State` objects or as integers, which
        are wrapped in :class:`IdentifiedState`. Transitions are
        ``(source, label, destination)`` triples.

        Args:
            states (iterable): The states.
            alphabet (iterable): The alphabet, or an Alphabet object.
            transitions (iterable): The transition triples.
            initial: The initial state.
            accepting (iterable): The accepting states.

        Raises:
            UndefinedReference: If the initial state, an accepting state or a
                transition refers to an undeclared state or symbol.
            InvalidAlphabetSymbol: If the alphabet contains an invalid symbol.
        """

        states = frozenset(as_state(s) for s in states)
        alphabet = Alphabet.coerce(alphabet)
        relation = self.relation_class(
            Transition(as_state(src), label, as_state(dest))
            for src, label, dest in transitions
        )
        initial = as_state(initial)
        accepting = frozenset(as_state(s) for s in accepting)

        if initial not in states:
            raise UndefinedReference(f"Initial state {initial} is not declared")
        undeclared = accepting - states
        if undeclared:
            raise UndefinedReference(
                f"Accepting states {pretty_state_set(undeclared)} are not declared"
            )
        relation.verify(states, alphabet)

        self.states = states
        self.alphabet = alphabet
        self.transitions = relation
        self.initial = initial
        self.accepting = accepting

    def __len__(self):
        return len(self.states)

    def __eq__(self, other):
        return (
            type(self) is type(other)
            and self.initial == other.initial
            and self.states == other.states
            and self.accepting == other.accepting
            and self.alphabet == other.alphabet
            and self.transitions == other.transitions
        )

    def __hash__(self):
        return hash((self.initial, self.states, self.accepting, self.alphabet))

    def __repr__(self):
        return f"<{type(self).__name__} {self.encode()}>"

    @cached_property
    def sorted_states(self):
        """The states as a sorted tuple."""

        return tuple(sorted(self.states))

    @cached_property
    def alphabet_with_epsilon(self):
        return self.alphabet.with_epsilon

    def start(self):
        """
        Returns the set of states the automaton is in before reading any
        input: the epsilon closure of the initial state.
        """

        return self.epsilon_closure(self.initial)

    def is_final(self, states):
        """
        Returns True if any of the given states is accepting.
        """

        return not self.accepting.isdisjoint(states)

    def epsilon_closure(self, states):
        """
        Returns the epsilon closure of a state or of an iterable of states as a
        frozenset. See :func:`epsilon_closure`.
        """

        if isinstance(states, State):
            states = (states,)
        return epsilon_closure(self.transitions, states)

    def move(self, states, label):
        """
        Returns the epsilon closure of the states reachable from `states` on
        `label`.
        """

        return move(self.transitions, states, label)

    def reachable_states(self):
        return reachable_states(self)

    def remove_unreachable_states(self):
        """
        Returns an automaton of the same class that recognizes the same
        language but has no unreachable states.
        """

        return prune(self, type(self))

    def to_canonical_form(self):
        """
        Returns a renumbered automaton of the same class. See
        :func:`canonicalize`.
        """

        return canonicalize(self, type(self))

    def to_dfa(self):
        """
        Returns an equivalent total DFA built by subset construction.
        """

        return subset_construction(self)

    def accepts(self, symbols):
        """
        Returns True if the automaton accepts the given sequence of symbols.

        The NFA is simulated directly by tracking the set of states it could
        be in, so no DFA is built.

        Raises:
            InvalidAlphabetSymbol: If a symbol is not in the alphabet.
        """

        current = self.start()
        for symbol in symbols:
            self.alphabet.check(symbol)
            current = self.move(current, symbol)
        return self.is_final(current)

    def compute(self, symbols):
        """
        Converts this automaton to a DFA and runs the DFA on the given
        symbols.
        """

        return self.to_dfa().accepts(symbols)

    def generate(self, max_length):
        """
        Yields the accepted strings of at most `max_length` symbols, shortest
        first and in lexicographic order within each length.
        """

        return self.to_dfa().generate(max_length)

    def encode(self, **kwargs):
        """
        Returns the text encoding of this automaton. Keyword arguments are
        passed to :func:`fsmkit.codec.plaintext.encode`.
        """

        from fsmkit.codec.plaintext import encode

        return encode(self, **kwargs)

    def pretty(self, stream=None):
        """
        Prints a set notation description of this automaton.

        Args:
            stream (file, optional): Where to print. Defaults to sys.stdout.
        """

        stream = stream or sys.stdout
        print("K =", pretty_state_set(self.states), file=stream)
        print("Σ =", self.alphabet.pretty(), file=stream)
        print(self.transitions.pretty_name, "=", self.transitions.pretty(), file=stream)
        print("s =", self.initial.pretty(), file=stream)
        print("A =", pretty_state_set(self.accepting), file=stream)


class DFA(NFA):
    """
    A deterministic finite automaton.

    A DFA has the same parts as an :class:`NFA`, but its transitions must be
    a total function: every state has exactly one transition for every
    symbol of the alphabet, and there are no EPSILON transitions. This is
    checked when the automaton is built, and :class:`NotDeterministic` is
    raised if it does not hold.
    """

    relation_class = TransitionFunction

    def start(self):
        return self.initial

    def is_final(self, state):
        return state in self.accepting

    def next_state(self, state, label):
        return self.transitions.next_state(state, label)

    def accepts(self, symbols):
        """
        Follows the unique transition for each symbol from the initial state
        and returns True if the last state is accepting.

        Raises:
            InvalidAlphabetSymbol: If a symbol is not in the alphabet.
        """

        state = self.initial
        for symbol in symbols:
            self.alphabet.check(symbol)
            state = self.next_state(state, symbol)
        return self.is_final(state)

    def compute(self, symbols):
        return self.accepts(symbols)

    def to_dfa(self):
        return self

    def live_states(self):
        """
        Returns the set of states from which some accepting state can be
        reached.
        """

        predecessors = {}
        for t in self.transitions.triples():
            predecessors.setdefault(t.dest, set()).add(t.src)

        live = set(self.accepting)
        stack = list(live)
        while stack:
            state = stack.pop()
            for src in predecessors.get(state, ()):
                if src not in live:
                    live.add(src)
                    stack.append(src)
        return live

    def generate(self, max_length):
        """
        Yields the accepted strings of at most `max_length` symbols, shortest
        first and in lexicographic order within each length.

        Paths into states that can never reach an accepting state are not
        explored.
        """

        live = self.live_states()
        if self.initial not in live:
            return

        symbols = sorted(self.alphabet)
        level = [(self.initial, "")]
        for length in range(max_length + 1):
            next_level = []
            for state, sofar in level:
                if self.is_final(state):
                    yield sofar
                if length == max_length:
                    continue
                for symbol in symbols:
                    dest = self.next_state(state, symbol)
                    if dest in live:
                        next_level.append((dest, sofar + symbol))
            level = next_level
