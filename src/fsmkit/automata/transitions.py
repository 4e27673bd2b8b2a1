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

from collections import namedtuple

from fsmkit.automata.alphabet import EPSILON, symbol_key
from fsmkit.automata.errors import NotDeterministic, UndefinedReference

Transition = namedtuple("Transition", ["src", "label", "dest"])


def transition_key(t):
    return (t.src.sort_key(), symbol_key(t.label), t.dest.sort_key())


def encode_symbol(label, epsilon_token):
    return epsilon_token if label is EPSILON else label


class TransitionRelation:
    """
    Maps (state, symbol) pairs to sets of destination states.

    This is the transition relation of a non-deterministic automaton: a pair
    may have any number of destinations, and EPSILON is allowed as a symbol.
    The relation is built once from an iterable of transitions and is not
    modified afterwards.

    Attributes:
        pretty_name (str): The name used for the relation in set notation.

    Example:
        >>> rel = TransitionRelation([Transition(s0, "a", s1), Transition(s0, "a", s2)])
        >>> sorted(rel.at(s0, "a"))
        [IdentifiedState(1), IdentifiedState(2)]
        >>> rel.at(s1, "a")
        frozenset()
    """

    pretty_name = "Δ"

    def __init__(self, transitions=()):
        """
        Args:
            transitions (iterable): Transition triples (or any 3-tuples of
                source state, label, destination state).
        """

        table = {}
        for src, label, dest in transitions:
            table.setdefault(src, {}).setdefault(label, set()).add(dest)

        # Freeze the destination sets so lookups can hand them out directly
        self._table = {
            src: {label: frozenset(dests) for label, dests in trans.items()}
            for src, trans in table.items()
        }

    def at(self, state, label):
        """
        Returns the set of states reachable from `state` by one transition on
        `label`. Returns an empty frozenset if there is no such transition.

        Args:
            state (State): The source state.
            label: An alphabet symbol or EPSILON.

        Returns:
            frozenset: The destination states.
        """

        trans = self._table.get(state)
        if not trans:
            return frozenset()
        return trans.get(label, frozenset())

    def labels(self, state):
        """
        Returns the set of labels on transitions leaving the given state.
        """

        return set(self._table.get(state, ()))

    def __iter__(self):
        return iter(self.transitions())

    def __len__(self):
        return sum(
            len(dests) for trans in self._table.values() for dests in trans.values()
        )

    def __eq__(self, other):
        return isinstance(other, TransitionRelation) and self._table == other._table

    def __hash__(self):
        return hash(frozenset(self.triples()))

    def __repr__(self):
        return f"{type(self).__name__}({self.transitions()!r})"

    def triples(self):
        """
        Generates every (source state, label, destination state) triple in
        the relation, in no particular order.
        """

        for src, trans in self._table.items():
            for label, dests in trans.items():
                for dest in dests:
                    yield Transition(src, label, dest)

    def transitions(self):
        """
        Returns every transition as a list sorted by source, label and
        destination, with EPSILON before the real symbols.
        """

        return sorted(self.triples(), key=transition_key)

    def verify(self, states, alphabet):
        """
        Checks that every transition connects two members of `states` and is
        labelled either with EPSILON or with a member of `alphabet`.

        Args:
            states (set): The declared states of the automaton.
            alphabet (Alphabet): The declared alphabet of the automaton.

        Raises:
            UndefinedReference: If a transition refers to an undeclared state
                or symbol.
        """

        for t in self.transitions():
            if t.src not in states:
                raise UndefinedReference(
                    f"Transition {self.pretty_transition(t)} starts at undeclared state {t.src}"
                )
            if t.dest not in states:
                raise UndefinedReference(
                    f"Transition {self.pretty_transition(t)} ends at undeclared state {t.dest}"
                )
            if t.label is not EPSILON and t.label not in alphabet:
                raise UndefinedReference(
                    f"Transition {self.pretty_transition(t)} uses symbol {t.label!r} "
                    f"which is not in the alphabet"
                )

    def is_deterministic(self):
        """
        Returns True if there are no EPSILON transitions and no (state, symbol)
        pair has more than one destination.
        """

        for trans in self._table.values():
            for label, dests in trans.items():
                if label is EPSILON or len(dests) > 1:
                    return False
        return True

    def encode(self, state_encoder=None, epsilon_token="ε", transition_sep=";",
               field_sep=","):
        """
        Renders the relation in the text format: sorted transitions joined by
        `transition_sep`, each written as ``src,label,dest``.

        Args:
            state_encoder (callable, optional): Turns a state into its text
                form. Defaults to ``State.encode``.
            epsilon_token (str): Text written for EPSILON labels.
        """

        if state_encoder is None:
            state_encoder = _encode_state

        return transition_sep.join(
            field_sep.join(
                (state_encoder(t.src), encode_symbol(t.label, epsilon_token),
                 state_encoder(t.dest))
            )
            for t in self.transitions()
        )

    @staticmethod
    def pretty_transition(t):
        label = "ε" if t.label is EPSILON else t.label
        return f"({t.src.pretty()}, {label}, {t.dest.pretty()})"

    def pretty(self):
        return "{" + ", ".join(self.pretty_transition(t) for t in self.transitions()) + "}"


def _encode_state(state):
    return state.encode()


class TransitionFunction(TransitionRelation):
    """
    The transition relation of a deterministic automaton, where every
    (state, symbol) pair has exactly one destination.

    Totality is checked by :meth:`verify`, which is called when a DFA is
    built; after that :meth:`next_state` always succeeds for declared states
    and symbols.
    """

    pretty_name = "δ"

    def next_state(self, state, label):
        """
        Returns the single destination of the transition from `state` on
        `label`.

        Raises:
            KeyError: If there is not exactly one such transition, for example
                for a symbol outside the alphabet or an unverified function.
        """

        dests = self.at(state, label)
        if len(dests) != 1:
            raise KeyError((state, label))
        (dest,) = dests
        return dest

    def verify(self, states, alphabet):
        """
        In addition to the checks of :meth:`TransitionRelation.verify`, checks
        that there are no EPSILON transitions and that every state has exactly
        one transition for every symbol of the alphabet.

        Raises:
            UndefinedReference: If a transition refers to an undeclared state
                or symbol.
            NotDeterministic: If the relation is not a total function.
        """

        super().verify(states, alphabet)

        symbols = set(alphabet)
        if self.is_deterministic() and all(self.labels(s) == symbols for s in states):
            return

        # Find the first offending state for the error message
        for state in sorted(states):
            if EPSILON in self.labels(state):
                raise NotDeterministic(f"State {state} has an epsilon transition")
            for label in alphabet:
                count = len(self.at(state, label))
                if count != 1:
                    raise NotDeterministic(
                        f"State {state} has {count} transitions on {label!r}, expected 1"
                    )
