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
State identities.

An automaton's states are opaque, hashable and totally ordered values. There
are two kinds: an :class:`IdentifiedState` wraps an integer label and is what
parsed or hand-built automata use, and a :class:`CompositeState` wraps a set of
other states and is what subset construction produces.
"""

import re

from fsmkit.automata.errors import MalformedEncoding

_int_expr = re.compile(r"^[+-]?\d+$")


class State:
    """
    Base class for states.

    Subclasses provide :meth:`sort_key`, which is used for equality, hashing
    and ordering, and :meth:`encode`, which renders the state for the text
    format. The first element of every sort key is a rank, so that states of
    different kinds can be sorted together.
    """

    rank = 0

    def sort_key(self):
        raise NotImplementedError

    def encode(self):
        raise NotImplementedError

    def pretty(self):
        return self.encode()

    def __eq__(self, other):
        return type(self) is type(other) and self.sort_key() == other.sort_key()

    def __ne__(self, other):
        return not self.__eq__(other)

    def __lt__(self, other):
        return self.sort_key() < other.sort_key()

    def __le__(self, other):
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other):
        return self.sort_key() > other.sort_key()

    def __ge__(self, other):
        return self.sort_key() >= other.sort_key()

    def __hash__(self):
        return hash(self.sort_key())

    def __str__(self):
        return self.encode()


class IdentifiedState(State):
    """
    An atomic state identified by an integer label.

    Example:
        >>> IdentifiedState(3) == IdentifiedState(3)
        True
        >>> IdentifiedState(1) < IdentifiedState(2)
        True
    """

    rank = 0

    def __init__(self, label):
        if isinstance(label, bool) or not isinstance(label, int):
            raise TypeError(f"State label must be an integer, not {label!r}")
        self.label = label
        self._key = (self.rank, label)

    def __repr__(self):
        return f"{type(self).__name__}({self.label!r})"

    def sort_key(self):
        return self._key

    def encode(self):
        return str(self.label)


class CompositeState(State):
    """
    A state that stands for a set of other states.

    The members are deduplicated and kept as a tuple sorted by the state
    ordering, so two composites built from the same set compare equal no
    matter what order their members were supplied in. This tuple is the
    identity used by subset construction to recognize states it has already
    created.

    Example:
        >>> c = CompositeState([IdentifiedState(2), IdentifiedState(0)])
        >>> c.encode()
        '{0,2}'
        >>> c == CompositeState({IdentifiedState(0), IdentifiedState(2)})
        True
    """

    rank = 1

    def __init__(self, members=()):
        self.members = tuple(sorted(set(members)))
        self._key = (self.rank, tuple(m.sort_key() for m in self.members))

    def __repr__(self):
        return f"{type(self).__name__}({list(self.members)!r})"

    def __iter__(self):
        return iter(self.members)

    def __len__(self):
        return len(self.members)

    def __contains__(self, state):
        return state in self.members

    def sort_key(self):
        return self._key

    def encode(self):
        return "{" + ",".join(m.encode() for m in self.members) + "}"


# The empty composite: the set of NFA states reachable after a move that has
# no transitions. It accepts nothing and loops to itself on every symbol.
DEAD = CompositeState()


def as_state(obj):
    """
    Returns the given object as a State: integers are wrapped in an
    IdentifiedState and State objects are returned unchanged.

    Raises:
        TypeError: If the object is neither a State nor an integer.
    """

    if isinstance(obj, State):
        return obj
    return IdentifiedState(obj)


def encode_state_set(states, encoder=None, sep=" "):
    """
    Renders a collection of states in sorted order, separated by `sep`.

    Args:
        states (iterable): The states to render.
        encoder (callable, optional): Turns a state into text. Defaults to
            ``State.encode``.
        sep (str): The separator.
    """

    if encoder is None:
        return sep.join(s.encode() for s in sorted(states))
    return sep.join(encoder(s) for s in sorted(states))


def pretty_state_set(states):
    return "{" + ", ".join(s.pretty() for s in sorted(states)) + "}"


def parse_state_id(text):
    """
    Parses a single integer state id.

    Raises:
        MalformedEncoding: If the text is not an integer.
    """

    text = text.strip()
    if not _int_expr.match(text):
        raise MalformedEncoding(f"State id {text!r} is not an integer")
    return int(text)


def parse_state_ids(text):
    """
    Parses a whitespace-separated list of integer state ids. Duplicates are
    kept in first-seen order once.

    Example:
        >>> parse_state_ids(" 0 1  2 1")
        [0, 1, 2]
    """

    ids = []
    for token in text.split():
        stateid = parse_state_id(token)
        if stateid not in ids:
            ids.append(stateid)
    return ids
