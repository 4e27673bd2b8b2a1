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

from cached_property import cached_property

from fsmkit.automata.errors import InvalidAlphabetSymbol


class Marker:
    """
    Represents a marker object.

    Markers are unique sentinels that can be used wherever a symbol is
    expected but must never be confused with a real input symbol.

    Attributes:
        name (str): The name of the marker.

    Example:
        >>> marker = Marker("EPSILON")
        >>> repr(marker)
        '<EPSILON>'
    """

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"<{self.name}>"


# The label of a transition that consumes no input. It is a legal key for
# transition lookups but is never a member of an Alphabet.
EPSILON = Marker("EPSILON")


def symbol_key(symbol):
    """
    Returns a sort key that orders EPSILON before every real symbol, and real
    symbols by code point.
    """

    if symbol is EPSILON:
        return (0, "")
    return (1, symbol)


def is_valid_symbol(symbol):
    """
    Returns True if the given object can be used as an input symbol: a
    one-character string that is not whitespace.
    """

    return isinstance(symbol, str) and len(symbol) == 1 and not symbol.isspace()


class Alphabet:
    """
    An ordered collection of unique input symbols.

    Symbols are kept in the order they were first given, and duplicates are
    ignored. Every symbol must be a single non-whitespace character; the
    EPSILON marker is reserved and can not be added.

    Example:
        >>> sigma = Alphabet("abca")
        >>> list(sigma)
        ['a', 'b', 'c']
        >>> "b" in sigma
        True
        >>> sigma.encode()
        'a b c'
    """

    def __init__(self, symbols=()):
        """
        Args:
            symbols (iterable): The symbols of the alphabet.

        Raises:
            InvalidAlphabetSymbol: If one of the symbols is the EPSILON marker,
                whitespace, or not a one-character string.
        """

        ordered = []
        seen = set()
        for symbol in symbols:
            if symbol is EPSILON:
                raise InvalidAlphabetSymbol("EPSILON can not be a member of an alphabet")
            if not is_valid_symbol(symbol):
                raise InvalidAlphabetSymbol(f"{symbol!r} is not a valid alphabet symbol")
            if symbol not in seen:
                seen.add(symbol)
                ordered.append(symbol)
        self._symbols = tuple(ordered)

    @classmethod
    def coerce(cls, obj):
        """
        Returns the given object if it is already an Alphabet, otherwise builds
        an Alphabet from it.
        """

        if isinstance(obj, cls):
            return obj
        return cls(obj)

    def __iter__(self):
        return iter(self._symbols)

    def __len__(self):
        return len(self._symbols)

    def __contains__(self, symbol):
        return symbol in self.symbol_set

    def __eq__(self, other):
        return isinstance(other, Alphabet) and self._symbols == other._symbols

    def __hash__(self):
        return hash(self._symbols)

    def __repr__(self):
        return f"{type(self).__name__}({''.join(self._symbols)!r})"

    @cached_property
    def symbol_set(self):
        """The symbols as a frozenset, for fast membership tests."""

        return frozenset(self._symbols)

    @cached_property
    def with_epsilon(self):
        """
        The symbols of this alphabet preceded by EPSILON, as a tuple. This is
        the label set to follow when exploring every edge of an automaton.
        """

        return (EPSILON,) + self._symbols

    def sorted(self):
        """
        Returns a copy of this alphabet with the symbols in code point order.
        """

        return Alphabet(sorted(self._symbols))

    def check(self, symbol):
        """
        Raises InvalidAlphabetSymbol if the given symbol is not in this
        alphabet.

        Args:
            symbol: The symbol to check.

        Raises:
            InvalidAlphabetSymbol: If the symbol is not a member.
        """

        if symbol not in self.symbol_set:
            raise InvalidAlphabetSymbol(f"{symbol!r} is not in the alphabet {self.pretty()}")

    def encode(self):
        return " ".join(self._symbols)

    def pretty(self):
        return "{" + ", ".join(self._symbols) + "}"
