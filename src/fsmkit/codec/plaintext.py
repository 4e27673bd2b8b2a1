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
Reads and writes automata in a compact one-line text format::

    <states> / <alphabet> / <transitions> / <initial state> / <accepting states>

For example, this is a two-state machine over ``a`` and ``b`` that accepts
strings ending in ``b``::

    0 1/a b/0,a,0;0,b,1;1,a,0;1,b,1/0/1

States are integers separated by whitespace, the alphabet is single
characters separated by whitespace, transitions are ``from,symbol,to``
triples separated by semicolons, and the accepting states may be left out.
An epsilon transition is written with the epsilon token (``ε``) in place of
the symbol. The separators and the epsilon token can be changed with
keyword arguments.
"""

from loguru import logger

from fsmkit.automata.alphabet import EPSILON, Alphabet
from fsmkit.automata.errors import MalformedEncoding
from fsmkit.automata.fsa import NFA
from fsmkit.automata.states import (
    IdentifiedState,
    encode_state_set,
    parse_state_id,
    parse_state_ids,
)


def parse_alphabet(text, epsilon_token="ε", reserved=()):
    """
    Parses a whitespace-separated list of single-character symbols.

    Raises:
        MalformedEncoding: If a token is longer than one character, is the
            epsilon token, or is one of the `reserved` separator characters.
    """

    symbols = text.split()
    for symbol in symbols:
        if symbol == epsilon_token:
            raise MalformedEncoding(f"The epsilon token {epsilon_token!r} can not be declared")
        if len(symbol) != 1:
            raise MalformedEncoding(f"Alphabet symbol {symbol!r} is not a single character")
        if symbol in reserved:
            raise MalformedEncoding(f"Alphabet symbol {symbol!r} is a separator")
    return Alphabet(symbols)


def parse_transitions(text, transition_sep=";", field_sep=",", epsilon_token="ε"):
    """
    Parses a list of transitions into a list of ``(from id, label, to id)``
    tuples, where the label is EPSILON for the epsilon token.

    Example:
        >>> parse_transitions("0 , a , 0; 0,ε, 1")
        [(0, 'a', 0), (0, <EPSILON>, 1)]
    """

    if not text.strip():
        return []

    triples = []
    for part in text.split(transition_sep):
        fields = part.split(field_sep)
        if len(fields) != 3:
            raise MalformedEncoding(
                f"Transition {part.strip()!r} does not have the form from{field_sep}symbol{field_sep}to"
            )

        src = parse_state_id(fields[0])
        symbol = fields[1].strip()
        if symbol == epsilon_token:
            label = EPSILON
        elif len(symbol) == 1:
            label = symbol
        else:
            raise MalformedEncoding(f"Transition symbol {symbol!r} is not a single character")
        dest = parse_state_id(fields[2])

        triples.append((src, label, dest))
    return triples


def parse(
    text,
    factory=None,
    section_sep="/",
    transition_sep=";",
    field_sep=",",
    epsilon_token="ε",
):
    """
    Builds an automaton from its text encoding.

    Structural problems with the text raise :class:`MalformedEncoding` and
    nothing is built. Once the text is parsed, the pieces are handed to the
    automaton's constructor, which raises :class:`UndefinedReference` if they
    refer to undeclared states or symbols.

    Args:
        text (str): The encoding.
        factory (callable, optional): The class of automaton to build.
            Defaults to :class:`NFA`; pass :class:`DFA` to also check that the
            transitions are a total function.
        section_sep (str): Separates the five sections.
        transition_sep (str): Separates transitions.
        field_sep (str): Separates the parts of a transition.
        epsilon_token (str): Stands for an epsilon transition.

    Returns:
        NFA: The automaton.

    Raises:
        MalformedEncoding: If the text does not follow the format.
        UndefinedReference: If the text refers to undeclared states or
            symbols.
    """

    if factory is None:
        factory = NFA
    if not isinstance(text, str):
        raise MalformedEncoding(f"Expected a string, not {type(text).__name__}")

    sections = text.split(section_sep)
    if len(sections) == 4:
        sections.append("")
    elif len(sections) != 5:
        raise MalformedEncoding(
            f"Expected 4 or 5 sections separated by {section_sep!r}, found {len(sections)}"
        )
    states_text, alphabet_text, transitions_text, initial_text, accepting_text = sections

    stateids = parse_state_ids(states_text)
    if not stateids:
        raise MalformedEncoding("No states are declared")
    alphabet = parse_alphabet(
        alphabet_text, epsilon_token, reserved=(section_sep, transition_sep, field_sep)
    )
    triples = parse_transitions(transitions_text, transition_sep, field_sep, epsilon_token)
    initial = parse_state_id(initial_text)
    accepting = parse_state_ids(accepting_text)

    logger.debug(
        "Parsed {} states, {} symbols and {} transitions", len(stateids), len(alphabet), len(triples)
    )
    return factory(stateids, alphabet, triples, initial, accepting)


def encode(
    fsa,
    section_sep="/",
    transition_sep=";",
    field_sep=",",
    epsilon_token="ε",
):
    """
    Returns the text encoding of an automaton.

    States, transitions and accepting states are written in sorted order so
    equal automata always encode identically. If every state is an
    :class:`IdentifiedState` its label is written as is; otherwise (for
    example for the composite states of a converted DFA) the states are
    numbered from 0 in sorted order, so that the result can be parsed again.

    Args:
        fsa (NFA): The automaton to encode.

    Returns:
        str: The encoding.

    Raises:
        MalformedEncoding: If an alphabet symbol is the epsilon token or one
            of the separators, since the text could not be parsed back.
    """

    reserved = (epsilon_token, section_sep, transition_sep, field_sep)
    for symbol in fsa.alphabet:
        if symbol in reserved:
            raise MalformedEncoding(
                f"Symbol {symbol!r} can not be encoded, it is reserved by the format"
            )

    if all(isinstance(s, IdentifiedState) for s in fsa.states):
        encoder = None
    else:
        numbering = {s: str(i) for i, s in enumerate(sorted(fsa.states))}
        encoder = numbering.__getitem__

    return section_sep.join(
        (
            encode_state_set(fsa.states, encoder),
            fsa.alphabet.encode(),
            fsa.transitions.encode(encoder, epsilon_token, transition_sep, field_sep),
            encoder(fsa.initial) if encoder else fsa.initial.encode(),
            encode_state_set(fsa.accepting, encoder),
        )
    )
