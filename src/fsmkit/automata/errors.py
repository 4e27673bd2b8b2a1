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
Exceptions raised while building, parsing or running automata.

None of these are recoverable at the point they are raised: they describe a
structural problem with the input, so the requested operation is abandoned
and nothing that already exists is modified.
"""


class AutomatonError(Exception):
    """
    Base class for all errors raised by the automata package.

    Attributes:
        message -- explanation of the error
    """

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class MalformedEncoding(AutomatonError):
    """
    Raised when the text encoding of an automaton cannot be parsed, for
    example because it has the wrong number of sections, a state id that is
    not an integer, or a transition that does not have exactly three parts.
    """


class UndefinedReference(AutomatonError):
    """
    Raised when an automaton refers to something it did not declare: the
    initial state, an accepting state or a transition endpoint that is not in
    the state set, or a transition symbol that is not in the alphabet.
    """


class InvalidAlphabetSymbol(AutomatonError):
    """
    Raised when a symbol is not acceptable for an alphabet, either because it
    is given to an acceptance query and is not in the automaton's alphabet,
    or because it can never be an input symbol (whitespace, multi-character
    strings, the epsilon marker).
    """


class NotDeterministic(AutomatonError):
    """
    Raised when a deterministic automaton is built from transitions that are
    not a total function of (state, symbol).
    """
