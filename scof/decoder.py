# -*- coding: utf-8 -*-
#
# This file is part of `scof`, a library for the ScoreFall notation format
#
# Copyright © 2020-2022 by the scof authors
#
# This module is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This module is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.


"""
Decode the notation text of one channel of a bar into tokens, and back.

The notation is prefix based: a dynamic, articulations, an ornament, a bend, a
connection and a duration letter are collected and attached to the next pitch
(which becomes a :class:`~.notation.Note`) or ``R`` (a
:class:`~.notation.Rest`). The duration is sticky: it stays in effect until
another duration letter is written, and is initially a quarter note. For
example::

    >>> from scof.decoder import decode, encode
    >>> tokens = decode("fTC4 D4 QR")
    >>> [type(t).__name__ for t in tokens]
    ['Note', 'Note', 'Rest']
    >>> tokens[1].duration
    Fraction(1, 8)
    >>> encode(tokens)
    'fTC4 D4 QR'

Whitespace between tokens is ignored. Decoding errors are reported as a
:class:`DecodeError` with the position in the text.

"""

from . import duration as _duration
from .lang.notation import Grace, lex
from .notation import (
    Articulation, Bend, COMPOUND_ARTICULATIONS, Connection, Dynamic, GraceNote,
    Marking, MarkingKind, Note, Ornament, Rest)
from .pitch import Pitch


#: The duration in effect at the start of a channel.
DEFAULT_DURATION = _duration.from_string('Q')


class DecodeError(ValueError):
    """Base class for errors while decoding notation text.

    The ``position`` attribute is the offset in the text where the problem was
    found.

    """
    def __init__(self, position, message=None):
        self.position = position
        super().__init__(message or "{} at position {}".format(
            type(self).__name__, position))

    def __eq__(self, other):
        return type(self) is type(other) and self.position == other.position

    def __hash__(self):
        return hash((type(self), self.position))


class UnrecognizedToken(DecodeError):
    """Raised for text that can't be read as a token at this place."""


class InvalidAccidental(DecodeError):
    """Raised for a quarter-step accidental outside a microtonal key."""


class Decoder:
    """Decode notation text to a tuple of tokens.

    Set ``microtonal`` to True (on instantiation or as attribute) to allow the
    quarter-step accidentals.

    """
    #: Allow quarter-step accidentals
    microtonal = False

    def __init__(self, microtonal=None):
        if microtonal is not None:
            self.microtonal = microtonal

    def __repr__(self):
        return "<{} microtonal={}>".format(type(self).__name__, self.microtonal)

    def pitch(self, lexeme):
        """Return a Pitch for the pitch lexeme, checking the accidental."""
        pitch = Pitch.from_string(lexeme.text)
        if pitch.microtonal and not self.microtonal:
            raise InvalidAccidental(lexeme.pos)
        return pitch

    def decode(self, text):
        """Return a tuple of tokens for the notation text.

        Raises :class:`UnrecognizedToken` or :class:`InvalidAccidental` on
        errors.

        """
        lexemes = lex(text)
        if not lexemes:
            return ()
        for lexeme in lexemes:
            if not isinstance(lexeme, Grace) and lexeme.kind == 'repeat':
                if len(lexemes) > 1:
                    raise UnrecognizedToken(lexeme.pos)
                return (Marking(MarkingKind.MEASURE_REPEAT),)

        tokens = []
        current = DEFAULT_DURATION
        pending = {}    # modifier kind: (value, position)
        articulations = set()
        graces = []
        grace_pos = None

        def first_pending():
            """Return the position of the first pending item, or None."""
            positions = [pos for value, pos in pending.values()]
            if grace_pos is not None:
                positions.append(grace_pos)
            return min(positions) if positions else None

        def hold(kind, value, pos):
            if kind in pending:
                raise UnrecognizedToken(pos)
            pending[kind] = (value, pos)

        def value(kind):
            return pending[kind][0] if kind in pending else None

        for lexeme in lexemes:
            if isinstance(lexeme, Grace):
                if not lexeme.closed or not lexeme.lexemes or grace_pos is not None:
                    raise UnrecognizedToken(lexeme.pos)
                for g in lexeme.lexemes:
                    if g.kind != 'pitch':
                        raise UnrecognizedToken(g.pos)
                    graces.append(GraceNote(self.pitch(g)))
                grace_pos = lexeme.pos
                continue
            kind, text, pos = lexeme
            if kind == 'pitch':
                if 'duration' in pending:
                    current = value('duration')
                tokens.extend(graces)
                tokens.append(Note(
                    self.pitch(lexeme), current, value('dynamic'),
                    frozenset(articulations), value('ornament'),
                    value('connection'), value('bend')))
                pending.clear()
                articulations.clear()
                graces.clear()
                grace_pos = None
            elif kind == 'rest':
                dangling = [p for k, (v, p) in pending.items() if k != 'duration']
                if grace_pos is not None:
                    dangling.append(grace_pos)
                if dangling:
                    raise UnrecognizedToken(min(dangling))
                if 'duration' in pending:
                    current = value('duration')
                tokens.append(Rest(current))
                pending.clear()
            elif kind == 'duration':
                hold(kind, _duration.from_string(text), pos)
            elif kind == 'dynamic':
                hold(kind, Dynamic.from_string(text), pos)
            elif kind == 'ornament':
                hold(kind, Ornament(text), pos)
            elif kind == 'connection':
                hold(kind, Connection(text), pos)
            elif kind == 'bend':
                hold(kind, Bend(text), pos)
            elif kind == 'articulation':
                pending.setdefault(kind, (None, pos))
                articulations.update(
                    COMPOUND_ARTICULATIONS.get(text) or (Articulation(text),))
            elif kind == 'marking':
                tokens.append(Marking(MarkingKind(text)))
            else:
                raise UnrecognizedToken(pos)

        pos = first_pending()
        if pos is not None:
            raise UnrecognizedToken(pos)
        return tuple(tokens)


def decode(text, microtonal=False):
    """Decode the notation text to a tuple of tokens.

    See :class:`Decoder`.

    """
    return Decoder(microtonal).decode(text)


def is_measure_repeat(tokens):
    """Return True if the tokens consist of only a measure repeat sign."""
    return len(tokens) == 1 and tokens[0] == Marking(MarkingKind.MEASURE_REPEAT)


def _note_text(note, current):
    """Return the text for the Note, given the current duration."""
    s = [note.dynamic.text if note.dynamic is not None else '']
    s.extend(a.value for a in Articulation if a in note.articulations)
    for modifier in (note.ornament, note.bend, note.connection):
        if modifier is not None:
            s.append(modifier.value)
    if note.duration != current:
        s.append(_duration.to_string(note.duration))
    s.append(note.pitch.to_string())
    return ''.join(s)


def encode(tokens):
    """Return the canonical notation text for the tokens.

    Tokens are separated by a space, grace notes are grouped between braces,
    and a duration letter is only written when the duration changes. Raises a
    ValueError if a duration or octave can't be written.

    Decoding the returned text yields the same tokens again.

    """
    words = []
    graces = []
    current = DEFAULT_DURATION
    for t in tokens:
        if isinstance(t, GraceNote):
            graces.append(t.pitch.to_string())
            continue
        if graces:
            words.append('{' + ' '.join(graces) + '}')
            graces.clear()
        if isinstance(t, Note):
            words.append(_note_text(t, current))
            current = t.duration
        elif isinstance(t, Rest):
            words.append(('' if t.duration == current else
                          _duration.to_string(t.duration)) + 'R')
            current = t.duration
        elif isinstance(t, Marking):
            words.append(t.kind.value)
        else:
            raise TypeError("not a notation token: {!r}".format(t))
    if graces:
        words.append('{' + ' '.join(graces) + '}')
    return ' '.join(words)

