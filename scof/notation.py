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
The tokens a channel of ScoreFall notation consists of.

A channel of a bar is a sequence of tokens, each being one of :class:`Note`,
:class:`Rest`, :class:`GraceNote` or :class:`Marking`. Every token has a
``duration`` attribute, which is zero for grace notes and markings.

The small enums in this module list the modifiers that can be attached to a
note. Each enum member has the notation text as its value.

"""

import dataclasses
import enum
import fractions

from .pitch import Pitch


class Dynamic(enum.IntEnum):
    """A dynamic mark.

    The members from ``PPPPP`` to ``FFFFF`` are ordered from soft to loud. The
    text form is the lowercase name, see :attr:`text`.

    """
    PPPPP = 0
    PPPP = 1
    PPP = 2
    PP = 3
    P = 4
    MP = 5
    MF = 6
    F = 7
    FF = 8
    FFF = 9
    FFFF = 10
    FFFFF = 11
    SF = 12
    SFZ = 13
    FP = 14
    SFP = 15
    N = 16

    @property
    def text(self):
        """The notation text of this dynamic."""
        return self.name.lower()

    @classmethod
    def from_string(cls, text):
        """Return the Dynamic for the text, raises KeyError if unknown."""
        if not text.islower():
            raise KeyError(text)
        return cls[text.upper()]


class Articulation(enum.Enum):
    """An articulation; more than one can be attached to a note."""
    STACCATISSIMO = "'"
    STACCATO = '.'
    TENUTO = '_'
    MARCATO = '^'
    ACCENT = '>'
    CLOSED = '+'
    OPEN = 'o'
    HARMONIC = '@'
    PEDAL = '|'


#: The compound articulation forms and the articulations they stand for.
COMPOUND_ARTICULATIONS = {
    '_.': frozenset((Articulation.TENUTO, Articulation.STACCATO)),
    '^.': frozenset((Articulation.MARCATO, Articulation.STACCATO)),
    '^_': frozenset((Articulation.MARCATO, Articulation.TENUTO)),
    '>.': frozenset((Articulation.ACCENT, Articulation.STACCATO)),
    '>_': frozenset((Articulation.ACCENT, Articulation.TENUTO)),
}


class Ornament(enum.Enum):
    """An ornament; at most one per note."""
    TRILL = '~'
    TURN = '*'
    INVERTED_TURN = ';'
    TREMOLO = '!'
    FERMATA = ':'


class Connection(enum.Enum):
    """How a note connects to the next one; at most one per note."""
    TIE = '='
    SLUR_START = '('
    SLUR_END = ')'
    GLISSANDO = '~~'


class Bend(enum.Enum):
    """A pitch bend into or out of a note; at most one per note."""
    UP_INTO = '/'
    DOWN_INTO = '\\'
    UP_OUT = '//'
    DOWN_OUT = '\\\\'


class MarkingKind(enum.Enum):
    """A mark that sits between notes and takes no time."""
    BREATH = ','
    CAESURA_SHORT = '"'
    CAESURA_LONG = '""'
    CRESCENDO = '<<'
    DECRESCENDO = '>>'
    PIZZICATO = '$p'
    ARCO = '$a'
    MUTE = '$m'
    OPEN = '$o'
    MEASURE_REPEAT = '%'


#: The zero duration of grace notes and markings.
ZERO = fractions.Fraction(0)


@dataclasses.dataclass(frozen=True)
class Note:
    """A note with its pitch, duration and attached modifiers."""
    pitch: Pitch
    duration: fractions.Fraction = fractions.Fraction(1, 4)
    dynamic: Dynamic = None
    articulations: frozenset = frozenset()
    ornament: Ornament = None
    connection: Connection = None
    bend: Bend = None


@dataclasses.dataclass(frozen=True)
class Rest:
    """A rest."""
    duration: fractions.Fraction = fractions.Fraction(1, 4)


@dataclasses.dataclass(frozen=True)
class GraceNote:
    """A grace note; it precedes a :class:`Note` and takes no time."""
    pitch: Pitch

    @property
    def duration(self):
        return ZERO


@dataclasses.dataclass(frozen=True)
class Marking:
    """A :class:`MarkingKind` placed between the notes."""
    kind: MarkingKind

    @property
    def duration(self):
        return ZERO

