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
Classes and functions to deal with ScoreFall pitches.

A pitch consists of a note (the index in the scale C D E F G A B), an octave
and an optional written accidental. The notes 0..6 correspond with the usual
"white keys" C, D, E, F, G, A, B.

The octave of a pitch is 0 for the octave starting at middle C. In the
notation text the octave is written as a single character after the note
name, where ``4`` is the octave of middle C and ``-`` stands for the octave
below ``0``. So ``C4`` is middle C, ``A4`` the concert A, and ``B-`` the
lowest B that can be written.

An accidental is written between the note name and the octave, e.g. ``Bb3``,
``F#5`` or ``Et4`` (E quarter sharp). The quarter-step accidentals are only
allowed in microtonal keys, see :mod:`.key`.

"""

import enum
import fractions


#: Note names, indexed by note.
NOTE_NAMES = 'CDEFGAB'

#: The text octave digit of the octave containing middle C.
MIDDLE_OCTAVE = 4

#: Major scale: C D E F G A B, with the default pitch offset from the starting
#: C in whole tones.
MAJOR_SCALE = (0, 1, 2, 2.5, 3.5, 4.5, 5.5)


class Accidental(enum.Enum):
    """A written accidental.

    The value is the text form; :attr:`alter` is the alteration in whole tones.

    """
    DOUBLE_FLAT = 'bb'
    THREE_QUARTER_FLAT = 'db'
    FLAT = 'b'
    QUARTER_FLAT = 'd'
    NATURAL = 'n'
    QUARTER_SHARP = 't'
    SHARP = '#'
    THREE_QUARTER_SHARP = 't#'
    DOUBLE_SHARP = 'x'

    @property
    def alter(self):
        """The alteration in whole tones, as a Fraction."""
        return _alterations[self]

    @property
    def microtonal(self):
        """True if this accidental alters by an odd number of quarter steps."""
        return self.alter.denominator == 4


_alterations = {
    Accidental.DOUBLE_FLAT: fractions.Fraction(-1),
    Accidental.THREE_QUARTER_FLAT: fractions.Fraction(-3, 4),
    Accidental.FLAT: fractions.Fraction(-1, 2),
    Accidental.QUARTER_FLAT: fractions.Fraction(-1, 4),
    Accidental.NATURAL: fractions.Fraction(0),
    Accidental.QUARTER_SHARP: fractions.Fraction(1, 4),
    Accidental.SHARP: fractions.Fraction(1, 2),
    Accidental.THREE_QUARTER_SHARP: fractions.Fraction(3, 4),
    Accidental.DOUBLE_SHARP: fractions.Fraction(1),
}


class Pitch:
    """A pitch with ``octave``, ``note``, and ``accidental`` attributes.

    The ``octave`` is an integer where 0 stands for the octave containing
    "middle C". The ``note`` is an integer in the 0..6 range, where 0 stands
    for C. The ``accidental`` is an :class:`Accidental` or None, when no
    accidental is written.

    Pitches compare equal when their attributes are the same, and also support
    the ``>``, ``<``, ``>=`` and ``<=`` operators. These operators compare on
    octave first, then note, then alter. Pitches are hashable and should be
    treated as immutable values.

    ``format(pitch)`` returns the notation text of the pitch.

    """
    __slots__ = ('octave', 'note', 'accidental')

    def __init__(self, octave, note, accidental=None):
        self.octave = octave
        self.note = note
        self.accidental = accidental

    @property
    def alter(self):
        """The alteration in whole tones (0 if there is no accidental)."""
        return self.accidental.alter if self.accidental else 0

    def __format__(self, format_spec):
        try:
            s = self.to_string()
        except ValueError:
            s = '?'
        return format(s, format_spec)

    def __repr__(self):
        return "<{} octave={}, note={}, accidental={} ({})>".format(
            self.__class__.__name__, self.octave, self.note,
            self.accidental.value if self.accidental else None, self)

    def _as_tuple(self):
        """Return our attributes as a sortable tuple."""
        return (self.octave, self.note, self.alter)

    def __eq__(self, other):
        return (isinstance(other, Pitch)
            and (self.octave, self.note, self.accidental)
                == (other.octave, other.note, other.accidental))

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((self.octave, self.note, self.accidental))

    def __gt__(self, other):
        if isinstance(other, Pitch):
            return self._as_tuple() > other._as_tuple()
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, Pitch):
            return self._as_tuple() < other._as_tuple()
        return NotImplemented

    def __ge__(self, other):
        if isinstance(other, Pitch):
            return self._as_tuple() >= other._as_tuple()
        return NotImplemented

    def __le__(self, other):
        if isinstance(other, Pitch):
            return self._as_tuple() <= other._as_tuple()
        return NotImplemented

    def steps(self):
        """Return the visual distance above middle C in diatonic steps.

        This is the vertical position on the staff, regardless of the
        accidental.

        """
        return self.octave * len(MAJOR_SCALE) + self.note

    @property
    def microtonal(self):
        """True if this pitch has a quarter-step accidental."""
        return bool(self.accidental and self.accidental.microtonal)

    def to_string(self):
        """Return the notation text of this pitch, e.g. ``'Bb3'``.

        Raises a ValueError if the octave can't be written.

        """
        return NOTE_NAMES[self.note] + (
            self.accidental.value if self.accidental else '') + octave_to_string(self.octave)

    @classmethod
    def from_string(cls, text):
        """Return a Pitch from the notation text, e.g. ``'F#5'``.

        Raises a ValueError if the text is not a valid pitch.

        """
        text = text.strip()
        if len(text) < 2 or text[0] not in NOTE_NAMES:
            raise ValueError("invalid pitch: {}".format(repr(text)))
        note = NOTE_NAMES.index(text[0])
        acc = text[1:-1]
        try:
            accidental = Accidental(acc) if acc else None
        except ValueError:
            raise ValueError("invalid accidental in pitch: {}".format(repr(text))) from None
        return cls(octave_from_string(text[-1]), note, accidental)


def octave_to_string(octave):
    """Return the octave character for the octave, where 0 yields ``'4'``.

    Raises a ValueError if the octave can't be written.

    """
    digit = octave + MIDDLE_OCTAVE
    if digit == -1:
        return '-'
    elif 0 <= digit <= 9:
        return str(digit)
    raise ValueError("octave out of range: {}".format(octave))


def octave_from_string(char):
    """Return the octave for the octave character, where ``'4'`` yields 0.

    Raises a ValueError if the character is not an octave.

    """
    if char == '-':
        return -1 - MIDDLE_OCTAVE
    elif len(char) == 1 and char.isdigit():
        return int(char) - MIDDLE_OCTAVE
    raise ValueError("invalid octave: {}".format(repr(char)))

