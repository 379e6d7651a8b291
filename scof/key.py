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
Signatures: the key, time signature, tempo and swing in effect for a bar.

The key is given as an index in the table of 24 keys, counting quarter steps
above C. Even indices are the twelve common major keys, odd indices are the
keys a quarter step higher, which are microtonal: in a microtonal key, the
quarter-step accidentals may be used.

"""

import collections
import fractions

from . import pitch
from .time import TimeSignature, time_signature


#: Number of keys in the key table.
KEY_COUNT = 24

#: The number of sharps (positive) or flats (negative) for each of the twelve
#: semitones above C, as written in a key signature.
SHARPS_FLATS = (0, -5, 2, -3, 4, -1, 6, 1, -4, 3, -2, 5)


def _int(value):
    """Return int if val is integer."""
    i = int(value)
    return i if value == i else value


def _is_int(value):
    """Return True if value is an integer, but not a bool."""
    return isinstance(value, int) and not isinstance(value, bool)


def alterations(offset, scale=None):
    """Return the list of alterations for the specified offset.

    The list has the same length as the :py:data:`scale <.pitch.MAJOR_SCALE>`.
    The ``offset`` is an integer that specifies the number of notes to shift
    the scale to the left or right. For example::

        >>> from scof.key import alterations
        >>> alterations(0)
        [0, 0, 0, 0, 0, 0, 0]
        >>> alterations(5)          # aeolian
        [0, 0, -0.5, 0, 0, -0.5, -0.5]

    """
    scale = scale or pitch.MAJOR_SCALE
    l = len(scale)
    offset %= l
    alter = scale[offset] - scale[0]
    return [_int(scale[step % l] + step // l * 6 - scale[orig] - alter)
                for step, orig in enumerate(range(l), offset)]


def accidentals(note, alter=0, mode=None, scale=None):
    """Return the list of 7 alterations for the specified key signature.

    The ``note`` is a note from 0..6; the ``alter`` is the alteration of that
    note in whole tones, and the ``mode``, if given, is a list of 7 alterations
    describing the mode. By default the major mode is used. Examples::

        >>> accidentals(1, 0)                  # D major, accs for C# and F#
        [0.5, 0, 0, 0.5, 0, 0, 0]
        >>> accidentals(5, -0.5)               # A-flat major
        [0, -0.5, -0.5, 0, 0, -0.5, -0.5]

    """
    scale = scale or pitch.MAJOR_SCALE
    if mode is None:
        mode = alterations(0, scale)
    note %= len(scale)
    steps = alterations(note, scale)
    accs = [_int(m - s + alter) for m, s in zip(mode, steps)]
    return accs[-note:] + accs[:-note]  # rotate so C is always at start


def tonic(sf, scale=None):
    """Return the tuple(note, alter) which is the musical tonic for the major
    scale with the given number of sharps or flats ``sf``.

    If ``sf`` is negative, it is the number of flats, otherwise it is the
    number of sharps.

    """
    scale = scale or pitch.MAJOR_SCALE
    l = len(scale)
    note, alter = 0, 0
    d = 1 if sf > 0 else -1 if sf < 0 else 0
    for _ in range(d * sf):
        doct, new_note = divmod(note + d * 4, l)
        alter += d * 3.5 - doct * 6 - scale[new_note] + scale[note]
        note = new_note
    return note, alter


class Signature(collections.namedtuple("Signature", "key time tempo swing")):
    """The key, time signature, tempo and swing of a part of the score.

    ``key`` is the index in the key table (quarter steps above C, normalized
    modulo 24), ``time`` a :class:`~.time.TimeSignature` (a two-tuple is
    converted), ``tempo`` the number of quarter notes per minute and
    ``swing`` a percentage from 0 to 100, where 50 means straight. Key, tempo
    and swing are integers.

    Raises a ValueError for invalid values.

    """
    __slots__ = ()

    def __new__(cls, key=0, time=(4, 4), tempo=120, swing=50):
        if not _is_int(key):
            raise ValueError("invalid key: {!r}".format(key))
        if isinstance(time, str):
            time = TimeSignature.from_string(time)
        else:
            time = time_signature(time)
        if not _is_int(tempo) or tempo <= 0:
            raise ValueError("invalid tempo: {!r}".format(tempo))
        if not _is_int(swing) or not 0 <= swing <= 100:
            raise ValueError("invalid swing: {!r}".format(swing))
        return super().__new__(cls, key % KEY_COUNT, time, tempo, swing)

    @classmethod
    def from_dict(cls, d):
        """Return a Signature from a mapping with the keys ``"key"``,
        ``"time"``, ``"tempo"`` and ``"swing"``; missing keys get the default
        value.

        """
        unknown = set(d) - set(cls._fields)
        if unknown:
            raise ValueError("unknown signature fields: {}".format(
                ", ".join(sorted(unknown))))
        return cls(**d)

    @property
    def microtonal(self):
        """True if the key is a quarter step off the twelve common keys."""
        return bool(self.key % 2)

    def sharps_flats(self):
        """Return the number of sharps (positive) or flats (negative)."""
        return SHARPS_FLATS[self.key // 2]

    def accidentals(self):
        """Return the list of 7 alterations (Fractions) of the key signature,
        starting at C.

        """
        note, alter = tonic(self.sharps_flats())
        offset = fractions.Fraction(1, 4) if self.microtonal else 0
        return [fractions.Fraction(a) + offset for a in accidentals(note, alter)]

