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
Check that the notes of a channel fill the bar exactly.

The length of a channel is the exact sum of the durations of its notes and
rests; grace notes and markings take no time. A channel that consists of a
measure repeat sign (``%``) repeats a channel that already passed validation,
and always validates.

An example::

    >>> from scof.decoder import decode
    >>> from scof.time import TimeSignature, validate
    >>> validate(decode("C4 D4 E4"), TimeSignature(3, 4))
    >>> validate(decode("C4 D4"), TimeSignature(3, 4))
    Traceback (most recent call last):
     ...
    scof.time.BeatMismatch: expected 3/4, found 1/2

"""


import collections
import fractions

from .decoder import is_measure_repeat


class ValidationError(ValueError):
    """Base class for errors found when validating the contents of a bar."""


class BeatMismatch(ValidationError):
    """Raised when the length of a channel does not match its time signature.

    ``expected`` and ``actual`` are the lengths as Fraction, ``bar`` and
    ``channel`` the indices of the offending channel, if known.

    """
    def __init__(self, expected, actual, bar=None, channel=None):
        self.expected = expected
        self.actual = actual
        self.bar = bar
        self.channel = channel
        super().__init__("expected {}, found {}".format(expected, actual))

    def __eq__(self, other):
        return isinstance(other, BeatMismatch) and (
            (self.expected, self.actual, self.bar, self.channel)
            == (other.expected, other.actual, other.bar, other.channel))

    def __hash__(self):
        return hash((self.expected, self.actual, self.bar, self.channel))


class TimeSignature(collections.namedtuple("TimeSignature", "beats beat_unit")):
    """A time signature, e.g. ``TimeSignature(3, 4)``.

    ``beats`` must be a positive integer and ``beat_unit`` a positive power of
    two; a ValueError is raised otherwise.

    """
    __slots__ = ()

    def __new__(cls, beats, beat_unit):
        if not isinstance(beats, int) or beats < 1:
            raise ValueError("invalid number of beats: {!r}".format(beats))
        if not isinstance(beat_unit, int) or beat_unit < 1 or beat_unit & (beat_unit - 1):
            raise ValueError("invalid beat unit: {!r}".format(beat_unit))
        return super().__new__(cls, beats, beat_unit)

    def __str__(self):
        return "{}/{}".format(self.beats, self.beat_unit)

    @property
    def length(self):
        """The length of a full bar as a Fraction of a whole note."""
        return fractions.Fraction(self.beats, self.beat_unit)

    @classmethod
    def from_string(cls, text):
        """Return a TimeSignature from a string like ``"6/8"``.

        Raises a ValueError if the text is not a valid time signature.

        """
        beats, sep, unit = text.strip().partition('/')
        try:
            return cls(int(beats), int(unit))
        except ValueError:
            raise ValueError("invalid time signature: {!r}".format(text)) from None


def time_signature(signature):
    """Return the TimeSignature of ``signature``.

    The signature may be a TimeSignature, a two-tuple, or an object with a
    ``time`` attribute, such as a :class:`~.key.Signature`.

    """
    if isinstance(signature, TimeSignature):
        return signature
    time = getattr(signature, 'time', signature)
    return time if isinstance(time, TimeSignature) else TimeSignature(*time)


def length(tokens):
    """Return the total length of the tokens as a Fraction."""
    return sum((t.duration for t in tokens), fractions.Fraction(0))


def remaining(tokens, signature):
    """Return the length that is still missing to fill the bar.

    The returned value is negative when the tokens overfill the bar, and zero
    when the bar is full or the tokens are a measure repeat.

    """
    if is_measure_repeat(tokens):
        return fractions.Fraction(0)
    return time_signature(signature).length - length(tokens)


def validate(tokens, signature, bar=None, channel=None):
    """Check that the tokens fill the bar of the signature exactly.

    Returns None if the tokens are valid. Raises :class:`BeatMismatch`
    otherwise, with the ``bar`` and ``channel`` indices, if given.

    """
    if is_measure_repeat(tokens):
        return
    expected = time_signature(signature).length
    actual = length(tokens)
    if actual != expected:
        raise BeatMismatch(expected, actual, bar, channel)

