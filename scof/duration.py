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
Functions to deal with ScoreFall note durations.

A duration is a :class:`~fractions.Fraction` or an integer, where a whole note
is 1. A duration can be split in two values, log and dot-count, where the log
value is 0 for a whole note, 1 for a half note, 2 for a crotchet, -1 for a
breve, etc.

In the notation text a duration is written as a single capital letter,
optionally followed by augmentation dots:

=======  ===========  ===
letter   name         log
=======  ===========  ===
``L``    longa        -2
``V``    breve        -1
``W``    whole         0
``H``    half          1
``Q``    quarter       2
``T``    eighth        3
``S``    sixteenth     4
``Y``    32nd          5
``X``    64th          6
``O``    128th         7
=======  ===========  ===

"""

import fractions
import math


#: Duration letters, indexed by log + 2.
LETTERS = 'LVWHQTSYXO'

#: The shortest and longest log values that have a letter.
MIN_LOG, MAX_LOG = -2, 7


def log_dotcount(value):
    r"""Return the integer two-tuple (log, dotcount) for the duration value.

    The ``value`` may be a Fraction, integer or floating point value.

    The returned log is 0 for a whole note, 1 for a half note, 2 for a
    crotchet, -1 for a breve, etc. For example::

        >>> from scof.duration import log_dotcount
        >>> log_dotcount(1)
        (0, 0)
        >>> log_dotcount(1/2)
        (1, 0)
        >>> log_dotcount(4)
        (-2, 0)
        >>> log_dotcount(3/4)
        (1, 1)
        >>> log_dotcount(7/16)
        (2, 2)

    The value is truncated to a duration that can be expressed by a note length
    and a number of dots.

    """
    mantisse, exponent = math.frexp(value)
    dotcount = int(-1 - math.log2(1 - mantisse))
    log = 1 - exponent
    return log, dotcount


def duration(log, dotcount=0):
    r"""Return the duration as a Fraction.

    See for an explanation of the ``log`` and ``dotcount`` values
    :func:`log_dotcount`.

    """
    numer = ((2 << dotcount) - 1) << 3
    denom = 1 << (dotcount + log + 3)
    return fractions.Fraction(numer, denom)


def is_expressible(value):
    """Return True if the value can be written as a letter and dots."""
    if value <= 0:
        return False
    log, dotcount = log_dotcount(value)
    return MIN_LOG <= log <= MAX_LOG and duration(log, dotcount) == value


def to_string(value):
    r"""Convert the value (most times a Fraction) to a duration letter with dots.

    For example::

        >>> from fractions import Fraction
        >>> from scof.duration import to_string
        >>> to_string(Fraction(3, 8))
        'Q.'
        >>> to_string(4)
        'L'

    Unlike the truncating :func:`log_dotcount`, raises a ValueError if the
    value can't be expressed exactly by a letter and a number of dots.

    """
    if not is_expressible(value):
        raise ValueError("can't write duration {} as a letter".format(value))
    log, dotcount = log_dotcount(value)
    return LETTERS[log - MIN_LOG] + '.' * dotcount


def from_string(text, dotcount=None):
    r"""Convert a duration string (e.g. ``'Q.'``) to a Fraction.

    If ``dotcount`` is None, the dots are expected to be in the ``text``.

    For example::

        >>> from scof.duration import from_string
        >>> from_string('T')
        Fraction(1, 8)
        >>> from_string('T..')
        Fraction(7, 32)
        >>> from_string('T', dotcount=2)
        Fraction(7, 32)

    Raises a ValueError if an invalid duration is specified.

    """
    if dotcount is None:
        dotcount = text.count('.')
    text = text.strip(' \t.')
    if len(text) != 1 or text not in LETTERS:
        raise ValueError("invalid duration: {}".format(repr(text)))
    return duration(LETTERS.index(text) + MIN_LOG, dotcount)


def duration_class(value):
    """Return the log of the undotted note value of the duration.

    This is the "duration class" used when estimating horizontal space: a
    dotted eighth belongs to the eighth class (3), a half note to class 1.

    """
    return log_dotcount(value)[0]

