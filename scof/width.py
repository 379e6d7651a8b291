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
Estimate the intrinsic horizontal space a bar needs.

The width of a bar is a relative weight in thousandths of a stave space; the
layout engine scales it to the page. Every note and rest gets a slot, the
width of which depends on the shortest note value in the channel (the
"measure type"): the more notes fit in a bar, the less room each one gets. A
slot is never narrower than the glyphs it holds.

An example::

    >>> from scof.decoder import decode
    >>> from scof.width import channel_width
    >>> channel_width(decode("HC4 D4"))
    3200.0
    >>> channel_width(decode("C4 D4 E4 F4"))    # the noteheads need more room
    4720

"""

import collections
import fractions

from .duration import duration_class
from .notation import GraceNote, Marking, MarkingKind, Note, Rest


#: Glyph widths (in thousandths of a stave space), defaults resembling the
#: Bravura font.
GlyphMetrics = collections.namedtuple("GlyphMetrics",
    "notehead accidental flag dynamic barline time_signature",
    defaults=(1180, 1000, 1060, 1500, 160, 1800))

#: The width of a bar holding a single whole note.
BAR_WIDTH = 3200

#: The width of a measure repeat sign, used when a repeated channel can't be
#: resolved.
REPEAT_SIGN_WIDTH = BAR_WIDTH // 2

#: The part of BAR_WIDTH one slot gets, per duration class (log) of the
#: shortest note in a channel. Classes of a whole note and longer get 1.
MEASURE_TYPES = {
    0: fractions.Fraction(1),
    1: fractions.Fraction(1, 2),
    2: fractions.Fraction(1, 3),
    3: fractions.Fraction(1, 5),
    4: fractions.Fraction(1, 8),
    5: fractions.Fraction(1, 12),
    6: fractions.Fraction(1, 16),
    7: fractions.Fraction(1, 20),
}

#: Grace notes are printed smaller.
GRACE_SCALE = 0.6

#: Markings that take horizontal room, as a part of the notehead width.
MARKING_SCALE = {
    MarkingKind.BREATH: 0.5,
    MarkingKind.CAESURA_SHORT: 0.5,
    MarkingKind.CAESURA_LONG: 0.5,
}

#: Cost factors of an accidental.
ACCIDENTAL_FIRST = 0.5
ACCIDENTAL_CLEAR = 0.25

#: Accidentals at least this many steps from the previous one don't collide.
ACCIDENTAL_CLEARANCE = 6

#: Extent of a bar: its index, intrinsic width and number of tokens.
Extent = collections.namedtuple("Extent", "index width tokens")


def measure_type(tokens):
    """Return the slot fraction for the shortest note or rest in the tokens.

    Returns None if there are no notes or rests.

    """
    logs = [duration_class(t.duration) for t in tokens if isinstance(t, (Note, Rest))]
    if logs:
        return MEASURE_TYPES[min(max(max(logs), 0), max(MEASURE_TYPES))]


def accidental_costs(tokens, key=None):
    """Yield the cost factor for every token that has a written accidental.

    The first glyph of the channel costs less, and so does an accidental that
    is far enough from the previous accidental not to collide with it.

    If ``key`` is given, it is the list of 7 alterations of the key signature
    (see :meth:`.Signature.accidentals`), and accidentals that the key
    signature, or an earlier note on the same staff position in the channel,
    already implies are not printed and cost nothing.

    """
    previous = None
    current = {}
    for i, t in enumerate(tokens):
        pitch = getattr(t, 'pitch', None)
        if pitch is None or pitch.accidental is None:
            continue
        if key is not None:
            step = pitch.steps()
            if pitch.alter == current.get(step, key[pitch.note]):
                continue
            current[step] = pitch.alter
        if i == 0:
            yield ACCIDENTAL_FIRST
        elif previous is not None and abs(pitch.steps() - previous.steps()) >= ACCIDENTAL_CLEARANCE:
            yield ACCIDENTAL_CLEAR
        else:
            yield 1.0
        previous = pitch


def channel_width(tokens, metrics=None, key=None):
    """Return the intrinsic width of a channel holding the tokens.

    ``key``, if given, is the list of alterations of the key signature.

    """
    m = metrics or GlyphMetrics()
    fraction = measure_type(tokens)
    slot = float(fraction * BAR_WIDTH) if fraction else 0
    width = 0
    for t in tokens:
        if isinstance(t, (Note, Rest)):
            glyph = m.notehead
            if duration_class(t.duration) >= 3:
                glyph += m.flag
            if getattr(t, 'dynamic', None) is not None:
                glyph = max(glyph, m.dynamic)
            width += max(slot, glyph)
        elif isinstance(t, GraceNote):
            width += GRACE_SCALE * m.notehead
        elif isinstance(t, Marking):
            width += MARKING_SCALE.get(t.kind, 0) * m.notehead
    width += sum(accidental_costs(tokens, key)) * m.accidental
    return width


def signature_width(signature, metrics=None):
    """Return the width of the key and time signature at the start of a bar."""
    m = metrics or GlyphMetrics()
    return abs(signature.sharps_flats()) * m.accidental + m.time_signature


def estimate_width(bar, metrics=None, resolve=None, signature=None):
    """Return the intrinsic width of the :class:`~.score.Bar`.

    This is the width of the widest channel plus the barline and, if the bar
    shows it and ``signature`` is given, the key and time signature. With a
    ``signature``, accidentals of the key signature are not counted.

    ``resolve``, if given, is called with a channel index and must return the
    Channel a measure repeat stands for, see :meth:`.Score.resolve`. Without
    it, a repeated channel gets the width of the repeat sign.

    """
    m = metrics or GlyphMetrics()
    key = signature.accidentals() if signature is not None else None
    widths = [0]
    for i, c in enumerate(bar.channels):
        if getattr(c, 'tokens', None) is not None:
            widths.append(channel_width(c.tokens, m, key))
        elif resolve:
            widths.append(channel_width(resolve(i).tokens, m, key))
        else:
            widths.append(REPEAT_SIGN_WIDTH)
    width = max(widths) + m.barline
    if signature is not None and bar.shows_signature:
        width += signature_width(signature, m)
    return width


def token_count(bar, resolve=None):
    """Return the number of tokens of the fullest channel of the bar."""
    counts = [0]
    for i, c in enumerate(bar.channels):
        if getattr(c, 'tokens', None) is not None:
            counts.append(len(c.tokens))
        elif resolve:
            counts.append(len(resolve(i).tokens))
        else:
            counts.append(1)
    return max(counts)

