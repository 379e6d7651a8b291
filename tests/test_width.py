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
Test scof.width.
"""

### find scof
import sys
sys.path.insert(0, '.')


from fractions import Fraction

import pytest

from scof.decoder import decode
from scof.key import Signature
from scof.score import Bar, Channel, RepeatsPrevious
from scof.width import *


def test_main():
    """Main test function."""
    assert channel_width(decode("HC4 D4")) == 3200
    assert channel_width(decode("WC4")) == BAR_WIDTH
    # the noteheads need more than a third of the bar
    assert channel_width(decode("C4 D4 E4 F4")) == 4 * 1180
    assert channel_width(()) == 0

    m = GlyphMetrics(notehead=500)
    assert channel_width(decode("C4 D4 E4 F4"), m) == pytest.approx(4 * BAR_WIDTH / 3)
    assert channel_width(decode("TC4 D4"), m) == 2 * (500 + 1060)


def test_measure_type():
    assert measure_type(()) is None
    assert measure_type(decode(",")) is None
    assert measure_type(decode("WC4")) == 1
    assert measure_type(decode("LC4")) == 1
    assert measure_type(decode("HC4 QD4")) == Fraction(1, 3)
    # the shortest note value governs
    assert measure_type(decode("HC4 TD4 E4")) == Fraction(1, 5)
    assert measure_type(decode("OC4")) == Fraction(1, 20)


def test_glyphs():
    m = GlyphMetrics(dynamic=5000)
    assert channel_width(decode("fWC4"), m) == 5000
    assert channel_width(decode("{C4} WD4")) == pytest.approx(3200 + 0.6 * 1180)
    assert channel_width(decode("WC4 ,")) == pytest.approx(3200 + 0.5 * 1180)
    assert channel_width(decode("WC4 <<")) == 3200

    assert list(accidental_costs(decode("C#4 D4 Eb4"))) == [0.5, 1.0]
    assert list(accidental_costs(decode("C4 F#4 G#5"))) == [1.0, 0.25]
    assert list(accidental_costs(decode("C4 D4"))) == []
    assert channel_width(decode("HC#4 Db4")) == pytest.approx(3200 + 1.5 * 1000)

    # G major: the key signature already has the F sharp
    g = Signature(key=14).accidentals()
    assert list(accidental_costs(decode("F#4 G4"), g)) == []
    assert list(accidental_costs(decode("F#4 Fn4 F#4 F#5"), g)) == [1.0, 1.0]
    assert channel_width(decode("HF#4 Fn4"), key=g) == pytest.approx(3200 + 1000)
    assert channel_width(decode("HF#4 Fn4")) == pytest.approx(3200 + 1.5 * 1000)


def test_estimate_width():
    bar = Bar((Channel(decode("WC4")), Channel(decode("HC4 D4"))), 0, False, ())
    assert estimate_width(bar) == 3200 + 160
    assert token_count(bar) == 2

    # the signature is added when the bar shows it
    assert estimate_width(bar, signature=Signature(key=4)) == 3200 + 160
    bar = bar._replace(override=True)
    assert estimate_width(bar, signature=Signature(key=4)) == 3200 + 160 + 2 * 1000 + 1800

    bar = Bar((Channel(decode("HC#4 Db4")),), 0, False, ())
    assert estimate_width(bar) == pytest.approx(3200 + 160 + 1.5 * 1000)
    # C sharp is in the key signature of D major
    assert estimate_width(bar, signature=Signature(key=4)) == pytest.approx(3200 + 160 + 1000)

    bar = Bar((RepeatsPrevious(),), 1, False, ())
    assert estimate_width(bar) == REPEAT_SIGN_WIDTH + 160
    assert token_count(bar) == 1
    resolve = lambda i: Channel(decode("C4 D4 E4 F4"))
    assert estimate_width(bar, resolve=resolve) == 4 * 1180 + 160
    assert token_count(bar, resolve) == 4


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
