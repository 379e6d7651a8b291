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
Test scof.time.
"""

### find scof
import sys
sys.path.insert(0, '.')


from fractions import Fraction

import pytest

from scof.decoder import decode
from scof.key import Signature
from scof.time import (
    BeatMismatch, TimeSignature, ValidationError, length, remaining, validate)


def test_main():
    """Main test function."""
    assert validate(decode("C4D4E4"), TimeSignature(3, 4)) is None

    with pytest.raises(BeatMismatch) as e:
        validate(decode("C4 D4"), TimeSignature(3, 4))
    assert e.value.expected == Fraction(3, 4)
    assert e.value.actual == Fraction(1, 2)
    assert isinstance(e.value, ValidationError)

    # validating twice gives the same result
    tokens = decode("H.C4 QR")
    for _ in range(2):
        validate(tokens, TimeSignature(4, 4))
    for _ in range(2):
        with pytest.raises(BeatMismatch) as e:
            validate(tokens, TimeSignature(3, 4), bar=2, channel=1)
        assert e.value == BeatMismatch(Fraction(3, 4), 1, 2, 1)


def test_measure_repeat():
    validate(decode("%"), TimeSignature(3, 4))
    validate(decode("%"), TimeSignature(7, 8))
    assert remaining(decode("%"), (5, 4)) == 0


def test_length():
    assert length(()) == 0
    assert length(decode("{C4} D4 , E4")) == Fraction(1, 2)
    assert length(decode("T.C4 SD4 HR")) == Fraction(3, 4)
    assert remaining(decode("C4"), (3, 4)) == Fraction(1, 2)
    assert remaining(decode("HC4 D4"), TimeSignature(3, 4)) == Fraction(-1, 4)
    assert remaining(decode("WC4"), Signature()) == 0


def test_grace_notes():
    def verdict(text):
        try:
            validate(decode(text), TimeSignature(3, 4))
        except BeatMismatch as e:
            return e.actual

    # grace notes take no time, in a full bar and in a short one
    for text, result in (("C4 D4 E4", None), ("C4 D4", Fraction(1, 2))):
        assert verdict(text) == result
        assert verdict("{B3} " + text) == result
        assert verdict(text.replace(" D4", " {F#4 G4} D4")) == result
        assert verdict("{Bb3 Cn4} " + text.replace(" D4", " {D#4} D4")) == result


def test_signature():
    t = TimeSignature(6, 8)
    assert t.length == Fraction(3, 4)
    assert str(t) == "6/8"
    assert TimeSignature.from_string(" 6/8 ") == t
    validate(decode("WC4"), Signature())
    with pytest.raises(BeatMismatch):
        validate(decode("WC4"), Signature(time="3/4"))

    for args in ((3, 3), (0, 4), (3, 0), (-1, 4), (2.5, 4)):
        with pytest.raises(ValueError):
            TimeSignature(*args)
    for text in ("x", "3", "3/", "3/5", "/4"):
        with pytest.raises(ValueError):
            TimeSignature.from_string(text)


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
