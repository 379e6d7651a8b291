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
Test scof.pitch.
"""

from fractions import Fraction

### find scof
import sys
sys.path.insert(0, '.')

import pytest

from scof.pitch import Accidental, Pitch


def test_main():
    """Main test function."""
    p = Pitch.from_string('C4')
    assert (p.octave, p.note, p.accidental) == (0, 0, None)
    assert p.alter == 0

    p = Pitch.from_string('Bb3')
    assert (p.octave, p.note, p.accidental) == (-1, 6, Accidental.FLAT)
    assert p.alter == Fraction(-1, 2)
    assert p.to_string() == 'Bb3'

    assert Pitch.from_string('B-').octave == -5
    assert Pitch(-5, 6).to_string() == 'B-'
    assert Pitch(5, 0).to_string() == 'C9'
    assert Pitch(2, 3, Accidental.THREE_QUARTER_SHARP).to_string() == 'Ft#6'
    assert format(Pitch(1, 3, Accidental.SHARP)) == 'F#5'
    assert format(Pitch(7, 0)) == '?'


def test_compare():
    assert Pitch(0, 0) < Pitch(0, 1)
    assert Pitch(0, 0, Accidental.SHARP) > Pitch(0, 0)
    assert Pitch(-1, 6) < Pitch(0, 0)
    assert Pitch(0, 0, Accidental.NATURAL) != Pitch(0, 0)
    assert Pitch(0, 0) == Pitch.from_string('C4')
    assert len({Pitch(0, 0), Pitch(0, 0), Pitch(0, 1)}) == 2


def test_steps():
    assert Pitch(0, 0).steps() == 0
    assert Pitch(1, 2).steps() == 9
    assert Pitch(-1, 6, Accidental.FLAT).steps() == -1


def test_accidentals():
    assert Accidental.QUARTER_SHARP.microtonal
    assert Accidental.THREE_QUARTER_FLAT.microtonal
    assert not Accidental.SHARP.microtonal
    assert not Accidental.NATURAL.microtonal
    assert Accidental.DOUBLE_FLAT.alter == -1
    assert Pitch.from_string('Ed4').microtonal


def test_invalid():
    for text in ('H4', 'C', 'Cq4', 'C#', 'c4'):
        with pytest.raises(ValueError):
            Pitch.from_string(text)
    with pytest.raises(ValueError):
        Pitch(6, 0).to_string()


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
