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
Test scof.decoder and the notation language.
"""

from fractions import Fraction

### find scof
import sys
sys.path.insert(0, '.')

import pytest

from scof.decoder import (
    Decoder, DecodeError, InvalidAccidental, UnrecognizedToken, decode, encode,
    is_measure_repeat)
from scof.notation import (
    Articulation, Bend, Connection, Dynamic, GraceNote, Marking, MarkingKind,
    Note, Ornament, Rest)
from scof.pitch import Accidental, Pitch


def error_position(text, exception=UnrecognizedToken, **kwargs):
    """Return the position of the error decoding text raises."""
    with pytest.raises(exception) as e:
        decode(text, **kwargs)
    return e.value.position


def test_main():
    """Main test function."""
    assert decode("") == ()
    assert decode("   ") == ()

    tokens = decode("C4D4E4")
    assert tokens == (
        Note(Pitch(0, 0)), Note(Pitch(0, 1)), Note(Pitch(0, 2)))
    assert all(t.duration == Fraction(1, 4) for t in tokens)

    # duration is sticky
    tokens = decode("TC4 D4 HE4 F4")
    assert [t.duration for t in tokens] == [
        Fraction(1, 8), Fraction(1, 8), Fraction(1, 2), Fraction(1, 2)]

    tokens = decode("HR QC4 R")
    assert tokens == (Rest(Fraction(1, 2)), Note(Pitch(0, 0)), Rest(Fraction(1, 4)))


def test_modifiers():
    note, = decode("f'_.~/(C4")
    assert note.dynamic is Dynamic.F
    assert note.articulations == {
        Articulation.STACCATISSIMO, Articulation.TENUTO, Articulation.STACCATO}
    assert note.ornament is Ornament.TRILL
    assert note.bend is Bend.UP_INTO
    assert note.connection is Connection.SLUR_START

    # modifiers only attach to the next note
    assert decode("sfzC4 D4")[1] == Note(Pitch(0, 1))

    # compound articulations are the union of their parts
    assert decode("_.C4") == decode("._C4")
    assert decode(">.C4")[0].articulations == {Articulation.ACCENT, Articulation.STACCATO}
    assert decode("^_C4")[0].articulations == {Articulation.MARCATO, Articulation.TENUTO}
    assert decode("'@|C4")[0].articulations == {
        Articulation.STACCATISSIMO, Articulation.HARMONIC, Articulation.PEDAL}

    assert decode("ppC4")[0].dynamic is Dynamic.PP
    assert decode("fpC4")[0].dynamic is Dynamic.FP
    assert decode("nC4")[0].dynamic is Dynamic.N
    assert Dynamic.PPPPP < Dynamic.MP < Dynamic.FFFFF


def test_longest_match():
    assert decode("~~C4")[0].connection is Connection.GLISSANDO
    assert decode("~C4")[0].ornament is Ornament.TRILL
    assert decode("//C4")[0].bend is Bend.UP_OUT
    assert decode(r"\\C4")[0].bend is Bend.DOWN_OUT
    assert decode(r"\C4")[0].bend is Bend.DOWN_INTO
    assert decode('""C4') == (Marking(MarkingKind.CAESURA_LONG), Note(Pitch(0, 0)))
    assert decode('"C4') == (Marking(MarkingKind.CAESURA_SHORT), Note(Pitch(0, 0)))
    assert decode(">>C4")[0] == Marking(MarkingKind.DECRESCENDO)
    assert decode(">C4")[0].articulations == {Articulation.ACCENT}
    # a dot after a duration letter is an augmentation dot
    note, = decode("Q.C4")
    assert note.duration == Fraction(3, 8)
    assert note.articulations == frozenset()


def test_markings():
    tokens = decode("C4 , D4 <<E4 $p F4")
    assert tokens == (
        Note(Pitch(0, 0)), Marking(MarkingKind.BREATH), Note(Pitch(0, 1)),
        Marking(MarkingKind.CRESCENDO), Note(Pitch(0, 2)),
        Marking(MarkingKind.PIZZICATO), Note(Pitch(0, 3)))
    assert all(t.duration == 0 for t in tokens if isinstance(t, Marking))

    # markings don't consume pending modifiers
    tokens = decode("f , C4")
    assert tokens[0] == Marking(MarkingKind.BREATH)
    assert tokens[1].dynamic is Dynamic.F

    assert decode("%") == (Marking(MarkingKind.MEASURE_REPEAT),)
    assert decode(" % ") == (Marking(MarkingKind.MEASURE_REPEAT),)
    assert is_measure_repeat(decode("%"))
    assert not is_measure_repeat(decode("C4"))
    assert error_position("% C4") == 0
    assert error_position("C4 %") == 3


def test_grace():
    tokens = decode("{C4 D4} E4")
    assert tokens == (GraceNote(Pitch(0, 0)), GraceNote(Pitch(0, 1)), Note(Pitch(0, 2)))
    assert tokens[0].duration == 0

    # grace notes are placed right before their note
    assert decode("{Bb3} fTC4") == decode("f{Bb3}TC4")

    assert error_position("{C4 D4") == 0        # unclosed
    assert error_position("C4 {} D4") == 3      # empty
    assert error_position("{C4}") == 0          # no note follows
    assert error_position("{C4} R") == 0
    assert error_position("C4 }") == 3
    assert error_position("{C4 R} D4") == 4
    assert error_position("{C4}{D4} E4") == 4


def test_errors():
    assert error_position("Q") == 0
    assert error_position("C4 Q") == 3
    assert error_position("C4 fT") == 3
    assert error_position("ffpC4") == 2         # second dynamic
    assert error_position("QTC4") == 1          # second duration
    assert error_position("~*C4") == 1          # second ornament
    assert error_position("=(C4") == 1          # second connection
    assert error_position("fR") == 0            # modifiers before a rest
    assert error_position("C4 Z4") == 3
    assert error_position("C4 $x") == 3
    assert error_position("C") == 0
    assert isinstance(UnrecognizedToken(0), DecodeError)
    assert isinstance(UnrecognizedToken(0), ValueError)


def test_microtonal():
    assert error_position("C4 Et4", InvalidAccidental) == 3
    assert error_position("{Cd4} C4", InvalidAccidental) == 1
    note, = decode("Et4", microtonal=True)
    assert note.pitch.accidental is Accidental.QUARTER_SHARP
    assert Decoder(microtonal=True).decode("Adb4")[0].pitch.alter == Fraction(-3, 4)
    assert Decoder().decode("Bb4 C#5 Dx5 Ebb5 Fn5")[4].pitch.accidental is Accidental.NATURAL


def test_encode():
    assert encode(decode("fTC4 D4 HR")) == "fTC4 D4 HR"
    assert encode(decode("{C4 D4} _.E4")) == "{C4 D4} ._E4"
    assert encode(decode("%")) == "%"
    assert encode(()) == ""

    for text in (
        "pp>.~~TC#5 S.Bb3 R , <<$pQG4",
        "sfp'^_:\\\\WB- \"\" {F#5 G5} n=H.A9",
        "~~~C4 T)D4 o+!/E4 \"QR",
    ):
        tokens = decode(text)
        assert decode(encode(tokens)) == tokens

    with pytest.raises(TypeError):
        encode([1])


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
