from __future__ import annotations

import pytest

from services.errors import InvalidFormat, NoteError, OutOfRange, UnknownNote
from services.theory import (
    midi_to_frequency,
    parse_melody,
    parse_note,
    parse_tonic,
    render_melody,
    render_note,
)


def test_parse_note_basic_values():
    assert parse_note("C4") == 60
    assert parse_note("Bb4") == 70
    assert parse_note("A4") == 69
    assert parse_note("C-1") == 0
    assert parse_note("G9") == 127


def test_parse_note_defaults_to_octave_4():
    assert parse_note("C") == 60
    assert parse_note("F#") == 66


def test_parse_note_is_case_insensitive_on_letter_and_trims():
    assert parse_note("  c4 ") == 60
    assert parse_note("eb3") == 51
    assert parse_note("Db+4") == 61


def test_parse_note_unicode_accidentals():
    assert parse_note("F♯4") == 66
    assert parse_note("B♭4") == 70


def test_enharmonic_spellings_share_midi_number():
    assert parse_note("C#4") == parse_note("Db4")
    assert parse_note("G#2") == parse_note("Ab2")


@pytest.mark.parametrize("text", ["H4", "", "C##4", "4C", "Cx4", "C4.5", "do", "C٤", "C12345"])
def test_parse_note_invalid_format(text: str):
    with pytest.raises(InvalidFormat):
        parse_note(text)


@pytest.mark.parametrize("text", ["E#4", "Fb4", "B#3", "Cb5"])
def test_parse_note_unknown_spelling(text: str):
    with pytest.raises(UnknownNote):
        parse_note(text)


def test_parse_note_does_not_range_check():
    assert parse_note("C10") == 132
    assert parse_note("C-2") == -12


def test_render_note_octave_and_pitch_class():
    assert render_note(61) == "C#4"
    assert render_note(60) == "C4"
    assert render_note(0) == "C-1"
    assert render_note(127) == "G9"
    assert render_note(70) == "A#4"


@pytest.mark.parametrize("midi", [-1, 128, 1000])
def test_render_note_out_of_range(midi: int):
    with pytest.raises(OutOfRange):
        render_note(midi)


def test_round_trip_over_full_midi_range():
    for m in range(128):
        assert parse_note(render_note(m)) == m


def test_parse_tonic():
    assert parse_tonic("C") == 0
    assert parse_tonic("Eb") == 3
    assert parse_tonic("B") == 11
    with pytest.raises(UnknownNote):
        parse_tonic("Cb")
    with pytest.raises(UnknownNote):
        parse_tonic("C4")


def test_parse_melody_and_render_melody():
    midi = parse_melody("C4 E4  G4\tBb4")
    assert midi == [60, 64, 67, 70]
    assert render_melody(midi) == "C4 E4 G4 A#4"
    assert parse_melody(["D4", "F#4"]) == [62, 66]
    assert parse_melody("") == []


def test_parse_melody_fails_fast_with_position():
    with pytest.raises(InvalidFormat) as exc_info:
        parse_melody("C4 E4 H4 G4")
    assert "Token 2" in str(exc_info.value)
    assert "'H4'" in str(exc_info.value)


def test_errors_are_value_errors_with_codes():
    with pytest.raises(ValueError):
        parse_note("H4")
    assert issubclass(UnknownNote, NoteError)
    assert InvalidFormat.code == "InvalidFormat"
    assert OutOfRange.code == "OutOfRange"


def test_midi_to_frequency():
    assert midi_to_frequency(69) == pytest.approx(440.0)
    assert midi_to_frequency(81) == pytest.approx(880.0)
    assert midi_to_frequency(60) == pytest.approx(261.6256, rel=1e-5)


def test_parse_note_rejects_huge_octave():
    with pytest.raises(InvalidFormat):
        parse_note("C" + "1" * 5000)
    with pytest.raises(InvalidFormat):
        parse_melody(["C4", "D" + "9" * 5000])
