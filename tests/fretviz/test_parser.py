import doctest

import pytest

import fretviz.parser
from fretviz.base import ParseError
from fretviz.note import Note
from fretviz.parser import parse_note, parse_note_name, parse_tuning
from fretviz.pitch import Accidental, PitchClass


@pytest.mark.parametrize(
    "token, expected",
    [
        ("E", (PitchClass.E, Accidental.NATURAL, None)),
        ("E2", (PitchClass.E, Accidental.NATURAL, 2)),
        ("C#3", (PitchClass.C, Accidental.SHARP, 3)),
        ("C♯3", (PitchClass.C, Accidental.SHARP, 3)),
        ("Bb", (PitchClass.B, Accidental.FLAT, None)),
        ("B♭2", (PitchClass.B, Accidental.FLAT, 2)),
        ("G♭10", (PitchClass.G, Accidental.FLAT, 10)),
        (" A4 ", (PitchClass.A, Accidental.NATURAL, 4)),
    ],
)
def test_parse_note_name(token: str, expected: tuple) -> None:
    assert parse_note_name(token) == expected


@pytest.mark.parametrize(
    "token",
    ["", "H4", "e2", "C##3", "Cx3", "4", "C-1", "C 4", "E♯3", "F♭", "B#2", "Cb4"],
)
def test_parse_note_name_rejects(token: str) -> None:
    with pytest.raises(ParseError):
        parse_note_name(token)


def test_parse_error_carries_token() -> None:
    with pytest.raises(ParseError) as info:
        parse_note_name("H4")
    assert info.value.token == "H4"
    assert "H4" in str(info.value)


def test_parse_tuning() -> None:
    assert parse_tuning(["E2", "A2", "D3"]) == [
        (PitchClass.E, Accidental.NATURAL, 2),
        (PitchClass.A, Accidental.NATURAL, 2),
        (PitchClass.D, Accidental.NATURAL, 3),
    ]
    assert parse_tuning(["C#3"]) == parse_tuning(["C♯3"])
    assert parse_tuning(["Db3"]) == [(PitchClass.D, Accidental.FLAT, 3)]
    assert parse_tuning([]) == []


def test_parse_tuning_invalid_letter() -> None:
    with pytest.raises(ParseError):
        parse_tuning(["H4"])


def test_parse_tuning_requires_octave() -> None:
    with pytest.raises(ParseError):
        parse_tuning(["E"])


def test_parse_tuning_rejects_whole_list() -> None:
    with pytest.raises(ParseError):
        parse_tuning(["E2", "A2", "X3", "G3"])


def test_parse_note_default_octave() -> None:
    note = parse_note("Eb")
    assert note == Note(PitchClass.E, Accidental.FLAT)
    assert note.octave == 4
    assert parse_note("A", default_octave=2).octave == 2
    assert parse_note("A1").octave == 1


def test_docstring_examples() -> None:
    assert doctest.testmod(fretviz.parser).failed == 0
