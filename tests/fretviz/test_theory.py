from typing import List

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fretviz.pitch import FLAT_NAMES, SHARP_NAMES
from fretviz.theory import (
    KEY_CANDIDATES,
    Consonance,
    Mode,
    TheoryAnalysis,
    analyze_chord,
    analyze_intervals,
    analyze_scale_degrees,
    analyze_theory,
    detect_key,
    generate_suggestions,
    harmonic_tension,
    key_scale,
)
from tests.fretviz.hypo import configure_hypo

configure_hypo()

C_MAJOR = ["C", "D", "E", "F", "G", "A", "B"]


def test_candidates() -> None:
    majors = [c for c in KEY_CANDIDATES if c.mode == Mode.Major]
    minors = [c for c in KEY_CANDIDATES if c.mode == Mode.Minor]
    assert len(majors) == 15
    assert len(minors) == 13
    assert KEY_CANDIDATES[0].tonic == "C"
    assert all(len(c.signature) <= 7 for c in KEY_CANDIDATES)


def test_detect_key_c_major() -> None:
    key = detect_key(C_MAJOR)
    assert key is not None
    assert key.tonic == "C"
    assert key.mode == Mode.Major
    assert key.signature == []


def test_detect_key_ignores_octaves_and_ascii() -> None:
    key = detect_key(["Bb3", "D4", "F4", "Eb4", "G4", "A4", "C5"])
    assert key is not None
    assert key.tonic == "B♭"
    assert key.mode == Mode.Major
    assert key.signature == ["B♭", "E♭"]


def test_detect_key_minor() -> None:
    key = detect_key(["A", "C", "E"])
    assert key is not None
    assert key.tonic == "A"
    assert key.mode == Mode.Minor


def test_detect_key_sharp_signature() -> None:
    key = detect_key(["E", "F#", "G#", "A", "B", "C#", "D#", "E"])
    assert key is not None
    assert key.tonic == "E"
    assert key.signature == ["F♯", "C♯", "G♯", "D♯"]


@pytest.mark.parametrize("notes", [[], ["H"], ["X4", "?"]])
def test_detect_key_undetected(notes: List[str]) -> None:
    assert detect_key(notes) is None


def test_key_scale() -> None:
    key = detect_key(C_MAJOR)
    assert key is not None
    assert key_scale(key) == [0, 2, 4, 5, 7, 9, 11]


def test_scale_degrees() -> None:
    key = detect_key(C_MAJOR)
    assert key is not None
    degrees = analyze_scale_degrees(["G4", "B4", "C#4", "D"], key)
    assert [(d.degree, d.note, d.function, d.chord_function) for d in degrees] == [
        (5, "G", "Dominant", "V"),
        (7, "B", "Leading Tone", "vii°"),
        (2, "D", "Supertonic", "ii"),
    ]
    assert degrees[1].quality == "diminished"


def test_scale_degrees_minor_uses_major_table() -> None:
    key = detect_key(["A", "C", "E"])
    assert key is not None
    degrees = analyze_scale_degrees(["A", "C"], key)
    assert [(d.degree, d.function, d.chord_function) for d in degrees] == [
        (1, "Tonic", "I"),
        (3, "Mediant", "iii"),
    ]


def test_intervals() -> None:
    intervals = analyze_intervals(["C4", "E4", "G4"])
    assert [(i.from_note, i.to_note, i.semitones, i.name) for i in intervals] == [
        ("C", "E", 4, "Major Third"),
        ("C", "G", 7, "Perfect Fifth"),
        ("E", "G", 3, "Minor Third"),
    ]
    assert all(i.consonance == Consonance.Consonant for i in intervals)
    assert intervals[0].quality == "Major"


def test_interval_classes() -> None:
    (tritone,) = analyze_intervals(["F", "B"])
    assert tritone.quality == "Tritone"
    assert tritone.consonance == Consonance.Dissonant
    (fourth,) = analyze_intervals(["G", "C"])
    assert fourth.semitones == 5
    assert fourth.consonance == Consonance.Neutral
    (unison,) = analyze_intervals(["C#", "Db"])
    assert unison.name == "Perfect Unison"


def test_intervals_skip_unparseable() -> None:
    assert analyze_intervals(["C", "X", "G"]) == analyze_intervals(["C", "G"])
    assert analyze_intervals([]) == []
    assert analyze_intervals(["C"]) == []


@pytest.mark.parametrize(
    "notes, quality, roman, function",
    [
        (["C4", "E4", "G4"], "major", "I", "Tonic"),
        (["A", "C", "E"], "minor", "i", "Tonic"),
        (["B", "D", "F"], "diminished", "i°", "Leading Tone"),
        (["C", "E", "F#"], "unknown", "", ""),
        (["E", "G", "C"], "unknown", "", ""),
    ],
)
def test_analyze_chord(notes: List[str], quality: str, roman: str, function: str) -> None:
    chord = analyze_chord(notes)
    assert chord is not None
    assert chord.root == notes[0].rstrip("0123456789")
    assert chord.quality == quality
    assert chord.roman_numeral == roman
    assert chord.function == function


def test_analyze_chord_extensions() -> None:
    chord = analyze_chord(["C", "E", "C4", "G", "B", "D"])
    assert chord is not None
    assert chord.notes == ["C", "E", "G", "B", "D"]
    assert chord.extensions == ["B", "D"]


@pytest.mark.parametrize("notes", [[], ["C"], ["C", "E"], ["C", "E", "C5", "E3"]])
def test_analyze_chord_insufficient(notes: List[str]) -> None:
    assert analyze_chord(notes) is None


def test_harmonic_tension() -> None:
    assert harmonic_tension([]) == 5.0
    assert harmonic_tension(["C", "E", "G"]) == 3.5
    assert harmonic_tension(["C", "C#", "D", "D#"]) == 9.5
    assert harmonic_tension(SHARP_NAMES) == 10.0
    assert harmonic_tension(["C", "E", "G", "C", "E", "G"]) == 0.0


@given(st.lists(st.sampled_from(SHARP_NAMES + FLAT_NAMES + ["C4", "X"]), min_size=1, max_size=16))
def test_harmonic_tension_bounds(notes: List[str]) -> None:
    assert 0 <= harmonic_tension(notes) <= 10


@given(st.lists(st.text(max_size=4), max_size=8))
def test_analysis_is_total(notes: List[str]) -> None:
    analysis = analyze_theory(notes)
    assert 0 <= analysis.harmonic_tension <= 10


def test_analyze_theory_triad() -> None:
    analysis = analyze_theory(["C", "E", "G"])
    assert analysis.detected_key is not None
    assert analysis.detected_key.tonic == "C"
    assert [d.degree for d in analysis.scale_degrees] == [1, 3, 5]
    assert len(analysis.intervals) == 3
    assert analysis.chord_analysis is not None
    assert analysis.chord_analysis.quality == "major"
    assert analysis.harmonic_tension == 3.5
    assert analysis.suggestions == ["Key detected: C major"]


def test_suggestions_missing_tonic() -> None:
    analysis = analyze_theory(["D", "F", "B"])
    assert analysis.detected_key is not None
    assert analysis.detected_key.tonic == "C"
    assert analysis.suggestions == [
        "Key detected: C major",
        "Try adding the tonic note for stronger key establishment",
        "Dissonant intervals present: Tritone",
    ]


def test_suggestions_high_tension() -> None:
    analysis = analyze_theory(["C", "C#", "D", "D#"])
    assert "High harmonic tension - consider resolving dissonant intervals" in analysis.suggestions
    assert analysis.suggestions[-1] == (
        "Dissonant intervals present: "
        "Minor Second, Major Second, Minor Second, Major Second, Minor Second"
    )


def test_suggestions_low_tension() -> None:
    analysis = analyze_theory(["C", "E", "G", "C", "E", "G"])
    assert "Low harmonic tension - consider adding more complex harmonies" in analysis.suggestions


def test_empty_analysis() -> None:
    analysis = analyze_theory([])
    assert analysis.detected_key is None
    assert analysis.scale_degrees == []
    assert analysis.intervals == []
    assert analysis.chord_analysis is None
    assert analysis.harmonic_tension == 5.0
    assert analysis.suggestions == []


def test_generate_suggestions_without_key() -> None:
    analysis = TheoryAnalysis(
        detected_key=None,
        scale_degrees=[],
        intervals=analyze_intervals(["C", "F♯"]),
        chord_analysis=None,
        harmonic_tension=8.0,
        suggestions=[],
    )
    assert generate_suggestions(analysis) == [
        "High harmonic tension - consider resolving dissonant intervals",
        "Dissonant intervals present: Tritone",
    ]
