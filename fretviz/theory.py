"""Music theory analysis over a selection of note names.

Given the note names a user has selected (with or without octaves), this
module guesses the key, labels scale degrees, names every pairwise interval,
makes a rough triad guess, scores harmonic tension and produces short
textual suggestions. Every function is total: insufficient input yields an
empty or absent result rather than an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum, unique
from typing import Dict, List, Optional, Sequence, Tuple

from fretviz import constants
from fretviz.base import ParseError
from fretviz.parser import parse_note_name
from fretviz.pitch import (
    FLAT,
    SHARP,
    Accidental,
    PitchClass,
    chromatic_index,
    normalize_accidentals,
    strip_octave,
)
from fretviz.scale import ScaleType, pattern_intervals


@unique
class Mode(Enum):
    Major = "major"
    Minor = "minor"


@unique
class Consonance(Enum):
    """How an interval class is heard in isolation."""

    Consonant = "consonant"
    Dissonant = "dissonant"
    Neutral = "neutral"


@dataclass(frozen=True)
class Key:
    """A detected key."""

    tonic: str  # Tonic name, e.g. "B♭"
    mode: Mode
    signature: List[str]  # Sharps or flats of the key signature, in order
    tonic_index: int  # Chromatic index of the tonic


@dataclass(frozen=True)
class ScaleDegree:
    """An input note placed within a key."""

    degree: int  # 1-based position in the key's scale
    note: str  # The input note name, octave removed
    function: str  # Functional name, e.g. "Dominant"
    quality: str  # Quality of the triad built on this degree
    chord_function: str  # Roman numeral, e.g. "vii°"


@dataclass(frozen=True)
class NamedInterval:
    """The interval class between two input notes."""

    from_note: str
    to_note: str
    semitones: int
    quality: str
    name: str
    consonance: Consonance


@dataclass(frozen=True)
class ChordAnalysis:
    """A positional triad guess over the distinct input notes."""

    notes: List[str]
    root: str
    quality: str  # "major", "minor", "diminished" or "unknown"
    extensions: List[str]
    roman_numeral: str
    function: str


@dataclass(frozen=True)
class TheoryAnalysis:
    """The combined result of every analysis step."""

    detected_key: Optional[Key]
    scale_degrees: List[ScaleDegree]
    intervals: List[NamedInterval]
    chord_analysis: Optional[ChordAnalysis]
    harmonic_tension: float
    suggestions: List[str]


@dataclass(frozen=True)
class _DegreeInfo:
    name: str
    function: str
    quality: str


# Major-scale degree table, applied to minor keys as well
SCALE_DEGREE_INFO: List[_DegreeInfo] = [
    _DegreeInfo("Tonic", "I", "perfect"),
    _DegreeInfo("Supertonic", "ii", "minor"),
    _DegreeInfo("Mediant", "iii", "minor"),
    _DegreeInfo("Subdominant", "IV", "major"),
    _DegreeInfo("Dominant", "V", "major"),
    _DegreeInfo("Submediant", "vi", "minor"),
    _DegreeInfo("Leading Tone", "vii°", "diminished"),
]

INTERVAL_QUALITIES: Dict[int, Tuple[str, Consonance]] = {
    0: ("Perfect Unison", Consonance.Consonant),
    1: ("Minor Second", Consonance.Dissonant),
    2: ("Major Second", Consonance.Dissonant),
    3: ("Minor Third", Consonance.Consonant),
    4: ("Major Third", Consonance.Consonant),
    5: ("Perfect Fourth", Consonance.Neutral),
    6: ("Tritone", Consonance.Dissonant),
    7: ("Perfect Fifth", Consonance.Consonant),
    8: ("Minor Sixth", Consonance.Consonant),
    9: ("Major Sixth", Consonance.Consonant),
    10: ("Minor Seventh", Consonance.Dissonant),
    11: ("Major Seventh", Consonance.Dissonant),
    12: ("Perfect Octave", Consonance.Consonant),
}
"""Long name and consonance for semitone distances 0-12."""

SHARP_ORDER = ["F", "C", "G", "D", "A", "E", "B"]
"""Letters in the order sharps are added to key signatures."""

FLAT_ORDER = list(reversed(SHARP_ORDER))
"""Letters in the order flats are added to key signatures."""


@dataclass(frozen=True)
class _KeyCandidate:
    pitch_class: PitchClass
    accidental: Accidental
    mode: Mode
    sharps: int  # Signature size; negative counts flats

    @property
    def tonic(self) -> str:
        return self.pitch_class.name + self.accidental.symbol

    @property
    def signature(self) -> List[str]:
        if self.sharps >= 0:
            return [letter + SHARP for letter in SHARP_ORDER[: self.sharps]]
        else:
            return [letter + FLAT for letter in FLAT_ORDER[: -self.sharps]]

    def to_key(self) -> Key:
        return Key(
            tonic=self.tonic,
            mode=self.mode,
            signature=self.signature,
            tonic_index=chromatic_index(self.pitch_class, self.accidental),
        )


def _candidates() -> List[_KeyCandidate]:
    """Enumerate candidate keys: 15 major keys, then 13 minor keys.

    Returns:
        Candidates in detection order, sharp keys before flat keys.
    """
    n, s, f = Accidental.NATURAL, Accidental.SHARP, Accidental.FLAT
    pc = PitchClass
    majors = [
        (pc.C, n, 0), (pc.G, n, 1), (pc.D, n, 2), (pc.A, n, 3), (pc.E, n, 4),
        (pc.B, n, 5), (pc.F, s, 6), (pc.C, s, 7),
        (pc.F, n, -1), (pc.B, f, -2), (pc.E, f, -3), (pc.A, f, -4),
        (pc.D, f, -5), (pc.G, f, -6), (pc.C, f, -7),
    ]
    minors = [
        (pc.A, n, 0), (pc.E, n, 1), (pc.B, n, 2), (pc.F, s, 3), (pc.C, s, 4),
        (pc.G, s, 5), (pc.D, s, 6),
        (pc.D, n, -1), (pc.G, n, -2), (pc.C, n, -3), (pc.F, n, -4),
        (pc.B, f, -5), (pc.E, f, -6),
    ]
    candidates = [_KeyCandidate(p, a, Mode.Major, k) for p, a, k in majors]
    candidates.extend(_KeyCandidate(p, a, Mode.Minor, k) for p, a, k in minors)
    return [c for c in candidates if abs(c.sharps) <= 7]


KEY_CANDIDATES = _candidates()


def _clean(note: str) -> str:
    return normalize_accidentals(strip_octave(note))


def _pitch_index(note: str) -> Optional[int]:
    """Chromatic index of a note name, or None if it does not parse."""
    try:
        pitch_class, accidental, _ = parse_note_name(_clean(note))
    except ParseError:
        logging.debug("Ignoring unparseable note in analysis: %r", note)
        return None
    return chromatic_index(pitch_class, accidental)


def _mode_intervals(mode: Mode) -> Tuple[int, ...]:
    if mode == Mode.Major:
        return pattern_intervals(ScaleType.DiatonicMajor)
    else:
        return pattern_intervals(ScaleType.DiatonicMinor)


def key_scale(key: Key) -> List[int]:
    """Chromatic indexes of the key's scale, tonic first."""
    return [
        (key.tonic_index + i) % constants.SEMITONES_PER_OCTAVE for i in _mode_intervals(key.mode)
    ]


def _key_score(scale: List[int], counts: Dict[int, int], total: int) -> float:
    score = 0.0
    for index in scale:
        if index in counts:
            score += counts[index] / total
    if scale[0] in counts:
        score += constants.TONIC_BONUS
    if scale[4] in counts:
        score += constants.DOMINANT_BONUS
    return score


def detect_key(notes: Sequence[str]) -> Optional[Key]:
    """Guess the key that best fits a set of notes.

    Each candidate scores the share of input notes inside its scale, plus a
    bonus when its tonic or fifth degree is present. The first candidate
    with the highest score wins.

    Args:
        notes: Note names, with or without octaves. Repeats add weight.

    Returns:
        The best key, or None for empty input or when the best score does
        not exceed the detection threshold.
    """
    counts: Dict[int, int] = {}
    for note in notes:
        index = _pitch_index(note)
        if index is not None:
            counts[index] = counts.get(index, 0) + 1
    total = sum(counts.values())
    if total == 0:
        return None

    best: Optional[Key] = None
    best_score = 0.0
    for candidate in KEY_CANDIDATES:
        key = candidate.to_key()
        score = _key_score(key_scale(key), counts, total)
        if best is None or score > best_score:
            best = key
            best_score = score
    if best_score <= constants.KEY_DETECTION_THRESHOLD:
        return None
    return best


def analyze_scale_degrees(notes: Sequence[str], key: Key) -> List[ScaleDegree]:
    """Label each input note that belongs to the key's scale.

    Notes outside the scale are skipped. The degree table is the major-scale
    one for both modes.
    """
    scale = key_scale(key)
    degrees: List[ScaleDegree] = []
    for note in notes:
        index = _pitch_index(note)
        if index is None or index not in scale:
            continue
        position = scale.index(index)
        info = SCALE_DEGREE_INFO[position]
        degrees.append(
            ScaleDegree(
                degree=position + 1,
                note=_clean(note),
                function=info.name,
                quality=info.quality,
                chord_function=info.function,
            )
        )
    return degrees


def _interval(from_note: str, to_note: str) -> Optional[NamedInterval]:
    from_index = _pitch_index(from_note)
    to_index = _pitch_index(to_note)
    if from_index is None or to_index is None:
        return None
    semitones = (to_index - from_index) % constants.SEMITONES_PER_OCTAVE
    name, consonance = INTERVAL_QUALITIES[semitones]
    return NamedInterval(
        from_note=from_note,
        to_note=to_note,
        semitones=semitones,
        quality=name.split(" ")[0],
        name=name,
        consonance=consonance,
    )


def analyze_intervals(notes: Sequence[str]) -> List[NamedInterval]:
    """Name the interval between every pair of notes, in input order."""
    cleaned = [_clean(note) for note in notes]
    intervals: List[NamedInterval] = []
    for i in range(len(cleaned)):
        for j in range(i + 1, len(cleaned)):
            interval = _interval(cleaned[i], cleaned[j])
            if interval is not None:
                intervals.append(interval)
    return intervals


# (third, fifth) semitones -> (quality, roman numeral, function)
_TRIADS: Dict[Tuple[int, int], Tuple[str, str, str]] = {
    (4, 7): ("major", "I", "Tonic"),
    (3, 7): ("minor", "i", "Tonic"),
    (3, 6): ("diminished", "i°", "Leading Tone"),
}


def analyze_chord(notes: Sequence[str]) -> Optional[ChordAnalysis]:
    """Guess a triad from the first three distinct notes.

    The first three distinct names, in input order, are taken as root, third
    and fifth; they are not sorted by pitch. Any further names are reported
    as extensions.

    Returns:
        The analysis, or None when there are fewer than three distinct names.
    """
    unique: List[str] = []
    for note in notes:
        cleaned = _clean(note)
        if cleaned not in unique:
            unique.append(cleaned)
    if len(unique) < 3:
        return None

    root, third, fifth = unique[:3]
    quality, roman_numeral, function = "unknown", "", ""
    root_to_third = _interval(root, third)
    root_to_fifth = _interval(root, fifth)
    if root_to_third is not None and root_to_fifth is not None:
        triad = _TRIADS.get((root_to_third.semitones, root_to_fifth.semitones))
        if triad is not None:
            quality, roman_numeral, function = triad

    return ChordAnalysis(
        notes=unique,
        root=root,
        quality=quality,
        extensions=unique[3:],
        roman_numeral=roman_numeral,
        function=function,
    )


def harmonic_tension(notes: Sequence[str]) -> float:
    """Score harmonic tension from 0 (relaxed) to 10 (tense).

    Starts at 5, adds 1 per dissonant pair and subtracts 0.5 per consonant
    pair, then clamps.
    """
    tension = constants.TENSION_BASELINE
    for interval in analyze_intervals(notes):
        if interval.consonance == Consonance.Dissonant:
            tension += 1
        elif interval.consonance == Consonance.Consonant:
            tension -= 0.5
    return max(constants.TENSION_MIN, min(constants.TENSION_MAX, tension))


def generate_suggestions(analysis: TheoryAnalysis) -> List[str]:
    suggestions: List[str] = []

    key = analysis.detected_key
    if key is not None:
        suggestions.append(f"Key detected: {key.tonic} {key.mode.value}")
        if analysis.scale_degrees and not any(d.degree == 1 for d in analysis.scale_degrees):
            suggestions.append("Try adding the tonic note for stronger key establishment")

    if analysis.harmonic_tension > constants.HIGH_TENSION:
        suggestions.append("High harmonic tension - consider resolving dissonant intervals")
    elif analysis.harmonic_tension < constants.LOW_TENSION:
        suggestions.append("Low harmonic tension - consider adding more complex harmonies")

    dissonant = [i.name for i in analysis.intervals if i.consonance == Consonance.Dissonant]
    if dissonant:
        suggestions.append(f"Dissonant intervals present: {', '.join(dissonant)}")

    return suggestions


def analyze_theory(notes: Sequence[str]) -> TheoryAnalysis:
    """Run every analysis step over a selection of note names.

    Args:
        notes: Note names such as ``["C4", "E4", "G4"]``.

    Returns:
        The combined analysis, including suggestions.
    """
    detected_key = detect_key(notes)
    analysis = TheoryAnalysis(
        detected_key=detected_key,
        scale_degrees=analyze_scale_degrees(notes, detected_key) if detected_key is not None else [],
        intervals=analyze_intervals(notes),
        chord_analysis=analyze_chord(notes),
        harmonic_tension=harmonic_tension(notes),
        suggestions=[],
    )
    return replace(analysis, suggestions=generate_suggestions(analysis))
