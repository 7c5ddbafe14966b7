"""Scale and chord interval patterns and their resolution to notes.

This module provides the closed vocabulary of scale and chord types that the
visualizer can highlight, the semitone offsets of each, and helpers that
expand a pattern from a root note into concrete notes. It also names the
interval class between two notes.
"""

from __future__ import annotations

from enum import Enum, unique
from typing import Dict, List, Optional, Tuple, Union

from fretviz.base import MatchException, UnknownPatternError
from fretviz.constants import SEMITONES_PER_OCTAVE
from fretviz.note import Note
from fretviz.parser import parse_note
from fretviz.pitch import FLAT, normalize_accidentals


@unique
class ScaleType(Enum):
    """Scale names, valued by their external identifiers."""

    DiatonicMajor = "diatonicMajor"
    DiatonicMinor = "diatonicMinor"
    PentatonicMajor = "pentatonicMajor"
    PentatonicMinor = "pentatonicMinor"
    BluesMajor = "bluesMajor"
    BluesMinor = "bluesMinor"
    Major = "major"
    Minor = "minor"
    HarmonicMinor = "harmonicMinor"
    MelodicMinor = "melodicMinor"
    Dorian = "dorian"
    Phrygian = "phrygian"
    Lydian = "lydian"
    Mixolydian = "mixolydian"
    Locrian = "locrian"
    Altered = "altered"
    LydianDominant = "lydianDominant"
    WholeTone = "wholeTone"
    Diminished = "diminished"
    Hirajoshi = "hirajoshi"
    PhrygianDominant = "phrygianDominant"
    HungarianMinor = "hungarianMinor"
    Persian = "persian"
    Octatonic = "octatonic"
    Hexatonic = "hexatonic"
    Chromatic = "chromatic"
    Tritone = "tritone"


@unique
class ChordType(Enum):
    """Chord names, valued by their external identifiers."""

    Maj = "maj"
    Min = "min"
    Dim = "dim"
    Aug = "aug"
    Maj7 = "maj7"
    Min7 = "min7"
    Dom7 = "7"
    Dim7 = "dim7"
    HalfDim7 = "m7b5"
    Maj9 = "maj9"
    Min9 = "min9"
    Dom9 = "9"
    Maj6 = "maj6"
    Min6 = "min6"
    Sus2 = "sus2"
    Sus4 = "sus4"


Pattern = Union[ScaleType, ChordType]
"""Any scale or chord type."""

_SCALE_INTERVALS: Dict[ScaleType, Tuple[int, ...]] = {
    ScaleType.DiatonicMajor: (0, 2, 4, 5, 7, 9, 11),
    ScaleType.DiatonicMinor: (0, 2, 3, 5, 7, 8, 10),
    ScaleType.PentatonicMajor: (0, 2, 4, 7, 9),
    ScaleType.PentatonicMinor: (0, 3, 5, 7, 10),
    ScaleType.BluesMajor: (0, 2, 3, 4, 7, 9),
    ScaleType.BluesMinor: (0, 3, 5, 6, 7, 10),
    ScaleType.Major: (0, 2, 4, 5, 7, 9, 11),
    ScaleType.Minor: (0, 2, 3, 5, 7, 8, 10),
    ScaleType.HarmonicMinor: (0, 2, 3, 5, 7, 8, 11),
    ScaleType.MelodicMinor: (0, 2, 3, 5, 7, 9, 11),
    ScaleType.Dorian: (0, 2, 3, 5, 7, 9, 10),
    ScaleType.Phrygian: (0, 1, 3, 5, 7, 8, 10),
    ScaleType.Lydian: (0, 2, 4, 6, 7, 9, 11),
    ScaleType.Mixolydian: (0, 2, 4, 5, 7, 9, 10),
    ScaleType.Locrian: (0, 1, 3, 5, 6, 8, 10),
    ScaleType.Altered: (0, 1, 3, 4, 6, 8, 10),
    ScaleType.LydianDominant: (0, 2, 4, 6, 7, 9, 10),
    ScaleType.WholeTone: (0, 2, 4, 6, 8, 10),
    # Whole-half diminished
    ScaleType.Diminished: (0, 2, 3, 5, 6, 8, 9, 11),
    ScaleType.Hirajoshi: (0, 2, 3, 7, 8),
    ScaleType.PhrygianDominant: (0, 1, 4, 5, 7, 8, 10),
    ScaleType.HungarianMinor: (0, 2, 3, 6, 7, 8, 11),
    ScaleType.Persian: (0, 1, 4, 5, 6, 8, 11),
    # Half-whole
    ScaleType.Octatonic: (0, 1, 3, 4, 6, 7, 9, 10),
    # Augmented
    ScaleType.Hexatonic: (0, 3, 4, 7, 8, 11),
    ScaleType.Chromatic: (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11),
    ScaleType.Tritone: (0, 1, 4, 6, 7, 10),
}

_CHORD_INTERVALS: Dict[ChordType, Tuple[int, ...]] = {
    ChordType.Maj: (0, 4, 7),
    ChordType.Min: (0, 3, 7),
    ChordType.Dim: (0, 3, 6),
    ChordType.Aug: (0, 4, 8),
    ChordType.Maj7: (0, 4, 7, 11),
    ChordType.Min7: (0, 3, 7, 10),
    ChordType.Dom7: (0, 4, 7, 10),
    ChordType.Dim7: (0, 3, 6, 9),
    ChordType.HalfDim7: (0, 3, 6, 10),
    ChordType.Maj9: (0, 4, 7, 11, 14),
    ChordType.Min9: (0, 3, 7, 10, 14),
    ChordType.Dom9: (0, 4, 7, 10, 14),
    ChordType.Maj6: (0, 4, 7, 9),
    ChordType.Min6: (0, 3, 7, 9),
    ChordType.Sus2: (0, 2, 7),
    ChordType.Sus4: (0, 5, 7),
}


def _build_pattern_lookup() -> Dict[str, Pattern]:
    """Build a lookup table from external names to pattern enum members.

    Returns:
        Dictionary mapping every scale and chord identifier to its member.
    """
    d: Dict[str, Pattern] = {}
    for pattern in (*ScaleType, *ChordType):
        assert pattern.value not in d
        d[pattern.value] = pattern
    assert set(_SCALE_INTERVALS) == set(ScaleType)
    assert set(_CHORD_INTERVALS) == set(ChordType)
    return d


PATTERN_LOOKUP = _build_pattern_lookup()
"""Lookup table from case-sensitive external name to ScaleType or ChordType."""

INTERVAL_NAMES: List[str] = [
    "P1", "m2", "M2", "m3", "M3", "P4", "TT", "P5", "m6", "M6", "m7", "M7"
]
"""Short interval-class labels indexed by semitone distance 0-11."""


def lookup_pattern(name: str) -> Pattern:
    """Find the scale or chord type for an external name.

    Raises:
        UnknownPatternError: If the name is not in the table.
    """
    pattern = PATTERN_LOOKUP.get(name)
    if pattern is None:
        raise UnknownPatternError(name)
    return pattern


def pattern_intervals(pattern: Pattern) -> Tuple[int, ...]:
    """Ascending semitone offsets from the root for a pattern, starting at 0."""
    if isinstance(pattern, ScaleType):
        return _SCALE_INTERVALS[pattern]
    elif isinstance(pattern, ChordType):
        return _CHORD_INTERVALS[pattern]
    else:
        raise MatchException(pattern)


def resolve(root: Note, pattern: Union[Pattern, str]) -> List[Note]:
    """Expand a scale or chord from a root note.

    Each offset in the pattern is applied with ``root.transpose``. Offsets that
    land on a chromatic index already produced are dropped, keeping the first
    occurrence, so the result has no two equal notes.

    Args:
        root: The root note.
        pattern: A ScaleType, ChordType, or its external name.

    Returns:
        Notes in ascending offset order.

    Raises:
        UnknownPatternError: If ``pattern`` is a name not in the table.
    """
    if isinstance(pattern, str):
        pattern = lookup_pattern(pattern)
    notes: List[Note] = []
    for offset in pattern_intervals(pattern):
        note = root.transpose(offset)
        if note not in notes:
            notes.append(note)
    return notes


def resolve_names(
    root_name: str, pattern_name: str, prefer_flat: Optional[bool] = None
) -> List[str]:
    """Expand a scale or chord to octave-free note names.

    Args:
        root_name: Root note name such as ``"C"`` or ``"Eb"``.
        pattern_name: External scale or chord name such as ``"diatonicMajor"``.
        prefer_flat: Spell with flats. When None, flats are used only if the
            root itself is spelled with a flat.

    Returns:
        Names such as ``["A", "C", "E"]``.

    Raises:
        ParseError: If the root name is invalid.
        UnknownPatternError: If the pattern name is not in the table.
    """
    pattern = lookup_pattern(pattern_name)
    root = parse_note(root_name)
    if prefer_flat is None:
        prefer_flat = FLAT in normalize_accidentals(root_name)
    return [note.name(prefer_flat) for note in resolve(root, pattern)]


def interval_name(a: Note, b: Note) -> str:
    """Name the interval class from ``a`` up to ``b``, ignoring octaves.

    Examples:
        >>> from fretviz.pitch import PitchClass
        >>> interval_name(Note(PitchClass.C), Note(PitchClass.G))
        'P5'
    """
    return INTERVAL_NAMES[(b.index - a.index + SEMITONES_PER_OCTAVE) % SEMITONES_PER_OCTAVE]
