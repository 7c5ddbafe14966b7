"""Constants shared by the fretviz engine.

Fretboard defaults, pitch reference values and the thresholds used by
the theory analysis routines.
"""

from enum import Enum
from typing import Dict, List, Type, TypeVar

E = TypeVar("E", bound=Enum)
"""Type variable for enum types."""


def make_enum_value_lookup(enum_type: Type[E]) -> Dict[int, E]:
    """Create a reverse lookup dictionary from enum values to enum instances.

    Args:
        enum_type: The enum class to create a lookup for.

    Returns:
        A dictionary mapping enum values to enum instances.
    """
    lookup: Dict[int, E] = {}
    for enum_val in enum_type.__members__.values():
        lookup[enum_val.value] = enum_val
    return lookup


SEMITONES_PER_OCTAVE = 12
"""Number of distinct chromatic positions in an octave."""

TRANSPOSE_OFFSET = 1200
"""Added before taking a chromatic index modulo 12 so the result stays non-negative."""

DEFAULT_FRET_COUNT = 22
"""Number of frets on a freshly configured fretboard (fret 0 excluded)."""

DEFAULT_OCTAVE = 4
"""Octave assigned to note names parsed without octave digits."""

STANDARD_TUNING: List[str] = ["E2", "A2", "D3", "G3", "B3", "E4"]
"""Standard guitar tuning, lowest string first (E-A-D-G-B-E)."""

A4_FREQUENCY = 440.0
"""Reference pitch in Hz used by Note.frequency."""

A4_MIDI_NUMBER = 69
"""Number that Note.frequency treats as the reference pitch."""

KEY_DETECTION_THRESHOLD = 0.3
"""A best key score at or below this value means no key was detected."""

TONIC_BONUS = 0.2
"""Key score bonus when the candidate tonic appears in the input."""

DOMINANT_BONUS = 0.1
"""Key score bonus when the candidate fifth degree appears in the input."""

TENSION_BASELINE = 5.0
"""Harmonic tension of a note set with no intervals."""

TENSION_MIN = 0.0
TENSION_MAX = 10.0

HIGH_TENSION = 7.0
"""Tension above this triggers a resolution suggestion."""

LOW_TENSION = 3.0
"""Tension below this triggers a complexity suggestion."""
