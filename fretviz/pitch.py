"""Pitch classes, accidentals and chromatic name tables.

This module defines the twelve-tone chromatic space used by the rest of
fretviz: the seven natural letter classes with their fixed chromatic offsets,
the three supported accidentals, and the two canonical spellings (sharp or
flat preferring) for every chromatic index. All accidentals are rendered with
the Unicode symbols ``♯`` and ``♭``.
"""

import re
from enum import Enum, unique
from typing import Dict, List, Tuple

from fretviz.constants import SEMITONES_PER_OCTAVE, make_enum_value_lookup


@unique
class PitchClass(Enum):
    """Enumeration of the seven natural letter classes.

    Values are the semitone offsets of the natural notes from C.
    """

    C = 0
    D = 2
    E = 4
    F = 5
    G = 7
    A = 9
    B = 11


@unique
class Accidental(Enum):
    """Signed semitone modifier applied to a natural pitch class."""

    NATURAL = 0
    SHARP = 1
    FLAT = -1

    @property
    def symbol(self) -> str:
        """The Unicode symbol for this accidental (empty for natural)."""
        return _ACCIDENTAL_SYMBOLS[self]


_ACCIDENTAL_SYMBOLS: Dict[Accidental, str] = {
    Accidental.NATURAL: "",
    Accidental.SHARP: "♯",
    Accidental.FLAT: "♭",
}

SHARP = "♯"
FLAT = "♭"

PITCH_CLASS_LOOKUP = make_enum_value_lookup(PitchClass)
"""Lookup table from chromatic offset to natural PitchClass."""

SHARP_NAMES: List[str] = ["C", "C♯", "D", "D♯", "E", "F", "F♯", "G", "G♯", "A", "A♯", "B"]
"""Sharp-preferring label for each chromatic index."""

FLAT_NAMES: List[str] = ["C", "D♭", "D", "E♭", "E", "F", "G♭", "G", "A♭", "A", "B♭", "B"]
"""Flat-preferring label for each chromatic index."""

SHARP_COMPONENTS: List[Tuple[PitchClass, Accidental]] = [
    (PitchClass.C, Accidental.NATURAL),
    (PitchClass.C, Accidental.SHARP),
    (PitchClass.D, Accidental.NATURAL),
    (PitchClass.D, Accidental.SHARP),
    (PitchClass.E, Accidental.NATURAL),
    (PitchClass.F, Accidental.NATURAL),
    (PitchClass.F, Accidental.SHARP),
    (PitchClass.G, Accidental.NATURAL),
    (PitchClass.G, Accidental.SHARP),
    (PitchClass.A, Accidental.NATURAL),
    (PitchClass.A, Accidental.SHARP),
    (PitchClass.B, Accidental.NATURAL),
]
"""Canonical (pitch class, accidental) spelling of each index using sharps."""

FLAT_COMPONENTS: List[Tuple[PitchClass, Accidental]] = [
    (PitchClass.C, Accidental.NATURAL),
    (PitchClass.D, Accidental.FLAT),
    (PitchClass.D, Accidental.NATURAL),
    (PitchClass.E, Accidental.FLAT),
    (PitchClass.E, Accidental.NATURAL),
    (PitchClass.F, Accidental.NATURAL),
    (PitchClass.G, Accidental.FLAT),
    (PitchClass.G, Accidental.NATURAL),
    (PitchClass.A, Accidental.FLAT),
    (PitchClass.A, Accidental.NATURAL),
    (PitchClass.B, Accidental.FLAT),
    (PitchClass.B, Accidental.NATURAL),
]
"""Canonical (pitch class, accidental) spelling of each index using flats."""


def _build_name_table() -> Dict[str, Tuple[PitchClass, Accidental]]:
    """Build the supported note-name table keyed by Unicode spelling.

    Returns:
        Seven naturals plus the five sharp and five flat spellings.
    """
    d: Dict[str, Tuple[PitchClass, Accidental]] = {}
    for components in (SHARP_COMPONENTS, FLAT_COMPONENTS):
        for pitch_class, accidental in components:
            d[pitch_class.name + accidental.symbol] = (pitch_class, accidental)
    assert len(d) == 17
    return d


NOTE_NAME_TABLE = _build_name_table()
"""Supported note names (Unicode accidentals) to their components."""


def chromatic_index(pitch_class: PitchClass, accidental: Accidental) -> int:
    """Absolute chromatic position (0-11) of a spelled note."""
    return (pitch_class.value + accidental.value + SEMITONES_PER_OCTAVE) % SEMITONES_PER_OCTAVE


def index_name(index: int, prefer_flat: bool = False) -> str:
    """Canonical label for a chromatic index.

    Args:
        index: Chromatic position, reduced modulo 12.
        prefer_flat: Spell black keys with flats instead of sharps.

    Returns:
        The label, e.g. ``"C♯"`` or ``"D♭"`` for index 1.
    """
    names = FLAT_NAMES if prefer_flat else SHARP_NAMES
    return names[index % SEMITONES_PER_OCTAVE]


_ASCII_ACCIDENTAL = re.compile(r"([A-G])([#b])")


def normalize_accidentals(text: str) -> str:
    """Replace ASCII accidentals following a note letter with Unicode ones.

    Only a ``#`` or ``b`` that directly follows an uppercase letter A-G is
    rewritten, so a lone ``B`` is never mistaken for a flat.
    """
    return _ASCII_ACCIDENTAL.sub(
        lambda m: m.group(1) + (SHARP if m.group(2) == "#" else FLAT), text
    )


_OCTAVE_DIGITS = re.compile(r"-?[0-9]+$")


def strip_octave(name: str) -> str:
    """Remove trailing octave digits from a display string ("C♯4" -> "C♯")."""
    return _OCTAVE_DIGITS.sub("", name.strip())
