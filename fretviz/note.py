"""The Note value type.

A Note is a spelled pitch (pitch class plus accidental) in a given octave.
Notes are immutable; transposition, parsing and scale expansion always build
fresh instances.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from fretviz.constants import (
    A4_FREQUENCY,
    A4_MIDI_NUMBER,
    DEFAULT_OCTAVE,
    SEMITONES_PER_OCTAVE,
    TRANSPOSE_OFFSET,
)
from fretviz.pitch import (
    FLAT_COMPONENTS,
    SHARP_COMPONENTS,
    Accidental,
    PitchClass,
    chromatic_index,
    index_name,
)


@dataclass(frozen=True, eq=False)
class Note:
    """A pitch class with an accidental and an octave.

    Equality and hashing only consider the chromatic ``index``, so ``C♯2``
    equals ``D♭5``. Use ``same_pitch`` when the octave matters.

    Octave 0 covers numbers 0-11 (``midi_number`` applies no scientific pitch
    offset), so ``E2`` is 28 rather than 40.
    """

    pitch_class: PitchClass
    """The natural letter class this note is spelled from."""
    accidental: Accidental = Accidental.NATURAL
    """Sharp, flat or natural modifier applied to the letter class."""
    octave: int = DEFAULT_OCTAVE
    """Octave number; may be negative after transposing far enough down."""

    @property
    def index(self) -> int:
        """Absolute chromatic position within the octave, always 0-11."""
        return chromatic_index(self.pitch_class, self.accidental)

    @staticmethod
    def from_chromatic_index(index: int, octave: int, prefer_flat: bool = False) -> Note:
        """Build the canonically spelled note for a chromatic index.

        Args:
            index: Chromatic position (reduced modulo 12).
            octave: Octave of the resulting note.
            prefer_flat: Spell black keys as flats instead of sharps.

        Returns:
            A Note whose ``index`` equals ``index % 12``.
        """
        components = FLAT_COMPONENTS if prefer_flat else SHARP_COMPONENTS
        pitch_class, accidental = components[index % SEMITONES_PER_OCTAVE]
        return Note(pitch_class, accidental, octave)

    def name(self, prefer_flat: bool = False) -> str:
        """Canonical label of this note's index, without octave.

        The label comes from the sharp or flat table, not from this note's
        own spelling: ``Note(D, FLAT).name()`` is ``"C♯"``.
        """
        return index_name(self.index, prefer_flat)

    def midi_number(self) -> int:
        return self.octave * SEMITONES_PER_OCTAVE + self.index

    def frequency(self, a4: float = A4_FREQUENCY) -> float:
        """Equal-tempered frequency in Hz, rounded to two decimals.

        Args:
            a4: Frequency assigned to note number 69.
        """
        return round(a4 * math.pow(2, (self.midi_number() - A4_MIDI_NUMBER) / 12), 2)

    def transpose(self, steps: int) -> Note:
        """Move this note by a number of half steps.

        The result is always spelled with sharps, so an original flat
        spelling is not preserved.

        Args:
            steps: Semitones to move (negative moves down).

        Returns:
            A new Note ``steps`` semitones away.
        """
        new_midi = self.midi_number() + steps
        new_index = (new_midi + TRANSPOSE_OFFSET) % SEMITONES_PER_OCTAVE
        new_octave = new_midi // SEMITONES_PER_OCTAVE
        return Note.from_chromatic_index(new_index, new_octave)

    def distance_to(self, other: Note) -> int:
        """Signed semitone distance from this note up to ``other``."""
        return other.midi_number() - self.midi_number()

    def to_display_string(self, prefer_flat: bool = False) -> str:
        """Label with octave, e.g. ``"C♯4"``."""
        return f"{self.name(prefer_flat)}{self.octave}"

    def same_pitch(self, other: Note) -> bool:
        """Whether both notes share the chromatic index and the octave."""
        return self.index == other.index and self.octave == other.octave

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        return self.index == other.index

    def __hash__(self) -> int:
        return hash(self.index)

    def __str__(self) -> str:
        return self.to_display_string()
