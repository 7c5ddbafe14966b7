"""Fretboard note-grid generation.

This module builds the string-by-fret grid of Notes for a tuning and fret
count, and answers lookups against it: the note at a position, every position
of a pitch class, and the positions that sound the exact same pitch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from fretviz.constants import DEFAULT_FRET_COUNT, STANDARD_TUNING
from fretviz.note import Note
from fretviz.parser import parse_tuning


@dataclass(frozen=True)
class StringPos:
    """Represents a position on the fretboard as a string and fret combination."""

    str_index: int
    """The string number (0-based index into the tuning, lowest string first)."""
    fret: int
    """The fret number, where 0 is the open string."""


class Fretboard:
    """A fixed set of open strings and the notes under every fret.

    The grid is computed once at construction: ``grid[s][f]`` is the open
    note of string ``s`` transposed up ``f`` half steps. A tuning or fret
    count change means building a new Fretboard.
    """

    def __init__(self, strings: Sequence[Note], fret_count: int = DEFAULT_FRET_COUNT) -> None:
        """Initialize the fretboard and compute its grid.

        Args:
            strings: Open-string notes, lowest string first.
            fret_count: Number of frets above the open string.

        Raises:
            ValueError: If fret_count is negative.
        """
        if fret_count < 0:
            raise ValueError(f"Fret count must be non-negative: {fret_count}")
        self._strings = list(strings)
        self._fret_count = fret_count
        self._grid = self._make_grid()
        self._index_lookup = self._make_index_lookup()

    @staticmethod
    def from_tuning(tokens: Sequence[str], fret_count: int = DEFAULT_FRET_COUNT) -> Fretboard:
        """Build a fretboard from open-string tokens such as ``"E2"``.

        Raises:
            ParseError: If any token is invalid.
        """
        strings = [Note(pc, acc, octave) for pc, acc, octave in parse_tuning(tokens)]
        return Fretboard(strings, fret_count)

    @staticmethod
    def standard(fret_count: int = DEFAULT_FRET_COUNT) -> Fretboard:
        return Fretboard.from_tuning(STANDARD_TUNING, fret_count)

    def _make_grid(self) -> List[List[Note]]:
        return [
            [open_note.transpose(fret) for fret in range(self._fret_count + 1)]
            for open_note in self._strings
        ]

    def _make_index_lookup(self) -> Dict[int, List[StringPos]]:
        """Build a lookup table from chromatic index to the positions sounding it.

        Returns:
            Dictionary mapping indexes 0-11 to StringPos lists in string-major
            order. Indexes absent from the grid have no entry.
        """
        lookup: Dict[int, List[StringPos]] = {}
        for str_index, row in enumerate(self._grid):
            for fret, note in enumerate(row):
                lookup.setdefault(note.index, []).append(StringPos(str_index, fret))
        return lookup

    @property
    def strings(self) -> List[Note]:
        return list(self._strings)

    @property
    def fret_count(self) -> int:
        return self._fret_count

    @property
    def grid(self) -> List[List[Note]]:
        """The full grid, one row per string with ``fret_count + 1`` cells."""
        return [list(row) for row in self._grid]

    def get_note(self, str_index: int, fret: int) -> Optional[Note]:
        """Get the note at a string and fret.

        Args:
            str_index: String index, 0 is the lowest string.
            fret: Fret number, 0 is the open string.

        Returns:
            The Note, or None if either index is out of range.
        """
        if str_index < 0 or str_index >= len(self._strings):
            return None
        if fret < 0 or fret > self._fret_count:
            return None
        return self._grid[str_index][fret]

    def as_strings(self, prefer_flat: bool = False) -> List[List[str]]:
        """The grid as display strings such as ``"C♯4"``."""
        return [[note.to_display_string(prefer_flat) for note in row] for row in self._grid]

    def positions_of(self, note: Note) -> List[StringPos]:
        """Every position whose note has the same chromatic index, in any octave."""
        return list(self._index_lookup.get(note.index, []))

    def equivalent_positions(self, str_pos: StringPos) -> List[StringPos]:
        """Positions that sound exactly the same pitch as ``str_pos``.

        Args:
            str_pos: The position to match, included in its own result.

        Returns:
            Matching positions in string-major order, or an empty list if
            ``str_pos`` is off the board.
        """
        note = self.get_note(str_pos.str_index, str_pos.fret)
        if note is None:
            return []
        return [
            pos
            for pos in self._index_lookup[note.index]
            if self._grid[pos.str_index][pos.fret].same_pitch(note)
        ]


def build_grid(tuning_tokens: Sequence[str], fret_count: int = DEFAULT_FRET_COUNT) -> List[List[Note]]:
    """Parse a tuning and return its note grid.

    Args:
        tuning_tokens: Open-string names with octaves, lowest string first.
        fret_count: Number of frets above the open string.

    Returns:
        ``grid[s][f]``, with ``len(tuning_tokens)`` rows of ``fret_count + 1``.

    Raises:
        ParseError: If any tuning token is invalid.
    """
    return Fretboard.from_tuning(tuning_tokens, fret_count).grid
