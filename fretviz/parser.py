"""Parser for note names and tuning tokens using Lark."""

from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence, Tuple

from lark import Lark, Transformer
from lark.exceptions import LarkError

from fretviz.base import ParseError
from fretviz.constants import DEFAULT_OCTAVE
from fretviz.note import Note
from fretviz.pitch import NOTE_NAME_TABLE, Accidental, PitchClass, normalize_accidentals

# Lark grammar for a single note token: a letter, an optional accidental and
# optional octave digits, e.g. "E", "C#3", "B♭2".
NOTE_GRAMMAR = """
start: note

note: LETTER ACCIDENTAL? OCTAVE?

LETTER: /[A-G]/
ACCIDENTAL: "#" | "♯" | "b" | "♭"
OCTAVE: /[0-9]+/
"""

TuningEntry = Tuple[PitchClass, Accidental, int]
"""Constructor arguments for one open string."""


class NoteToken(NamedTuple):
    """Raw pieces of a parsed note token."""

    name: str
    octave: Optional[int]


class NoteTransformer(Transformer):
    """Transform a parsed note tree into a NoteToken."""

    def start(self, items):
        """Transform the root rule."""
        return items[0]

    def note(self, items):
        """Collect the letter, accidental and octave tokens."""
        name = ""
        octave = None
        for token in items:
            if token.type == "OCTAVE":
                octave = int(str(token))
            else:
                name += str(token)
        return NoteToken(name, octave)


_NOTE_PARSER = Lark(NOTE_GRAMMAR, parser="lalr", transformer=NoteTransformer())


def parse_note_name(
    token: str, require_octave: bool = False
) -> Tuple[PitchClass, Accidental, Optional[int]]:
    """Parse a note name into Note constructor arguments.

    ASCII accidentals are normalized to Unicode before the name is looked up
    in the supported name table, so ``"C#3"`` and ``"C♯3"`` are equivalent.

    Args:
        token: A note name such as ``"E"``, ``"C#3"`` or ``"B♭2"``.
        require_octave: Reject tokens without octave digits.

    Returns:
        A tuple of (pitch_class, accidental, octave) where octave is None when
        the token has no digits.

    Raises:
        ParseError: If the token does not match the grammar, names an
            unsupported spelling (such as ``E♯``), or lacks a required octave.
    """
    try:
        parsed: NoteToken = _NOTE_PARSER.parse(token.strip())
    except LarkError as e:
        raise ParseError(token, "expected a format like E4 or C♯3") from e
    name = normalize_accidentals(parsed.name)
    components = NOTE_NAME_TABLE.get(name)
    if components is None:
        raise ParseError(token, f"unknown note {name}")
    if require_octave and parsed.octave is None:
        raise ParseError(token, "missing octave")
    pitch_class, accidental = components
    return pitch_class, accidental, parsed.octave


def parse_note(token: str, default_octave: int = DEFAULT_OCTAVE) -> Note:
    """Parse a note name into a Note, filling in a missing octave."""
    pitch_class, accidental, octave = parse_note_name(token)
    return Note(pitch_class, accidental, default_octave if octave is None else octave)


def parse_tuning(tokens: Sequence[str]) -> List[TuningEntry]:
    """Parse open-string tokens into Note constructor arguments.

    Every token must carry an octave. The whole tuning is rejected if any
    token is invalid.

    Args:
        tokens: Open-string names, lowest string first, e.g. ``["E2", "A2"]``.

    Returns:
        One (pitch_class, accidental, octave) tuple per token.

    Raises:
        ParseError: If any token is malformed or unsupported.

    Examples:
        >>> parse_tuning(["E2", "C#3"])  # doctest: +NORMALIZE_WHITESPACE
        [(<PitchClass.E: 4>, <Accidental.NATURAL: 0>, 2),
         (<PitchClass.C: 0>, <Accidental.SHARP: 1>, 3)]
    """
    entries: List[TuningEntry] = []
    for token in tokens:
        pitch_class, accidental, octave = parse_note_name(token, require_octave=True)
        assert octave is not None
        entries.append((pitch_class, accidental, octave))
    return entries
