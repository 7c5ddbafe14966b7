"""Highlight colors for fretboard cells.

Turns the active scale list of a Config into a map from octave-free note
name to the colors that should mark that note on the grid.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from fretviz.base import ParseError, UnknownPatternError
from fretviz.config import Config
from fretviz.parser import parse_note
from fretviz.pitch import normalize_accidentals
from fretviz.scale import resolve


def build_highlights(config: Config) -> Dict[str, List[str]]:
    """Compute the highlight colors for every highlighted note name.

    Regular entries are resolved and spelled with ``config.prefer_flat``;
    custom entries contribute their note names as written. Hidden entries are
    skipped, as are entries with an unknown pattern or invalid root. Note
    overrides replace whatever colors a note had.

    Args:
        config: The session configuration.

    Returns:
        Note name (e.g. ``"C♯"``) to colors in scale-list order. Empty when
        ``config.show_scales`` is false.
    """
    highlights: Dict[str, List[str]] = {}
    if not config.show_scales:
        return highlights

    for entry in config.scales:
        if entry.hidden or entry.is_custom:
            continue
        try:
            notes = resolve(parse_note(entry.root), entry.scale)
        except (ParseError, UnknownPatternError) as e:
            logging.warning("Skipping scale entry %s/%s: %s", entry.root, entry.scale, e)
            continue
        for note in notes:
            highlights.setdefault(note.name(config.prefer_flat), []).append(entry.color)

    for entry in config.scales:
        if entry.hidden or not entry.is_custom:
            continue
        for name in entry.custom_notes():
            highlights.setdefault(normalize_accidentals(name), []).append(entry.color)

    for name, color in config.note_overrides.items():
        highlights[normalize_accidentals(name)] = [color]

    return highlights
