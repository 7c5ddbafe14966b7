"""Music theory engine for a guitar fretboard visualizer."""

from fretviz.base import ConfigError, FretvizError, ParseError, UnknownPatternError
from fretviz.config import Config, ScaleEntry, init_config
from fretviz.fretboard import Fretboard, build_grid
from fretviz.highlight import build_highlights
from fretviz.note import Note
from fretviz.parser import parse_note, parse_tuning
from fretviz.pitch import Accidental, PitchClass
from fretviz.scale import ChordType, ScaleType, interval_name, resolve, resolve_names
from fretviz.theory import analyze_theory

__all__ = [
    "Accidental",
    "ChordType",
    "Config",
    "ConfigError",
    "Fretboard",
    "FretvizError",
    "Note",
    "ParseError",
    "PitchClass",
    "ScaleEntry",
    "ScaleType",
    "UnknownPatternError",
    "analyze_theory",
    "build_grid",
    "build_highlights",
    "init_config",
    "interval_name",
    "parse_note",
    "parse_tuning",
    "resolve",
    "resolve_names",
]
