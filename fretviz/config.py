"""Session configuration for fretviz.

The engine itself is stateless. Everything a visualizer session changes
(fret count, spelling preference, tuning, the active scale list, per-note
color overrides) lives in a caller-owned Config, which can be exported to
and imported from JSON.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr, ValidationError

from fretviz import constants
from fretviz.base import ConfigError
from fretviz.fretboard import Fretboard

CUSTOM_SCALE = "custom"
"""ScaleEntry.scale value for a user-built note list."""


@dataclass(frozen=True)
class ScaleEntry:
    """One scale or chord selected for highlighting.

    For custom entries ``root`` holds the comma-separated note names instead
    of a single root.
    """

    scale: str  # Scale or chord name, or "custom"
    root: str  # Root note name, e.g. "A" or "E♭"
    color: str  # Highlight color, e.g. "#FF6B6B"
    hidden: bool = False  # Hidden entries stay in the list but are not drawn

    @property
    def is_custom(self) -> bool:
        return self.scale == CUSTOM_SCALE

    def custom_notes(self) -> List[str]:
        """The note names of a custom entry."""
        return [n.strip() for n in self.root.split(",") if n.strip()]


@dataclass(frozen=True)
class Config:
    """Main configuration class holding all visualizer session settings."""

    fret_count: int  # Frets above the open string
    prefer_flat: bool  # Spell black keys with flats
    tuning: List[str]  # Open-string tokens, lowest string first
    scales: List[ScaleEntry] = field(default_factory=list)
    show_scales: bool = True  # Master switch for scale highlighting
    note_overrides: Dict[str, str] = field(default_factory=dict)  # Note name -> color

    @property
    def num_strings(self) -> int:
        return len(self.tuning)

    def fretboard(self) -> Fretboard:
        """Build the fretboard for this tuning and fret count.

        Raises:
            ParseError: If the tuning contains an invalid token.
        """
        return Fretboard.from_tuning(self.tuning, self.fret_count)

    def with_scale(self, entry: ScaleEntry) -> Config:
        """A copy with ``entry`` appended to the scale list."""
        return replace(self, scales=[*self.scales, entry])


def init_config(
    fret_count: int = constants.DEFAULT_FRET_COUNT, prefer_flat: bool = False
) -> Config:
    """Initialize a default configuration with standard guitar settings.

    Args:
        fret_count: Number of frets above the open string.
        prefer_flat: Spell black keys with flats.

    Returns:
        A Config with standard tuning, no scales and no overrides.
    """
    return Config(
        fret_count=fret_count,
        prefer_flat=prefer_flat,
        tuning=list(constants.STANDARD_TUNING),
    )


class _ScaleEntryModel(BaseModel):
    """Payload shape of one exported scale entry."""

    scale: StrictStr
    root: StrictStr
    color: StrictStr
    hidden: StrictBool = False


class _ConfigModel(BaseModel):
    """Payload shape of an exported configuration, in the UI's field names.

    Unknown fields are ignored. ``numStrings`` is derived from the tuning,
    so it is not read.
    """

    fret_count: StrictInt = Field(default=constants.DEFAULT_FRET_COUNT, ge=0, alias="numFrets")
    prefer_flat: StrictBool = Field(default=False, alias="preferFlat")
    tuning: List[StrictStr] = Field(default_factory=lambda: list(constants.STANDARD_TUNING))
    scales: List[_ScaleEntryModel] = Field(default_factory=list)
    show_scales: StrictBool = Field(default=True, alias="showScales")
    note_overrides: Dict[str, StrictStr] = Field(default_factory=dict, alias="noteOverrides")

    def to_config(self) -> Config:
        return Config(
            fret_count=self.fret_count,
            prefer_flat=self.prefer_flat,
            tuning=list(self.tuning),
            scales=[ScaleEntry(**s.model_dump()) for s in self.scales],
            show_scales=self.show_scales,
            note_overrides=dict(self.note_overrides),
        )


def config_to_dict(config: Config) -> Dict[str, Any]:
    """Plain JSON-compatible form of a config, in the UI's field names."""
    d = asdict(config)
    return {
        "numFrets": d["fret_count"],
        "preferFlat": d["prefer_flat"],
        "numStrings": config.num_strings,
        "tuning": d["tuning"],
        "scales": d["scales"],
        "showScales": d["show_scales"],
        "noteOverrides": d["note_overrides"],
    }


def config_from_dict(payload: Any) -> Config:
    """Rebuild a config from its dictionary form.

    Missing fields fall back to ``init_config`` defaults and unknown fields
    are ignored.

    Raises:
        ConfigError: If the payload or any field has the wrong type, or the
            fret count is negative.
    """
    try:
        model = _ConfigModel.model_validate(payload)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
    return model.to_config()


def config_to_json(config: Config) -> str:
    return json.dumps(config_to_dict(config), ensure_ascii=False, indent=2)


def config_from_json(text: str) -> Config:
    """Parse an exported configuration.

    Raises:
        ConfigError: If the text is not valid JSON or has the wrong shape.
    """
    try:
        model = _ConfigModel.model_validate_json(text)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration JSON: {e}") from e
    return model.to_config()


def save_config(config: Config, path: Path) -> None:
    path.write_text(config_to_json(config), encoding="utf-8")


def load_config(path: Path) -> Config:
    """Read a configuration exported with ``save_config``.

    Raises:
        ConfigError: If the file cannot be read or does not hold a valid
            configuration.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read configuration {path}: {e}") from e
    return config_from_json(text)
