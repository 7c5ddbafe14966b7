"""Command-line entry point for fretviz.

Prints a fretboard grid, the notes of a scale or chord, or a theory analysis
of a note selection.
"""

import logging
import sys
from argparse import ArgumentParser, Namespace
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from fretviz.base import FretvizError
from fretviz.config import Config, init_config, load_config
from fretviz.highlight import build_highlights
from fretviz.scale import resolve_names
from fretviz.theory import TheoryAnalysis, analyze_theory


def render_grid(config: Config) -> List[str]:
    """Render the configured fretboard as text, highest string first.

    Highlighted notes are wrapped in brackets.
    """
    board = config.fretboard()
    highlights = build_highlights(config)
    lines = []
    for row in reversed(board.grid):
        cells = []
        for note in row:
            label = note.to_display_string(config.prefer_flat)
            if note.name(config.prefer_flat) in highlights:
                label = f"[{label}]"
            cells.append(f"{label:>6}")
        lines.append("".join(cells))
    lines.append("".join(f"{fret:>6}" for fret in range(board.fret_count + 1)))
    return lines


def render_analysis(analysis: TheoryAnalysis) -> List[str]:
    lines = []
    key = analysis.detected_key
    if key is None:
        lines.append("Key: undetected")
    else:
        signature = " ".join(key.signature) or "none"
        lines.append(f"Key: {key.tonic} {key.mode.value} (signature: {signature})")
    for degree in analysis.scale_degrees:
        lines.append(
            f"  {degree.note}: degree {degree.degree} {degree.function} ({degree.chord_function})"
        )
    for interval in analysis.intervals:
        lines.append(
            f"  {interval.from_note}-{interval.to_note}: {interval.name} ({interval.consonance.value})"
        )
    chord = analysis.chord_analysis
    if chord is None:
        lines.append("Chord: none")
    else:
        lines.append(f"Chord: {chord.root} {chord.quality} {chord.roman_numeral}".rstrip())
    lines.append(f"Harmonic tension: {analysis.harmonic_tension:g}")
    lines.extend(f"- {s}" for s in analysis.suggestions)
    return lines


def make_parser() -> ArgumentParser:
    """Create the command-line argument parser.

    Returns:
        An ArgumentParser with the grid, scale and analyze subcommands.
    """
    parser = ArgumentParser(prog="fretviz")
    parser.add_argument("--log-level", default="WARNING")
    subparsers = parser.add_subparsers(dest="command", required=True)

    grid = subparsers.add_parser("grid", help="print the fretboard grid")
    grid.add_argument("--config", type=Path, help="exported JSON configuration")
    grid.add_argument("--frets", type=int, default=None)
    grid.add_argument("--tuning", nargs="+", default=None)
    grid.add_argument("--flat", action="store_true")

    scale = subparsers.add_parser("scale", help="print the notes of a scale or chord")
    scale.add_argument("root")
    scale.add_argument("pattern")
    scale.add_argument("--flat", action="store_true", default=None)

    analyze = subparsers.add_parser("analyze", help="analyze a selection of notes")
    analyze.add_argument("notes", nargs="+")
    return parser


def configure_logging(log_level: str) -> None:
    """Configure the logging system with the specified log level.

    Args:
        log_level: The logging level (e.g., 'DEBUG', 'INFO', 'WARNING').
    """
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d -- %(message)s",
        level=log_level,
    )


def _grid_config(args: Namespace) -> Config:
    config = load_config(args.config) if args.config is not None else init_config()
    fret_count = config.fret_count if args.frets is None else args.frets
    tuning = config.tuning if args.tuning is None else args.tuning
    return replace(
        config, fret_count=fret_count, prefer_flat=config.prefer_flat or args.flat, tuning=tuning
    )


def run(args: Namespace) -> List[str]:
    """Execute a parsed command and return the lines to print.

    Raises:
        FretvizError: If a note, tuning, pattern or config file is invalid.
    """
    if args.command == "grid":
        return render_grid(_grid_config(args))
    elif args.command == "scale":
        return [" ".join(resolve_names(args.root, args.pattern, args.flat))]
    else:
        return render_analysis(analyze_theory(args.notes))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the fretviz command.

    Parses arguments, configures logging and prints the command output.

    Returns:
        The process exit status.
    """
    parser = make_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    logging.debug("running %s", args.command)
    try:
        lines = run(args)
    except (FretvizError, ValueError) as e:
        logging.error("%s", e)
        return 1
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
