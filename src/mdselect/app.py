"""Command line entry point: print smart selection chains for a Markdown file."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Sequence, TextIO

from .core.errors import SelectionError
from .core.ranges import Position
from .editor.document_model import TextDocument
from .editor.syntax.markdown import MarkdownEngine
from .editor.syntax.toc import build_toc
from .selection.provider import MarkdownSmartSelect
from .selection.types import SelectionRange
from .services.settings import SettingsStore, SmartSelectSettings
from .utils import logging as logging_utils

_LOGGER = logging.getLogger(__name__)
_EXIT_OK = 0
_EXIT_USAGE = 2


def configure_logging(level: int | str = logging.WARNING, *, force: bool = False) -> None:
    """Configure logging for CLI runs."""

    logging_utils.setup_logging(level, force=force)
    _LOGGER.debug("Logging configured (level=%s)", level)


def main(argv: Sequence[str] | None = None, *, stdout: TextIO | None = None) -> int:
    """Entry point invoked by the ``mdselect`` console script."""

    destination = stdout or sys.stdout
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        print(f"Invalid --log-level: {exc}", file=sys.stderr)
        return _EXIT_USAGE

    settings_path = args.settings_path or os.environ.get("MDSELECT_SETTINGS_PATH")
    store = SettingsStore(Path(settings_path).expanduser() if settings_path else None)
    try:
        overrides = _coerce_cli_overrides(args.overrides or [])
        settings = store.load(overrides=overrides or None)
    except ValueError as exc:
        print(f"Invalid settings: {exc}", file=sys.stderr)
        return _EXIT_USAGE

    if args.dump_settings:
        _dump_settings(settings, store, overrides=overrides, stream=destination)
        return _EXIT_OK

    if settings.debug_logging:
        configure_logging(logging.DEBUG, force=True)

    if args.path is None:
        parser.print_usage(sys.stderr)
        print("mdselect: error: a Markdown file is required", file=sys.stderr)
        return _EXIT_USAGE

    try:
        document = TextDocument.from_path(args.path)
        positions = [Position.from_value(value) for value in args.positions or ["0:0"]]
    except SelectionError as exc:
        print(str(exc), file=sys.stderr)
        return _EXIT_USAGE

    results = compute_chains(document, positions, settings)
    if args.json:
        payload = [
            {"position": position.to_dict(), "ranges": [item.to_dict() for item in chain.ranges()] if chain else []}
            for position, chain in results
        ]
        json.dump(payload, destination, indent=2)
        destination.write("\n")
    else:
        _print_chains(results, document, destination, show_text=args.show_text)
    return _EXIT_OK


def compute_chains(
    document: TextDocument,
    positions: Sequence[Position],
    settings: SmartSelectSettings,
) -> list[tuple[Position, SelectionRange | None]]:
    """Return every requested position with its chain (``None`` when empty)."""

    engine = MarkdownEngine(settings)
    provider = MarkdownSmartSelect(engine, settings=settings)
    tokens = engine.parse(document)
    toc = build_toc(engine, document)
    return [(position, provider.provide_selection_range(document, position, tokens, toc)) for position in positions]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdselect",
        description="Print the nested smart selection ranges for cursor positions in a Markdown file.",
    )
    parser.add_argument("path", nargs="?", help="Markdown file to inspect.")
    parser.add_argument(
        "-p",
        "--position",
        dest="positions",
        metavar="LINE:CHAR",
        action="append",
        help="Zero-based cursor position (repeatable, defaults to 0:0).",
    )
    parser.add_argument("--json", action="store_true", help="Emit the chains as JSON.")
    parser.add_argument(
        "--show-text",
        action="store_true",
        help="Print the first line of text covered by each range.",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("MDSELECT_LOG_LEVEL", "WARNING"),
        help="Logging level for diagnostics written to stderr.",
    )
    parser.add_argument(
        "--dump-settings",
        action="store_true",
        help="Print the effective settings payload and exit.",
    )
    parser.add_argument(
        "--settings-path",
        metavar="PATH",
        help="Override the default ~/.mdselect/settings.json path.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Override persisted settings for this run (repeatable).",
    )
    return parser


def _coerce_cli_overrides(items: Sequence[str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    known = SmartSelectSettings.field_names()
    for entry in items:
        if "=" not in entry:
            raise ValueError(f"Override '{entry}' must use KEY=VALUE syntax.")
        key, raw_value = entry.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError("Override is missing a field name.")
        if key not in known:
            raise ValueError(f"Unknown setting '{key}'.")
        overrides[key] = raw_value.strip()
    return overrides


def _print_chains(
    results: Sequence[tuple[Position, SelectionRange | None]],
    document: TextDocument,
    stream: TextIO,
    *,
    show_text: bool = False,
) -> None:
    for position, chain in results:
        stream.write(f"{position}\n")
        if chain is None:
            stream.write("  (no enclosing structure)\n")
            continue
        for depth, selection in enumerate(chain):
            line = f"  [{depth}] {selection.range}"
            if show_text:
                snippet = document.line_text(selection.range.start.line)[selection.range.start.character :]
                line = f"{line}  {snippet[:60]!r}"
            stream.write(line + "\n")


def _dump_settings(
    settings: SmartSelectSettings,
    store: SettingsStore,
    *,
    overrides: Mapping[str, Any],
    stream: TextIO,
) -> None:
    metadata = {
        "path": str(store.path),
        "cli_overrides": sorted(overrides.keys()),
        "environment_variables": sorted(name for name in os.environ if name.startswith("MDSELECT_")),
    }
    json.dump({"settings": asdict(settings), "meta": metadata}, stream, indent=2)
    stream.write("\n")


__all__ = ["main", "compute_chains", "configure_logging"]
