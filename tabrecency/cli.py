"""Command-line front door for tabrecency.

``tabrecency replay`` feeds a recorded browser event log through the
recency tracker and prints the resulting ranking and jump activations.
``tabrecency config`` shows or updates the persisted settings.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from . import config
from .highlight import DEFAULT_STYLE, colorize_json
from .logging_setup import configure_logging
from .replay import EventLogError, ReplayResult, replay


def _nonnegative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _format_ids(ids: list[int]) -> str:
    return " ".join(str(tab_id) for tab_id in ids) if ids else "-"


def format_result(result: ReplayResult) -> str:
    """Render a replay result as plain text lines."""
    lines = [
        f"ranking: {_format_ids(result.ranking)}",
        f"current: {result.current_tab if result.current_tab is not None else '-'}",
        f"activations: {_format_ids(result.activations)}",
    ]
    if result.unknown_commands:
        lines.append(f"unknown commands: {', '.join(result.unknown_commands)}")
    return "\n".join(lines) + "\n"


def _read_event_lines(source: str) -> list[str]:
    if source == "-":
        return sys.stdin.read().splitlines()
    path = Path(source)
    if not path.is_file():
        raise SystemExit(f"Event log not found: {path}")
    return path.read_text(encoding="utf-8").splitlines()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabrecency",
        description="Replay browser tab events through the recency tracker.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Config file (default: user config dir).")
    parser.add_argument(
        "--log-level",
        choices=config.LOG_LEVEL_NAMES,
        type=str.upper,
        default=None,
        help="Log level for stderr output (default: from config).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    replay_parser = sub.add_parser("replay", help="Replay a JSON-lines event log.")
    replay_parser.add_argument("events", help="Path to the event log, or '-' for stdin.")
    replay_parser.add_argument(
        "--debounce-ms",
        type=_nonnegative_int,
        default=None,
        help="Minimum dwell time before a visit counts (default: from config).",
    )
    replay_parser.add_argument("--json", action="store_true", help="Print the result as JSON.")
    replay_parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    replay_parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for JSON output.")

    config_parser = sub.add_parser("config", help="Show or update persisted settings.")
    config_parser.add_argument(
        "--set-debounce-ms",
        type=_nonnegative_int,
        default=None,
        help="Persist a new debounce interval.",
    )
    return parser


def _run_replay(args: argparse.Namespace, settings: config.Settings) -> None:
    debounce_ms = args.debounce_ms if args.debounce_ms is not None else settings.debounce_ms
    try:
        result = replay(_read_event_lines(args.events), debounce_ms=debounce_ms)
    except EventLogError as exc:
        raise SystemExit(f"Invalid event log: {exc}") from exc

    if not args.json:
        sys.stdout.write(format_result(result))
        return
    text = json.dumps(result.to_dict(), indent=2) + "\n"
    if not args.no_color and sys.stdout.isatty():
        text = colorize_json(text, args.style)
    sys.stdout.write(text)


def _run_config(args: argparse.Namespace, settings: config.Settings) -> None:
    if args.set_debounce_ms is not None:
        data = config.load_config(args.config)
        data["debounce_ms"] = args.set_debounce_ms
        config.save_config(data, args.config)
        settings = config.load_settings(args.config)
    path = args.config if args.config is not None else config.CONFIG_PATH
    sys.stdout.write(f"config: {path}\n")
    sys.stdout.write(f"debounce_ms: {settings.debounce_ms}\n")
    sys.stdout.write(f"log_level: {settings.log_level}\n")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the selected subcommand."""
    args = _build_parser().parse_args(argv)
    settings = config.load_settings(args.config)
    configure_logging(args.log_level or settings.log_level)

    if args.command == "replay":
        _run_replay(args, settings)
    else:
        _run_config(args, settings)
