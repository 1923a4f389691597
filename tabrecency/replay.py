"""Replay a JSON-lines browser event log through a recency tracker.

Each non-blank line is one JSON object with an ``at`` time (milliseconds,
non-decreasing) and an ``event`` name plus that event's fields::

    {"at": 0, "event": "open", "tab": 1, "window": 1}
    {"at": 400, "event": "activate", "tab": 2}
    {"at": 900, "event": "back"}

Lines starting with ``#`` are comments.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .commands import build_jump_commands
from .constants import DEBOUNCE_MS, WINDOW_ID_NONE
from .events import create_tracker
from .host import InMemoryTabHost
from .recency import TabRecency

logger = logging.getLogger(__name__)

EVENT_FIELDS: dict[str, tuple[str, ...]] = {
    "open": ("tab", "window"),
    "activate": ("tab",),
    "close": ("tab",),
    "replace": ("old", "new"),
    "focus": ("window",),
    "back": (),
    "forward": (),
    "command": ("id",),
}


class EventLogError(ValueError):
    """Raised for an event-log line that cannot be replayed."""

    def __init__(self, line_no: int, message: str) -> None:
        super().__init__(f"line {line_no}: {message}")
        self.line_no = line_no


@dataclass(frozen=True)
class ReplayEvent:
    line_no: int
    at: float
    name: str
    fields: dict[str, object]


@dataclass
class ReplayClock:
    """Manually advanced millisecond clock."""

    now: float = 0.0

    def __call__(self) -> float:
        return self.now


@dataclass
class ReplayResult:
    ranking: list[int]
    current_tab: int | None
    activations: list[int] = field(default_factory=list)
    unknown_commands: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "ranking": list(self.ranking),
            "current_tab": self.current_tab,
            "activations": list(self.activations),
            "unknown_commands": list(self.unknown_commands),
        }


def _require_int(raw: dict, key: str, line_no: int) -> int:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise EventLogError(line_no, f"{key!r} must be an integer")
    return value


def parse_event(line: str, line_no: int) -> ReplayEvent | None:
    """Parse one log line; returns None for blank and comment lines."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    try:
        raw = json.loads(stripped)
    except ValueError as exc:
        raise EventLogError(line_no, f"invalid JSON ({exc})") from exc
    if not isinstance(raw, dict):
        raise EventLogError(line_no, "expected a JSON object")

    name = raw.get("event")
    if name not in EVENT_FIELDS:
        raise EventLogError(line_no, f"unknown event {name!r}")
    at = raw.get("at", 0)
    if isinstance(at, bool) or not isinstance(at, (int, float)) or at < 0:
        raise EventLogError(line_no, "'at' must be a non-negative number")

    fields: dict[str, object] = {}
    for key in EVENT_FIELDS[name]:
        if name == "command":
            value = raw.get(key)
            if not isinstance(value, str):
                raise EventLogError(line_no, "'id' must be a string")
            fields[key] = value
        else:
            fields[key] = _require_int(raw, key, line_no)
    if name == "open":
        fields["active"] = bool(raw.get("active", True))
    return ReplayEvent(line_no=line_no, at=float(at), name=name, fields=fields)


def parse_events(lines: Iterable[str]) -> list[ReplayEvent]:
    """Parse a whole log, checking that event times never go backwards."""
    events: list[ReplayEvent] = []
    last_at = 0.0
    for line_no, line in enumerate(lines, start=1):
        event = parse_event(line, line_no)
        if event is None:
            continue
        if event.at < last_at:
            raise EventLogError(line_no, f"time {event.at:g} is before previous event at {last_at:g}")
        last_at = event.at
        events.append(event)
    return events


class Replayer:
    """Drive an ``InMemoryTabHost`` and its tracker from parsed events."""

    def __init__(self, debounce_ms: float = DEBOUNCE_MS) -> None:
        self.clock = ReplayClock()
        self.host = InMemoryTabHost()
        self.tracker: TabRecency = create_tracker(self.host, clock=self.clock, debounce_ms=debounce_ms)
        self.commands = build_jump_commands(self.tracker)
        self.unknown_commands: list[str] = []

    def apply(self, event: ReplayEvent) -> None:
        self.clock.now = event.at
        f = event.fields
        name = event.name
        logger.debug("replay %s at %g: %s", name, event.at, f)
        try:
            if name == "open":
                self.host.open_tab(f["tab"], f["window"], active=f["active"])
            elif name == "activate":
                self.host.select_tab(f["tab"])
            elif name == "close":
                self.host.close_tab(f["tab"])
            elif name == "replace":
                self.host.replace_tab(f["old"], f["new"])
            elif name == "focus":
                self.host.set_window_focus(f["window"] if f["window"] >= 0 else WINDOW_ID_NONE)
            elif name == "back":
                self.tracker.jump_back()
            elif name == "forward":
                self.tracker.jump_forward()
            elif name == "command":
                self._command(f["id"])
        except ValueError as exc:
            raise EventLogError(event.line_no, str(exc)) from exc

    def _command(self, command_id: str) -> None:
        if self.commands.dispatch(command_id) is None:
            logger.info("unbound command %r", command_id)
            self.unknown_commands.append(command_id)

    def result(self) -> ReplayResult:
        return ReplayResult(
            ranking=self.tracker.get_ranking(),
            current_tab=self.tracker.current_tab,
            activations=list(self.host.activation_requests),
            unknown_commands=list(self.unknown_commands),
        )


def replay(lines: Iterable[str], debounce_ms: float = DEBOUNCE_MS) -> ReplayResult:
    """Replay ``lines`` and report the final ranking and jump activations."""
    replayer = Replayer(debounce_ms=debounce_ms)
    for event in parse_events(lines):
        replayer.apply(event)
    return replayer.result()
