"""Command-id dispatch table for the jump commands."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .constants import CommandIDs
from .recency import TabRecency


@dataclass(frozen=True)
class CommandBinding:
    """Mapping from one or more command ids to a single action callback."""

    command_ids: tuple[str, ...]
    handler: Callable[[], None]


class CommandRegistry:
    """Small command-dispatch table keyed by host command id."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], None]] = {}

    def register_binding(self, binding: CommandBinding) -> CommandRegistry:
        """Register one binding, overwriting existing handlers for same ids."""
        for command_id in binding.command_ids:
            self._handlers[command_id] = binding.handler
        return self

    def register_bindings(self, *bindings: CommandBinding) -> CommandRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, command_id: str) -> bool | None:
        """Run the handler for ``command_id``; None when nothing is bound."""
        handler = self._handlers.get(command_id)
        if handler is None:
            return None
        handler()
        return True


def build_jump_commands(tracker: TabRecency) -> CommandRegistry:
    """Bind the previous/next tab commands to ``tracker``'s jumps."""
    return CommandRegistry().register_bindings(
        CommandBinding((CommandIDs.PREVIOUS_TAB,), tracker.jump_back),
        CommandBinding((CommandIDs.NEXT_TAB,), tracker.jump_forward),
    )
