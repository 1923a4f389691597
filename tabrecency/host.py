"""Tab host capability and an in-memory implementation.

``TabHost`` is the boundary to the browser: it delivers tab/window
notifications and performs focus/activation requests. ``InMemoryTabHost``
models a browser session for tests and event-log replay.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from .constants import WINDOW_ID_NONE

logger = logging.getLogger(__name__)

TabListener = Callable[[int], None]
ReplaceListener = Callable[[int, int], None]
WindowListener = Callable[[int], None]


class TabHost(Protocol):
    """Notifications and primitives the recency tracker depends on."""

    supports_windows: bool

    def add_tab_activated_listener(self, listener: TabListener) -> None: ...

    def add_tab_removed_listener(self, listener: TabListener) -> None: ...

    def add_tab_replaced_listener(self, listener: ReplaceListener) -> None: ...

    def add_window_focus_listener(self, listener: WindowListener) -> None: ...

    def query_active_tab(self, window_id: int) -> int | None: ...

    def window_of(self, tab_id: int) -> int | None: ...

    def focus_window(self, window_id: int) -> None: ...

    def activate_tab(self, tab_id: int) -> None: ...


@dataclass
class _Window:
    tabs: list[int] = field(default_factory=list)
    active_tab: int | None = None


class InMemoryTabHost:
    """Synchronous browser model that notifies listeners as state changes.

    With ``auto_deliver`` disabled, ``activate_tab`` and ``focus_window`` only
    queue their requests; ``deliver_pending()`` later applies them in request
    order, which mirrors how a real browser reports the changes after the
    requests return.
    """

    def __init__(self, supports_windows: bool = True, auto_deliver: bool = True) -> None:
        self.supports_windows = supports_windows
        self.auto_deliver = auto_deliver
        self.windows: dict[int, _Window] = {}
        self.focused_window: int = WINDOW_ID_NONE
        self.activation_requests: list[int] = []
        self.pending_requests: list[tuple[str, int]] = []
        self._activated: list[TabListener] = []
        self._removed: list[TabListener] = []
        self._replaced: list[ReplaceListener] = []
        self._focus: list[WindowListener] = []

    def add_tab_activated_listener(self, listener: TabListener) -> None:
        self._activated.append(listener)

    def add_tab_removed_listener(self, listener: TabListener) -> None:
        self._removed.append(listener)

    def add_tab_replaced_listener(self, listener: ReplaceListener) -> None:
        self._replaced.append(listener)

    def add_window_focus_listener(self, listener: WindowListener) -> None:
        self._focus.append(listener)

    @property
    def pending_activations(self) -> list[int]:
        return [target for kind, target in self.pending_requests if kind == "activate"]

    def window_of(self, tab_id: int) -> int | None:
        for window_id, window in self.windows.items():
            if tab_id in window.tabs:
                return window_id
        return None

    def query_active_tab(self, window_id: int) -> int | None:
        window = self.windows.get(window_id)
        return window.active_tab if window is not None else None

    def open_tab(self, tab_id: int, window_id: int, active: bool = True) -> None:
        """Create ``tab_id`` in ``window_id`` and optionally activate it."""
        if self.window_of(tab_id) is not None:
            raise ValueError(f"tab {tab_id} already exists")
        window = self.windows.setdefault(window_id, _Window())
        window.tabs.append(tab_id)
        if self.focused_window == WINDOW_ID_NONE:
            self.focused_window = window_id
        if active:
            self.select_tab(tab_id)

    def close_tab(self, tab_id: int) -> None:
        """Remove ``tab_id``; the window falls back to its neighbouring tab."""
        window_id = self.window_of(tab_id)
        if window_id is None:
            return
        window = self.windows[window_id]
        position = window.tabs.index(tab_id)
        window.tabs.remove(tab_id)
        was_active = window.active_tab == tab_id
        if was_active:
            window.active_tab = None
        for listener in list(self._removed):
            listener(tab_id)
        if window.tabs:
            if was_active:
                self._set_active(window.tabs[min(position, len(window.tabs) - 1)])
            return
        # closing the last tab closes its window
        del self.windows[window_id]
        if self.focused_window == window_id:
            self.set_window_focus(min(self.windows, default=WINDOW_ID_NONE))

    def replace_tab(self, old_tab_id: int, new_tab_id: int) -> None:
        """Swap ``old_tab_id`` for ``new_tab_id`` in place (prerender/discard)."""
        if self.window_of(new_tab_id) is not None:
            raise ValueError(f"tab {new_tab_id} already exists")
        window_id = self.window_of(old_tab_id)
        if window_id is None:
            return
        window = self.windows[window_id]
        window.tabs[window.tabs.index(old_tab_id)] = new_tab_id
        if window.active_tab == old_tab_id:
            window.active_tab = new_tab_id
        for listener in list(self._replaced):
            listener(old_tab_id, new_tab_id)

    def set_window_focus(self, window_id: int) -> None:
        """Move OS focus to ``window_id`` (or away from all windows)."""
        if window_id != WINDOW_ID_NONE and window_id not in self.windows:
            return
        if window_id == self.focused_window:
            return
        self.focused_window = window_id
        for listener in list(self._focus):
            listener(window_id)

    def focus_window(self, window_id: int) -> None:
        """Request focus for ``window_id``; queued like activations."""
        if self.auto_deliver:
            self.set_window_focus(window_id)
        else:
            self.pending_requests.append(("focus", window_id))

    def select_tab(self, tab_id: int) -> None:
        """User-driven activation, e.g. clicking a tab strip entry."""
        self._set_active(tab_id)
        window_id = self.window_of(tab_id)
        if window_id is not None:
            self.set_window_focus(window_id)

    def activate_tab(self, tab_id: int) -> None:
        """Request activation; every request is answered with a notification."""
        self.activation_requests.append(tab_id)
        if self.auto_deliver:
            self._set_active(tab_id, always_notify=True)
        else:
            self.pending_requests.append(("activate", tab_id))

    def deliver_pending(self) -> None:
        """Apply queued activation and focus requests in the order they were made."""
        pending, self.pending_requests = self.pending_requests, []
        for kind, target in pending:
            if kind == "activate":
                self._set_active(target, always_notify=True)
            else:
                self.set_window_focus(target)

    def _set_active(self, tab_id: int, always_notify: bool = False) -> None:
        window_id = self.window_of(tab_id)
        if window_id is None:
            logger.debug("activation of unknown tab %s ignored", tab_id)
            return
        window = self.windows[window_id]
        if window.active_tab == tab_id and not always_notify:
            return
        window.active_tab = tab_id
        for listener in list(self._activated):
            listener(tab_id)
