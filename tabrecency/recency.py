"""Tab recency ranking and the jump-list lifecycle built on top of it.

``TabRecency`` associates a logical timestamp with each tab id. The ranking it
produces orders tabs by their last confirmed visit, and it owns at most one
``TabJumpList`` used to step back and forth through that ranking.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .constants import DEBOUNCE_MS
from .host import TabHost
from .jump_list import TabJumpList

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000.0


class TabRecency:
    """Recency ranking plus back/forward jumping for one browser session.

    A tab only counts as visited once it has been active for at least
    ``debounce_ms``; tabs passed through quickly (for example while jumping)
    never enter the ranking. The credit is written when the tab stops being
    active, so the current tab is usually not ranked yet.

    A manual navigation, i.e. any activation the live jump list did not
    predict, discards the jump list. The next jump rebuilds it from the
    ranking at that moment.
    """

    def __init__(
        self,
        host: TabHost,
        clock: Clock = monotonic_ms,
        debounce_ms: float = DEBOUNCE_MS,
    ) -> None:
        self.host = host
        self.clock = clock
        self.debounce_ms = debounce_ms
        self.timestamp = 1
        self.recency_by_tab: dict[int, int] = {}
        self.current_tab: int | None = None
        self.pending_tab: int | None = None
        self.pending_since: float | None = None
        self._jump_list: TabJumpList | None = None

    @property
    def jump_list(self) -> TabJumpList | None:
        return self._jump_list

    @property
    def has_jump_list(self) -> bool:
        return self._jump_list is not None

    def _discard_jump_list(self, reason: str) -> None:
        if self._jump_list is not None:
            logger.debug("jump list discarded: %s", reason)
        self._jump_list = None

    def register(self, tab_id: int) -> None:
        """Record that ``tab_id`` just became the active tab."""
        now = self.clock()
        if self.pending_tab is not None and self.pending_since is not None:
            if now - self.pending_since >= self.debounce_ms:
                self.timestamp += 1
                self.recency_by_tab[self.pending_tab] = self.timestamp
                logger.debug("credited tab %s at %d", self.pending_tab, self.timestamp)
            else:
                logger.debug("tab %s left too quickly, not credited", self.pending_tab)

        if self._jump_list is not None and not self._jump_list.is_coherent(tab_id):
            self._discard_jump_list(f"tab {tab_id} activated outside jump list")

        self.current_tab = tab_id
        self.pending_tab = tab_id
        self.pending_since = now

    def deregister(self, tab_id: int) -> None:
        """Forget ``tab_id`` after it was closed or replaced."""
        if tab_id == self.pending_tab:
            # a closed tab never becomes recent
            self.pending_tab = None
            self.pending_since = None
        if tab_id == self.current_tab:
            self.current_tab = None
        self.recency_by_tab.pop(tab_id, None)

        if self._jump_list is not None and self._jump_list.deregister(tab_id):
            self._discard_jump_list(f"anchor tab {tab_id} removed")

    def replace(self, old_tab_id: int, new_tab_id: int) -> None:
        """Handle a tab swapped for another id as a close plus an activation."""
        self.deregister(old_tab_id)
        self.register(new_tab_id)

    def get_ranking(self) -> list[int]:
        """Return tab ids by recency, most recently used first."""
        return sorted(self.recency_by_tab, key=self.recency_by_tab.__getitem__, reverse=True)

    def _jump_seed(self, current_tab: int) -> list[int]:
        """Return the ranking oldest-first with ``current_tab`` as the last entry.

        The current tab may be missing from the ranking (not credited yet) or
        ranked at an older visit; either way it belongs at the end only.
        """
        tabs = [tab_id for tab_id in reversed(self.get_ranking()) if tab_id != current_tab]
        tabs.append(current_tab)
        return tabs

    def _ensure_jump_list(self) -> TabJumpList | None:
        """Return the live jump list, building one from the ranking if needed.

        Without a current tab there is no position to jump from.
        """
        if self._jump_list is None and self.current_tab is not None:
            self._jump_list = TabJumpList(self._jump_seed(self.current_tab))
            logger.debug("jump list created over %d tabs", len(self._jump_list.tabs))
        return self._jump_list

    def jump_back(self) -> None:
        """Activate the next older tab in the jump list, if there is one."""
        jump_list = self._ensure_jump_list()
        target = jump_list.get_jump_back_tab_id() if jump_list is not None else None
        logger.debug("jump back -> %s", target)
        if target is not None:
            self.select_tab(target)

    def jump_forward(self) -> None:
        """Activate the next newer tab in the jump list, if there is one."""
        jump_list = self._ensure_jump_list()
        target = jump_list.get_jump_forward_tab_id() if jump_list is not None else None
        logger.debug("jump forward -> %s", target)
        if target is not None:
            self.select_tab(target)

    def select_tab(self, tab_id: int) -> None:
        """Ask the host to bring ``tab_id`` to the front.

        The tab is activated before its window is focused so that a host
        resolving the focus change to "active tab of that window" reports
        ``tab_id`` itself. Nothing here touches ``current_tab``; that waits
        for the host's activation notification.
        """
        self.host.activate_tab(tab_id)
        if self.host.supports_windows:
            window_id = self.host.window_of(tab_id)
            if window_id is not None:
                self.host.focus_window(window_id)
