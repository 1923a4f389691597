"""Back/forward stepping over a frozen snapshot of recently used tabs.

This module intentionally has no host or clock concerns.
A jump list only knows the tab ids it was built from and where it stands.
"""

from __future__ import annotations

from collections.abc import Iterable


class TabJumpList:
    """Frozen tab snapshot with a movable active position.

    ``tabs`` runs from the tab visited longest ago (index 0) to the current
    tab (last index). Jumping back walks toward older tabs and jumping forward
    walks back toward newer ones. Tabs closed after the snapshot was taken are
    tombstoned and skipped, so indices never shift.
    """

    def __init__(self, tabs: Iterable[int]) -> None:
        """Snapshot ``tabs`` and anchor on the last (most recent) entry."""
        self.tabs: tuple[int, ...] = tuple(tabs)
        self.active_index = len(self.tabs) - 1
        self.deleted_tabs: set[int] = set()

    @property
    def active_tab(self) -> int | None:
        """Return the tab id at the active position, if any."""
        if self.active_index < 0:
            return None
        return self.tabs[self.active_index]

    def is_coherent(self, tab_id: int) -> bool:
        """Return whether ``tab_id`` is where this jump list believes the user is."""
        return self.active_tab == tab_id

    def deregister(self, tab_id: int) -> bool:
        """Forget a closed tab; return True when the whole list is invalidated.

        Losing the anchor tab leaves no meaningful position to step from.
        Any other tab is tombstoned and skipped by later traversal.
        """
        if self.active_tab == tab_id:
            return True
        self.deleted_tabs.add(tab_id)
        return False

    def _step(self, indices: Iterable[int]) -> int | None:
        for idx in indices:
            candidate = self.tabs[idx]
            if candidate in self.deleted_tabs:
                continue
            self.active_index = idx
            return candidate
        return None

    def get_jump_back_tab_id(self) -> int | None:
        """Move to the next older live tab and return it, or None at the oldest."""
        return self._step(range(self.active_index - 1, -1, -1))

    def get_jump_forward_tab_id(self) -> int | None:
        """Move to the next newer live tab and return it, or None at the newest."""
        return self._step(range(self.active_index + 1, len(self.tabs)))
