"""Shared constants for recency tracking and jump commands."""

from __future__ import annotations

# A tab must stay active this long before its visit counts as "recent".
DEBOUNCE_MS = 250

# Window id reported when focus moves away from every browser window.
WINDOW_ID_NONE = -1


class CommandIDs:
    """Command identifiers bound to keyboard shortcuts by the host."""

    PREVIOUS_TAB = "1-previous-tab"
    NEXT_TAB = "2-next-tab"
