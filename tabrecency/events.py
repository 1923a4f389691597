"""Wire host tab/window notifications into a ``TabRecency`` tracker."""

from __future__ import annotations

import logging

from .constants import WINDOW_ID_NONE
from .host import TabHost
from .recency import TabRecency

logger = logging.getLogger(__name__)


def window_focus_changed(tracker: TabRecency, host: TabHost, window_id: int) -> None:
    """Register the active tab of a newly focused window.

    Focus leaving every browser window, or a window with no active tab,
    changes nothing.
    """
    if window_id == WINDOW_ID_NONE:
        return
    tab_id = host.query_active_tab(window_id)
    if tab_id is None:
        logger.debug("focused window %s has no active tab", window_id)
        return
    tracker.register(tab_id)


def attach_event_source(tracker: TabRecency, host: TabHost) -> None:
    """Subscribe ``tracker`` to every notification it consumes from ``host``."""
    host.add_tab_activated_listener(tracker.register)
    host.add_tab_removed_listener(tracker.deregister)
    host.add_tab_replaced_listener(tracker.replace)
    if host.supports_windows:
        host.add_window_focus_listener(lambda window_id: window_focus_changed(tracker, host, window_id))


def create_tracker(host: TabHost, **kwargs) -> TabRecency:
    """Build a tracker for ``host`` and attach it to the host's notifications."""
    tracker = TabRecency(host, **kwargs)
    attach_event_source(tracker, host)
    return tracker
