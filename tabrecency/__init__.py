"""Public package surface for tabrecency.

Exports the recency tracker, its jump list, and ``main`` for programmatic
CLI invocation.
"""

from __future__ import annotations

from .jump_list import TabJumpList
from .recency import TabRecency


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["TabJumpList", "TabRecency", "main"]
