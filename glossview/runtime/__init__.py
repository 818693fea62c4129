"""Public runtime orchestration entry points.

This package groups the state owner (`BrowserController`), the interactive
bootstrap (`run_browser`), and the event loop used by tests and composition.
"""

from __future__ import annotations

from .controller import BrowserController
from .state import FOCUS_SEARCH, FOCUS_TREE, AppState
from .type_ahead import TYPE_AHEAD_TIMEOUT_MS, DeadlineTimer, TypeAheadBuffer


def run_browser(*args, **kwargs):
    """Lazily import session entrypoint to avoid package-import cycles."""
    from .app import run_browser as _run_browser

    return _run_browser(*args, **kwargs)


__all__ = [
    "AppState",
    "BrowserController",
    "DeadlineTimer",
    "FOCUS_SEARCH",
    "FOCUS_TREE",
    "TYPE_AHEAD_TIMEOUT_MS",
    "TypeAheadBuffer",
    "run_browser",
]
