"""Logging setup for a process that owns the terminal.

Log records never reach stdout/stderr while the UI is drawn; they go to a file
when one is requested and are discarded otherwise.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_ENV_VAR = "GLOSSVIEW_LOG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Path | None = None, level: str = "INFO") -> logging.Logger:
    """Attach a file handler (or a null handler) to the ``glossview`` logger."""
    root = logging.getLogger("glossview")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if log_file is None:
        env_path = os.environ.get(LOG_ENV_VAR, "").strip()
        log_file = Path(env_path) if env_path else None

    if log_file is None:
        root.addHandler(logging.NullHandler())
        return root

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.propagate = False
    return root
