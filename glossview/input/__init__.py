"""Input-layer public API for key decoding and interaction handlers.

Exports are split between low-level terminal decoding (`read_key`) and the
higher-level key/mouse handlers used by the runtime loop.
"""

from .dispatch import HANDLED, NOT_HANDLED, KeyContext, KeyDispatcher, KeyOutcome, handle_key
from .key_registry import KeyComboBinding, KeyComboRegistry
from .keys import KeyEvent, parse_key
from .mouse import TreeMouseHandler, parse_mouse_col_row
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyEvent",
    "parse_key",
    "KeyComboBinding",
    "KeyComboRegistry",
    "KeyContext",
    "KeyDispatcher",
    "KeyOutcome",
    "HANDLED",
    "NOT_HANDLED",
    "handle_key",
    "TreeMouseHandler",
    "parse_mouse_col_row",
]
