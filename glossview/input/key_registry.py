"""Key-combo registry mapping canonical key tokens to actions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyComboRegistry:
    """Small key-dispatch table with optional key normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else str
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register bindings, later ones overwriting earlier combos; returns ``self``."""
        for binding in bindings:
            for combo in binding.combos:
                self._handlers[self._normalize(combo)] = binding.handler
        return self

    def __contains__(self, key: str) -> bool:
        return self._normalize(key) in self._handlers

    def dispatch(self, key: str) -> bool | None:
        """Invoke bound handler for ``key``; ``None`` means no binding matched."""
        handler = self._handlers.get(self._normalize(key))
        if handler is None:
            return None
        return handler()
