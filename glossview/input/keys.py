"""Key tokens parsed into a base key name plus modifier flags."""

from __future__ import annotations

from dataclasses import dataclass

_MODIFIER_PREFIXES: tuple[str, ...] = ("CTRL_", "META_", "ALT_", "SHIFT_")
_ALIASES: dict[str, str] = {
    "ENTER_CR": "ENTER",
    "ENTER_LF": "ENTER",
}


@dataclass(frozen=True)
class KeyEvent:
    """One decoded key press.

    ``char`` is set for plain character keys; ``name`` is ``"CHAR"`` then.
    Named keys carry their base name (``UP``, ``ENTER``, ``K``...) with
    modifiers split out.
    """

    name: str
    char: str | None = None
    ctrl: bool = False
    meta: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def is_character(self) -> bool:
        return self.char is not None

    @property
    def has_command_modifier(self) -> bool:
        """Return whether any modifier other than Shift is held."""
        return self.ctrl or self.meta or self.alt

    @property
    def combo(self) -> str:
        """Return the canonical token (``ALT_UP``, ``ENTER``...) for dispatch tables."""
        if self.char is not None:
            return self.char
        prefix = "".join(
            label
            for label, flag in zip(_MODIFIER_PREFIXES, (self.ctrl, self.meta, self.alt, self.shift))
            if flag
        )
        return f"{prefix}{self.name}"


def parse_key(token: str) -> KeyEvent:
    """Parse one reader token into a ``KeyEvent``."""
    if len(token) == 1:
        return KeyEvent(name="CHAR", char=token, shift=token.isupper())
    token = _ALIASES.get(token, token)
    flags = {"CTRL_": False, "META_": False, "ALT_": False, "SHIFT_": False}
    rest = token
    for prefix in _MODIFIER_PREFIXES:
        if rest.startswith(prefix) and len(rest) > len(prefix):
            flags[prefix] = True
            rest = rest[len(prefix):]
    return KeyEvent(
        name=rest,
        ctrl=flags["CTRL_"],
        meta=flags["META_"],
        alt=flags["ALT_"],
        shift=flags["SHIFT_"],
    )
