"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, xterm modifier parameters, and SGR mouse events.

Modified keys are spelled ``CTRL_``/``META_``/``ALT_``/``SHIFT_`` prefixes in
that order, e.g. ``ALT_UP`` or ``META_DOWN``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_BYTES: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x11": "CTRL_Q",
    b"\x0b": "CTRL_K",
    b"\x15": "CTRL_U",
    b"\x17": "CTRL_W",
    b"\x1f": "CTRL_QUESTION",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"P": "F1",
}

_CSI_TILDE_KEYS: dict[str, str] = {
    "1": "HOME",
    "4": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "7": "HOME",
    "8": "END",
    "11": "F1",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, first: bytes) -> str:
    """Complete a multi-byte UTF-8 character started by ``first``."""
    lead = first[0]
    if lead >= 0xF0:
        extra = 3
    elif lead >= 0xE0:
        extra = 2
    elif lead >= 0xC0:
        extra = 1
    else:
        extra = 0
    data = first
    for _ in range(extra):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")


def modifier_prefix(param: int) -> str:
    """Translate an xterm modifier parameter (``1 + bitmask``) into a token prefix."""
    mask = max(0, param - 1)
    parts: list[str] = []
    if mask & 4:
        parts.append("CTRL")
    if mask & 8:
        parts.append("META")
    if mask & 2:
        parts.append("ALT")
    if mask & 1:
        parts.append("SHIFT")
    return "".join(f"{part}_" for part in parts)


def _decode_sgr_mouse(fd: int) -> str:
    """Decode ``ESC [ < btn ; col ; row (M|m)`` after the ``<`` byte."""
    payload = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if part in {b"M", b"m"}:
            break
        payload.append(part)
        if len(payload) > 64:
            return "ESC"
    try:
        btn_s, col_s, row_s = b"".join(payload).decode("ascii").split(";")
        btn = int(btn_s)
        col = int(col_s)
        row = int(row_s)
    except ValueError:
        return "ESC"
    button = btn & 0b11
    is_wheel = (btn & 0b0100_0000) != 0
    if is_wheel:
        if button == 0:
            return f"MOUSE_WHEEL_UP:{col}:{row}"
        if button == 1:
            return f"MOUSE_WHEEL_DOWN:{col}:{row}"
        return "MOUSE"
    if button == 0 and (btn & 0b0010_0000) == 0:
        suffix = "DOWN" if part == b"M" else "UP"
        return f"MOUSE_LEFT_{suffix}:{col}:{row}"
    return "MOUSE"


def _decode_csi(fd: int) -> str:
    """Decode a CSI sequence after ``ESC [``."""
    first = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if first is None:
        return "ESC"
    if first == b"<":
        return _decode_sgr_mouse(fd)
    if first == b"Z":
        return "SHIFT_TAB"
    params = b""
    final = first
    while final.isdigit() or final == b";":
        params += final
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if len(params) > 16:
            return "ESC"
        final = part

    fields = params.decode("ascii").split(";") if params else []
    modifier = ""
    if len(fields) >= 2 and fields[1].isdigit():
        modifier = modifier_prefix(int(fields[1]))

    if final == b"~":
        name = _CSI_TILDE_KEYS.get(fields[0] if fields else "")
        return f"{modifier}{name}" if name else "ESC"
    name = _CSI_FINAL_KEYS.get(final)
    if name is None:
        return "ESC"
    return f"{modifier}{name}"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; ``""`` means timeout or end of input."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    control = _CONTROL_BYTES.get(ch)
    if control is not None:
        return control

    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch)

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    # macOS terminals send Option+Left/Right as ESC b / ESC f.
    if seq == b"b":
        return "ALT_LEFT"
    if seq == b"f":
        return "ALT_RIGHT"
    if seq == b"\x1b":
        # ESC ESC [ A: Option+arrow when the terminal sends Esc+ for Option.
        inner = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if inner != b"[":
            if inner is not None:
                _PENDING_BYTES.append(inner)
            return "ESC"
        decoded = _decode_csi(fd)
        if decoded in {"UP", "DOWN", "LEFT", "RIGHT"}:
            return f"ALT_{decoded}"
        return decoded
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        name = _CSI_FINAL_KEYS.get(final) if final is not None else None
        return name if name is not None else "ESC"
    if seq == b"[":
        return _decode_csi(fd)
    # Terminals that send Esc+ for Option prefix the plain character.
    if b" " <= seq <= b"~":
        return f"ALT_{seq.decode('ascii')}"
    _PENDING_BYTES.append(seq)
    return "ESC"
