"""Regression tests for raw-key decoding.

Covers ESC timing, modified arrow sequences, control-key token mapping, and
SGR mouse reports. These tests protect interactive input in raw terminal mode.
"""

import os
import time
import unittest

from glossview.input import reader


def _read_tokens(data: bytes, count: int = 1) -> list[str]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, data)
        return [reader.read_key(read_fd, timeout_ms=20) for _ in range(count)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        reader._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        reader._PENDING_BYTES.clear()

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        key = _read_tokens(b"\x1b")[0]
        elapsed = time.monotonic() - started

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_escape_prefixed_character_is_alt_chord(self) -> None:
        self.assertEqual(_read_tokens(b"\x1bc")[0], "ALT_c")
        self.assertEqual(_read_tokens(b"\x1bB\x1bF", 2), ["ALT_B", "ALT_F"])

    def test_escape_does_not_swallow_following_control_key(self) -> None:
        self.assertEqual(_read_tokens(b"\x1b\x7f", 2), ["ESC", "BACKSPACE"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(_read_tokens(b"", 1), [""])

    def test_plain_arrows(self) -> None:
        self.assertEqual(
            _read_tokens(b"\x1b[A\x1b[B\x1bOC\x1b[D", 4),
            ["UP", "DOWN", "RIGHT", "LEFT"],
        )

    def test_xterm_modifier_parameters(self) -> None:
        self.assertEqual(_read_tokens(b"\x1b[1;3A")[0], "ALT_UP")
        self.assertEqual(_read_tokens(b"\x1b[1;9B")[0], "META_DOWN")
        self.assertEqual(_read_tokens(b"\x1b[1;5H")[0], "CTRL_HOME")
        self.assertEqual(_read_tokens(b"\x1b[1;4C")[0], "ALT_SHIFT_RIGHT")

    def test_option_arrow_variants(self) -> None:
        self.assertEqual(_read_tokens(b"\x1bb\x1bf", 2), ["ALT_LEFT", "ALT_RIGHT"])
        self.assertEqual(_read_tokens(b"\x1b\x1b[A")[0], "ALT_UP")

    def test_tilde_keys(self) -> None:
        self.assertEqual(
            _read_tokens(b"\x1b[5~\x1b[6~\x1b[1~\x1b[4~", 4),
            ["PAGE_UP", "PAGE_DOWN", "HOME", "END"],
        )

    def test_shift_tab(self) -> None:
        self.assertEqual(_read_tokens(b"\x1b[Z")[0], "SHIFT_TAB")

    def test_control_bytes(self) -> None:
        self.assertEqual(
            _read_tokens(b"\x0b\x03\x15\x17\x7f\r\t", 7),
            ["CTRL_K", "CTRL_C", "CTRL_U", "CTRL_W", "BACKSPACE", "ENTER_CR", "TAB"],
        )

    def test_utf8_character_is_one_token(self) -> None:
        self.assertEqual(_read_tokens("é".encode("utf-8"))[0], "é")

    def test_sgr_mouse_reports(self) -> None:
        self.assertEqual(
            _read_tokens(b"\x1b[<0;5;7M\x1b[<0;5;7m\x1b[<64;30;4M", 3),
            ["MOUSE_LEFT_DOWN:5:7", "MOUSE_LEFT_UP:5:7", "MOUSE_WHEEL_UP:30:4"],
        )

    def test_modifier_prefix_order(self) -> None:
        self.assertEqual(reader.modifier_prefix(1), "")
        self.assertEqual(reader.modifier_prefix(16), "CTRL_META_ALT_SHIFT_")


if __name__ == "__main__":
    unittest.main()
