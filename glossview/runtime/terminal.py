"""Raw-mode lifecycle for the interactive browser.

Switches to the alternate screen with button and SGR mouse reporting while the
browser runs, and always restores the saved tty attributes on the way out.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

# Alternate screen, hidden cursor, button events, SGR mouse encoding.
ENTER_SEQUENCE = b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1006h"
EXIT_SEQUENCE = b"\x1b[?1000l\x1b[?1006l\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Own tty state for one stdin/stdout pair."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_SEQUENCE)

    def disable_tui_mode(self) -> None:
        os.write(self.stdout_fd, EXIT_SEQUENCE)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Bracket the browser session with TUI enter/exit, even on errors."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
