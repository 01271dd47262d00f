"""Non-blocking single-key input for the interactive runner."""

from __future__ import annotations

import select
import sys


class KeyboardHandler:
    """Reads single keypresses from a terminal in cbreak mode."""

    def __init__(self):
        self.fd = sys.stdin.fileno()
        self.old_settings = None
        self.start()

    def start(self) -> None:
        """Put the terminal into cbreak mode."""
        try:
            import termios
            import tty

            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except Exception:
            # Not a TTY, or no termios on this platform
            self.old_settings = None

    def get_key(self) -> str | None:
        """
        Get a single keypress without blocking.

        Returns the lower-cased key character or None if no key is pending.
        """
        try:
            if select.select([sys.stdin], [], [], 0)[0]:
                return sys.stdin.read(1).lower()
        except (OSError, ValueError):
            pass
        return None

    def stop(self) -> None:
        """Restore terminal settings."""
        if self.old_settings is None:
            return
        import termios

        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
        except termios.error:
            pass
        self.old_settings = None


class WindowsKeyboardHandler:
    """Keyboard handler for Windows using msvcrt."""

    def __init__(self):
        try:
            import msvcrt

            self.msvcrt = msvcrt
        except ImportError:
            self.msvcrt = None

    def start(self) -> None:
        """No terminal mode switch needed on Windows."""

    def get_key(self) -> str | None:
        if not self.msvcrt:
            return None

        if self.msvcrt.kbhit():
            key = self.msvcrt.getch()
            if isinstance(key, bytes):
                key = key.decode("utf-8", errors="ignore")
            return key.lower()
        return None

    def stop(self) -> None:
        """No cleanup needed on Windows."""


def get_keyboard_handler() -> KeyboardHandler | WindowsKeyboardHandler:
    if sys.platform == "win32":
        return WindowsKeyboardHandler()
    return KeyboardHandler()
