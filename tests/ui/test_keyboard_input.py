"""Unit tests for keyboard handlers."""

from unittest.mock import MagicMock

from pomoclock.ui import keyboard
from pomoclock.ui.keyboard import KeyboardHandler, WindowsKeyboardHandler, get_keyboard_handler


def _handler(mocker):
    """KeyboardHandler built without touching the real terminal."""
    mocker.patch.object(keyboard.sys, "stdin")
    mocker.patch.object(KeyboardHandler, "start")
    return KeyboardHandler()


class TestKeyboardHandler:
    def test_returns_lowercase_key(self, mocker):
        handler = _handler(mocker)
        mocker.patch.object(keyboard.select, "select", return_value=([keyboard.sys.stdin], [], []))
        keyboard.sys.stdin.read.return_value = "P"

        assert handler.get_key() == "p"

    def test_no_key_pending(self, mocker):
        handler = _handler(mocker)
        mocker.patch.object(keyboard.select, "select", return_value=([], [], []))

        assert handler.get_key() is None

    def test_select_error_returns_none(self, mocker):
        handler = _handler(mocker)
        mocker.patch.object(keyboard.select, "select", side_effect=ValueError("closed"))

        assert handler.get_key() is None

    def test_stop_without_settings_is_noop(self, mocker):
        handler = _handler(mocker)
        handler.stop()
        assert handler.old_settings is None

    def test_start_without_tty(self, mocker):
        mocker.patch.object(keyboard.sys, "stdin")
        keyboard.sys.stdin.fileno.return_value = 99999

        handler = KeyboardHandler()

        assert handler.old_settings is None


class TestWindowsKeyboardHandler:
    def test_reads_bytes(self):
        handler = WindowsKeyboardHandler()
        handler.msvcrt = MagicMock()
        handler.msvcrt.kbhit.return_value = True
        handler.msvcrt.getch.return_value = b"Q"

        assert handler.get_key() == "q"

    def test_no_key(self):
        handler = WindowsKeyboardHandler()
        handler.msvcrt = MagicMock()
        handler.msvcrt.kbhit.return_value = False

        assert handler.get_key() is None

    def test_without_msvcrt(self):
        handler = WindowsKeyboardHandler()
        handler.msvcrt = None
        assert handler.get_key() is None


class TestFactory:
    def test_windows(self, mocker):
        mocker.patch.object(keyboard.sys, "platform", "win32")
        assert isinstance(get_keyboard_handler(), WindowsKeyboardHandler)

    def test_posix(self, mocker):
        mocker.patch.object(keyboard.sys, "platform", "linux")
        mocker.patch.object(keyboard.sys, "stdin")
        mocker.patch.object(KeyboardHandler, "start")
        assert isinstance(get_keyboard_handler(), KeyboardHandler)
