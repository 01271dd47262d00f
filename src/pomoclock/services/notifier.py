"""Notification channels."""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod

from rich.console import Console

from pomoclock.utils.console import get_console

logger = logging.getLogger("pomoclock.notify")


class Notifier(ABC):
    """Fire-and-forget alert channel."""

    @abstractmethod
    def notify(self, title: str, message: str) -> None:
        """Show ``title``/``message`` to the user without blocking."""


class ConsoleNotifier(Notifier):
    """Prints notifications to the terminal."""

    def __init__(self, console: Console | None = None):
        self.console = console or get_console()

    def notify(self, title: str, message: str) -> None:
        text = f"[bold cyan]{title}[/bold cyan]"
        if message:
            text += f" {message}"
        self.console.print(text)


class DesktopNotifier(ConsoleNotifier):
    """Sends desktop notifications and mirrors them to the terminal."""

    def notify(self, title: str, message: str) -> None:
        super().notify(title, message)

        cmd = self._command(title, message)
        if cmd is None:
            return
        try:
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.warning("desktop notification failed: %s", e)

    @staticmethod
    def _command(title: str, message: str) -> list[str] | None:
        if sys.platform == "darwin" and shutil.which("osascript"):
            script = "display notification {} with title {}".format(
                _applescript_quote(message), _applescript_quote(title)
            )
            return ["osascript", "-e", script]
        if shutil.which("notify-send"):
            return ["notify-send", "--app-name=pomoclock", title, message]
        return None


def _applescript_quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
