"""Best-effort, non-blocking audio playback.

Playback is attempted in order: the Windows host player when running under
WSL, ``winsound`` on native Windows, then an external player process. Every
launch is fire-and-forget; the player process is never waited on.
"""

from __future__ import annotations

import logging
import os
import platform
import shlex
import shutil
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path, PureWindowsPath

logger = logging.getLogger("pomoclock.sound")

# Tried in order when no player is configured.
DEFAULT_PLAYERS: tuple[tuple[str, ...], ...] = (
    ("afplay",),
    ("paplay",),
    ("aplay", "-q"),
    ("ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"),
)


def is_wsl() -> bool:
    """True when running inside the Windows Subsystem for Linux."""
    if sys.platform != "linux":
        return False
    return "microsoft" in platform.uname().release.lower()


def to_windows_path(path: Path) -> str:
    """Translate a WSL path into one the Windows host can open."""
    parts = path.resolve().parts
    # /mnt/c/Users/... -> C:\Users\...
    if len(parts) > 2 and parts[1] == "mnt" and len(parts[2]) == 1:
        return str(PureWindowsPath(f"{parts[2].upper()}:\\", *parts[3:]))
    distro = os.environ.get("WSL_DISTRO_NAME", "")
    return str(PureWindowsPath(f"\\\\wsl$\\{distro}", *parts[1:]))


class SoundPlayer:
    """Plays audio files without blocking the caller."""

    def play(
        self,
        path: str | Path,
        args: Sequence[str] = (),
        player: str | None = None,
    ) -> bool:
        """Launch playback of ``path``.

        Args:
            path: Audio file to play
            args: Extra arguments for an external player
            player: External player command line; autodetected if None

        Returns:
            True if a playback process or primitive was started
        """
        path = Path(path).expanduser()

        if is_wsl() and self._play_on_windows_host(path):
            return True
        if sys.platform == "win32" and self._play_with_winsound(path):
            return True
        return self._play_with_external_player(path, args, player)

    def _play_on_windows_host(self, path: Path) -> bool:
        powershell = shutil.which("powershell.exe")
        if powershell is None:
            return False
        script = f"(New-Object Media.SoundPlayer '{to_windows_path(path)}').PlaySync()"
        return self._spawn([powershell, "-NoProfile", "-NonInteractive", "-Command", script])

    def _play_with_winsound(self, path: Path) -> bool:
        try:
            import winsound
        except ImportError:
            return False

        try:
            winsound.PlaySound(str(path), winsound.SND_FILENAME | winsound.SND_ASYNC)
        except RuntimeError as e:
            logger.warning("winsound failed for %s: %s", path, e)
            return False
        return True

    def _play_with_external_player(
        self, path: Path, args: Sequence[str], player: str | None
    ) -> bool:
        if player:
            candidates: list[list[str]] = [shlex.split(player)]
        else:
            candidates = [list(cmd) for cmd in DEFAULT_PLAYERS if shutil.which(cmd[0])]

        for cmd in candidates:
            if self._spawn([*cmd, *args, str(path)]):
                return True
        return False

    @staticmethod
    def _spawn(cmd: list[str]) -> bool:
        try:
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            logger.warning("could not launch %s: %s", cmd[0], e)
            return False
        return True
