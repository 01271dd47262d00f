"""Unit tests for SoundPlayer."""

import subprocess
from pathlib import Path, PurePosixPath

import pytest

from pomoclock.services import sound_player
from pomoclock.services.sound_player import SoundPlayer, is_wsl, to_windows_path


@pytest.fixture()
def linux(mocker):
    """Native Linux, not WSL."""
    mocker.patch.object(sound_player.sys, "platform", "linux")
    mocker.patch.object(sound_player, "is_wsl", return_value=False)


@pytest.fixture()
def popen(mocker):
    return mocker.patch.object(sound_player.subprocess, "Popen")


class TestIsWsl:
    def test_detects_microsoft_kernel(self, mocker):
        mocker.patch.object(sound_player.sys, "platform", "linux")
        uname = mocker.patch.object(sound_player.platform, "uname")
        uname.return_value.release = "5.15.153.1-microsoft-standard-WSL2"

        assert is_wsl() is True

    def test_plain_linux(self, mocker):
        mocker.patch.object(sound_player.sys, "platform", "linux")
        uname = mocker.patch.object(sound_player.platform, "uname")
        uname.return_value.release = "6.8.0-45-generic"

        assert is_wsl() is False

    def test_not_linux(self, mocker):
        mocker.patch.object(sound_player.sys, "platform", "darwin")
        assert is_wsl() is False


class TestToWindowsPath:
    def test_mounted_drive(self, mocker):
        mocker.patch.object(
            Path, "resolve", return_value=PurePosixPath("/mnt/c/Users/me/ding.wav")
        )
        assert to_windows_path(Path("/mnt/c/Users/me/ding.wav")) == "C:\\Users\\me\\ding.wav"

    def test_distro_path(self, mocker):
        mocker.patch.object(Path, "resolve", return_value=PurePosixPath("/home/me/ding.wav"))
        mocker.patch.dict(sound_player.os.environ, {"WSL_DISTRO_NAME": "Ubuntu"})

        assert to_windows_path(Path("/home/me/ding.wav")) == "\\\\wsl$\\Ubuntu\\home\\me\\ding.wav"


class TestExternalPlayer:
    def test_configured_player_with_args(self, linux, popen):
        assert SoundPlayer().play("/tmp/ding.wav", ["--volume", "50"], "mpv --really-quiet")

        cmd = popen.call_args.args[0]
        assert cmd == ["mpv", "--really-quiet", "--volume", "50", "/tmp/ding.wav"]
        assert popen.call_args.kwargs["stdout"] is subprocess.DEVNULL
        assert popen.call_args.kwargs["start_new_session"] is True

    def test_autodetects_first_available(self, linux, popen, mocker):
        mocker.patch.object(
            sound_player.shutil, "which", side_effect=lambda name: name if name == "aplay" else None
        )

        assert SoundPlayer().play("/tmp/ding.wav")
        assert popen.call_args.args[0] == ["aplay", "-q", "/tmp/ding.wav"]

    def test_falls_through_failing_player(self, linux, popen, mocker):
        mocker.patch.object(sound_player.shutil, "which", side_effect=lambda name: name)
        popen.side_effect = [OSError("broken"), mocker.MagicMock()]

        assert SoundPlayer().play("/tmp/ding.wav")
        assert popen.call_args.args[0][0] == "paplay"

    def test_nothing_available(self, linux, popen, mocker):
        mocker.patch.object(sound_player.shutil, "which", return_value=None)

        assert SoundPlayer().play("/tmp/ding.wav") is False
        popen.assert_not_called()

    def test_configured_player_missing(self, linux, popen):
        popen.side_effect = FileNotFoundError("mpv")
        assert SoundPlayer().play("/tmp/ding.wav", player="mpv") is False


class TestWslPlayback:
    def test_uses_windows_host_player(self, mocker, popen):
        mocker.patch.object(sound_player, "is_wsl", return_value=True)
        mocker.patch.object(sound_player.shutil, "which", return_value="/mnt/c/ps/powershell.exe")
        mocker.patch.object(sound_player, "to_windows_path", return_value="C:\\ding.wav")

        assert SoundPlayer().play("/mnt/c/ding.wav")

        cmd = popen.call_args.args[0]
        assert cmd[0] == "/mnt/c/ps/powershell.exe"
        assert "C:\\ding.wav" in cmd[-1]

    def test_falls_back_without_powershell(self, mocker, popen):
        mocker.patch.object(sound_player.sys, "platform", "linux")
        mocker.patch.object(sound_player, "is_wsl", return_value=True)
        mocker.patch.object(
            sound_player.shutil, "which", side_effect=lambda name: name if name == "paplay" else None
        )

        assert SoundPlayer().play("/tmp/ding.wav")
        assert popen.call_args.args[0][0] == "paplay"


class TestWinsound:
    def test_uses_winsound_on_windows(self, mocker, popen):
        mocker.patch.object(sound_player.sys, "platform", "win32")
        mocker.patch.object(sound_player, "is_wsl", return_value=False)
        winsound = mocker.MagicMock()
        mocker.patch.dict("sys.modules", {"winsound": winsound})

        assert SoundPlayer().play("C:/ding.wav")

        winsound.PlaySound.assert_called_once()
        flags = winsound.PlaySound.call_args.args[1]
        assert flags == winsound.SND_FILENAME | winsound.SND_ASYNC
        popen.assert_not_called()
