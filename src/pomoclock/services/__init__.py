"""pomoclock services."""

from .config_service import ConfigService, get_config_service
from .notifier import ConsoleNotifier, DesktopNotifier, Notifier
from .sound_player import SoundPlayer

__all__ = [
    "ConfigService",
    "ConsoleNotifier",
    "DesktopNotifier",
    "Notifier",
    "SoundPlayer",
    "get_config_service",
]
