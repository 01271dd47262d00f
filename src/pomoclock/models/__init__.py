"""pomoclock domain models."""

from .config_models import (
    AppConfig,
    BehaviourConfig,
    CueMessage,
    DurationConfig,
    NotificationConfig,
    SoundConfig,
    SoundEventConfig,
    StatusConfig,
    TickingConfig,
)
from .events import CueEvent, HookEvent
from .state import EXPIRING_PHASES, Phase, TimerSnapshot, TimerState

__all__ = [
    "AppConfig",
    "BehaviourConfig",
    "CueEvent",
    "CueMessage",
    "DurationConfig",
    "EXPIRING_PHASES",
    "HookEvent",
    "NotificationConfig",
    "Phase",
    "SoundConfig",
    "SoundEventConfig",
    "StatusConfig",
    "TickingConfig",
    "TimerSnapshot",
    "TimerState",
]
