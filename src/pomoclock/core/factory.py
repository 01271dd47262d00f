"""Process-wide phase controller.

Only one timer may run per process. Commands obtain it through
``get_phase_controller`` instead of constructing ``PhaseController`` directly.
"""

from __future__ import annotations

from functools import lru_cache

from pomoclock.adapters import SQLiteClockBackend
from pomoclock.services.config_service import get_config_service
from pomoclock.services.notifier import DesktopNotifier
from pomoclock.utils.console import get_console

from .controller import PhaseController
from .dispatcher import CueDispatcher
from .scheduler import AsyncioTickScheduler


def _current_config():
    return get_config_service().config


@lru_cache(maxsize=1)
def get_clock_backend() -> SQLiteClockBackend:
    """Get the cached SQLite clock backend for the configured database."""
    return SQLiteClockBackend(get_config_service().clock_db_path())


@lru_cache(maxsize=1)
def get_phase_controller() -> PhaseController:
    """Get the single PhaseController for this process.

    The scheduler binds to the running event loop on first arm, so the
    controller must be driven from inside that loop.
    """
    console = get_console()
    dispatcher = CueDispatcher(
        config_provider=_current_config,
        notifier=DesktopNotifier(console),
        console=console,
    )
    return PhaseController(
        config_provider=_current_config,
        tracking=get_clock_backend(),
        dispatcher=dispatcher,
        scheduler=AsyncioTickScheduler(),
    )
