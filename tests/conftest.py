"""Shared test fixtures.

Provides fakes for the timer's collaborators (clock, tick scheduler, tracking
backend, sound player, notifier) so the phase controller can be driven
deterministically without an event loop or real audio.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest

from pomoclock.core.controller import PhaseController
from pomoclock.core.dispatcher import CueDispatcher
from pomoclock.core.scheduler import TickScheduler
from pomoclock.models.config_models import AppConfig
from pomoclock.repositories import TrackingBackend
from pomoclock.services.notifier import Notifier


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 5, 9, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeScheduler(TickScheduler):
    """Records arm/disarm calls; ``fire`` simulates one trigger firing."""

    def __init__(self):
        self.callback = None
        self.arm_calls = 0
        self.disarm_calls = 0

    def arm(self, callback, interval: float = 1.0) -> None:
        self.callback = callback
        self.arm_calls += 1

    def disarm(self) -> None:
        self.callback = None
        self.disarm_calls += 1

    @property
    def is_armed(self) -> bool:
        return self.callback is not None

    def fire(self) -> None:
        if self.callback is not None:
            self.callback()


class FakeTracking(TrackingBackend):
    """In-memory clock that records every call."""

    def __init__(self, last_task: str | None = None):
        self.current: str | None = None
        self.last_task = last_task
        self.calls: list[tuple[str, object]] = []

    def begin_tracking(self, task_ref: str) -> None:
        self.calls.append(("begin", task_ref))
        self.current = task_ref
        self.last_task = task_ref

    def end_tracking(self, discard: bool = False) -> None:
        self.calls.append(("end", discard))
        self.current = None

    def is_tracking_active(self) -> bool:
        return self.current is not None

    def resolve_current_task_context(self) -> str | None:
        return self.current or self.last_task


class FakePlayer:
    """Sound player stand-in that records requests."""

    def __init__(self, succeeds: bool = True):
        self.succeeds = succeeds
        self.played: list[tuple[object, tuple, object]] = []

    def play(self, path, args=(), player=None) -> bool:
        self.played.append((path, tuple(args), player))
        return self.succeeds


class RecordingNotifier(Notifier):
    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def notify(self, title: str, message: str) -> None:
        self.messages.append((title, message))


class RecordingDispatcher(CueDispatcher):
    """CueDispatcher that also records every dispatched event."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.events: list[tuple[object, bool]] = []

    def dispatch(self, event, *, notify=True, **fields):
        self.events.append((event, notify))
        super().dispatch(event, notify=notify, **fields)

    def event_names(self) -> list[str]:
        return [event.value for event, _ in self.events]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def app_config() -> AppConfig:
    """Default configuration; tests mutate it in place."""
    return AppConfig()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture()
def tracking() -> FakeTracking:
    return FakeTracking()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def player() -> FakePlayer:
    return FakePlayer()


@pytest.fixture()
def console() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def dispatcher(app_config, player, notifier, console) -> RecordingDispatcher:
    return RecordingDispatcher(
        config_provider=lambda: app_config,
        player=player,
        notifier=notifier,
        console=console,
    )


@pytest.fixture()
def controller(app_config, tracking, dispatcher, scheduler, clock) -> PhaseController:
    return PhaseController(
        config_provider=lambda: app_config,
        tracking=tracking,
        dispatcher=dispatcher,
        scheduler=scheduler,
        clock=clock,
    )


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only and
    clears the lru_cache so each test gets a fresh service instance.
    """
    from pomoclock.services.config_service import ConfigService, get_config_service

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with patch("pomoclock.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("pomoclock.services.config_service.user_data_dir", return_value=tmpdir):
            svc = ConfigService()
            with patch(
                "pomoclock.services.config_service.get_config_service",
                return_value=svc,
            ):
                yield svc
    get_config_service.cache_clear()


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Keep the application log file out of the real user log directory."""
    import pomoclock.utils.logger as logger_mod

    original = logger_mod._logger
    logger_mod._logger = None
    with patch("pomoclock.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    import logging

    app_logger = logging.getLogger("pomoclock")
    for handler in app_logger.handlers:
        handler.close()
    app_logger.handlers.clear()
    app_logger.propagate = True
    logger_mod._logger = original
