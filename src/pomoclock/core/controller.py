"""Pomodoro phase state machine.

The controller owns the ``TimerState`` and is the only code that mutates it.
It never schedules anything itself beyond asking its ``TickScheduler`` to arm
or disarm the single 1 Hz trigger that calls :meth:`PhaseController.tick`.

Every transition applies all of its state changes and tracking calls first,
then plays cues, sends notifications and fires hooks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from pomoclock.models.config_models import AppConfig
from pomoclock.models.events import CueEvent, HookEvent
from pomoclock.models.state import EXPIRING_PHASES, Phase, TimerSnapshot, TimerState
from pomoclock.repositories import TrackingBackend
from pomoclock.ui.status import format_status

from .dispatcher import CueDispatcher
from .hooks import HookRegistry
from .scheduler import TickScheduler

logger = logging.getLogger("pomoclock.controller")

ConfirmCallback = Callable[[str], bool]

KILL_QUESTION = "There is already a running timer. Would you like to stop it?"
EXPIRED_QUESTION = "The last pomodoro session has expired. Reset the pomodoro count?"


def _now() -> datetime:
    return datetime.now().astimezone()


def _always_confirm(question: str) -> bool:
    return True


class PhaseController:
    """Drives pomodoro, overtime and break phases."""

    def __init__(
        self,
        *,
        config_provider: Callable[[], AppConfig],
        tracking: TrackingBackend,
        dispatcher: CueDispatcher,
        scheduler: TickScheduler,
        hooks: HookRegistry | None = None,
        confirm: ConfirmCallback | None = None,
        clock: Callable[[], datetime] = _now,
    ):
        self.state = TimerState()
        self.hooks = hooks or HookRegistry()
        self.confirm: ConfirmCallback = confirm or _always_confirm
        self.status_text = ""

        self._config_provider = config_provider
        self._tracking = tracking
        self._dispatcher = dispatcher
        self._scheduler = scheduler
        self._clock = clock

    @property
    def config(self) -> AppConfig:
        return self._config_provider()

    @property
    def is_active(self) -> bool:
        return self.state.is_active

    def snapshot(self) -> TimerSnapshot:
        return self.state.snapshot(self._clock())

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def invoke(self, context_hint: str | None = None) -> None:
        """Single user-facing toggle.

        Starts a pomodoro when idle, finishes overtime, and otherwise offers
        to kill the running phase.
        """
        state = self.state
        now = self._clock()

        if self._session_expired(now) and self.confirm(EXPIRED_QUESTION):
            logger.info("session expired; pomodoro count reset from %d", state.pomodoro_count)
            state.pomodoro_count = 0

        state.last_clock_in_time = now
        if not state.is_active:
            state.original_task_ref = (
                context_hint or self._tracking.resolve_current_task_context()
            )

        if state.phase is Phase.OVERTIME:
            self._finish_pomodoro()
        elif state.is_active:
            if not self.config.behaviour.ask_upon_killing or self.confirm(KILL_QUESTION):
                self.kill()
        else:
            if state.original_task_ref:
                self._tracking.begin_tracking(state.original_task_ref)
            else:
                logger.warning("no task to clock in; starting without tracking")
            self.start(Phase.POMODORO)

        self._refresh_status()

    def start(self, phase: Phase = Phase.POMODORO) -> None:
        """Enter ``phase`` and arm the tick trigger."""
        if phase is Phase.NONE:
            raise ValueError("cannot start the inactive phase")

        self._enter(phase)
        if phase is Phase.POMODORO:
            self._announce_start()
        self._refresh_status()

    def pause(self) -> None:
        state = self.state
        if state.paused or not state.is_active:
            return

        state.paused_at = self._clock()
        if self._tracking.is_tracking_active() and self._tracks(state.phase):
            state.paused_task_ref = (
                self._tracking.resolve_current_task_context() or state.original_task_ref
            )
            self._tracking.end_tracking(discard=False)
        self._scheduler.disarm()
        state.paused = True

        logger.info("paused %s", state.phase.value)
        self._refresh_status()

    def resume(self) -> None:
        state = self.state
        if not state.paused:
            return

        now = self._clock()
        gap = now - (state.paused_at or now)
        if state.end_time is not None:
            state.end_time += gap
        if state.started_at is not None:
            state.started_at += gap

        task_ref = state.paused_task_ref
        if task_ref and self._tracks(state.phase):
            self._tracking.begin_tracking(task_ref)
        state.clear_pause()
        self._scheduler.arm(self.tick)

        logger.info("resumed %s after %ss", state.phase.value, int(gap.total_seconds()))
        self._refresh_status()

    def toggle_pause(self) -> None:
        if self.state.paused:
            self.resume()
        else:
            self.pause()

    def kill(self) -> None:
        """Abort the active phase. A killed pomodoro never counts toward the cycle."""
        state = self.state
        killed_phase = state.phase
        if not state.is_active:
            self._scheduler.disarm()
            return

        if self._tracking.is_tracking_active():
            self._tracking.end_tracking(discard=not self.config.behaviour.keep_killed_time)
        self._scheduler.disarm()
        state.reset()

        logger.info("killed %s", killed_phase.value)
        self._refresh_status()
        self._dispatcher.dispatch(CueEvent.KILLED)
        self.hooks.fire(HookEvent.KILLED, self.snapshot())

    def tick(self) -> None:
        """Advance the timer. Safe to call at any time."""
        state = self.state
        if not state.is_active or state.paused:
            if self._scheduler.is_armed:
                logger.warning("tick while %s; disarming stale trigger",
                               "paused" if state.paused else "inactive")
                self._scheduler.disarm()
            return

        now = self._clock()
        if state.phase in EXPIRING_PHASES and state.remaining_seconds(now) <= 0:
            self._expire(state.phase)
        self._refresh_status()

        if not state.is_active:
            return
        self._maybe_play_tick(now)
        self.hooks.fire(HookEvent.TICK, self.snapshot())

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _expire(self, phase: Phase) -> None:
        if phase is Phase.POMODORO:
            if self.config.behaviour.manual_break:
                self._enter_overtime()
            else:
                self._finish_pomodoro()
        elif phase.is_break:
            self._finish_break(phase)

    def _enter_overtime(self) -> None:
        self._enter(Phase.OVERTIME)
        self._dispatcher.dispatch(CueEvent.OVERTIME)
        self.hooks.fire(HookEvent.OVERTIME, self.snapshot())

    def _finish_pomodoro(self) -> None:
        state = self.state
        behaviour = self.config.behaviour

        if self._tracking.is_tracking_active() and not behaviour.clock_breaks:
            self._tracking.end_tracking(discard=False)
        elif state.paused and behaviour.clock_breaks and state.paused_task_ref:
            self._tracking.begin_tracking(state.paused_task_ref)

        state.pomodoro_count += 1
        if state.pomodoro_count % behaviour.long_break_frequency == 0:
            break_phase = Phase.LONG_BREAK
        else:
            break_phase = Phase.SHORT_BREAK
        self._enter(break_phase)

        logger.info(
            "pomodoro %d finished; starting %s", state.pomodoro_count, break_phase.value
        )
        self._dispatcher.dispatch(
            CueEvent.POMODORO_FINISHED, break_name=break_phase.label.lower()
        )
        self.hooks.fire(HookEvent.FINISHED, self.snapshot())

    def _finish_break(self, phase: Phase) -> None:
        state = self.state
        behaviour = self.config.behaviour

        if behaviour.clock_breaks and self._tracking.is_tracking_active():
            self._tracking.end_tracking(discard=False)

        if behaviour.auto_continue:
            task_ref = state.original_task_ref or self._tracking.resolve_current_task_context()
            if task_ref:
                self._tracking.begin_tracking(task_ref)
            else:
                logger.warning("no task to clock in; continuing without tracking")
            self._enter(Phase.POMODORO)
        else:
            self._scheduler.disarm()
            state.reset()

        logger.info("%s finished", phase.value)
        if phase is Phase.LONG_BREAK:
            cue, specific_hook = CueEvent.LONG_BREAK_FINISHED, HookEvent.LONG_BREAK_FINISHED
        else:
            cue, specific_hook = CueEvent.SHORT_BREAK_FINISHED, HookEvent.SHORT_BREAK_FINISHED
        self._dispatcher.dispatch(cue, notify=not behaviour.auto_continue)

        snapshot = self.snapshot()
        self.hooks.fire(HookEvent.BREAK_FINISHED, snapshot)
        self.hooks.fire(specific_hook, snapshot)

        if behaviour.auto_continue:
            self._announce_start()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _enter(self, phase: Phase) -> None:
        """Set the phase and its deadline, then (re-)arm the trigger."""
        state = self.state
        now = self._clock()
        duration = self.config.durations.seconds_for(phase)

        self._scheduler.disarm()
        state.phase = phase
        state.started_at = now
        state.end_time = now + timedelta(seconds=duration)
        state.clear_pause()
        self._scheduler.arm(self.tick)

        logger.info("entered %s (%ss)", phase.value, duration)

    def _announce_start(self) -> None:
        self._dispatcher.dispatch(CueEvent.START)
        self.hooks.fire(HookEvent.STARTED, self.snapshot())

    def _tracks(self, phase: Phase) -> bool:
        """Whether time is clocked during ``phase``."""
        return not phase.is_break or self.config.behaviour.clock_breaks

    def _session_expired(self, now: datetime) -> bool:
        state = self.state
        if state.last_clock_in_time is None or state.pomodoro_count == 0:
            return False
        window = timedelta(minutes=self.config.behaviour.expiry_minutes)
        return now - state.last_clock_in_time > window

    def _maybe_play_tick(self, now: datetime) -> None:
        ticking = self.config.ticking
        if self.state.phase not in ticking.phases:
            return
        if round(self.state.elapsed_seconds(now)) % ticking.frequency == 0:
            self._dispatcher.dispatch(CueEvent.TICK, notify=False)

    def _refresh_status(self) -> None:
        self.status_text = format_status(self.snapshot(), self.config.status)
