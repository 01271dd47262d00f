"""Closed sets of transition events: cues and lifecycle hooks."""

from enum import Enum


class CueEvent(str, Enum):
    """Events that may produce a sound and/or a notification."""

    START = "start"
    POMODORO_FINISHED = "pomodoro_finished"
    OVERTIME = "overtime"
    KILLED = "killed"
    SHORT_BREAK_FINISHED = "short_break_finished"
    LONG_BREAK_FINISHED = "long_break_finished"
    TICK = "tick"


class HookEvent(str, Enum):
    """Extension points fired by the phase controller."""

    STARTED = "started"
    FINISHED = "finished"
    OVERTIME = "overtime"
    KILLED = "killed"
    BREAK_FINISHED = "break_finished"
    SHORT_BREAK_FINISHED = "short_break_finished"
    LONG_BREAK_FINISHED = "long_break_finished"
    TICK = "tick"
