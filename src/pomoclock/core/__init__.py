"""Timer core: phase controller, tick scheduler, hooks and cue dispatch."""

from .controller import PhaseController
from .dispatcher import CUE_TABLE, CueDispatcher
from .hooks import HookRegistry
from .scheduler import AsyncioTickScheduler, TickScheduler

__all__ = [
    "AsyncioTickScheduler",
    "CUE_TABLE",
    "CueDispatcher",
    "HookRegistry",
    "PhaseController",
    "TickScheduler",
]
