"""Tracking backend adapters."""

from .sqlite_clock import SQLiteClockBackend

__all__ = ["SQLiteClockBackend"]
