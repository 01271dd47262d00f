"""Ports consumed by the pomoclock core."""

from .tracking import TrackingBackend

__all__ = ["TrackingBackend"]
