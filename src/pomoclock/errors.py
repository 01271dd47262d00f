"""Exception hierarchy for pomoclock."""


class PomoclockError(Exception):
    """Base class for all pomoclock errors."""


class ConfigurationError(PomoclockError):
    """Raised when configuration is invalid or cannot be loaded."""


class UnknownCueEventError(ConfigurationError):
    """Raised when a cue lookup is made for an event outside the cue table."""

    def __init__(self, event: object):
        super().__init__(f"Unknown cue event: {event!r}")
        self.event = event


class TrackingError(PomoclockError):
    """Raised by tracking backends when a clock operation cannot be applied."""
