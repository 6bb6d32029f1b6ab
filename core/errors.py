"""
errors.py - Grace period failure kinds
ONE RESPONSIBILITY: Name what can go wrong before the heartbeat starts
"""


class GraceError(Exception):
    """Base class for grace period errors."""


class FormatError(GraceError):
    """Raised when a grace period isn't in sudo 'timestamp_timeout' format."""

    def __init__(self, value, pattern):
        super().__init__(
            f"Specified grace period: '{value}' doesn't conform to sudo "
            f"'timestamp_timeout' format. Must be in minutes and adhere to "
            f"regex: '{pattern}'."
        )
        self.value = value
        self.pattern = pattern


class ConfigAccessError(GraceError):
    """Raised when the sudoers settings file can't be read."""

    def __init__(self, settings_file):
        super().__init__(
            f"Unable to locate or lack permissions to view sudoers settings "
            f"file: '{settings_file}'."
        )
        self.settings_file = settings_file


class TimerResolutionUnstableError(GraceError):
    """Raised when the grace period is too short to refresh reliably."""

    def __init__(self, grace_period_sec, margin_sec):
        super().__init__(
            f"Timer resolution to trigger heartbeat renewal (validation) "
            f"unstable. sudo grace period of {grace_period_sec}s leaves less "
            f"than {margin_sec} seconds between renewals."
        )
        self.grace_period_sec = grace_period_sec
        self.margin_sec = margin_sec


class ElevationDeniedError(GraceError):
    """Raised when sudo refuses to elevate."""

    def __init__(self, reason="sudo refused privilege elevation"):
        super().__init__(reason)


class InvalidProcessError(GraceError):
    """Raised when the process to monitor isn't a valid pid."""

    def __init__(self, pid):
        super().__init__(f"Process id to monitor must be a positive integer, got: {pid!r}.")
        self.pid = pid
