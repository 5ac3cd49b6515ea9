"""Activity tracking errors.

None of these are fatal; each is reported to the caller, which decides what
to do next (retry a save, show a message, drop a stale session id).
"""


class ActivityError(Exception):
    """Base class for all activity tracking errors."""


class ValidationError(ActivityError):
    """Raised when an input cannot be clamped into a usable value."""


class UnknownActivityError(ValidationError):
    """Raised when an activity id is not in the catalog."""

    def __init__(self, activity_id: str) -> None:
        super().__init__(f"Unknown activity: {activity_id}")
        self.activity_id = activity_id


class UnknownSeriesError(ValidationError):
    """Raised when a series id is not in the series catalog."""

    def __init__(self, series_id: str) -> None:
        super().__init__(f"Unknown series: {series_id}")
        self.series_id = series_id


class UnknownSessionError(ActivityError):
    """Raised when completing a session id that is not the pending session."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"No pending session with id {session_id}")
        self.session_id = session_id


class PersistenceError(ActivityError):
    """Raised when the activity record could not be written.

    The in-memory state has already been updated and stays authoritative.
    """

    def __init__(self, user_key: str, reason: str = "") -> None:
        message = f"Failed to persist activity data for {user_key}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.user_key = user_key
