"""Error taxonomy shared by the API, the stores and the tracker core."""


class TrackerError(Exception):
    """Base error for tracker operations."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """A required field is missing or invalid. Never retried."""

    status_code = 400


class EntryBusyError(ValidationError):
    """Another write against the same entry has not settled yet."""


class NotFoundError(TrackerError):
    """The target entry or record does not exist."""

    status_code = 404


class NetworkError(TrackerError):
    """Transient transport failure; safe to retry."""

    status_code = 503


class ServerError(TrackerError):
    """Opaque failure reported by the store or the backend."""
