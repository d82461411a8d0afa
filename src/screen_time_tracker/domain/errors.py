"""Errors raised by the tracker services."""


class TrackerError(Exception):
    """Base class for errors surfaced to callers."""

    code = "tracker_error"


class ValidationError(TrackerError):
    """Input was rejected before any write."""

    code = "validation_error"


class ConflictError(TrackerError):
    """A non-deleted entry already exists for the user and period."""

    code = "conflict"


class NotFoundError(TrackerError):
    """The requested record does not exist or is not owned by the caller."""

    code = "not_found"


class ConcurrencyConflictError(TrackerError):
    """The streak row changed between read and write."""

    code = "concurrency_conflict"
