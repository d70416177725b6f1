"""Exception hierarchy for gym-logbook.

The web layer maps each class to an HTTP status; the CLI echoes the message
and exits non-zero.
"""


class GymLogbookError(Exception):
    """Base class for all application errors."""

    status_code = 500


class ValidationError(GymLogbookError):
    """A required field is missing or a value is out of range."""

    status_code = 400


class AuthenticationError(GymLogbookError):
    """Unknown user or wrong password."""

    status_code = 401


class PermissionDenied(GymLogbookError):
    """The acting user may not perform an owner-only operation."""

    status_code = 403


class NotFoundError(GymLogbookError):
    """A strict single-row lookup found nothing."""

    status_code = 404

    def __init__(self, kind: str, key: object):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} {key} not found")
