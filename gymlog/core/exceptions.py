"""Domain errors raised by services and mapped to HTTP responses in the app."""


class GymLogError(Exception):
    """Base for recoverable, user-facing errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GymLogError):
    """Too few exercises, empty name and similar input problems."""

    status_code = 422


class NotFound(GymLogError):
    """A referenced template or plan does not exist."""

    status_code = 404


class ConflictError(GymLogError):
    """A workout is already in progress."""

    status_code = 409


class InsufficientHistory(GymLogError):
    """Not enough logged history to assemble a suggested plan."""

    status_code = 422
