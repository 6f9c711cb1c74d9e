"""Exception classes raised by services and repositories.

Each error carries the HTTP status it is rendered with; the exception
handlers in `main` turn any of them into an `{"error": message}` body.
"""


class ExerciseTrackerError(Exception):
    """Base exception for all exercise tracker errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(ExerciseTrackerError):
    """Raised when a referenced user does not exist."""

    status_code = 404


class ConflictError(ExerciseTrackerError):
    """Raised when a username is already taken."""

    status_code = 400


class BadInputError(ExerciseTrackerError):
    """Raised when a body or query value cannot be parsed."""

    status_code = 400


class StorageError(ExerciseTrackerError):
    """Raised when the database fails underneath an operation."""

    status_code = 500
