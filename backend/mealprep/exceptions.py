"""
Error taxonomy
--------------
Every error raised on purpose by the services carries the HTTP status the
API layer renders it with. main.py turns them into the {ok, error} envelope.
"""


class MealPrepError(Exception):
    status_code = 500

    def __init__(self, message: str, details: str = None):
        super().__init__(message)
        self.message = message
        self.details = details


class AuthRequired(MealPrepError):
    """No active session on an endpoint that needs one."""
    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class ValidationError(MealPrepError):
    """Missing or malformed required field."""
    status_code = 400


class NotFoundError(MealPrepError):
    status_code = 404


class GenerationError(MealPrepError):
    """Upstream model call failed or returned unusable content."""
    status_code = 500


class PersistenceError(MealPrepError):
    """Underlying store operation failed. Message is passed through as-is."""
    status_code = 500
