# taskboard/core/errors.py


class TaskboardError(Exception):
    """Base class for errors the HTTP layer turns into ``{"error": message}``."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class ValidationError(TaskboardError):
    status_code = 400


class UnauthorizedError(TaskboardError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(TaskboardError):
    status_code = 404


class StoreError(TaskboardError):
    """Persisting the dataset failed; the in-memory state was left untouched."""

    status_code = 500
