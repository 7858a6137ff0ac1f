"""Application error taxonomy.

Services raise these; the handlers registered in ``app.main`` turn them into
``{"Code", "Kind", "Message"}`` JSON responses.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    kind: str = "Internal"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"Code": self.status_code, "Kind": self.kind, "Message": self.message}


class Unauthorized(AppError):
    kind = "Unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class Forbidden(AppError):
    kind = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(AppError):
    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidInput(AppError):
    kind = "InvalidInput"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class Conflict(AppError):
    kind = "Conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class Internal(AppError):
    pass
