"""Error taxonomy shared by services and controllers.

Every error carries a short message that is safe to show to clients and the
HTTP status the controllers answer with.
"""
from __future__ import annotations

from app.core.constants import MSG_INTERNAL


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str = MSG_INTERNAL) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class CodeMismatchError(ValidationError):
    pass


class ConflictError(AppError):
    status_code = 409


class NotFoundError(AppError):
    status_code = 404


class UnauthorizedError(AppError):
    status_code = 401


class InternalError(AppError):
    status_code = 500
