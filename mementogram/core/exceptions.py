# mementogram/core/exceptions.py
"""Typed errors raised by the CRUD layer and mapped to HTTP responses in main."""


class MementogramError(Exception):
    """Base class for errors that carry an HTTP status code"""
    status_code: int = 500
    default_detail: str = "An unexpected error occurred."

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(MementogramError):
    status_code = 404
    default_detail = "Resource not found"


class ConflictError(MementogramError):
    status_code = 409
    default_detail = "Resource conflict"


class BadRequestError(MementogramError):
    status_code = 400
    default_detail = "Bad Request"


class UnauthorizedError(MementogramError):
    status_code = 401
    default_detail = "Unauthorized"


class ForbiddenError(MementogramError):
    status_code = 403
    default_detail = "Permission denied"
