from core.exceptions.base import AbstractException


class InvalidRequestException(AbstractException):
    status_code = 400
    error_code = "INVALID_REQUEST"


class NotFoundException(AbstractException):
    status_code = 404
    error_code = "NOT_FOUND"


class ConflictException(AbstractException):
    """The request is well formed but clashes with the current state."""

    status_code = 409
    error_code = "CONFLICT"
