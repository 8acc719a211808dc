from core.exceptions.base import AbstractException


class UnauthorizedException(AbstractException):
    status_code = 401
    error_code = "UNAUTHORIZED"


class ForbiddenException(AbstractException):
    status_code = 403
    error_code = "FORBIDDEN"
