from core.exceptions.base import AbstractException
from core.exceptions.request import (
    ConflictException,
    InvalidRequestException,
    NotFoundException,
)
from core.exceptions.authentication import ForbiddenException, UnauthorizedException

__all__ = [
    "AbstractException",
    "InvalidRequestException",
    "NotFoundException",
    "ConflictException",
    "UnauthorizedException",
    "ForbiddenException",
]
