from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from apps.api.auth.service import AuthServiceDependency
from apps.api.user.models import User
from apps.context import set_current_user_id
from core.exceptions import ForbiddenException, UnauthorizedException

http_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    auth_service: AuthServiceDependency,
    token: Annotated[HTTPAuthorizationCredentials | None, Depends(http_bearer)],
) -> User:
    if not token or not token.credentials:
        raise UnauthorizedException("Missing or invalid authentication token.")
    user = await auth_service.get_user_by_token(token.credentials)
    if not user:
        raise UnauthorizedException(
            "User not found or not authenticated.",
            error_code="USER_NOT_FOUND",
        )
    set_current_user_id(
        user.id
    )  # used to store the current user id in context to retrive accross the current coroutine/thread
    return user


UserDependency = Annotated[User, Depends(get_current_user)]


async def get_current_admin_user(user: UserDependency) -> User:
    if not user.is_admin:
        raise ForbiddenException(
            "Admin access required.",
            error_code="ADMIN_USER_NOT_FOUND",
        )
    return user


AdminUserDependency = Annotated[User, Depends(get_current_admin_user)]
