from fastapi import APIRouter, status

from apps.api.auth.schema import (
    AuthTokenResponse,
    LoginRequest,
    RegisterRequest,
    UserDetailsResponse,
)
from apps.api.auth.service import AuthServiceDependency

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", summary="Log in with email and password")
async def login(
    auth_service: AuthServiceDependency,
    credentials: LoginRequest,
) -> AuthTokenResponse:
    user = await auth_service.login(credentials.email, credentials.password)
    return AuthTokenResponse(
        token=user.token, user=UserDetailsResponse.model_validate(user)
    )


@router.post(
    "/register",
    summary="Register a new user",
    status_code=status.HTTP_201_CREATED,
)
async def register(
    auth_service: AuthServiceDependency,
    payload: RegisterRequest,
) -> AuthTokenResponse:
    """
    Create a USER account and return its bearer token.
    Admin accounts are only created by the seed data.
    """
    user = await auth_service.create_user(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
    )
    return AuthTokenResponse(
        token=user.token, user=UserDetailsResponse.model_validate(user)
    )
