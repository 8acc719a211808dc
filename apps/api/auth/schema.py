from pydantic import EmailStr, Field

from core.response.models import CustomBaseModel


class LoginRequest(CustomBaseModel):
    email: EmailStr = Field(..., description="Registered email address")
    password: str = Field(..., min_length=1, description="Account password")


class RegisterRequest(CustomBaseModel):
    first_name: str = Field(..., min_length=1, max_length=60)
    last_name: str = Field(..., min_length=1, max_length=60)
    email: EmailStr = Field(...)
    password: str = Field(..., min_length=6, max_length=128)


class UserDetailsResponse(CustomBaseModel):
    id: int = Field(...)
    first_name: str = Field(...)
    last_name: str = Field(...)
    email: str = Field(...)
    role: str = Field(...)
    profile_picture: str | None = Field(None)


class AuthTokenResponse(CustomBaseModel):
    token: str = Field(..., description="Bearer token for the Authorization header")
    user: UserDetailsResponse = Field(...)
