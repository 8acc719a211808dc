from pydantic import EmailStr, Field

from core.response.models import CustomBaseModel


class UserUpdateRequest(CustomBaseModel):
    first_name: str | None = Field(None, min_length=1, max_length=60)
    last_name: str | None = Field(None, min_length=1, max_length=60)
    email: EmailStr | None = Field(None)
    password: str | None = Field(None, min_length=6, max_length=128)
    profile_picture: str | None = Field(None, max_length=500)
