from fastapi import APIRouter

from apps.api.auth.dependency import UserDependency
from apps.api.auth.schema import UserDetailsResponse
from apps.api.user.schema import UserUpdateRequest
from apps.api.user.service import UserServiceDependency

router = APIRouter(
    prefix="/user",
    tags=["User"],
)


@router.get("/me", summary="Get the current user")
async def get_me(user: UserDependency) -> UserDetailsResponse:
    return user


@router.put("/update", summary="Update user details")
async def update_user_details(
    user: UserDependency,
    user_service: UserServiceDependency,
    payload: UserUpdateRequest,
) -> UserDetailsResponse:
    user = await user_service.update_user_details(user_id=user.id, data=payload)
    return user
