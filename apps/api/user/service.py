from typing import Annotated

from sqlalchemy import select

from apps.api.auth.service import hash_password
from apps.api.user.models import User
from apps.api.user.schema import UserUpdateRequest
from core.architecture.service import AbstractService
from core.db.core import SessionDep
from core.exceptions import ConflictException, NotFoundException


class UserService(AbstractService):
    DEPENDENCIES = {"session": SessionDep}

    def __init__(self, session: SessionDep, **kwargs):
        super().__init__(session=session, **kwargs)
        self.session = session

    async def get_user_by_id(self, user_id: int) -> User:
        user = await self.session.get(User, user_id)
        if not user:
            raise NotFoundException("User not found", error_code="USER_NOT_FOUND")
        return user

    async def update_user_details(self, user_id: int, data: UserUpdateRequest) -> User:
        user = await self.get_user_by_id(user_id)

        if data.email is not None:
            email = data.email.strip().lower()
            taken = await self.session.scalar(
                select(User).where(User.email == email, User.id != user.id)
            )
            if taken:
                raise ConflictException("Email already in use", error_code="USER_EXISTS")
            user.email = email
        if data.first_name is not None:
            user.first_name = data.first_name
        if data.last_name is not None:
            user.last_name = data.last_name
        if data.password is not None:
            user.password_hash = hash_password(data.password)
        if data.profile_picture is not None:
            user.profile_picture = data.profile_picture

        await self.session.commit()
        await self.session.refresh(user)
        return user


UserServiceDependency = Annotated[UserService, UserService.get_dependency()]
