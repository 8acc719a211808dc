import hashlib
import hmac
import logging
import secrets
from typing import Annotated

from sqlalchemy import select

from apps.api.user.models import User, UserRoles
from core.architecture.service import AbstractService
from core.db.core import SessionDep
from core.exceptions import ConflictException, UnauthorizedException

logger = logging.getLogger(__name__)

_HASH_ITERATIONS = 100_000


def hash_password(password: str, salt: str | None = None) -> str:
    """
    Salted PBKDF2-SHA256, stored as `salt$hexdigest`. Good enough for the
    stub credential store; swap for a real password hasher before this
    holds real accounts.
    """
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), salt.encode(), _HASH_ITERATIONS
    )
    return f"{salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    salt, _, _ = password_hash.partition("$")
    return hmac.compare_digest(hash_password(password, salt), password_hash)


class AuthService(AbstractService):
    """
    Stub credential store. Tokens are static per user and never expire;
    issuing real tokens is somebody else's job.
    """

    DEPENDENCIES = {"session": SessionDep}

    def __init__(self, session: SessionDep, **kwargs):
        super().__init__(session=session, **kwargs)
        self.session = session

    async def add_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: UserRoles = UserRoles.USER,
        token: str | None = None,
    ) -> User:
        """Stage a new user in the current transaction without committing."""
        email = email.strip().lower()
        existing = await self.session.scalar(select(User).where(User.email == email))
        if existing:
            raise ConflictException("User already exists", error_code="USER_EXISTS")

        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(password),
            role=role.value,
            token=token or secrets.token_urlsafe(32),
        )
        self.session.add(user)
        await self.session.flush()
        return user

    async def create_user(self, *args, **kwargs) -> User:
        user = await self.add_user(*args, **kwargs)
        await self.session.commit()
        await self.session.refresh(user)
        logger.info("Registered user %s with role %s", user.id, user.role)
        return user

    async def login(self, email: str, password: str) -> User:
        user = await self.session.scalar(
            select(User).where(User.email == email.strip().lower())
        )
        if not user or not verify_password(password, user.password_hash):
            raise UnauthorizedException(
                "Invalid credentials", error_code="INVALID_CREDENTIALS"
            )
        return user

    async def get_user_by_token(self, token: str) -> User | None:
        return await self.session.scalar(select(User).where(User.token == token))


AuthServiceDependency = Annotated[AuthService, AuthService.get_dependency()]
