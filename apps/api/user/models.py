from enum import Enum as PyEnum

from sqlalchemy import Column, Integer, String

from core.db.base import AbstractSQLModel
from core.db.mixins import TimestampsMixin


class UserRoles(PyEnum):
    USER = "USER"
    ADMIN = "ADMIN"


# -------------------------
# 1. User Model
# -------------------------
class User(AbstractSQLModel, TimestampsMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(60), nullable=False)
    last_name = Column(String(60), nullable=False)
    email = Column(String(120), unique=True, nullable=False, index=True)
    password_hash = Column(String(128), nullable=False)
    role = Column(
        String(20),
        default=UserRoles.USER.value,
        nullable=False,
        server_default=UserRoles.USER.value,
    )
    # static bearer token handed out on login; no expiry
    token = Column(String(64), unique=True, nullable=False, index=True)
    profile_picture = Column(String(500), nullable=True)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRoles.ADMIN.value
