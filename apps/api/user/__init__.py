# apps/api/user/__init__.py

from .models import User, UserRoles

__all__ = ["User", "UserRoles"]
