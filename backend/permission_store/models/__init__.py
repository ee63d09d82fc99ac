from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from .permission import Permission
from .user import User
from .user_permission import UserPermission

__all__ = [
    "Base",
    "Permission",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "User",
    "UserPermission",
]
