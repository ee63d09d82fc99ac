from __future__ import annotations

from typing import Any


class PermissionStoreError(RuntimeError):
    """Base error for permission store operations."""


class DuplicateNameError(PermissionStoreError):
    """Raised when a unique name is already taken."""

    def __init__(self, name: str, *, entity: str = "permission"):
        super().__init__(f"{entity} name already exists: {name!r}")
        self.name = name
        self.entity = entity


class NotFoundError(PermissionStoreError):
    """Raised when a referenced record does not exist."""

    entity = "record"

    def __init__(self, record_id: Any):
        super().__init__(f"{self.entity} not found: {record_id}")
        self.record_id = record_id


class PermissionNotFoundError(NotFoundError):
    entity = "permission"


class UserNotFoundError(NotFoundError):
    entity = "user"


class AlreadyGrantedError(PermissionStoreError):
    """Raised when the (user, permission) pair is already granted."""

    def __init__(self, user_id: Any, permission_id: Any):
        super().__init__(f"permission {permission_id} already granted to user {user_id}")
        self.user_id = user_id
        self.permission_id = permission_id


__all__ = [
    "AlreadyGrantedError",
    "DuplicateNameError",
    "NotFoundError",
    "PermissionNotFoundError",
    "PermissionStoreError",
    "UserNotFoundError",
]
