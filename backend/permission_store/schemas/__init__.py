from .permission import (
    PermissionCreateRequest,
    PermissionResponse,
    PermissionUpdateRequest,
    UserPermissionResponse,
)

__all__ = [
    "PermissionCreateRequest",
    "PermissionResponse",
    "PermissionUpdateRequest",
    "UserPermissionResponse",
]
