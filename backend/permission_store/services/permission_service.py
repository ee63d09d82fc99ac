from __future__ import annotations

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from permission_store.errors import (
    AlreadyGrantedError,
    DuplicateNameError,
    PermissionNotFoundError,
    UserNotFoundError,
)
from permission_store.logging_config import logger
from permission_store.models import Permission, UserPermission
from permission_store.repositories.permission_repository import (
    delete_permission_cascade as repo_delete_permission_cascade,
    get_permission_by_id as repo_get_permission_by_id,
    get_permission_by_name as repo_get_permission_by_name,
    list_permissions as repo_list_permissions,
    permission_name_exists,
    persist_permission as repo_persist_permission,
)
from permission_store.repositories.user_permission_repository import (
    create_user_permission as repo_create_user_permission,
    delete_user_permission as repo_delete_user_permission,
    get_user_permission as repo_get_user_permission,
    has_permission_name,
    list_permissions_for_user as repo_list_permissions_for_user,
    list_user_ids_for_permission as repo_list_user_ids_for_permission,
)
from permission_store.schemas import PermissionCreateRequest, PermissionUpdateRequest
from permission_store.services.user_service import user_exists


def _coerce_uuid(value: UUID | str) -> UUID | None:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


class PermissionStore:
    """Permission definitions and their grants to users.

    Every mutating call runs as one transaction on the given session: the
    uniqueness check and the write, or the grant removal and the permission
    delete, either all commit or all roll back.
    """

    def __init__(self, session: Session):
        self.session = session

    # ---- permissions ----

    def create_permission(self, name: str, description: str | None = None) -> Permission:
        payload = PermissionCreateRequest(name=name, description=description)
        if permission_name_exists(self.session, name=payload.name):
            logger.warning("Refusing to create duplicate permission %r", payload.name)
            raise DuplicateNameError(payload.name)

        permission = Permission(name=payload.name, description=payload.description)
        try:
            permission = repo_persist_permission(self.session, permission=permission)
        except IntegrityError as exc:
            # Another writer inserted the same name between the check and the commit.
            if permission_name_exists(self.session, name=payload.name):
                logger.warning("Concurrent insert for permission %r: %s", payload.name, exc)
                raise DuplicateNameError(payload.name) from exc
            raise
        logger.info("Created permission %s (%s)", permission.name, permission.id)
        return permission

    def get_permission(self, permission_id: UUID | str) -> Permission:
        permission_uuid = _coerce_uuid(permission_id)
        permission = (
            repo_get_permission_by_id(self.session, permission_id=permission_uuid)
            if permission_uuid is not None
            else None
        )
        if permission is None:
            logger.warning("Permission %s not found", permission_id)
            raise PermissionNotFoundError(permission_id)
        return permission

    def get_permission_by_name(self, name: str) -> Permission | None:
        return repo_get_permission_by_name(self.session, name=name.strip())

    def list_permissions(self) -> list[Permission]:
        return repo_list_permissions(self.session)

    def update_permission(
        self,
        permission_id: UUID | str,
        payload: PermissionUpdateRequest,
    ) -> Permission:
        """Rename a permission and/or change its description."""
        permission = self.get_permission(permission_id)

        if payload.name is not None and payload.name != permission.name:
            if permission_name_exists(
                self.session, name=payload.name, exclude_permission_id=permission.id
            ):
                logger.warning(
                    "Refusing to rename permission %s to existing name %r",
                    permission.id,
                    payload.name,
                )
                raise DuplicateNameError(payload.name)
            permission.name = payload.name
        if "description" in payload.model_fields_set:
            permission.description = payload.description

        try:
            permission = repo_persist_permission(self.session, permission=permission)
        except IntegrityError as exc:
            if payload.name is not None and permission_name_exists(
                self.session, name=payload.name, exclude_permission_id=permission.id
            ):
                logger.warning("Concurrent rename to %r: %s", payload.name, exc)
                raise DuplicateNameError(payload.name) from exc
            raise
        return permission

    def delete_permission(self, permission_id: UUID | str) -> int:
        """Delete the permission and every grant of it; returns the number of grants removed."""
        permission = self.get_permission(permission_id)
        name = permission.name
        removed = repo_delete_permission_cascade(self.session, permission=permission)
        logger.info("Deleted permission %s together with %d grant(s)", name, removed)
        return removed

    # ---- grants ----

    def grant_permission(
        self,
        user_id: UUID | str,
        permission_id: UUID | str,
        *,
        exist_ok: bool = False,
    ) -> UserPermission:
        """Grant a permission to a user.

        A second grant of the same pair raises AlreadyGrantedError unless
        `exist_ok` is set, in which case the existing grant is returned.
        """
        user_uuid = _coerce_uuid(user_id)
        if user_uuid is None or not user_exists(self.session, user_uuid):
            logger.warning("Cannot grant to unknown user %s", user_id)
            raise UserNotFoundError(user_id)
        permission = self.get_permission(permission_id)

        existing = repo_get_user_permission(
            self.session, user_id=user_uuid, permission_id=permission.id
        )
        if existing is not None:
            if exist_ok:
                return existing
            logger.warning("Permission %s already granted to user %s", permission.name, user_uuid)
            raise AlreadyGrantedError(user_uuid, permission.id)

        try:
            record = repo_create_user_permission(
                self.session, user_id=user_uuid, permission_id=permission.id
            )
        except IntegrityError as exc:
            existing = repo_get_user_permission(
                self.session, user_id=user_uuid, permission_id=permission.id
            )
            if existing is None:
                # FK violation: one side disappeared before the commit.
                raise
            if exist_ok:
                return existing
            logger.warning("Concurrent grant of %s to user %s: %s", permission.name, user_uuid, exc)
            raise AlreadyGrantedError(user_uuid, permission.id) from exc
        logger.info("Granted permission %s to user %s", permission.name, user_uuid)
        return record

    def revoke_permission(self, user_id: UUID | str, permission_id: UUID | str) -> bool:
        """Remove a grant; revoking a grant that does not exist is a no-op."""
        user_uuid = _coerce_uuid(user_id)
        permission_uuid = _coerce_uuid(permission_id)
        if user_uuid is None or permission_uuid is None:
            return False
        removed = repo_delete_user_permission(
            self.session, user_id=user_uuid, permission_id=permission_uuid
        )
        if removed:
            logger.info("Revoked permission %s from user %s", permission_uuid, user_uuid)
        return removed

    # ---- queries ----

    def list_permissions_for_user(self, user_id: UUID | str) -> list[Permission]:
        user_uuid = _coerce_uuid(user_id)
        if user_uuid is None:
            return []
        return repo_list_permissions_for_user(self.session, user_id=user_uuid)

    def list_users_for_permission(self, permission_id: UUID | str) -> list[UUID]:
        permission_uuid = _coerce_uuid(permission_id)
        if permission_uuid is None:
            return []
        return repo_list_user_ids_for_permission(self.session, permission_id=permission_uuid)

    def user_has_permission(self, user_id: UUID | str, name: str) -> bool:
        user_uuid = _coerce_uuid(user_id)
        if user_uuid is None:
            return False
        return has_permission_name(self.session, user_id=user_uuid, name=name.strip())


__all__ = ["PermissionStore"]
