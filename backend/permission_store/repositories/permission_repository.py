from __future__ import annotations

from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from permission_store.models import Permission, UserPermission


def get_permission_by_id(db: Session, *, permission_id: UUID) -> Permission | None:
    return db.get(Permission, permission_id)


def get_permission_by_name(db: Session, *, name: str) -> Permission | None:
    stmt: Select[tuple[Permission]] = select(Permission).where(Permission.name == name)
    return db.execute(stmt).scalars().first()


def permission_name_exists(
    db: Session,
    *,
    name: str,
    exclude_permission_id: UUID | None = None,
) -> bool:
    stmt = select(Permission.id).where(Permission.name == name)
    if exclude_permission_id is not None:
        stmt = stmt.where(Permission.id != exclude_permission_id)
    return db.execute(stmt.limit(1)).first() is not None


def list_permissions(db: Session) -> list[Permission]:
    stmt: Select[tuple[Permission]] = select(Permission).order_by(Permission.name)
    return list(db.execute(stmt).scalars().all())


def persist_permission(db: Session, *, permission: Permission) -> Permission:
    db.add(permission)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(permission)
    return permission


def delete_permission_cascade(db: Session, *, permission: Permission) -> int:
    """Remove the permission and all of its grants in a single transaction.

    Returns the number of grant rows removed.
    """
    condition = UserPermission.permission_id == permission.id
    try:
        removed = db.execute(
            select(func.count()).select_from(UserPermission).where(condition)
        ).scalar_one()
        db.execute(
            delete(UserPermission).where(condition).execution_options(synchronize_session="fetch")
        )
        db.delete(permission)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return int(removed)


__all__ = [
    "delete_permission_cascade",
    "get_permission_by_id",
    "get_permission_by_name",
    "list_permissions",
    "permission_name_exists",
    "persist_permission",
]
