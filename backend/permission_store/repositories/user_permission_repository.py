from __future__ import annotations

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from permission_store.models import Permission, UserPermission


def get_user_permission(
    db: Session,
    *,
    user_id: UUID,
    permission_id: UUID,
) -> UserPermission | None:
    return db.get(UserPermission, (permission_id, user_id))


def create_user_permission(
    db: Session,
    *,
    user_id: UUID,
    permission_id: UUID,
) -> UserPermission:
    record = UserPermission(user_id=user_id, permission_id=permission_id)
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(record)
    return record


def delete_user_permission(db: Session, *, user_id: UUID, permission_id: UUID) -> bool:
    record = get_user_permission(db, user_id=user_id, permission_id=permission_id)
    if record is None:
        return False
    db.delete(record)
    db.commit()
    return True


def list_permissions_for_user(db: Session, *, user_id: UUID) -> list[Permission]:
    stmt: Select[tuple[Permission]] = (
        select(Permission)
        .join(UserPermission, UserPermission.permission_id == Permission.id)
        .where(UserPermission.user_id == user_id)
        .order_by(Permission.name)
    )
    return list(db.execute(stmt).scalars().all())


def list_user_ids_for_permission(db: Session, *, permission_id: UUID) -> list[UUID]:
    stmt = (
        select(UserPermission.user_id)
        .where(UserPermission.permission_id == permission_id)
        .order_by(UserPermission.created_at, UserPermission.user_id)
    )
    return list(db.execute(stmt).scalars().all())


def has_permission_name(db: Session, *, user_id: UUID, name: str) -> bool:
    stmt = (
        select(UserPermission.user_id)
        .join(Permission, Permission.id == UserPermission.permission_id)
        .where(UserPermission.user_id == user_id, Permission.name == name)
        .limit(1)
    )
    return db.execute(stmt).first() is not None


__all__ = [
    "create_user_permission",
    "delete_user_permission",
    "get_user_permission",
    "has_permission_name",
    "list_permissions_for_user",
    "list_user_ids_for_permission",
]
