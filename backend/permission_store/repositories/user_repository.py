from __future__ import annotations

import uuid
from uuid import UUID

from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from permission_store.models import User, UserPermission


def get_user_by_id(db: Session, *, user_id: UUID | str) -> User | None:
    if isinstance(user_id, str):
        try:
            user_uuid = uuid.UUID(user_id)
        except ValueError:
            return None
    else:
        user_uuid = user_id
    return db.get(User, user_uuid)


def user_exists(db: Session, *, user_id: UUID) -> bool:
    stmt = select(User.id).where(User.id == user_id).limit(1)
    return db.execute(stmt).first() is not None


def username_exists(db: Session, *, username: str) -> bool:
    stmt: Select[tuple[User]] = select(User).where(User.username == username)
    return db.execute(stmt).scalars().first() is not None


def create_user(db: Session, *, user: User) -> User:
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(user)
    return user


def delete_user_cascade(db: Session, *, user: User) -> int:
    """Remove the user together with every permission grant it holds."""
    condition = UserPermission.user_id == user.id
    try:
        removed = db.execute(
            select(func.count()).select_from(UserPermission).where(condition)
        ).scalar_one()
        db.execute(
            delete(UserPermission).where(condition).execution_options(synchronize_session="fetch")
        )
        db.delete(user)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return int(removed)


__all__ = [
    "create_user",
    "delete_user_cascade",
    "get_user_by_id",
    "user_exists",
    "username_exists",
]
