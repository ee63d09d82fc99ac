from __future__ import annotations

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from permission_store.errors import DuplicateNameError, UserNotFoundError
from permission_store.logging_config import logger
from permission_store.models import User
from permission_store.repositories.user_repository import (
    create_user as repo_create_user,
    delete_user_cascade as repo_delete_user_cascade,
    get_user_by_id as repo_get_user_by_id,
    user_exists as repo_user_exists,
    username_exists as repo_username_exists,
)


def get_user_by_id(session: Session, user_id: UUID | str) -> User | None:
    return repo_get_user_by_id(session, user_id=user_id)


def user_exists(session: Session, user_id: UUID | str) -> bool:
    if isinstance(user_id, str):
        return get_user_by_id(session, user_id) is not None
    return repo_user_exists(session, user_id=user_id)


def create_user(session: Session, username: str, email: str | None = None) -> User:
    username = username.strip()
    if repo_username_exists(session, username=username):
        logger.warning("Refusing to create duplicate user %r", username)
        raise DuplicateNameError(username, entity="user")
    try:
        return repo_create_user(session, user=User(username=username, email=email))
    except IntegrityError as exc:
        logger.warning("Concurrent insert for username %r: %s", username, exc)
        raise DuplicateNameError(username, entity="user") from exc


def delete_user(session: Session, user_id: UUID | str) -> int:
    """Delete a user and every permission granted to it.

    Returns the number of grants that were removed with the user.
    """
    user = get_user_by_id(session, user_id)
    if user is None:
        logger.warning("User %s not found", user_id)
        raise UserNotFoundError(user_id)
    removed = repo_delete_user_cascade(session, user=user)
    logger.info("Deleted user %s together with %d permission grant(s)", user_id, removed)
    return removed


__all__ = ["create_user", "delete_user", "get_user_by_id", "user_exists"]
