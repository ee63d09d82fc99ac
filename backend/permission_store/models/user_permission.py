from __future__ import annotations

from sqlalchemy import Column, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, relationship

from .base import Base, TimestampMixin


class UserPermission(TimestampMixin, Base):
    """Association row: the user holds the permission.

    The composite primary key keeps each (permission_id, user_id) pair unique;
    both foreign keys cascade so that removing either parent removes the grant.
    """

    __tablename__ = "permission_user"

    permission_id = Column(
        UUID(as_uuid=True),
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
        nullable=False,
    )
    user_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        nullable=False,
        index=True,
    )

    permission: Mapped[Permission] = relationship("Permission")
    user: Mapped[User] = relationship("User")

    def __repr__(self) -> str:
        return f"<UserPermission(user_id={self.user_id}, permission_id={self.permission_id})>"


__all__ = ["UserPermission"]
