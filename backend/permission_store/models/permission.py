from __future__ import annotations

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import Mapped, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Permission(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A named capability that can be granted to users."""

    __tablename__ = "permissions"

    name: Mapped[str] = Column(String(100), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = Column(Text, nullable=True)

    # Read-only view over permission_user; grants and revokes go through the repositories.
    users: Mapped[list[User]] = relationship(
        "User",
        secondary="permission_user",
        viewonly=True,
        order_by="User.username",
    )

    def __repr__(self) -> str:
        return f"<Permission(name={self.name!r})>"


__all__ = ["Permission"]
