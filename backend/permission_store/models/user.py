from __future__ import annotations

from sqlalchemy import Boolean, Column, String, text
from sqlalchemy.orm import Mapped, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Minimal user record; referenced by permission grants."""

    __tablename__ = "users"

    username: Mapped[str] = Column(String(64), unique=True, nullable=False, index=True)
    email: Mapped[str | None] = Column(String(255), nullable=True)
    is_active: Mapped[bool] = Column(Boolean, server_default=text("TRUE"), default=True, nullable=False)

    permissions: Mapped[list[Permission]] = relationship(
        "Permission",
        secondary="permission_user",
        viewonly=True,
        order_by="Permission.name",
    )


__all__ = ["User"]
