from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _normalize_name(value: str) -> str:
    name = value.strip()
    if not name:
        raise ValueError("name must not be blank")
    return name


class PermissionCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: object) -> object:
        return _normalize_name(value) if isinstance(value, str) else value


class PermissionUpdateRequest(BaseModel):
    """Partial update; only explicitly provided fields are applied.

    Passing `description=None` clears the description, omitting it keeps the
    current value.
    """

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: object) -> object:
        return _normalize_name(value) if isinstance(value, str) else value

    @model_validator(mode="after")
    def ensure_any_field(self) -> "PermissionUpdateRequest":
        if self.name is None and "description" not in self.model_fields_set:
            raise ValueError("at least one of name / description must be provided")
        return self


class PermissionResponse(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserPermissionResponse(BaseModel):
    user_id: UUID
    permission_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "PermissionCreateRequest",
    "PermissionResponse",
    "PermissionUpdateRequest",
    "UserPermissionResponse",
]
