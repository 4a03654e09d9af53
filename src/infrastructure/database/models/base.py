# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy declarative base and shared column mixins.

All academic record models inherit from ``Base``. Identifiers are string
UUIDs (``UUID(as_uuid=False)``) so services can pass ids received from
callers straight into queries.
"""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from sqlalchemy import DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.utils.datetime import utc_now


class Base(DeclarativeBase):
    """Base class for all academic record ORM models."""

    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }

    def __repr__(self) -> str:
        """String representation showing table name and id."""
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"


def new_uuid() -> str:
    """Generate a new string UUID primary key."""
    return str(uuid4())


def uuid_column(*args: Any, **kwargs: Any) -> Any:
    """Build a string UUID column; positional args such as ``ForeignKey`` pass through."""
    return mapped_column(UUID(as_uuid=False), *args, **kwargs)


def enum_type(enum_cls: type[Enum], name: str) -> SAEnum:
    """Map a ``str`` enum to a VARCHAR column that stores its values."""
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )


class UUIDPrimaryKeyMixin:
    """Adds a string UUID ``id`` primary key."""

    id: Mapped[str] = uuid_column(primary_key=True, default=new_uuid)


class TimestampMixin:
    """Adds ``created_at`` / ``updated_at`` audit timestamps."""

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )
