"""
User Models.

Pydantic declarations of the two Supabase tables this service reads and
writes (``users`` and ``archive_users``) in their Row / Insert / Update
shapes, plus the ``UserRecord`` shape consumed by presentation code.

This is the single pinned schema: ``program`` and ``other_program`` are
nullable on both tables, and the archive timestamp column keeps its
remote spelling ``archivec_at`` on the wire while being exposed as
``archived_at`` in Python.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Final, Optional

from pydantic import BaseModel, ConfigDict, Field

from training_admin.models.enums import UserRole

USERS_TABLE: Final[str] = "users"
ARCHIVE_USERS_TABLE: Final[str] = "archive_users"

# Remote column name for the archival timestamp.
ARCHIVED_AT_COLUMN: Final[str] = "archivec_at"


# ---------------------------------------------------------------------------
# users
# ---------------------------------------------------------------------------

class User(BaseModel):
    """A row of the ``users`` table."""

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: str  # Supabase auth UUID
    email: str
    role: UserRole
    full_name: Optional[str] = None
    program: Optional[str] = None
    other_program: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    def to_archive(self, archived_at: Optional[datetime] = None) -> "ArchivedUserInsert":
        """Build the ``archive_users`` insert payload for this user.

        The user's ``id`` is reused as the archive key.
        """
        return ArchivedUserInsert(
            id=self.id,
            email=self.email,
            role=self.role,
            full_name=self.full_name,
            program=self.program,
            other_program=self.other_program,
            created_at=self.created_at,
            archived_at=archived_at or datetime.now(timezone.utc),
        )


class UserInsert(BaseModel):
    """Payload for inserting into ``users``.  Timestamps default server-side."""

    id: str
    email: str
    role: UserRole
    full_name: Optional[str] = None
    program: Optional[str] = None
    other_program: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdate(BaseModel):
    """Partial update for ``users``.

    Serialise with ``model_dump(exclude_unset=True)`` so only the fields
    the caller set are sent.
    """

    id: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None
    full_name: Optional[str] = None
    program: Optional[str] = None
    other_program: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# archive_users
# ---------------------------------------------------------------------------

class ArchivedUser(BaseModel):
    """A row of the ``archive_users`` table.  Never mutated once written."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True, extra="ignore")

    id: str
    email: str
    role: UserRole
    full_name: Optional[str] = None
    program: Optional[str] = None
    other_program: Optional[str] = None
    created_at: datetime
    archived_at: datetime = Field(alias=ARCHIVED_AT_COLUMN)


class ArchivedUserInsert(BaseModel):
    """Payload for inserting into ``archive_users``.

    Dump with ``by_alias=True`` to emit the remote column names.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    role: UserRole
    full_name: Optional[str] = None
    program: Optional[str] = None
    other_program: Optional[str] = None
    created_at: Optional[datetime] = None
    archived_at: datetime = Field(alias=ARCHIVED_AT_COLUMN)


class ArchivedUserUpdate(BaseModel):
    """Partial update for ``archive_users``; kept for schema completeness."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None
    full_name: Optional[str] = None
    program: Optional[str] = None
    other_program: Optional[str] = None
    created_at: Optional[datetime] = None
    archived_at: Optional[datetime] = Field(default=None, alias=ARCHIVED_AT_COLUMN)


# ---------------------------------------------------------------------------
# Local record shape
# ---------------------------------------------------------------------------

class UserRecord(BaseModel):
    """User shape used by presentation code.

    ``auth_id`` links to the Supabase auth user when it differs from ``id``;
    ``status`` is a display-only field not stored in ``users``.
    """

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    id: str
    auth_id: Optional[str] = None
    email: str
    role: UserRole
    full_name: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User, status: Optional[str] = None) -> "UserRecord":
        return cls(
            id=user.id,
            auth_id=user.id,
            email=user.email,
            role=user.role,
            full_name=user.full_name,
            status=status,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
