"""
User Repositories.

Data access for the ``users`` table and its historical counterpart
``archive_users``, through the service-role Supabase client.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from training_admin.models.enums import UserRole
from training_admin.models.user import (
    ARCHIVE_USERS_TABLE,
    ARCHIVED_AT_COLUMN,
    USERS_TABLE,
    ArchivedUser,
    ArchivedUserInsert,
    User,
    UserUpdate,
)
from training_admin.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository):
    """Data access layer for active users."""

    TABLE = USERS_TABLE

    def get_all(self) -> list[User]:
        """Fetch all active users, newest first."""
        response = (
            self._table()
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [User.model_validate(row) for row in response.data or []]

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Fetch a user by primary key, or ``None`` when absent."""
        response = (
            self._table()
            .select("*")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        return User.model_validate(response.data[0]) if response.data else None

    def update_role(self, user_id: str, new_role: UserRole) -> Optional[User]:
        """Update a user's role. Returns the updated user or ``None`` if not found."""
        payload = UserUpdate(
            role=new_role,
            updated_at=datetime.now(timezone.utc),
        ).model_dump(mode="json", exclude_unset=True)
        response = (
            self._table()
            .update(payload)
            .eq("id", user_id)
            .execute()
        )
        if not response.data:
            return None
        user = User.model_validate(response.data[0])
        self._logger.info("Role updated in %s: %s -> %s", self.TABLE, user_id, new_role)
        return user

    def delete(self, user_id: str) -> None:
        """Remove a user row.  Only called after the row was archived."""
        self._table().delete().eq("id", user_id).execute()
        self._logger.info("User removed from %s: %s", self.TABLE, user_id)


class ArchiveUserRepository(BaseRepository):
    """Data access layer for archived users.

    Archive rows are write-once: there is no update or delete method.
    """

    TABLE = ARCHIVE_USERS_TABLE

    def get_all(self) -> list[ArchivedUser]:
        """Fetch all archived users, most recently archived first."""
        response = (
            self._table()
            .select("*")
            .order(ARCHIVED_AT_COLUMN, desc=True)
            .execute()
        )
        return [ArchivedUser.model_validate(row) for row in response.data or []]

    def insert(self, record: ArchivedUserInsert) -> ArchivedUser:
        """Write one archive row and return it as stored."""
        payload = record.model_dump(mode="json", by_alias=True)
        response = self._table().insert(payload).execute()
        row = response.data[0] if response.data else payload
        archived = ArchivedUser.model_validate(row)
        self._logger.info("User archived into %s: %s", self.TABLE, archived.id)
        return archived
