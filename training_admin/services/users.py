"""
User Management Service.

Handles administrative user operations: listing, role updates and
archival.  Table access goes through the repositories; Supabase Auth
metadata updates use the service-role client directly.

Architectural notes:
    - A role change is written to ``users`` first, then mirrored into
      the auth user's ``user_metadata`` so new sessions carry it.
    - Archival copies the row into ``archive_users`` (same ``id``) and
      then removes it from ``users``.
"""

from __future__ import annotations

from typing import Optional

from training_admin.database import SupabaseAdmin
from training_admin.logger import StructuredLogger
from training_admin.models.enums import ErrorCode, UserRole
from training_admin.models.service_models import Failure, ServiceResult, Success
from training_admin.models.user import ArchivedUser, User, UserRecord
from training_admin.repositories.user_repository import (
    ArchiveUserRepository,
    UserRepository,
)
from training_admin.services.base_service import BaseService
from training_admin.utils.audit import log_audit_event

ACTIVE_STATUS = "active"


class UserService(BaseService):
    """Service layer for admin user management operations."""

    def __init__(
        self,
        repo: UserRepository,
        archive_repo: ArchiveUserRepository,
        admin: SupabaseAdmin,
        logger: StructuredLogger,
    ) -> None:
        super().__init__(logger)
        self._repo = repo
        self._archive_repo = archive_repo
        self._admin = admin

    def list_users(self) -> ServiceResult[list[UserRecord]]:
        """Fetch all active users for the admin dashboard."""
        try:
            users: list[User] = self._repo.get_all()
        except Exception as exc:
            return self._fail("list_users", exc)
        return Success(data=[UserRecord.from_user(u, status=ACTIVE_STATUS) for u in users])

    def get_user(self, user_id: str) -> ServiceResult[UserRecord]:
        try:
            user: Optional[User] = self._repo.get_by_id(user_id)
        except Exception as exc:
            return self._fail("get_user", exc)
        if user is None:
            return self._not_found()
        return Success(data=UserRecord.from_user(user, status=ACTIVE_STATUS))

    def update_user_role(self, user_id: str, new_role: str) -> ServiceResult[UserRecord]:
        """
        Update a user's role in ``users`` and in Supabase Auth metadata.

        Args:
            user_id: Supabase UUID of the target user.
            new_role: One of 'admin', 'trainer', 'trainee'.
        """
        # --- 1. Validate the role string against the enum ---
        try:
            validated_role: UserRole = UserRole(new_role)
        except ValueError:
            return Failure.of(
                ErrorCode.VALIDATION_ERROR,
                f"Invalid role specified: '{new_role}'. "
                f"Must be one of: {', '.join(r.value for r in UserRole)}.",
                400,
            )

        # --- 2. Verify user exists ---
        try:
            user: Optional[User] = self._repo.get_by_id(user_id)
            if user is None:
                return self._not_found()

            # --- 3. Update the users table ---
            updated_user: Optional[User] = self._repo.update_role(user_id, validated_role)
        except Exception as exc:
            return self._fail("update_user_role", exc)

        if updated_user is None:
            return self._not_found()

        # --- 4. Mirror into auth user_metadata ---
        self._sync_auth_metadata(updated_user)

        # --- 5. Audit trail ---
        log_audit_event(
            logger=self._logger,
            action="UPDATE_ROLE",
            entity_type="User",
            entity_id=user_id,
            details={
                "old_role": str(user.role),
                "new_role": str(validated_role),
            },
        )
        return Success(data=UserRecord.from_user(updated_user, status=ACTIVE_STATUS))

    def archive_user(self, user_id: str) -> ServiceResult[ArchivedUser]:
        """Move a user from ``users`` into ``archive_users``.

        The archive row is written before the active row is deleted, so a
        failure between the two steps leaves the user in both tables rather
        than in neither.
        """
        try:
            user: Optional[User] = self._repo.get_by_id(user_id)
            if user is None:
                return self._not_found()
            archived = self._archive_repo.insert(user.to_archive())
        except Exception as exc:
            return self._fail("archive_user", exc)

        try:
            self._repo.delete(user_id)
        except Exception as exc:
            self._logger.error(
                "User %s archived but not removed from users; remove manually.",
                user_id,
            )
            return self._fail("archive_user", exc)

        log_audit_event(
            logger=self._logger,
            action="ARCHIVE_USER",
            entity_type="User",
            entity_id=user_id,
            details={"email": user.email, "role": str(user.role)},
        )
        return Success(data=archived)

    def list_archived_users(self) -> ServiceResult[list[ArchivedUser]]:
        try:
            archived: list[ArchivedUser] = self._archive_repo.get_all()
        except Exception as exc:
            return self._fail("list_archived_users", exc)
        return Success(data=archived)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _not_found() -> Failure:
        return Failure.of(ErrorCode.NOT_FOUND, "User not found.", 404)

    def _sync_auth_metadata(self, user: User) -> None:
        """
        Push role/full_name into Supabase Auth ``user_metadata``.

        Best effort: the ``users`` table already holds the new role, so a
        failure here is logged and the request still succeeds.
        """
        try:
            self._admin.client.auth.admin.update_user_by_id(
                user.id,
                {
                    "user_metadata": {
                        "full_name": user.full_name or "",
                        "role": str(user.role),
                    }
                },
            )
            self._logger.info("Updated auth metadata for %s: role=%s", user.id, user.role)
        except Exception as exc:
            self._logger.error(
                "Failed to update auth metadata for %s: %s", user.id, exc,
            )
