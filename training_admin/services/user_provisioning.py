"""
User Provisioning Service.

Creates confirmed Supabase Auth accounts on behalf of an administrator.
Input is validated locally first so malformed requests never reach
Supabase; password strength is left to the Supabase project's policy.

``create_user`` never raises: every failure path, including network and
configuration errors, is logged and returned as a ``Failure``.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Final, Optional

from training_admin.database import SupabaseAdmin
from training_admin.logger import StructuredLogger
from training_admin.models.enums import ErrorCode, UserRole
from training_admin.models.service_models import (
    CreatedAccount,
    Failure,
    ServiceResult,
    Success,
)
from training_admin.services.base_service import BaseService
from training_admin.utils.audit import log_audit_event


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_EMAIL_RE: re.Pattern[str] = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)

# Matches C0 controls (U+0000-U+001F), DEL (U+007F), and C1 controls (U+0080-U+009F).
_CONTROL_CHAR_RE: re.Pattern[str] = re.compile(r"[\x00-\x1f\x7f-\x9f]")

_MAX_NAME_LENGTH: Final[int] = 200


class UserProvisioningService(BaseService):
    """Creates auth users through the service-role admin API.

    Parameters
    ----------
    admin:
        Accessor for the service-role Supabase client.
    logger:
        Structured JSON logger for audit-grade logging.
    """

    def __init__(self, admin: SupabaseAdmin, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._admin = admin

    # ==================================================================
    # Validation helpers
    # ==================================================================

    @staticmethod
    def validate_email(email: object) -> Optional[str]:
        """Return an error message for an invalid email, ``None`` if valid."""
        if not isinstance(email, str) or not email.strip():
            return "Email address is required."
        if not _EMAIL_RE.match(email.strip()):
            return "Please enter a valid email address."
        return None

    @staticmethod
    def validate_password(password: object) -> Optional[str]:
        """Require a non-blank password; strength is enforced by Supabase."""
        if not isinstance(password, str) or not password.strip():
            return "Password is required."
        return None

    @staticmethod
    def validate_full_name(full_name: object) -> Optional[str]:
        """The display name may be empty but must be printable text."""
        if full_name is None:
            return None
        if not isinstance(full_name, str):
            return "Full name must be text."
        if len(full_name) > _MAX_NAME_LENGTH:
            return f"Full name must be at most {_MAX_NAME_LENGTH} characters."
        if _CONTROL_CHAR_RE.search(full_name):
            return (
                "Full name contains invalid characters. "
                "Only printable characters are allowed."
            )
        return None

    @staticmethod
    def normalize_email(email: str) -> str:
        """Normalise an email address: strip whitespace and lowercase."""
        return email.strip().lower()

    # ==================================================================
    # Account creation
    # ==================================================================

    def create_user(
        self,
        email: str,
        password: str,
        full_name: str,
        role: UserRole,
    ) -> ServiceResult[CreatedAccount]:
        """Create a confirmed Supabase Auth user with role metadata.

        The account is created with ``email_confirm=True`` so no
        verification email is sent, and ``user_metadata`` records the
        display name and *role*.

        Returns
        -------
        Success[CreatedAccount]
            With ``status_code`` 201 when the account was created.
        Failure
            On validation errors or any Supabase / network error.
        """
        for message in (
            self.validate_email(email),
            self.validate_password(password),
            self.validate_full_name(full_name),
        ):
            if message is not None:
                self._logger.warning(
                    "Rejected create_user request: %s", message,
                    extra={"event": "CREATE_USER_REJECTED"},
                )
                return Failure.of(ErrorCode.VALIDATION_ERROR, message, 400)

        try:
            validated_role = UserRole(role)
        except ValueError:
            return Failure.of(
                ErrorCode.VALIDATION_ERROR,
                f"Invalid role specified: '{role}'. "
                f"Must be one of: {', '.join(r.value for r in UserRole)}.",
                400,
            )

        email = self.normalize_email(email)
        full_name = (full_name or "").strip()

        try:
            response = self._admin.client.auth.admin.create_user({
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": {
                    "full_name": full_name,
                    "role": validated_role.value,
                },
            })
        except Exception as exc:
            return self._fail("create_user", exc)

        # The account exists remotely from here on; mapping must not fail it.
        account = self._to_account(response, email, full_name, validated_role)
        if account is None:
            self._logger.error(
                "Supabase returned no user for %s", email,
                extra={"event": "CREATE_USER_FAILED"},
            )
            return Failure.of(
                ErrorCode.UNKNOWN_ERROR,
                "The user could not be created. Please try again later.",
                500,
            )

        log_audit_event(
            logger=self._logger,
            action="CREATE_USER",
            entity_type="User",
            entity_id=account.id,
            details={"email": email, "role": validated_role.value},
        )
        return Success(data=account, status_code=201)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _to_account(
        response: object,
        email: str,
        full_name: str,
        role: UserRole,
    ) -> Optional[CreatedAccount]:
        """Describe the created user from a ``UserResponse``.

        Name and role come from the validated request, not from the
        metadata Supabase echoes back.
        """
        user = getattr(response, "user", None)
        if user is None or getattr(user, "id", None) is None:
            return None
        returned_email = getattr(user, "email", None)
        return CreatedAccount(
            id=str(user.id),
            email=returned_email if isinstance(returned_email, str) else email,
            full_name=full_name,
            role=role,
            created_at=_as_datetime(getattr(user, "created_at", None)),
            email_confirmed_at=_as_datetime(getattr(user, "email_confirmed_at", None)),
        )


def _as_datetime(value: object) -> Optional[datetime]:
    """Best-effort timestamp parsing; unknown shapes become ``None``."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None
