"""
Shared Enumerations for Training Admin Models.

StrEnum values compare equal to their string equivalents and serialise
to the lowercase strings stored in the Supabase ``role`` column.
"""

from __future__ import annotations
from enum import StrEnum


class UserRole(StrEnum):
    """Valid user roles, matching the remote ``users.role`` enumeration.

    The local record shape once allowed an extra ``user`` value that the
    database never accepted; it is not part of this enumeration.
    """

    ADMIN = "admin"
    TRAINER = "trainer"
    TRAINEE = "trainee"


class ErrorCode(StrEnum):
    """Categories of failure returned inside a ``Failure`` result.

    The HTTP layer maps each category to a status code; callers can
    branch on it without parsing messages.
    """

    VALIDATION_ERROR = "validation_error"
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    WEAK_PASSWORD = "weak_password"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    NETWORK_ERROR = "network_error"
    CONFIGURATION_ERROR = "configuration_error"
    UNKNOWN_ERROR = "unknown_error"
