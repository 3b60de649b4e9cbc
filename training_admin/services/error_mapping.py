"""
Supabase Error Classification.

Maps exceptions raised by ``supabase-py`` (auth admin API and PostgREST)
or by the transport underneath it to a structured ``Failure``.  Auth API
errors expose a string ``code`` such as ``email_exists``; PostgREST
errors expose the PostgreSQL SQLSTATE (``23505``, ``42501``).  Older
servers omit codes, so the message text is checked as a last resort.
"""

from __future__ import annotations

from typing import Final

import httpx

from training_admin.config import ConfigurationError
from training_admin.models.enums import ErrorCode
from training_admin.models.service_models import Failure
from training_admin.utils.formatting import (
    DUPLICATE_EMAIL_MESSAGE,
    PERMISSION_DENIED_MESSAGE,
    map_database_error,
)

NETWORK_ERROR_MESSAGE: Final[str] = (
    "Cannot reach the Supabase service. Check connectivity and try again."
)
CONFIGURATION_ERROR_MESSAGE: Final[str] = "Supabase credentials are not configured."

# code -> (category, HTTP status)
SUPABASE_ERROR_MAP: Final[dict[str, tuple[ErrorCode, int]]] = {
    "23505": (ErrorCode.EMAIL_ALREADY_EXISTS, 409),
    "email_exists": (ErrorCode.EMAIL_ALREADY_EXISTS, 409),
    "user_already_exists": (ErrorCode.EMAIL_ALREADY_EXISTS, 409),
    "42501": (ErrorCode.PERMISSION_DENIED, 403),
    "not_admin": (ErrorCode.PERMISSION_DENIED, 403),
    "weak_password": (ErrorCode.WEAK_PASSWORD, 400),
    "validation_failed": (ErrorCode.VALIDATION_ERROR, 400),
    "email_address_invalid": (ErrorCode.VALIDATION_ERROR, 400),
}

# Lower-cased message fragments for errors that arrive without a code.
_MESSAGE_HINTS: Final[tuple[tuple[str, str], ...]] = (
    ("already been registered", "email_exists"),
    ("already exists", "email_exists"),
    ("duplicate key", "23505"),
    ("permission denied", "42501"),
    ("password should", "weak_password"),
)


def _resolve_code(exc: BaseException) -> str | None:
    code = getattr(exc, "code", None)
    if code is not None and str(code) in SUPABASE_ERROR_MAP:
        return str(code)

    text = str(exc).lower()
    for fragment, hinted_code in _MESSAGE_HINTS:
        if fragment in text:
            return hinted_code
    return None


def classify_error(exc: BaseException) -> Failure:
    """Convert *exc* into a ``Failure`` with a category and HTTP status."""
    if isinstance(exc, ConfigurationError):
        return Failure.of(ErrorCode.CONFIGURATION_ERROR, CONFIGURATION_ERROR_MESSAGE, 500)

    if isinstance(exc, (ConnectionError, TimeoutError, httpx.TransportError)):
        return Failure.of(ErrorCode.NETWORK_ERROR, NETWORK_ERROR_MESSAGE, 503)

    code = _resolve_code(exc)
    if code is None:
        return Failure.of(ErrorCode.UNKNOWN_ERROR, map_database_error(exc), 500)

    category, status_code = SUPABASE_ERROR_MAP[code]
    if category is ErrorCode.EMAIL_ALREADY_EXISTS:
        message = DUPLICATE_EMAIL_MESSAGE
    elif category is ErrorCode.PERMISSION_DENIED:
        message = PERMISSION_DENIED_MESSAGE
    else:
        message = map_database_error(exc)
    return Failure.of(category, message, status_code)
