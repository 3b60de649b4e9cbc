"""
Presentation Helpers.

Pure, total functions used when rendering users: date formatting,
initials, role badge classes and database-error messages.  None of them
raise, whatever they are given; malformed input degrades to a fixed
sentinel string instead.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Final, Optional

__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "DUPLICATE_EMAIL_MESSAGE",
    "PERMISSION_DENIED_MESSAGE",
    "format_date",
    "get_role_badge_class",
    "get_user_initials",
    "map_database_error",
]

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DATE_MISSING: Final[str] = "N/A"
DATE_INVALID: Final[str] = "Invalid Date"

# en-US short month names; independent of the process locale.
_MONTH_ABBR: Final[tuple[str, ...]] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Non-ISO inputs accepted after ``datetime.fromisoformat`` gives up.
_FALLBACK_DATE_FORMATS: Final[tuple[str, ...]] = (
    "%b %d, %Y",
    "%B %d, %Y",
    "%m/%d/%Y",
    "%Y/%m/%d",
)

DEFAULT_INITIALS: Final[str] = "U"

BADGE_ADMIN: Final[str] = "bg-purple-100 text-purple-800"
BADGE_TRAINER: Final[str] = "bg-blue-100 text-blue-800"
BADGE_TRAINEE: Final[str] = "bg-green-100 text-green-800"
BADGE_DEFAULT: Final[str] = "bg-gray-100 text-gray-800"

_ROLE_BADGES: Final[dict[str, str]] = {
    "admin": BADGE_ADMIN,
    "trainer": BADGE_TRAINER,
    "trainee": BADGE_TRAINEE,
}

# PostgreSQL SQLSTATE codes surfaced by PostgREST.
UNIQUE_VIOLATION: Final[str] = "23505"
INSUFFICIENT_PRIVILEGE: Final[str] = "42501"

DUPLICATE_EMAIL_MESSAGE: Final[str] = "User with this email already exists"
PERMISSION_DENIED_MESSAGE: Final[str] = "Permission denied"
DEFAULT_ERROR_MESSAGE: Final[str] = "An unexpected error occurred"


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def _parse_date(value: object) -> Optional[date]:
    """Coerce *value* into a ``date``/``datetime``; ``None`` when impossible."""
    if isinstance(value, date):
        return value

    # bool is an int subclass; True/False are not timestamps.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Numbers are epoch milliseconds.
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)

    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    for fmt in _FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_date(value: object) -> str:
    """Render *value* as ``"Jan 5, 2024"``.

    Returns ``"N/A"`` for empty / falsy input and ``"Invalid Date"`` when
    the value cannot be interpreted as a date.  Aware datetimes are
    rendered in their own timezone.
    """
    try:
        if not value:
            return DATE_MISSING
        parsed = _parse_date(value)
    except Exception:
        return DATE_INVALID

    if parsed is None:
        return DATE_INVALID
    return f"{_MONTH_ABBR[parsed.month - 1]} {parsed.day}, {parsed.year}"


# ---------------------------------------------------------------------------
# Names and roles
# ---------------------------------------------------------------------------

def get_user_initials(name: object) -> str:
    """Return up to two upper-cased initials from a display name.

    Splits on single spaces, so runs of spaces contribute nothing.
    Empty or non-string names give ``"U"``.
    """
    if not isinstance(name, str) or not name:
        return DEFAULT_INITIALS
    initials = "".join(part[0] for part in name.split(" ") if part)
    return initials.upper()[:2]


def get_role_badge_class(role: object) -> str:
    """Map a role to its badge CSS classes; unknown roles get the grey badge."""
    if not isinstance(role, str):
        return BADGE_DEFAULT
    return _ROLE_BADGES.get(role, BADGE_DEFAULT)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

def _error_field(error: object, name: str) -> object:
    if isinstance(error, dict):
        return error.get(name)
    return getattr(error, name, None)


def map_database_error(error: object) -> str:
    """Translate a Supabase / PostgREST error into a human-readable message.

    Accepts a mapping, an exception or any object exposing ``code`` and
    ``message``.  Exceptions without a ``message`` attribute fall back to
    their string form.
    """
    try:
        code = _error_field(error, "code")
        if code is not None:
            code = str(code)
        if code == UNIQUE_VIOLATION:
            return DUPLICATE_EMAIL_MESSAGE
        if code == INSUFFICIENT_PRIVILEGE:
            return PERMISSION_DENIED_MESSAGE

        message = _error_field(error, "message")
        if message:
            return str(message)
        if isinstance(error, BaseException) and str(error):
            return str(error)
    except Exception:
        return DEFAULT_ERROR_MESSAGE
    return DEFAULT_ERROR_MESSAGE
