"""Shared utility functions for the Training Admin service.

Convenience re-exports so consumers can import directly from
``training_admin.utils`` (e.g. ``from training_admin.utils import format_date``)
while full absolute imports remain supported.
"""

from training_admin.utils.audit import AuditEvent, log_audit_event
from training_admin.utils.formatting import (
    format_date,
    get_role_badge_class,
    get_user_initials,
    map_database_error,
)

__all__ = [
    "AuditEvent",
    "format_date",
    "get_role_badge_class",
    "get_user_initials",
    "log_audit_event",
    "map_database_error",
]
