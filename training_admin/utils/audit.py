"""
Structured Audit Logging Utility.

Every administrative state change (account created, role changed, user
archived) is logged as one structured JSON object.  Provides a
Pydantic-validated model and a single function for consistent entries.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, Field

from training_admin.logger import StructuredLogger

__all__ = ["AuditEvent", "log_audit_event"]

# Flat scalar values only; nested structures belong in their own fields.
DetailValue = Union[str, int, float, bool, None]


class AuditEvent(BaseModel):
    """Schema-validated representation of a single audit trail entry."""

    timestamp: str
    action: str
    entity_type: str
    entity_id: str
    details: dict[str, DetailValue] = Field(default_factory=dict)


def log_audit_event(
    logger: StructuredLogger,
    action: str,
    entity_type: str,
    entity_id: str,
    details: Optional[dict[str, DetailValue]] = None,
) -> AuditEvent:
    """Log a structured JSON audit event and return it.

    Args:
        logger: The logger instance to write to.
        action: What happened (e.g. ``"CREATE_USER"``, ``"UPDATE_ROLE"``,
            ``"ARCHIVE_USER"``).
        entity_type: Type of entity affected (e.g. ``"User"``).
        entity_id: Primary key of the affected entity.
        details: Optional additional context (e.g. old/new values).
    """
    event = AuditEvent(
        timestamp=datetime.now(timezone.utc).isoformat(),
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details or {},
    )
    logger.info(
        "AUDIT: %s",
        json.dumps(event.model_dump(), default=str),
        extra={"event": action},
    )
    return event
