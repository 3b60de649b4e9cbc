"""
Base Service Class.

Minimal base class standardizing the logger pattern for all services.
Services extend this and add their own repository dependencies via __init__.
"""

from __future__ import annotations

from training_admin.logger import StructuredLogger
from training_admin.models.service_models import Failure
from training_admin.services.error_mapping import classify_error


class BaseService:
    """Base class for all service classes. Provides a logger."""

    def __init__(self, logger: StructuredLogger) -> None:
        self._logger: StructuredLogger = logger

    def _fail(self, operation: str, exc: Exception) -> Failure:
        """Log *exc* and turn it into a ``Failure`` result."""
        failure = classify_error(exc)
        self._logger.error(
            "Error during %s: %s", operation, exc,
            extra={"event": f"{operation.upper()}_FAILED", "error_code": str(failure.error.code)},
        )
        return failure
