"""
JSON logging for the admin service.

Every line written by the service is one JSON object, so request
rejections, Supabase failures and audit events can be filtered by field
in any log pipeline.  Output goes to stdout and, unless disabled, to a
size-rotated file whose name and limits come from ``AppConfig``.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional, TextIO

from training_admin.config import get_config

# Attributes every LogRecord carries; anything else was passed via ``extra``.
_RECORD_FIELDS: frozenset[str] = frozenset(
    vars(logging.makeLogRecord({})).keys()
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render a record as ``{timestamp, level, logger_name, message}``.

    Caller context supplied through ``extra=`` is nested under ``"extra"``
    with values stringified; tracebacks go under ``"exception"``.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger_name": record.name,
            "message": record.getMessage(),
        }

        context = {
            key: str(value)
            for key, value in vars(record).items()
            if key not in _RECORD_FIELDS
        }
        if context:
            payload["extra"] = context

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            payload["exception"] = record.exc_text

        return json.dumps(payload, ensure_ascii=False)


def _rotating_file_handler(
    path: str, max_bytes: int, backup_count: int
) -> RotatingFileHandler:
    log_path = Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(log_path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )


class StructuredLogger:
    """A named ``logging.Logger`` wired for JSON output.

    Services, repositories and ``SupabaseAdmin`` receive an instance in
    their constructor::

        log = StructuredLogger(name="services")
        log.warning("Rejected create_user request", extra={"event": "CREATE_USER_REJECTED"})

    Arguments left as ``None`` fall back to ``AppConfig`` (``LOG_LEVEL``,
    ``LOG_FILE``, ``LOG_MAX_BYTES``, ``LOG_BACKUP_COUNT``).  An empty
    ``log_file`` keeps output on the stream only, which is what the
    tests use.  Handlers are attached once per logger name.
    """

    def __init__(
        self,
        name: str = "training_admin",
        level: Optional[int] = None,
        stream: Optional[TextIO] = None,
        log_file: Optional[str] = None,
        max_bytes: Optional[int] = None,
        backup_count: Optional[int] = None,
    ) -> None:
        config = get_config()
        self._logger: logging.Logger = logging.getLogger(name)
        self._logger.setLevel(config.log_level if level is None else level)

        if self._logger.handlers:
            return

        formatter = JSONFormatter()
        console = logging.StreamHandler(stream or sys.stdout)
        console.setFormatter(formatter)
        self._logger.addHandler(console)

        path = config.LOG_FILE if log_file is None else log_file
        if not path:
            return
        try:
            file_handler = _rotating_file_handler(
                path,
                config.LOG_MAX_BYTES if max_bytes is None else max_bytes,
                config.LOG_BACKUP_COUNT if backup_count is None else backup_count,
            )
        except OSError as exc:
            self._logger.warning(
                "Log file %s unavailable (%s); logging to the console only.", path, exc
            )
            return
        file_handler.setFormatter(formatter)
        self._logger.addHandler(file_handler)

    @property
    def logger(self) -> logging.Logger:
        """The wrapped ``logging.Logger``."""
        return self._logger

    def debug(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args: object, **kwargs: Any) -> None:
        self._logger.critical(msg, *args, **kwargs)


def get_logger(name: str = "training_admin") -> StructuredLogger:
    """Logger for *name* with every setting taken from ``AppConfig``."""
    return StructuredLogger(name=name)
