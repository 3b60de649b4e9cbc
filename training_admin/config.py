"""
Application Configuration.

Pydantic Settings model for the Training Admin service.
All configuration is loaded from environment variables and .env files.
Inject an AppConfig instance via dependency injection where needed.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings


class ConfigurationError(ValueError):
    """Raised when required configuration is missing or malformed.

    Fatal at startup: the service refuses to run rather than talk to
    Supabase with partial credentials.
    """


class AppConfig(BaseSettings):
    """Central configuration loaded from environment variables and defaults."""

    # --- Supabase ---
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_ROLE_KEY: SecretStr = SecretStr("")

    # --- HTTP server ---
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "training_admin.log"
    LOG_MAX_BYTES: int = 5_242_880  # 5 MB
    LOG_BACKUP_COUNT: int = 3

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @model_validator(mode="after")
    def _warn_missing_env(self) -> "AppConfig":
        """Emit a warning when the Supabase credentials are empty.

        The hard failure happens in :meth:`validate_supabase_config`, which
        the application factory calls at startup.
        """
        _log = logging.getLogger("training_admin.config")

        if not Path(".env").exists():
            _log.warning(
                "No .env file found; configuration loaded from "
                "environment variables or defaults."
            )

        if not self.SUPABASE_URL:
            _log.warning("SUPABASE_URL is empty.")

        if not self.SUPABASE_SERVICE_ROLE_KEY.get_secret_value():
            _log.warning("SUPABASE_SERVICE_ROLE_KEY is empty.")

        return self

    # --- Supabase Validation ---
    def validate_supabase_config(self) -> None:
        """Validate that the privileged Supabase configuration is complete.

        Raises:
            ConfigurationError: If the project URL or service-role key is missing.
        """
        missing: list[str] = []
        if not self.SUPABASE_URL.strip():
            missing.append("SUPABASE_URL")
        if not self.SUPABASE_SERVICE_ROLE_KEY.get_secret_value().strip():
            missing.append("SUPABASE_SERVICE_ROLE_KEY")
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}"
            )

    @property
    def log_level(self) -> int:
        """Numeric ``logging`` level for ``LOG_LEVEL``; unknown names fall back to INFO."""
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.INFO


# ---------------------------------------------------------------------------
# Module-level singleton factory
# ---------------------------------------------------------------------------

_config_instance: Optional[AppConfig] = None
_config_lock: threading.Lock = threading.Lock()


def get_config() -> AppConfig:
    """Return a cached ``AppConfig`` singleton.

    On first call, creates an ``AppConfig`` instance (reading from ``.env``).
    Subsequent calls return the same instance.  Uses a check-lock-check
    pattern so first initialisation stays thread-safe.

    Prefer passing ``AppConfig`` explicitly; this factory is for the
    entry point and the logger defaults.
    """
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = AppConfig()
    return _config_instance
