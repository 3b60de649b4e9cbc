"""
Privileged Supabase Client Accessor.

Builds the Supabase client authorised with the **service-role** key.  That
key bypasses row-level security and grants unrestricted read/write over
every table and auth user, so this module is server-only: the client must
never be handed to, or serialised for, an untrusted caller.

Data access is performed through the Repository pattern.  This module only
manages the client *handle*; it contains no query logic.

Usage (dependency injection at app startup)::

    from training_admin.config import get_config
    from training_admin.database import SupabaseAdmin
    from training_admin.logger import StructuredLogger

    admin = SupabaseAdmin(
        config=get_config(),
        logger=StructuredLogger(name="database"),
    )
    # Inject `admin` into repositories / services that need it.
"""

from __future__ import annotations

import threading
from typing import Optional

from supabase import Client as SupabaseClient
from supabase import create_client

from training_admin.config import AppConfig, ConfigurationError
from training_admin.logger import StructuredLogger


class SupabaseAdmin:
    """Holds the service-role Supabase client.

    Configuration is validated at construction time: missing credentials
    raise :class:`ConfigurationError` immediately instead of producing an
    unauthenticated client.  The client itself is created lazily on first
    access and reused afterwards; ``create_client`` performs no network I/O.

    Parameters
    ----------
    config:
        Application configuration holding ``SUPABASE_URL`` and
        ``SUPABASE_SERVICE_ROLE_KEY``.
    logger:
        A ``StructuredLogger`` instance for structured JSON log output.
    """

    def __init__(self, config: AppConfig, logger: StructuredLogger) -> None:
        config.validate_supabase_config()

        self._url: str = config.SUPABASE_URL.strip()
        self._service_role_key = config.SUPABASE_SERVICE_ROLE_KEY
        self._logger: StructuredLogger = logger
        self._lock: threading.Lock = threading.Lock()
        self._client: Optional[SupabaseClient] = None

    # ------------------------------------------------------------------
    # Public properties
    # ------------------------------------------------------------------

    @property
    def client(self) -> SupabaseClient:
        """Return the service-role Supabase client, creating it on first use.

        Raises
        ------
        ConfigurationError
            If ``supabase.create_client`` rejects the URL or key format.
        """
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = self._create_client()
        return self._client

    @property
    def url(self) -> str:
        """The Supabase project URL this accessor targets."""
        return self._url

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _create_client(self) -> SupabaseClient:
        try:
            client = create_client(
                self._url,
                self._service_role_key.get_secret_value(),
            )
        except Exception as exc:
            # supabase-py raises SupabaseException for a malformed URL or
            # key; the message never contains the key itself.
            self._logger.error("Supabase credential format error: %s", exc)
            raise ConfigurationError(
                f"Invalid Supabase configuration: {exc}"
            ) from exc

        self._logger.info(
            "Service-role Supabase client initialized.",
            extra={"supabase_url": self._url},
        )
        return client
