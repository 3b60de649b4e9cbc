"""
Base Repository.

Provides shared infrastructure for all repositories:
- SupabaseAdmin reference (service-role client)
- Logger reference
- Table-scoped query builder shortcut
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from supabase import Client as SupabaseClient

from training_admin.database import SupabaseAdmin
from training_admin.logger import StructuredLogger

if TYPE_CHECKING:
    from postgrest import SyncRequestBuilder


class BaseRepository:
    """Base class for all repositories. Receives dependencies via __init__.

    Repositories do not swallow errors: PostgREST and network exceptions
    propagate to the service layer, which classifies them into ``Failure``
    results.
    """

    TABLE: str = ""

    def __init__(self, admin: SupabaseAdmin, logger: StructuredLogger) -> None:
        self._admin = admin
        self._logger = logger

    @property
    def supabase(self) -> SupabaseClient:
        """Returns the service-role Supabase client."""
        return self._admin.client

    def _table(self) -> "SyncRequestBuilder":
        """Start a query against this repository's table."""
        return self.supabase.table(self.TABLE)
