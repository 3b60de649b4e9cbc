"""
Repository Layer Package.

Provides data-access abstractions over the Supabase tables.
All database operations flow through repositories; services never build
PostgREST queries on ``SupabaseAdmin.client`` directly.

Usage:
    from training_admin.repositories.user_repository import UserRepository
"""

from training_admin.repositories.base_repository import BaseRepository
from training_admin.repositories.user_repository import (
    ArchiveUserRepository,
    UserRepository,
)

__all__ = [
    "ArchiveUserRepository",
    "BaseRepository",
    "UserRepository",
]
