"""
Business Logic Services Package.

Services depend on the Repository layer for table access and on
``SupabaseAdmin`` for the auth admin API.

The ``create_services()`` factory wires every repository and service
together, returning a typed dict the HTTP layer consumes without knowing
the internal dependency graph.
"""

from __future__ import annotations

from typing import TypedDict

from training_admin.database import SupabaseAdmin
from training_admin.logger import StructuredLogger, get_logger
from training_admin.repositories.user_repository import (
    ArchiveUserRepository,
    UserRepository,
)
from training_admin.services.user_provisioning import UserProvisioningService
from training_admin.services.users import UserService


class ServiceContainer(TypedDict):
    """Typed container for all application services."""

    user_provisioning_service: UserProvisioningService
    user_service: UserService


def create_services(
    admin: SupabaseAdmin,
    logger: StructuredLogger | None = None,
) -> ServiceContainer:
    """
    Wire all repositories and services together.

    This is the single composition root for the service layer.  The
    application factory calls this once at startup.

    Args:
        admin: Validated accessor for the service-role Supabase client.
        logger: Optional logger shared by every service; defaults to
            ``get_logger("services")``.

    Returns:
        ServiceContainer mapping service names to fully-wired instances.
    """
    logger = logger or get_logger("services")

    user_repo = UserRepository(admin=admin, logger=logger)
    archive_repo = ArchiveUserRepository(admin=admin, logger=logger)

    return ServiceContainer(
        user_provisioning_service=UserProvisioningService(admin=admin, logger=logger),
        user_service=UserService(
            repo=user_repo,
            archive_repo=archive_repo,
            admin=admin,
            logger=logger,
        ),
    )
