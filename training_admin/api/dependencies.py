"""FastAPI dependency providers.

Services are built once by :func:`training_admin.api.app.create_app` and
stored on ``app.state``; these providers hand them to route handlers and
can be replaced through ``app.dependency_overrides`` in tests.
"""

from fastapi import Request

from training_admin.services.user_provisioning import UserProvisioningService
from training_admin.services.users import UserService


def get_user_provisioning_service(request: Request) -> UserProvisioningService:
    return request.app.state.services["user_provisioning_service"]


def get_user_service(request: Request) -> UserService:
    return request.app.state.services["user_service"]
