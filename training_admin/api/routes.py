"""HTTP routes for user provisioning and administration.

Every route answers with the same envelope:
``{"success": true, "data": ...}`` or ``{"success": false, "error": {...}}``,
using the HTTP status carried by the service result.
"""

from typing import Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from training_admin.api.dependencies import (
    get_user_provisioning_service,
    get_user_service,
)
from training_admin.models.service_models import (
    CreateUserRequest,
    Failure,
    Success,
    UpdateRoleRequest,
)
from training_admin.services.user_provisioning import UserProvisioningService
from training_admin.services.users import UserService

router = APIRouter(prefix="/api")


def render_result(result: Union[Success, Failure]) -> JSONResponse:
    """Serialise a service result into its JSON envelope and status code."""
    return JSONResponse(
        status_code=result.status_code,
        content=result.model_dump(mode="json"),
    )


# -----------------------
# Provisioning
# -----------------------
@router.post("/auth/create-user", tags=["Auth"])
def create_user(
    body: CreateUserRequest,
    service: UserProvisioningService = Depends(get_user_provisioning_service),
) -> JSONResponse:
    """
    Create a confirmed auth user with role and display-name metadata.
    Access control is handled by the deployment (server-to-server only).
    """
    result = service.create_user(
        email=body.email,
        password=body.password,
        full_name=body.full_name or "",
        role=body.role,
    )
    return render_result(result)


# -----------------------
# Administration
# -----------------------
@router.get("/users", tags=["Users"])
def list_users(service: UserService = Depends(get_user_service)) -> JSONResponse:
    return render_result(service.list_users())


@router.get("/users/{user_id}", tags=["Users"])
def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    return render_result(service.get_user(user_id))


@router.patch("/users/{user_id}/role", tags=["Users"])
def update_user_role(
    user_id: str,
    body: UpdateRoleRequest,
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    return render_result(service.update_user_role(user_id, body.role))


@router.post("/users/{user_id}/archive", tags=["Users"])
def archive_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Move the user into ``archive_users``."""
    return render_result(service.archive_user(user_id))


@router.get("/archive-users", tags=["Users"])
def list_archived_users(service: UserService = Depends(get_user_service)) -> JSONResponse:
    return render_result(service.list_archived_users())
