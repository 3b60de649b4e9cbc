from __future__ import annotations

"""
Data Models Package.

Re-exports the Pydantic models for convenient imports:
    from training_admin.models import User, ArchivedUser, UserRecord, UserRole
    from training_admin.models import Success, Failure, ServiceResult
"""

from training_admin.models.enums import ErrorCode, UserRole
from training_admin.models.service_models import (
    CreatedAccount,
    CreateUserRequest,
    Failure,
    ServiceError,
    ServiceResult,
    Success,
    UpdateRoleRequest,
)
from training_admin.models.user import (
    ArchivedUser,
    ArchivedUserInsert,
    ArchivedUserUpdate,
    User,
    UserInsert,
    UserRecord,
    UserUpdate,
)

__all__ = [
    "ArchivedUser",
    "ArchivedUserInsert",
    "ArchivedUserUpdate",
    "CreatedAccount",
    "CreateUserRequest",
    "ErrorCode",
    "Failure",
    "ServiceError",
    "ServiceResult",
    "Success",
    "UpdateRoleRequest",
    "User",
    "UserInsert",
    "UserRecord",
    "UserRole",
    "UserUpdate",
]
