"""
Service Layer Data Transfer Objects.

Pydantic models for validated input/output at service boundaries.
Every service method returns a ``ServiceResult``: either ``Success``
carrying data or ``Failure`` carrying a ``ServiceError``.  The two
variants are told apart by the literal ``success`` field, so callers
can handle both branches exhaustively.
"""

from __future__ import annotations

from datetime import datetime
from typing import Generic, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypeAliasType

from training_admin.models.enums import ErrorCode, UserRole

T = TypeVar("T")

__all__ = [
    "CreateUserRequest",
    "CreatedAccount",
    "Failure",
    "ServiceError",
    "ServiceResult",
    "Success",
    "UpdateRoleRequest",
]


# ---------------------------------------------------------------------------
# Result envelope
# ---------------------------------------------------------------------------

class ServiceError(BaseModel):
    """Structured error carried by a ``Failure``."""

    code: ErrorCode
    message: str
    status_code: int = Field(default=500, exclude=True)


class Success(BaseModel, Generic[T]):
    """Successful outcome carrying ``data``."""

    success: Literal[True] = True
    data: T
    status_code: int = Field(default=200, exclude=True)


class Failure(BaseModel):
    """Failed outcome carrying a structured ``error``."""

    success: Literal[False] = False
    error: ServiceError

    @property
    def status_code(self) -> int:
        return self.error.status_code

    @classmethod
    def of(cls, code: ErrorCode, message: str, status_code: int) -> "Failure":
        return cls(error=ServiceError(code=code, message=message, status_code=status_code))


# Parameterised alias so ``ServiceResult[CreatedAccount]`` resolves at runtime.
ServiceResult = TypeAliasType(
    "ServiceResult", Union[Success[T], Failure], type_params=(T,)
)


# ---------------------------------------------------------------------------
# User provisioning
# ---------------------------------------------------------------------------

class CreateUserRequest(BaseModel):
    """Request body for ``POST /api/auth/create-user``.

    ``role`` defaults to ``trainer`` so callers that only send email and
    password keep their previous behaviour.  ``fullName`` and
    ``full_name`` are both accepted.  A null or missing name
    is stored as an empty string.
    """

    model_config = ConfigDict(populate_by_name=True)

    email: str
    password: str
    full_name: Optional[str] = Field(default=None, alias="fullName")
    role: UserRole = UserRole.TRAINER


class CreatedAccount(BaseModel):
    """The auth account Supabase created, as returned to the caller."""

    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None
    email_confirmed_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# User administration
# ---------------------------------------------------------------------------

class UpdateRoleRequest(BaseModel):
    """Request body for ``PATCH /api/users/{user_id}/role``."""

    role: UserRole
