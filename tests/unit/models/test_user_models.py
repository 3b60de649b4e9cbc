"""Unit tests for the table and record models."""

import typing
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from training_admin.models import (
    ArchivedUser,
    ArchivedUserUpdate,
    CreateUserRequest,
    CreatedAccount,
    Failure,
    ServiceResult,
    Success,
    User,
    UserInsert,
    UserRecord,
    UserRole,
    UserUpdate,
)
from training_admin.models.enums import ErrorCode
from training_admin.services.user_provisioning import UserProvisioningService
from training_admin.services.users import UserService


class TestUserRole:
    """Tests for the canonical role enumeration."""

    def test_values_match_remote_enum(self):
        assert {r.value for r in UserRole} == {"admin", "trainer", "trainee"}

    def test_legacy_user_role_is_rejected(self):
        with pytest.raises(ValueError):
            UserRole("user")

    def test_roles_compare_equal_to_strings(self):
        assert UserRole.TRAINER == "trainer"


class TestUserModels:
    """Tests for the users table shapes."""

    def test_row_parses_supabase_payload(self, user_row):
        user = User.model_validate(user_row)

        assert user.role is UserRole.TRAINER
        assert user.program == "Cohort A"
        assert user.other_program is None
        assert user.created_at == datetime(2024, 1, 5, 10, tzinfo=timezone.utc)

    def test_row_rejects_unknown_role(self, user_row):
        user_row["role"] = "user"
        with pytest.raises(ValidationError):
            User.model_validate(user_row)

    def test_insert_requires_identity_fields(self):
        with pytest.raises(ValidationError):
            UserInsert(email="ada@example.com", role="admin")

        insert = UserInsert(id="u-1", email="ada@example.com", role="admin")
        assert insert.created_at is None

    def test_update_only_dumps_set_fields(self):
        update = UserUpdate(role=UserRole.ADMIN)
        assert update.model_dump(mode="json", exclude_unset=True) == {"role": "admin"}

    def test_to_archive_reuses_id(self, user_row):
        user = User.model_validate(user_row)
        archived_at = datetime(2024, 5, 1, tzinfo=timezone.utc)

        record = user.to_archive(archived_at=archived_at)
        payload = record.model_dump(mode="json", by_alias=True)

        assert payload["id"] == user.id
        assert payload["archivec_at"] == "2024-05-01T00:00:00Z"
        assert "archived_at" not in payload
        assert "updated_at" not in payload


class TestArchivedUserModels:
    """Tests for the archive_users table shapes."""

    def test_row_reads_remote_column_name(self, archived_row):
        archived = ArchivedUser.model_validate(archived_row)
        assert archived.archived_at == datetime(2024, 2, 1, 12, tzinfo=timezone.utc)

    def test_row_accepts_python_field_name(self, archived_row):
        archived_row["archived_at"] = archived_row.pop("archivec_at")
        archived = ArchivedUser.model_validate(archived_row)
        assert archived.role is UserRole.TRAINEE

    def test_update_uses_remote_column_name(self):
        update = ArchivedUserUpdate(archived_at=datetime(2024, 5, 1, tzinfo=timezone.utc))
        assert update.model_dump(mode="json", by_alias=True, exclude_unset=True) == {
            "archivec_at": "2024-05-01T00:00:00Z"
        }


class TestUserRecord:
    """Tests for the local presentation record."""

    def test_from_user(self, user_row):
        record = UserRecord.from_user(User.model_validate(user_row), status="active")

        assert record.auth_id == record.id
        assert record.status == "active"
        assert record.full_name == "Ada Lovelace"


class TestResultEnvelope:
    """Tests for Success / Failure serialisation."""

    def test_success_dump_hides_status_code(self):
        result = Success(data={"id": "u-1"}, status_code=201)

        assert result.status_code == 201
        assert result.model_dump(mode="json") == {"success": True, "data": {"id": "u-1"}}

    def test_failure_dump(self):
        result = Failure.of(ErrorCode.NOT_FOUND, "User not found.", 404)

        assert result.status_code == 404
        assert result.model_dump(mode="json") == {
            "success": False,
            "error": {"code": "not_found", "message": "User not found."},
        }

    def test_create_user_request_accepts_both_name_spellings(self):
        camel = CreateUserRequest.model_validate(
            {"email": "a@example.com", "password": "pw", "fullName": "Ada"}
        )
        snake = CreateUserRequest.model_validate(
            {"email": "a@example.com", "password": "pw", "full_name": "Ada"}
        )

        assert camel.full_name == snake.full_name == "Ada"
        assert camel.role is UserRole.TRAINER

    def test_create_user_request_allows_null_name(self):
        request = CreateUserRequest.model_validate(
            {"email": "a@example.com", "password": "pw", "fullName": None}
        )

        assert request.full_name is None


class TestServiceResultAnnotations:
    """Return annotations of the services resolve to a parameterised result."""

    @pytest.mark.parametrize(
        "method,payload",
        [
            (UserProvisioningService.create_user, CreatedAccount),
            (UserService.list_users, list[UserRecord]),
            (UserService.get_user, UserRecord),
            (UserService.update_user_role, UserRecord),
            (UserService.archive_user, ArchivedUser),
            (UserService.list_archived_users, list[ArchivedUser]),
        ],
    )
    def test_return_hint_resolves(self, method, payload):
        hint = typing.get_type_hints(method)["return"]

        assert typing.get_origin(hint) is ServiceResult
        assert typing.get_args(hint) == (payload,)

    def test_alias_expands_to_both_variants(self):
        variants = typing.get_args(ServiceResult.__value__)

        assert Failure in variants
        assert len(variants) == 2
