"""Unit tests for the HTTP routes."""

from unittest.mock import Mock, patch

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from training_admin.api import create_app
from training_admin.config import ConfigurationError
from training_admin.models import (
    ArchivedUser,
    CreatedAccount,
    Failure,
    Success,
    User,
    UserRecord,
    UserRole,
)
from training_admin.models.enums import ErrorCode
from training_admin.utils.formatting import DUPLICATE_EMAIL_MESSAGE


@pytest.fixture
def mock_provisioning_service():
    """Mock UserProvisioningService for testing."""
    return Mock()


@pytest.fixture
def mock_user_service():
    """Mock UserService for testing."""
    return Mock()


@pytest.fixture
def test_client(config, logger, mock_provisioning_service, mock_user_service):
    """Create TestClient with mocked services."""
    app = create_app(
        config=config,
        services={
            "user_provisioning_service": mock_provisioning_service,
            "user_service": mock_user_service,
        },
        logger=logger,
    )
    return TestClient(app)


def _account(role=UserRole.TRAINER):
    return CreatedAccount(
        id="8d0c4f3e-1111-4a2b-9c3d-000000000003",
        email="new.trainer@example.com",
        full_name="New Trainer",
        role=role,
    )


class TestCreateUserRoute:
    """Tests for POST /api/auth/create-user."""

    def test_success(self, test_client, mock_provisioning_service):
        mock_provisioning_service.create_user.return_value = Success(
            data=_account(UserRole.TRAINEE), status_code=201
        )

        response = test_client.post(
            "/api/auth/create-user",
            json={
                "email": "new.trainer@example.com",
                "password": "S3cure!pass",
                "fullName": "New Trainer",
                "role": "trainee",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["success"] is True
        assert body["data"]["role"] == "trainee"
        mock_provisioning_service.create_user.assert_called_once_with(
            email="new.trainer@example.com",
            password="S3cure!pass",
            full_name="New Trainer",
            role=UserRole.TRAINEE,
        )

    def test_role_and_name_are_optional(self, test_client, mock_provisioning_service):
        mock_provisioning_service.create_user.return_value = Success(
            data=_account(), status_code=201
        )

        response = test_client.post(
            "/api/auth/create-user",
            json={"email": "new.trainer@example.com", "password": "S3cure!pass"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        kwargs = mock_provisioning_service.create_user.call_args.kwargs
        assert kwargs["role"] is UserRole.TRAINER
        assert kwargs["full_name"] == ""

    def test_null_full_name_is_treated_as_empty(self, test_client, mock_provisioning_service):
        mock_provisioning_service.create_user.return_value = Success(
            data=_account(), status_code=201
        )

        response = test_client.post(
            "/api/auth/create-user",
            json={"email": "new.trainer@example.com", "password": "S3cure!pass", "fullName": None},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert mock_provisioning_service.create_user.call_args.kwargs["full_name"] == ""

    def test_duplicate_email_returns_409(self, test_client, mock_provisioning_service):
        mock_provisioning_service.create_user.return_value = Failure.of(
            ErrorCode.EMAIL_ALREADY_EXISTS, DUPLICATE_EMAIL_MESSAGE, 409
        )

        response = test_client.post(
            "/api/auth/create-user",
            json={"email": "ada@example.com", "password": "S3cure!pass"},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json() == {
            "success": False,
            "error": {"code": "email_already_exists", "message": DUPLICATE_EMAIL_MESSAGE},
        }

    def test_missing_password_is_a_400_envelope(self, test_client, mock_provisioning_service):
        response = test_client.post(
            "/api/auth/create-user",
            json={"email": "ada@example.com"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "validation_error"
        assert "password" in body["error"]["message"]
        mock_provisioning_service.create_user.assert_not_called()

    def test_unknown_role_is_rejected(self, test_client, mock_provisioning_service):
        response = test_client.post(
            "/api/auth/create-user",
            json={"email": "ada@example.com", "password": "pw", "role": "user"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_provisioning_service.create_user.assert_not_called()


class TestUserRoutes:
    """Tests for the /api/users administration routes."""

    def test_list_users(self, test_client, mock_user_service, user_row):
        record = UserRecord.from_user(User.model_validate(user_row), status="active")
        mock_user_service.list_users.return_value = Success(data=[record])

        response = test_client.get("/api/users")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["success"] is True
        assert body["data"][0]["email"] == "ada@example.com"
        assert body["data"][0]["role"] == "trainer"

    def test_get_user_not_found(self, test_client, mock_user_service):
        mock_user_service.get_user.return_value = Failure.of(
            ErrorCode.NOT_FOUND, "User not found.", 404
        )

        response = test_client.get("/api/users/missing")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"]["code"] == "not_found"

    def test_update_role(self, test_client, mock_user_service):
        mock_user_service.update_user_role.return_value = Failure.of(
            ErrorCode.NOT_FOUND, "User not found.", 404
        )

        test_client.patch("/api/users/u-1/role", json={"role": "admin"})

        mock_user_service.update_user_role.assert_called_once_with("u-1", UserRole.ADMIN)

    def test_archive_user(self, test_client, mock_user_service, archived_row):
        mock_user_service.archive_user.return_value = Success(
            data=ArchivedUser.model_validate(archived_row)
        )

        response = test_client.post("/api/users/u-2/archive")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["archived_at"].startswith("2024-02-01")
        mock_user_service.archive_user.assert_called_once_with("u-2")

    def test_list_archived_users(self, test_client, mock_user_service):
        mock_user_service.list_archived_users.return_value = Success(data=[])

        response = test_client.get("/api/archive-users")

        assert response.json() == {"success": True, "data": []}


class TestApplication:
    """Tests for the application factory."""

    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "ok"

    def test_missing_configuration_fails_at_startup(self, empty_config, logger):
        with pytest.raises(ConfigurationError):
            create_app(config=empty_config, logger=logger)

    def test_end_to_end_with_real_services(self, config, logger, mock_client, make_auth_user):
        mock_client.auth.admin.create_user.return_value = make_auth_user(role="admin")
        with patch("training_admin.database.create_client", return_value=mock_client):
            app = create_app(config=config, logger=logger)
            client = TestClient(app)

            response = client.post(
                "/api/auth/create-user",
                json={
                    "email": "new.admin@example.com",
                    "password": "S3cure!pass",
                    "full_name": "New Admin",
                    "role": "admin",
                },
            )

        assert response.status_code == status.HTTP_201_CREATED
        sent = mock_client.auth.admin.create_user.call_args.args[0]
        assert sent["email_confirm"] is True
        assert sent["user_metadata"] == {"full_name": "New Admin", "role": "admin"}
