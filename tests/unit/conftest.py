"""Unit test fixtures with mocked Supabase dependencies."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

USER_ROW = {
    "id": "8d0c4f3e-1111-4a2b-9c3d-000000000001",
    "email": "ada@example.com",
    "role": "trainer",
    "full_name": "Ada Lovelace",
    "program": "Cohort A",
    "other_program": None,
    "created_at": "2024-01-05T10:00:00+00:00",
    "updated_at": "2024-01-05T10:00:00+00:00",
}

ARCHIVED_ROW = {
    "id": "8d0c4f3e-1111-4a2b-9c3d-000000000002",
    "email": "grace@example.com",
    "role": "trainee",
    "full_name": "Grace Hopper",
    "program": None,
    "other_program": None,
    "created_at": "2023-06-01T08:00:00+00:00",
    "archivec_at": "2024-02-01T12:00:00+00:00",
}


@pytest.fixture
def config():
    """Provide a complete test configuration without reading .env."""
    from training_admin.config import AppConfig

    return AppConfig(
        _env_file=None,
        SUPABASE_URL="https://test-project.supabase.co",
        SUPABASE_SERVICE_ROLE_KEY="test-service-role-key",
        LOG_FILE="",
    )


@pytest.fixture
def empty_config():
    """Provide a configuration with no Supabase credentials."""
    from training_admin.config import AppConfig

    return AppConfig(
        _env_file=None,
        SUPABASE_URL="",
        SUPABASE_SERVICE_ROLE_KEY="",
        LOG_FILE="",
    )


@pytest.fixture
def logger():
    """Provide a console-only structured logger."""
    from training_admin.logger import StructuredLogger

    return StructuredLogger(name="tests", log_file="")


@pytest.fixture
def tables():
    """Per-table query builder mocks, keyed by table name."""
    return {"users": MagicMock(), "archive_users": MagicMock()}


@pytest.fixture
def mock_client(tables):
    """Provide a mocked supabase Client whose .table() dispatches by name."""
    client = MagicMock()
    client.table.side_effect = lambda name: tables[name]
    return client


@pytest.fixture
def admin(mock_client):
    """Provide a SupabaseAdmin stand-in exposing the mocked client."""
    from training_admin.database import SupabaseAdmin

    admin = MagicMock(spec=SupabaseAdmin)
    admin.client = mock_client
    return admin


@pytest.fixture
def user_row():
    """A fresh copy of a users row."""
    return dict(USER_ROW)


@pytest.fixture
def archived_row():
    """A fresh copy of an archive_users row."""
    return dict(ARCHIVED_ROW)


def _make_response(data):
    return SimpleNamespace(data=data, count=None)


@pytest.fixture
def make_response():
    """Build a PostgREST-style APIResponse stand-in."""
    return _make_response


def _make_auth_user(
    user_id="8d0c4f3e-1111-4a2b-9c3d-000000000003",
    email="new.trainer@example.com",
    full_name="New Trainer",
    role="trainer",
):
    """Build a supabase-auth UserResponse stand-in."""
    user = SimpleNamespace(
        id=user_id,
        email=email,
        user_metadata={"full_name": full_name, "role": role},
        created_at="2024-03-01T09:30:00+00:00",
        email_confirmed_at="2024-03-01T09:30:00+00:00",
    )
    return SimpleNamespace(user=user)


@pytest.fixture
def make_auth_user():
    """Build a supabase-auth UserResponse stand-in."""
    return _make_auth_user
