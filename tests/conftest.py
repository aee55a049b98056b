"""
Global pytest configuration and fixtures for the Rehearsal Review API test suite.
"""

import os

# Set test environment variables before the app reads its settings
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only-32-chars"

from typing import Any, Dict  # noqa: E402
from unittest.mock import AsyncMock, MagicMock, Mock  # noqa: E402

import jwt  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from rehearsal.main import app  # noqa: E402

# Import fixtures from fixture modules
from tests.fixtures.auth_fixtures import *  # noqa: F403, F401, E402
from tests.fixtures.team_fixtures import *  # noqa: F403, F401, E402

PRISMA_MODELS = (
    "profile",
    "authlink",
    "team",
    "teammember",
    "project",
    "video",
    "videonote",
    "projectnote",
)


def _mock_model() -> Mock:
    model = Mock()
    model.find_unique = AsyncMock(return_value=None)
    model.find_first = AsyncMock(return_value=None)
    model.find_many = AsyncMock(return_value=[])
    model.create = AsyncMock()
    model.update = AsyncMock()
    model.delete = AsyncMock()
    model.delete_many = AsyncMock()
    model.count = AsyncMock(return_value=0)
    return model


@pytest.fixture
def mock_prisma() -> Mock:
    """
    Mock Prisma client for unit tests that don't need real database.

    Lookups return nothing by default. ``tx()`` yields the same mock so
    writes made inside a transaction are asserted on the usual accessors.
    """
    mock_db = Mock()
    for name in PRISMA_MODELS:
        setattr(mock_db, name, _mock_model())

    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=mock_db)
    transaction.__aexit__ = AsyncMock(return_value=False)
    mock_db.tx = Mock(return_value=transaction)

    return mock_db


@pytest.fixture
def mock_storage() -> Mock:
    """Mock StorageService with the default bucket names."""
    storage = Mock()
    storage.video_bucket = "videos"
    storage.screenshot_bucket = "screenshots"
    storage.create_signed_upload_url = AsyncMock(
        side_effect=lambda bucket, path: {
            "path": path,
            "signed_url": f"https://storage.test/upload/{bucket}/{path}",
            "token": "upload-token",
        }
    )
    storage.create_signed_url = AsyncMock(
        return_value="https://storage.test/signed/videos/file.mp4"
    )
    storage.get_public_url = Mock(
        side_effect=lambda bucket, path: f"https://storage.test/public/{bucket}/{path}"
    )
    storage.remove_files = AsyncMock(return_value=True)
    return storage


@pytest.fixture
def test_jwt_secret() -> str:
    """JWT secret for generating test tokens."""
    return "test-secret-key-for-testing-only-32-chars"


@pytest.fixture
def valid_jwt_payload() -> Dict[str, Any]:
    """Valid JWT payload for testing."""
    return {
        "sub": "test-user-id-123",
        "email": "test@example.com",
        "aud": "authenticated",
        "iss": "supabase",
    }


@pytest.fixture
def valid_jwt_token(test_jwt_secret: str, valid_jwt_payload: Dict[str, Any]) -> str:
    """Generate a valid JWT token for testing."""
    return jwt.encode(valid_jwt_payload, test_jwt_secret, algorithm="HS256")


@pytest.fixture
def auth_headers(valid_jwt_token: str) -> Dict[str, str]:
    """Generate authentication headers with valid JWT token."""
    return {"Authorization": f"Bearer {valid_jwt_token}"}


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client for API endpoint testing."""
    return TestClient(app)
