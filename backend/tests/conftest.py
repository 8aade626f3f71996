"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import (
    get_appwrite_client,
    get_cipher,
    get_dwolla_client,
    get_plaid_client,
)
from main import app
from services.page_cache import PageCache
# Pytest fixtures - imported to make them available to tests
from tests.fixtures import (  # noqa: F401
    bank_record,
    cipher,
    user_record,
)
from tests.fixtures.mocks import MockAppwriteClient, MockDwollaClient, MockPlaidClient


@pytest.fixture(name="appwrite")
def appwrite_fixture():
    """An empty in-memory Appwrite."""
    return MockAppwriteClient()


@pytest.fixture(name="mock_plaid_client")
def mock_plaid_client_fixture():
    return MockPlaidClient()


@pytest.fixture(name="mock_dwolla_client")
def mock_dwolla_client_fixture():
    return MockDwollaClient()


@pytest.fixture(name="client")
def client_fixture(appwrite, mock_plaid_client, mock_dwolla_client, cipher):
    """Create a test client with all external services mocked."""
    app.dependency_overrides[get_appwrite_client] = lambda: appwrite
    app.dependency_overrides[get_plaid_client] = lambda: mock_plaid_client
    app.dependency_overrides[get_dwolla_client] = lambda: mock_dwolla_client
    app.dependency_overrides[get_cipher] = lambda: cipher
    app.state.page_cache = PageCache()
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="seeded_user")
def seeded_user_fixture(appwrite):
    """A user document plus a live session secret."""
    return appwrite.add_user()


@pytest.fixture(name="auth_client")
def auth_client_fixture(client, seeded_user):
    """A test client carrying the seeded user's session cookie."""
    _, secret = seeded_user
    client.cookies.set("appwrite-session", secret)
    return client
