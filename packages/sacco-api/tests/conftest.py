"""Shared fixtures for the API test suite."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sacco_api.config import ServerConfig
from sacco_api.errors import install_error_handlers
from sacco_api.routes import health_router, router, webhook_router
from sacco_sdk import EventHandler, EventRouter, WebhookVerifier

API_KEY = "test-api-key"
WEBHOOK_SECRET = "whsec-test"


@pytest.fixture
def mock_client() -> MagicMock:
    """Mock BitnobClient; the real one is exercised in the SDK tests."""
    return MagicMock()


@pytest.fixture
def handler() -> MagicMock:
    return MagicMock(spec=EventHandler)


@pytest.fixture
def app(mock_client: MagicMock, handler: MagicMock) -> FastAPI:
    """Build a test app with mocked dependencies and no lifespan."""

    app = FastAPI()

    app.state.server_config = ServerConfig(api_key=API_KEY)
    app.state.api_key = API_KEY
    app.state.client = mock_client
    app.state.verifier = WebhookVerifier(WEBHOOK_SECRET)
    app.state.events = EventRouter(handler)

    install_error_handlers(app)

    app.include_router(health_router)
    app.include_router(webhook_router)
    app.include_router(router)

    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-API-Key": API_KEY}
