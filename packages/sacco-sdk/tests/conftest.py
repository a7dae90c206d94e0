"""Shared fixtures for the SDK test suite."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from unittest.mock import MagicMock

import pytest

from sacco_sdk.client import BitnobClient
from sacco_sdk.config import BitnobConfig


@dataclass
class FakeResponse:
    """Minimal stand-in for a curl_cffi Response."""

    status_code: int
    _json: Any = None
    text: str = ""

    def json(self) -> Any:
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


@pytest.fixture
def bitnob_config() -> BitnobConfig:
    return BitnobConfig(
        base_url="https://sandbox.bitnob.test",
        secret_key="sk-test",
        webhook_secret="whsec-test",
    )


@pytest.fixture
def session() -> MagicMock:
    return MagicMock()


@pytest.fixture
def client(bitnob_config: BitnobConfig, session: MagicMock) -> BitnobClient:
    c = BitnobClient(bitnob_config)
    c._session.close()
    c._session = session
    return c


@pytest.fixture
def respond(session: MagicMock) -> Callable[..., FakeResponse]:
    """Make the mocked session answer the next request with the given body."""

    def _respond(status_code: int, body: Any = None, text: str = "") -> FakeResponse:
        resp = FakeResponse(status_code, body, text)
        session.request.return_value = resp
        return resp

    return _respond
