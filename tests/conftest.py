"""
Shared test fixtures and helpers for the dynmail test suite.
"""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from dynmail.config import EnvConfig
from dynmail.message import SendMailParams
from dynmail.providers.base import Provider, ProviderOptions
from dynmail.result import Success
from dynmail.sender import Sender


# ============================================================================
# HTTP Helpers
# ============================================================================


class RecordingTransport(httpx.MockTransport):
    """``httpx.MockTransport`` that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


def json_response(status_code: int = 200, body: Optional[Any] = None) -> Callable:
    """Handler answering every request with ``body`` as JSON."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body if body is not None else {})
    return handler


def text_response(status_code: int, text: str) -> Callable:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=text)
    return handler


def failing_handler(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def mock_client(handler: Callable) -> tuple[httpx.AsyncClient, RecordingTransport]:
    transport = RecordingTransport(handler)
    return httpx.AsyncClient(transport=transport), transport


# ============================================================================
# Provider Helpers
# ============================================================================


def recording_provider(
    id: str = "default",
    *,
    supports_attachments: bool = False,
    result: Any = None,
) -> tuple[Provider, List[SendMailParams]]:
    """A callable ``Provider`` that records its params and returns ``result``."""
    calls: List[SendMailParams] = []

    async def send(params: SendMailParams):
        calls.append(params)
        return result if result is not None else Success()

    provider = Provider(
        id=id,
        send=send,
        options=ProviderOptions(supports_attachments=supports_attachments),
        provider_name="test",
    )
    return provider, calls


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def empty_config() -> EnvConfig:
    """A configuration source with no variables at all."""
    return EnvConfig(environ={})


@pytest.fixture
def sender() -> Sender:
    return Sender(email="hello@myapp.com", name="My App")


@pytest.fixture
def params(sender: Sender) -> SendMailParams:
    return SendMailParams(
        sender=sender,
        to="user@example.com",
        subject="Welcome",
        html="<p>Welcome aboard</p>",
    )
