"""
Tests for the Resend provider and its error taxonomy.

Covers:
    - Construction (explicit key, env fallback, missing key)
    - Request payload and headers
    - Lazy API key resolution
    - Error classification (catalogued codes, passthrough, unknown, network)
    - Client lifecycle
"""

from __future__ import annotations

import pytest

from conftest import failing_handler, json_response, mock_client, text_response
from dynmail.config import EnvConfig
from dynmail.faults import (
    NETWORK_ERROR_MESSAGE,
    FaultDomain,
    MissingApiKeyConfigError,
)
from dynmail.message import Attachment, SendMailParams
from dynmail.providers.resend import (
    RESEND_API_URL,
    ResendError,
    ResendErrorKind,
    ResendProvider,
    classify_resend_error,
)
from dynmail.result import Failure, Success
from dynmail.sender import Sender


def _provider(handler=None, **kwargs):
    client, transport = mock_client(handler or json_response(200, {"id": "msg_123"}))
    kwargs.setdefault("api_key", "re_test")
    return ResendProvider(client=client, **kwargs), transport


# ═══════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════


class TestResendProviderInit:

    def test_defaults(self):
        p = ResendProvider(api_key="re_test")
        assert p.id == "default"
        assert p.provider_name == "resend"
        assert p.options.supports_attachments is True
        assert p.api_url == RESEND_API_URL

    def test_custom_id(self):
        assert ResendProvider(id="transactional", api_key="re_test").id == "transactional"

    def test_missing_api_key(self, empty_config):
        with pytest.raises(MissingApiKeyConfigError) as exc:
            ResendProvider(config=empty_config)
        assert exc.value.provider == "resend"
        assert "RESEND_API_KEY" in str(exc.value)

    def test_process_env_fallback(self, monkeypatch):
        monkeypatch.setenv("RESEND_API_KEY", "re_env")
        ResendProvider()

    def test_repr(self):
        assert repr(ResendProvider(id="r", api_key="re_secret")) == "ResendProvider(id='r')"


# ═══════════════════════════════════════════════════════════════════
# Payload
# ═══════════════════════════════════════════════════════════════════


class TestResendPayload:

    @pytest.mark.asyncio
    async def test_minimal_payload(self, params):
        p, transport = _provider()

        result = await p.send(params)

        assert result == Success()
        request = transport.requests[0]
        assert request.method == "POST"
        assert str(request.url) == RESEND_API_URL
        assert transport.last_json == {
            "from": '"My App" <hello@myapp.com>',
            "to": "user@example.com",
            "subject": "Welcome",
            "html": "<p>Welcome aboard</p>",
        }

    @pytest.mark.asyncio
    async def test_full_payload(self):
        p, transport = _provider()
        params = SendMailParams(
            sender=Sender(email="hello@myapp.com"),
            to=["a@example.com", "b@example.com"],
            subject="Report",
            html="<p>See attached</p>",
            text="See attached",
            cc="cc@example.com",
            bcc=["bcc@example.com"],
            reply_to="reply@example.com",
            headers={"X-Entity-Ref-ID": "123"},
            attachments=[
                Attachment(filename="report.csv", content=b"a,b\n1,2\n", content_type="text/csv"),
                Attachment(filename="logo.png", path="https://cdn.example.com/logo.png"),
            ],
        )

        await p.send(params)

        body = transport.last_json
        assert body["from"] == "hello@myapp.com"
        assert body["to"] == ["a@example.com", "b@example.com"]
        assert body["text"] == "See attached"
        assert body["cc"] == "cc@example.com"
        assert body["bcc"] == ["bcc@example.com"]
        assert body["reply_to"] == "reply@example.com"
        assert body["headers"] == {"X-Entity-Ref-ID": "123"}
        assert body["attachments"] == [
            {"filename": "report.csv", "content": "YSxiCjEsMgo=", "content_type": "text/csv"},
            {"filename": "logo.png", "path": "https://cdn.example.com/logo.png"},
        ]

    @pytest.mark.asyncio
    async def test_headers(self, params):
        p, transport = _provider()

        await p.send(params)
        await p.send(params)

        first, second = transport.requests
        assert first.headers["Authorization"] == "Bearer re_test"
        assert first.headers["Content-Type"] == "application/json"
        assert first.headers["User-Agent"].startswith("dynmail/")
        assert first.headers["Idempotency-Key"] != second.headers["Idempotency-Key"]

    @pytest.mark.asyncio
    async def test_env_api_key(self, params):
        client, transport = mock_client(json_response(200, {"id": "x"}))
        p = ResendProvider(client=client, config=EnvConfig({"RESEND_API_KEY": "re_env"}, environ={}))

        await p.send(params)

        assert transport.requests[0].headers["Authorization"] == "Bearer re_env"

    @pytest.mark.asyncio
    async def test_callable_api_key_resolved_once(self, params):
        calls = []

        async def api_key():
            calls.append(1)
            return "re_lazy"

        p, transport = _provider(api_key=api_key)

        await p.send(params)
        await p.send(params)

        assert len(calls) == 1
        assert transport.requests[1].headers["Authorization"] == "Bearer re_lazy"


# ═══════════════════════════════════════════════════════════════════
# Error handling
# ═══════════════════════════════════════════════════════════════════


class TestResendErrors:

    @pytest.mark.asyncio
    async def test_validation_error_passes_message_through(self, params):
        p, _ = _provider(json_response(422, {
            "statusCode": 422,
            "name": "validation_error",
            "message": "Invalid `to` field.",
        }))

        result = await p.send(params)

        assert isinstance(result, Failure)
        error = result.error
        assert isinstance(error, ResendError)
        assert error.kind is ResendErrorKind.VALIDATION_ERROR
        assert error.message == "Invalid `to` field."
        assert error.status_code == 400
        assert error.code == "validation_error"

    @pytest.mark.asyncio
    async def test_catalogued_error_uses_fixed_message(self, params):
        p, _ = _provider(json_response(403, {"name": "invalid_api_key", "message": "nope"}))

        error = (await p.send(params)).error

        assert error.kind is ResendErrorKind.INVALID_API_KEY
        assert error.message == "API key is invalid."
        assert error.status_code == 403

    @pytest.mark.asyncio
    async def test_code_field_accepted(self, params):
        p, _ = _provider(json_response(429, {"code": "rate_limit_exceeded"}))

        error = (await p.send(params)).error

        assert error.kind is ResendErrorKind.RATE_LIMIT_EXCEEDED
        assert error.retryable is True

    @pytest.mark.asyncio
    async def test_unknown_code(self, params):
        p, _ = _provider(json_response(418, {"name": "teapot", "message": "I'm a teapot"}))

        error = (await p.send(params)).error

        assert error.kind is ResendErrorKind.UNKNOWN
        assert error.code == "teapot"
        assert error.message == "I'm a teapot"
        assert error.status_code == 418
        assert error.suggestion == "Please check the Resend documentation for more information."

    @pytest.mark.asyncio
    async def test_malformed_body(self, params):
        p, _ = _provider(text_response(502, "<html>Bad Gateway</html>"))

        error = (await p.send(params)).error

        assert error.kind is ResendErrorKind.UNKNOWN
        assert error.code == "unknown_error"
        assert error.message == "Unknown error occurred"
        assert error.status_code == 502

    @pytest.mark.asyncio
    async def test_network_error(self, params):
        p, _ = _provider(failing_handler)

        error = (await p.send(params)).error

        assert error.kind is ResendErrorKind.NETWORK_ERROR
        assert error.message == NETWORK_ERROR_MESSAGE
        assert error.status_code == 500
        assert error.domain == FaultDomain.NETWORK

    @pytest.mark.asyncio
    async def test_failure_logged_without_credentials(self, params, caplog):
        p, _ = _provider(json_response(401, {"name": "missing_api_key"}), api_key="re_secret")

        with caplog.at_level("WARNING", logger="dynmail.providers.resend"):
            await p.send(params)

        assert "MISSING_API_KEY" in caplog.text
        assert "re_secret" not in caplog.text
        assert "Welcome aboard" not in caplog.text


class TestClassifyResendError:

    @pytest.mark.parametrize("code,status", [
        ("invalid_idempotency_key", 400),
        ("validation_error", 400),
        ("missing_api_key", 401),
        ("restricted_api_key", 401),
        ("invalid_api_key", 403),
        ("not_found", 404),
        ("method_not_allowed", 405),
        ("invalid_idempotent_request", 409),
        ("concurrent_idempotent_requests", 409),
        ("invalid_attachment", 422),
        ("invalid_from_address", 422),
        ("invalid_access", 422),
        ("invalid_parameter", 422),
        ("invalid_region", 422),
        ("missing_required_field", 422),
        ("daily_quota_exceeded", 429),
        ("rate_limit_exceeded", 429),
        ("security_error", 451),
        ("application_error", 500),
        ("internal_server_error", 500),
        ("network_error", 500),
    ])
    def test_status_codes(self, code, status):
        error = classify_resend_error(code)
        assert error.code == code
        assert error.status_code == status
        assert error.kind is ResendErrorKind(code)

    def test_security_error_passthrough(self):
        error = classify_resend_error("security_error", "Blocked content")
        assert error.message == "Blocked content"

    def test_passthrough_without_message_uses_default(self):
        error = classify_resend_error("validation_error")
        assert error.message == "We found an error with one or more fields in the request."

    def test_unknown_defaults(self):
        error = classify_resend_error("something_new")
        assert error.kind is ResendErrorKind.UNKNOWN
        assert error.status_code == 500
        assert error.message == "Unknown error occurred"
        assert error.retryable is True

    def test_unknown_kind_value_is_not_a_wire_code(self):
        error = classify_resend_error("unknown", "raw", 400)
        assert error.kind is ResendErrorKind.UNKNOWN
        assert error.code == "unknown"
        assert error.retryable is False


# ═══════════════════════════════════════════════════════════════════
# Lifecycle
# ═══════════════════════════════════════════════════════════════════


class TestResendLifecycle:

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self):
        p, _ = _provider()
        client = p._get_client()

        await p.aclose()

        assert client.is_closed is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        p = ResendProvider(api_key="re_test", timeout=5.0)
        client = p._get_client()

        async with p:
            pass

        assert client.is_closed is True
        assert p._client is None
