"""
Resend Provider - async delivery through the Resend HTTP API via httpx.

Usage::

    provider = ResendProvider(id="resend", api_key="re_xxx")
    result = await provider.send(params)
    await provider.aclose()
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

import httpx

from ...config import EnvConfig
from ...credentials import LazyValue, ValueSource
from ...faults import MissingApiKeyConfigError, NETWORK_ERROR_MESSAGE
from ...message import SendMailParams
from ...result import Failure, Result, Success
from ...sender import DEFAULT_ID
from ..base import USER_AGENT, HTTPProvider, ProviderOptions
from .faults import ResendError, classify_resend_error

logger = logging.getLogger("dynmail.providers.resend")

RESEND_API_URL = "https://api.resend.com/emails"


class ResendProvider(HTTPProvider):
    """
    Resend mail provider.

    The API key is taken from ``api_key`` (string, function or coroutine
    function) or from ``RESEND_API_KEY``; it is resolved on the first send
    and reused afterwards.
    """

    provider_name = "resend"

    def __init__(
        self,
        *,
        id: str = DEFAULT_ID,
        api_key: Optional[ValueSource] = None,
        config: Optional[EnvConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        api_url: str = RESEND_API_URL,
    ):
        super().__init__(
            id=id,
            client=client,
            timeout=timeout,
            options=ProviderOptions(supports_attachments=True),
        )
        config = config or EnvConfig()
        source = api_key or config.get("RESEND_API_KEY")
        if not source:
            raise MissingApiKeyConfigError("resend")

        self._api_key = LazyValue(source)
        self.api_url = api_url

    # ── Payload Construction ────────────────────────────────────────

    @staticmethod
    def _build_payload(params: SendMailParams) -> dict:
        """Build the Resend ``POST /emails`` body."""
        payload: dict[str, Any] = {
            "from": str(params.sender),
            "to": params.to,
            "subject": params.subject,
            "html": params.html,
        }
        optional = {
            "text": params.text,
            "cc": params.cc,
            "bcc": params.bcc,
            "reply_to": params.reply_to,
            "headers": params.headers,
        }
        payload.update({k: v for k, v in optional.items() if v is not None})

        if params.attachments:
            attachments: list[dict[str, Any]] = []
            for att in params.attachments:
                att_payload: dict[str, Any] = {"filename": att.filename}
                if isinstance(att.content, (bytes, bytearray)):
                    att_payload["content"] = att.content_base64()
                elif att.content is not None:
                    att_payload["content"] = att.content
                if att.path:
                    att_payload["path"] = att.path
                if att.content_type:
                    att_payload["content_type"] = att.content_type
                attachments.append(att_payload)
            payload["attachments"] = attachments

        return payload

    # ── Send ────────────────────────────────────────────────────────

    async def send(self, params: SendMailParams) -> Result[None, ResendError]:
        """Send a single message via Resend."""
        payload = self._build_payload(params)
        api_key = await self._api_key.resolve()
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Idempotency-Key": str(uuid.uuid4()),
            "User-Agent": USER_AGENT,
        }

        try:
            response = await self._get_client().post(
                self.api_url, json=payload, headers=headers,
            )
        except httpx.HTTPError as e:
            self._total_errors += 1
            logger.warning(f"Resend request via '{self.id}' failed: {e!r}")
            return Failure(classify_resend_error("network_error", NETWORK_ERROR_MESSAGE, 500))

        if response.is_success:
            self._total_sent += 1
            logger.info(f"Resend sent via '{self.id}' (status={response.status_code})")
            return Success()

        return Failure(self._handle_error_response(response))

    def _handle_error_response(self, response: httpx.Response) -> ResendError:
        """Classify a non-2xx Resend response."""
        self._total_errors += 1

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}

        code = body.get("code") or body.get("name") or "unknown_error"
        error = classify_resend_error(code, body.get("message"), response.status_code)

        logger.warning(
            f"Resend error via '{self.id}': HTTP {response.status_code} "
            f"-> {error.kind.name} ({error.code})"
        )
        return error

    def __repr__(self) -> str:
        return f"ResendProvider(id={self.id!r})"
