"""
Plunk Provider - async delivery through the Plunk ``/v1/send`` endpoint.

Supports self-hosted Plunk instances through ``base_url``, which may be a
string or a (coroutine) function resolved on first send.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ...config import EnvConfig
from ...credentials import LazyValue, ValueSource
from ...faults import MissingApiKeyConfigError
from ...message import SendMailParams
from ...result import Failure, Result, Success
from ...sender import DEFAULT_ID
from ..base import USER_AGENT, HTTPProvider, ProviderOptions
from .faults import (
    MAX_ATTACHMENTS,
    PlunkError,
    PlunkErrorKind,
    classify_plunk_error,
    network_error,
)

logger = logging.getLogger("dynmail.providers.plunk")

PLUNK_BASE_URL = "https://api.useplunk.com"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while sending the email."


class PlunkProvider(HTTPProvider):
    """
    Plunk mail provider.

    At most five attachments are accepted per message; larger sets fail
    locally without a network call.
    """

    provider_name = "plunk"

    def __init__(
        self,
        *,
        id: str = DEFAULT_ID,
        api_key: Optional[ValueSource] = None,
        base_url: Optional[ValueSource] = None,
        config: Optional[EnvConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(
            id=id,
            client=client,
            timeout=timeout,
            options=ProviderOptions(supports_attachments=True),
        )
        config = config or EnvConfig()
        source = api_key or config.get("PLUNK_API_KEY")
        if not source:
            raise MissingApiKeyConfigError("plunk")

        self._api_key = LazyValue(source)
        self._base_url = LazyValue(base_url or PLUNK_BASE_URL)

    @staticmethod
    def _build_payload(params: SendMailParams) -> dict:
        """Build the Plunk ``POST /v1/send`` body."""
        reply_to = params.reply_to
        if reply_to is not None and not isinstance(reply_to, str):
            reply_to = next(iter(reply_to), None)

        payload: dict[str, Any] = {
            "to": params.to,
            "subject": params.subject,
            "body": params.html or params.text or "",
            "from": params.sender.email,
        }
        optional = {
            "name": params.sender.name,
            "reply": reply_to,
            "headers": params.headers,
        }
        payload.update({k: v for k, v in optional.items() if v is not None})

        if params.attachments:
            payload["attachments"] = [
                {
                    "filename": att.filename,
                    "content": att.content if isinstance(att.content, str) else att.content_base64(),
                    **({"content_type": att.content_type} if att.content_type else {}),
                }
                for att in params.attachments
            ]

        return payload

    async def send(self, params: SendMailParams) -> Result[None, PlunkError]:
        """Send a single message via Plunk."""
        if len(params.attachments) > MAX_ATTACHMENTS:
            self._total_errors += 1
            logger.warning(
                f"Plunk provider '{self.id}' rejected {len(params.attachments)} "
                f"attachments (max {MAX_ATTACHMENTS})"
            )
            return Failure(PlunkError.from_kind(PlunkErrorKind.TOO_MANY_ATTACHMENTS))

        payload = self._build_payload(params)
        base_url = (await self._base_url.resolve()).rstrip("/")
        api_key = await self._api_key.resolve()
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

        try:
            response = await self._get_client().post(
                f"{base_url}/v1/send", json=payload, headers=headers,
            )
        except httpx.HTTPError as e:
            self._total_errors += 1
            logger.warning(f"Plunk request via '{self.id}' failed: {e!r}")
            return Failure(network_error())

        if response.is_success:
            self._total_sent += 1
            logger.info(f"Plunk sent via '{self.id}' (status={response.status_code})")
            return Success()

        return Failure(self._handle_error_response(response))

    def _handle_error_response(self, response: httpx.Response) -> PlunkError:
        """Classify a non-2xx Plunk response by status and message."""
        self._total_errors += 1

        try:
            body = response.json()
        except ValueError:
            body = None
        message = body.get("message") if isinstance(body, dict) else None
        if not isinstance(message, str):
            message = None

        error = classify_plunk_error(response.status_code, message or UNKNOWN_ERROR_MESSAGE)
        logger.warning(
            f"Plunk error via '{self.id}': HTTP {response.status_code} "
            f"-> {error.kind.name}"
        )
        return error

    def __repr__(self) -> str:
        return f"PlunkProvider(id={self.id!r})"
