"""
Provider adapter - uniform wrapper around a transport's send function.

A ``Provider`` is either built directly around a caller-supplied coroutine
function or subclassed by a built-in transport that overrides ``send``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import httpx

from ..message import SendMailParams
from ..result import Result
from ..sender import DEFAULT_ID

logger = logging.getLogger("dynmail.providers")

USER_AGENT = "dynmail/1.0.0"

SendFunction = Callable[[SendMailParams], Awaitable[Result[Any, Any]]]


@dataclass(frozen=True)
class ProviderOptions:
    """Capability flags declared by a provider."""

    supports_attachments: bool = False


class Provider:
    """
    A registered outbound transport.

    Usage::

        async def send(params: SendMailParams) -> Result[None, Exception]:
            ...
            return Success()

        provider = Provider(
            id="internal",
            send=send,
            options=ProviderOptions(supports_attachments=False),
        )
    """

    provider_name: str = "none"

    def __init__(
        self,
        *,
        send: Optional[SendFunction] = None,
        options: Optional[ProviderOptions] = None,
        id: str = DEFAULT_ID,
        provider_name: Optional[str] = None,
    ):
        self.id = id
        if provider_name is not None:
            self.provider_name = provider_name
        self.options = options or ProviderOptions()
        self._send_fn = send

    async def send(self, params: SendMailParams) -> Result[Any, Any]:
        """
        Send one message.

        Returns:
            ``Success`` or a ``Failure`` carrying a classified error.
        """
        if self._send_fn is None:
            raise NotImplementedError(
                f"{self.__class__.__name__} has no send function"
            )
        return await self._send_fn(params)

    async def aclose(self) -> None:
        """Release transport resources (no-op for callable providers)."""

    async def __aenter__(self) -> "Provider":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(id={self.id!r}, "
            f"provider={self.provider_name!r})"
        )


class HTTPProvider(Provider):
    """
    Provider backed by an ``httpx.AsyncClient``.

    An injected client is borrowed and never closed; otherwise the provider
    creates one on first send and closes it in ``aclose()``.
    """

    def __init__(
        self,
        *,
        id: str = DEFAULT_ID,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        options: Optional[ProviderOptions] = None,
    ):
        super().__init__(
            id=id,
            options=options or ProviderOptions(supports_attachments=True),
        )
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

        # Metrics
        self._total_sent = 0
        self._total_errors = 0

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            kwargs: dict[str, Any] = {"headers": {"User-Agent": USER_AGENT}}
            if self.timeout is not None:
                kwargs["timeout"] = httpx.Timeout(self.timeout)
            self._client = httpx.AsyncClient(**kwargs)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
        logger.debug(
            f"{self.provider_name} provider '{self.id}' closed "
            f"(sent={self._total_sent}, errors={self._total_errors})"
        )
