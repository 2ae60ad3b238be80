"""
Dynmail registry - routes send requests to a provider and a sender.

The registry owns an ordered list of providers and an ordered list of
senders, validated once at construction. Each ``send`` resolves a
provider, then a sender, then hands a ``SendMailParams`` to the provider.
What happens to a failure depends on the ``safe`` flag:

- safe mode: every failure is returned as ``Failure(error)``
- throwing mode (default): the error is raised; success returns ``Success()``

Usage::

    mail = dynmail(
        providers=[ResendProvider(), PlunkProvider(id="plunk")],
        senders=[Sender(email="hello@myapp.com", name="My App")],
    )
    await mail.send(to="user@example.com", subject="Hi", body="<p>Hi</p>")
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, TypeVar

from .faults import (
    AttachmentsNotSupportedError,
    DuplicateIdError,
    DynmailFault,
    EmptyRegistryError,
    ProviderNotFoundError,
    SenderNotFoundError,
)
from .message import Attachment, Recipients, SendMailParams
from .providers.base import Provider
from .result import Failure, Result, Success
from .sender import DEFAULT_ID, Sender

logger = logging.getLogger("dynmail.registry")

_Entry = TypeVar("_Entry", Provider, Sender)


def _validate_entries(entries: Sequence[Any], entry_kind: str) -> None:
    """Reject an empty list or a repeated id."""
    if not entries:
        raise EmptyRegistryError(entry_kind)

    seen: set[str] = set()
    for entry in entries:
        if entry.id in seen:
            raise DuplicateIdError(entry_kind, entry.id)
        seen.add(entry.id)


def _resolve(entries: Sequence[_Entry], entry_id: str, entry_kind: str) -> Optional[_Entry]:
    for entry in entries:
        if entry.id == entry_id:
            logger.debug(f"Resolved {entry_kind} '{entry_id}'")
            return entry

    if not entries:
        return None

    first = entries[0]
    logger.warning(
        f"{entry_kind.capitalize()} '{entry_id}' not registered; "
        f"falling back to first {entry_kind} '{first.id}'"
    )
    return first


def resolve_provider(providers: Sequence[Provider], provider_id: Optional[str] = None) -> Provider:
    """
    Find the provider registered under ``provider_id`` (default ``"default"``).

    An unmatched id falls back to the first registered provider.

    Raises:
        ProviderNotFoundError: ``providers`` is empty.
    """
    pid = provider_id if provider_id is not None else DEFAULT_ID
    provider = _resolve(providers, pid, "provider")
    if provider is None:
        raise ProviderNotFoundError(pid)
    return provider


def resolve_sender(senders: Sequence[Sender], sender_id: Optional[str] = None) -> Sender:
    """
    Find the sender registered under ``sender_id`` (default ``"default"``).

    An unmatched id falls back to the first registered sender.

    Raises:
        SenderNotFoundError: ``senders`` is empty.
    """
    sid = sender_id if sender_id is not None else DEFAULT_ID
    sender = _resolve(senders, sid, "sender")
    if sender is None:
        raise SenderNotFoundError(sid)
    return sender


class Dynmail:
    """
    Provider-agnostic mail client.

    Args:
        providers: Registered transports, in fallback order
        senders: Registered From identities, in fallback order
        safe: Return failures instead of raising them

    Raises:
        EmptyRegistryError: ``providers`` or ``senders`` is empty
        DuplicateIdError: two providers (or two senders) share an id
    """

    def __init__(
        self,
        providers: Iterable[Provider],
        senders: Iterable[Sender],
        *,
        safe: bool = False,
    ):
        self._providers: tuple[Provider, ...] = tuple(providers)
        self._senders: tuple[Sender, ...] = tuple(senders)

        _validate_entries(self._providers, "provider")
        _validate_entries(self._senders, "sender")

        self._safe = safe
        logger.debug(
            f"Dynmail ready: providers={[p.id for p in self._providers]} "
            f"senders={[s.id for s in self._senders]} safe={safe}"
        )

    @property
    def safe(self) -> bool:
        return self._safe

    @property
    def providers(self) -> tuple[Provider, ...]:
        return self._providers

    @property
    def senders(self) -> tuple[Sender, ...]:
        return self._senders

    # ── Send ────────────────────────────────────────────────────────

    async def send(
        self,
        *,
        to: Recipients,
        subject: str,
        body: str,
        provider: Optional[str] = None,
        sender: Optional[str] = None,
        text: Optional[str] = None,
        cc: Optional[Recipients] = None,
        bcc: Optional[Recipients] = None,
        reply_to: Optional[Recipients] = None,
        headers: Optional[Dict[str, str]] = None,
        attachments: Optional[List[Attachment]] = None,
    ) -> Result[Any, Any]:
        """
        Route and send one message.

        Args:
            to: Recipient address or addresses
            subject: Subject line
            body: HTML body
            provider: Provider id hint (default ``"default"``)
            sender: Sender id hint (default ``"default"``)

        Returns:
            ``Success`` in both modes; ``Failure`` in safe mode only.

        Raises:
            DynmailFault: In throwing mode, the routing or transport error.
        """
        result = await self._dispatch(
            provider_id=provider,
            sender_id=sender,
            to=to,
            subject=subject,
            html=body,
            text=text,
            cc=cc,
            bcc=bcc,
            reply_to=reply_to,
            headers=headers,
            attachments=list(attachments or []),
        )

        if isinstance(result, Failure) and not self._safe:
            result.unwrap()
        return result

    async def _dispatch(
        self,
        *,
        provider_id: Optional[str],
        sender_id: Optional[str],
        attachments: List[Attachment],
        **fields: Any,
    ) -> Result[Any, Any]:
        try:
            target = resolve_provider(self._providers, provider_id)
            from_ = resolve_sender(self._senders, sender_id)
            if attachments and not target.options.supports_attachments:
                raise AttachmentsNotSupportedError(target.id)
        except DynmailFault as e:
            logger.warning(f"Routing failed: {e.code} ({e.message})")
            return Failure(e)

        params = SendMailParams(sender=from_, attachments=attachments, **fields)
        result = await target.send(params)

        if isinstance(result, Success):
            logger.info(
                f"Sent via provider '{target.id}' ({target.provider_name}) "
                f"as sender '{from_.id}'"
            )
        else:
            logger.debug(
                f"Provider '{target.id}' ({target.provider_name}) returned failure: "
                f"{getattr(result.error, 'code', result.error)!s}"
            )
        return result

    # ── Lifecycle ───────────────────────────────────────────────────

    async def aclose(self) -> None:
        """Close every registered provider."""
        for p in self._providers:
            await p.aclose()

    async def __aenter__(self) -> "Dynmail":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"Dynmail(providers={[p.id for p in self._providers]}, "
            f"senders={[s.id for s in self._senders]}, safe={self._safe})"
        )


def dynmail(
    *,
    providers: Iterable[Provider],
    senders: Iterable[Sender],
    safe: bool = False,
) -> Dynmail:
    """Create a ``Dynmail`` client. See ``Dynmail`` for the arguments."""
    return Dynmail(providers, senders, safe=safe)
