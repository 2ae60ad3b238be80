"""
Message value objects shared by the dispatch engine and the transports.

``SendMailParams`` is what a provider receives: the public ``body`` has
become ``html`` and the sender id hint has been resolved to a ``Sender``.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from .sender import Sender

Recipients = Union[str, Sequence[str]]


@dataclass(frozen=True)
class Attachment:
    """
    A file attached to an outgoing message.

    Either ``content`` (text or raw bytes) or ``path`` should be set; what a
    transport does with a missing one is up to that transport's API.
    """

    filename: str
    content: Optional[Union[str, bytes]] = None
    path: Optional[str] = None
    content_type: Optional[str] = None

    def content_bytes(self) -> bytes:
        if self.content is None:
            return b""
        if isinstance(self.content, str):
            return self.content.encode("utf-8")
        return bytes(self.content)

    def content_base64(self) -> str:
        return base64.b64encode(self.content_bytes()).decode("ascii")


@dataclass(frozen=True)
class SendMailParams:
    """Transport-facing send request."""

    sender: Sender
    to: Recipients
    subject: str
    html: str
    text: Optional[str] = None
    cc: Optional[Recipients] = None
    bcc: Optional[Recipients] = None
    reply_to: Optional[Recipients] = None
    headers: Optional[Dict[str, str]] = None
    attachments: List[Attachment] = field(default_factory=list)


def as_list(value: Optional[Recipients]) -> List[str]:
    """Normalize a single address or a sequence of addresses to a list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)
