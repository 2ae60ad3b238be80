"""
Console Provider - prints messages instead of sending them (development).

Useful for local development and testing. Nothing leaves the process;
every message is also kept in ``outbox`` for inspection.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, List, Optional

from ..message import SendMailParams, as_list
from ..result import Result, Success
from ..sender import DEFAULT_ID
from .base import Provider, ProviderOptions

logger = logging.getLogger("dynmail.providers.console")


class ConsoleProvider(Provider):
    """
    Provider that renders messages to a stream instead of sending them.

    Always succeeds.
    """

    provider_name = "console"

    def __init__(self, *, id: str = DEFAULT_ID, stream: Optional[IO[str]] = None):
        super().__init__(id=id, options=ProviderOptions(supports_attachments=True))
        self.stream = stream
        self.outbox: List[SendMailParams] = []

    def render(self, params: SendMailParams) -> str:
        separator = "=" * 72
        output = (
            f"\n{separator}\n"
            f"  CONSOLE MAIL (not actually sent)\n"
            f"{separator}\n"
            f"  Provider: {self.id}\n"
            f"  From:    {params.sender}\n"
            f"  To:      {', '.join(as_list(params.to))}\n"
        )
        if params.cc:
            output += f"  CC:      {', '.join(as_list(params.cc))}\n"
        if params.bcc:
            output += f"  BCC:     {', '.join(as_list(params.bcc))}\n"
        if params.reply_to:
            output += f"  Reply:   {', '.join(as_list(params.reply_to))}\n"
        output += f"  Subject: {params.subject}\n"
        if params.headers:
            output += f"  Headers: {params.headers}\n"
        if params.attachments:
            output += f"  Attachments: {[a.filename for a in params.attachments]}\n"
        output += f"{'-' * 72}\n"
        if params.text:
            output += f"{params.text}\n"
            output += f"{'-' * 72}\n"
        output += f"[HTML]\n{params.html}\n"
        output += f"{separator}\n"
        return output

    async def send(self, params: SendMailParams) -> Result[None, None]:
        """Print the message and record it in the outbox."""
        print(self.render(params), file=self.stream or sys.stdout)
        self.outbox.append(params)
        logger.info(
            f"Console mail recorded via '{self.id}' "
            f"(to={as_list(params.to)}, attachments={len(params.attachments)})"
        )
        return Success()

    def clear(self) -> None:
        self.outbox.clear()
