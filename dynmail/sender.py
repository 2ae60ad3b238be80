"""
Sender - a named From identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


DEFAULT_ID = "default"


@dataclass(frozen=True)
class Sender:
    """
    Immutable From identity registered with a ``Dynmail`` instance.

    ``str(sender)`` is the From header value handed to transports that take
    a single string: the bare address when there is no display name,
    otherwise ``"Name" <address>``.

    Usage::

        support = Sender(id="support", name="Support Team", email="support@myapp.com")
        str(support)  # '"Support Team" <support@myapp.com>'
    """

    email: str
    name: Optional[str] = None
    id: str = DEFAULT_ID

    def __str__(self) -> str:
        if not self.name:
            return self.email
        return f'"{self.name}" <{self.email}>'

    @property
    def domain(self) -> str:
        return self.email.rsplit("@", 1)[-1] if "@" in self.email else "localhost"
