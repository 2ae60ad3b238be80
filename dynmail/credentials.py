"""
Lazy credential resolution.

API keys, AWS credentials and base URLs may be given as a plain string, a
function returning a string, or a coroutine function returning a string.
``LazyValue`` resolves the value on first use and memoizes it for the
lifetime of the provider instance.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Awaitable, Callable, Optional, Union

ValueSource = Union[str, Callable[[], str], Callable[[], Awaitable[str]]]


class LazyValue:
    """
    Memoized, possibly-asynchronous string value.

    Concurrent first calls are serialized by a lock, so the underlying
    function runs at most once per instance.
    """

    def __init__(self, source: ValueSource):
        self._source = source
        self._value: Optional[str] = source if isinstance(source, str) else None
        self._lock: Optional[asyncio.Lock] = None

    @property
    def resolved(self) -> bool:
        return self._value is not None

    async def resolve(self) -> str:
        if self._value is not None:
            return self._value

        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            if self._value is None:
                result = self._source()
                if inspect.isawaitable(result):
                    result = await result
                self._value = result
        return self._value

    def __repr__(self) -> str:
        state = "resolved" if self.resolved else "pending"
        return f"LazyValue({state})"
