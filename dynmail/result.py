"""
Result contract - the two-variant envelope every send returns.

``Success`` and ``Failure`` are frozen dataclasses; ``Result`` is their
union. A transport's ``send`` returns ``Result[T, E]`` and never raises for
a classified failure; the ``Dynmail`` dispatch mode decides whether that
failure is handed back or raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Generic, Literal, Optional, TypeVar, Union


T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """
    Successful outcome.

    ``data`` is ``None`` when the operation has nothing to return.
    """
    data: Optional[T] = None

    @property
    def status(self) -> Literal["success"]:
        return "success"

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> Optional[T]:
        return self.data


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Failed outcome carrying a typed error value."""
    error: E

    @property
    def status(self) -> Literal["failure"]:
        return "failure"

    @property
    def is_success(self) -> bool:
        return False

    def unwrap(self):
        """Raise the carried error (or wrap non-exception errors)."""
        if isinstance(self.error, BaseException):
            raise self.error
        raise RuntimeError(f"unwrap() called on Failure({self.error!r})")


# Union type for operation outcomes
Result = Union[Success[T], Failure[E]]
AsyncResult = Awaitable[Result[T, E]]


def success(data: Optional[T] = None) -> Success[T]:
    return Success(data)


def failure(error: E) -> Failure[E]:
    return Failure(error)
