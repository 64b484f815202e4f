"""Tagged result type returned by every public switch operation."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class FailureKind(enum.Enum):
    """Why an operation produced no usable value."""

    NO_DATA = "no_data"
    AUTH = "auth"
    TRANSPORT = "transport"
    PARSE = "parse"
    INVALID_ARGUMENT = "invalid_argument"


@dataclass(frozen=True)
class SwitchResult(Generic[T]):
    """Value of a switch operation, tagged with the failure kind if any.

    A failed result still carries a usable ``value`` (an empty list for
    reports, ``""`` for raw page text) so callers that only care about the
    data can ignore the tag.

    Attributes:
        value: The operation's payload.
        failure: ``None`` on success, otherwise the :class:`FailureKind`.
        reason: Human-readable detail for logging; empty on success.
    """

    value: T
    failure: FailureKind | None = None
    reason: str = ""

    @classmethod
    def success(cls, value: T) -> SwitchResult[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, failure: FailureKind, value: T, reason: str = "") -> SwitchResult[T]:
        return cls(value=value, failure=failure, reason=reason)

    @property
    def ok(self) -> bool:
        """True if the operation succeeded."""
        return self.failure is None

    def __bool__(self) -> bool:
        return self.ok

    def map(self, fn: Callable[[T], U], default: U) -> SwitchResult[U]:
        """Apply *fn* to a successful value; keep the failure tag otherwise.

        Args:
            fn: Conversion applied to :attr:`value` when :attr:`ok`.
            default: Value carried by the converted result on failure.
        """
        if self.failure is None:
            return SwitchResult(value=fn(self.value))
        return SwitchResult(value=default, failure=self.failure, reason=self.reason)
