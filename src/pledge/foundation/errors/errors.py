"""Misuse errors raised by futures and promises.

Domain failures never pass through here: they are stored on the settled
Future as data. These types cover broken caller contracts only.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel


class ErrorCode(StrEnum):
    """Codes for contract violations on a Future or Promise."""
    PENDING = "PENDING"                  # accessor used before settlement
    NO_VALUE = "NO_VALUE"                # get_value() on a failed future
    ALREADY_SETTLED = "ALREADY_SETTLED"  # second unguarded settlement
    MISSING_ERROR = "MISSING_ERROR"      # fail() without an exception
    CHAIN_CYCLE = "CHAIN_CYCLE"          # promise chained to its own future
    EMPTY_INPUT = "EMPTY_INPUT"          # combinator given nothing to wait on


class FutureError(BaseModel):
    """Structured description of a misuse."""

    model_config = {"frozen": True}

    operation: str
    message: str
    code: ErrorCode
    state: str | None = None

    def render(self) -> str:
        where = f" [{self.state}]" if self.state else ""
        return f"{self.operation}(): {self.message} ({self.code}){where}"

    __str__ = render


class FutureException(Exception):
    """Exception wrapping a FutureError for raising."""

    def __init__(self, error: FutureError) -> None:
        self.error = error
        super().__init__(error.render())

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @classmethod
    def create(cls, operation: str, message: str, code: ErrorCode, *, state: str | None = None) -> Self:
        """Factory method for construction."""
        return cls(FutureError(operation=operation, message=message, code=code, state=state))


class InvalidStateError(FutureException, RuntimeError):
    """Operation not allowed in the Future's current state."""


class InvalidArgumentError(FutureException, ValueError):
    """Settlement or combinator called with an unusable argument."""
