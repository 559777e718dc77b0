"""Read side of the Promise/Future pair.

A Future is a placeholder for a value that becomes available at most once.
It starts pending and settles exactly once, either succeeded with a value
or failed with an exception. Consumers observe it; only the paired
Promise (through its private settler) can settle it.

Dispatch is inline: settling runs every registered observer on the
caller's stack, in registration order, before returning. An observer
registered after settlement runs immediately inside on_complete().

Example:
    >>> from pledge import Promise
    >>> promise = Promise()
    >>> future = promise.future
    >>> future.on_complete(lambda f: print("got", f.get_value()))
    >>> promise.succeed(42)
    got 42
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from pledge.foundation.config import get_settings
from pledge.foundation.errors import (
    Err,
    ErrorCode,
    InvalidArgumentError,
    InvalidStateError,
    Ok,
    Result,
)
from pledge.observability import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

T = TypeVar("T")

Observer = Callable[["Future[T]"], object]

_log = get_logger("pledge.future")


class FutureState(StrEnum):
    """Future lifecycle states."""
    PENDING = "pending"      # Not yet settled
    SUCCEEDED = "succeeded"  # Settled with a value
    FAILED = "failed"        # Settled with an exception


class Future(Generic[T]):
    """Placeholder for a value that is settled at most once.

    Obtain one from ``Promise.future``, or an already-settled one from
    ``Success()``/``Failure()``. A Future built directly stays pending
    forever since nothing holds its settler.
    """

    __slots__ = ("_state", "_value", "_error", "_observers", "__weakref__")

    def __init__(self) -> None:
        self._state = FutureState.PENDING
        self._value: T | None = None
        self._error: BaseException | None = None
        self._observers: list[Observer[T]] = []

    @classmethod
    def _open(cls) -> tuple[Future[T], _Settler[T]]:
        """Create a pending Future together with its only write capability."""
        future: Future[T] = cls()
        return future, _Settler(future)

    # ─────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────

    @property
    def state(self) -> FutureState:
        return self._state

    def is_complete(self) -> bool:
        """Whether the Future has settled, with either outcome."""
        return self._state is not FutureState.PENDING

    def succeeded(self) -> bool:
        return self._state is FutureState.SUCCEEDED

    def failed(self) -> bool:
        return self._state is FutureState.FAILED

    def get_value(self) -> T:
        """Return the success value.

        Raises:
            InvalidStateError: If the Future is pending (``PENDING``) or
                failed (``NO_VALUE``, chained to the stored failure).
        """
        if self._state is FutureState.SUCCEEDED:
            return self._value  # type: ignore[return-value]
        if self._state is FutureState.FAILED:
            raise InvalidStateError.create(
                "get_value", "future failed and has no value", ErrorCode.NO_VALUE, state=self._state.value,
            ) from self._error
        raise self._pending_error("get_value")

    def get_error(self) -> BaseException | None:
        """Return the failure, or None if the Future succeeded.

        Raises:
            InvalidStateError: If the Future is still pending
        """
        if self._state is FutureState.PENDING:
            raise self._pending_error("get_error")
        return self._error

    def outcome(self) -> Result[T, BaseException]:
        """Settled outcome as Ok(value) or Err(error).

        Raises:
            InvalidStateError: If the Future is still pending
        """
        if self._state is FutureState.SUCCEEDED:
            return Ok(self._value)  # type: ignore[arg-type]
        if self._state is FutureState.FAILED:
            return Err(self._error)  # type: ignore[arg-type]
        raise self._pending_error("outcome")

    def _pending_error(self, operation: str) -> InvalidStateError:
        return InvalidStateError.create(operation, "future is not settled yet", ErrorCode.PENDING, state=self._state.value)

    # ─────────────────────────────────────────────────────────────────
    # Observation
    # ─────────────────────────────────────────────────────────────────

    def on_complete(self, callback: Observer[T]) -> None:
        """Invoke callback with this Future once it settles.

        Pending: the callback is queued behind earlier registrations.
        Settled: the callback runs now, before on_complete() returns.
        """
        if self._state is FutureState.PENDING:
            self._observers.append(callback)
        else:
            self._dispatch((callback,))

    # ─────────────────────────────────────────────────────────────────
    # Settlement
    # ─────────────────────────────────────────────────────────────────

    def _settle(self, error: BaseException | None, value: T | None, operation: str) -> None:
        if self._state is not FutureState.PENDING:
            self._refuse(operation, "future is already settled")
            return

        if error is not None:
            self._state, self._error = FutureState.FAILED, error
        else:
            self._state, self._value = FutureState.SUCCEEDED, value

        observers, self._observers = self._observers, []
        _log.debug("future settled", state=self._state.value, observers=len(observers))
        self._dispatch(observers)

    def _refuse(self, operation: str, message: str) -> None:
        """Reject an unguarded settlement: raise when strict, otherwise warn and ignore."""
        if get_settings().strict_settlement:
            raise InvalidStateError.create(operation, message, ErrorCode.ALREADY_SETTLED, state=self._state.value)
        _log.warning("settlement ignored", operation=operation, reason=message, future=repr(self))

    def _dispatch(self, observers: Sequence[Observer[T]]) -> None:
        """Run observers in order. A raising observer does not stop the rest."""
        if not observers:
            return
        policy = get_settings().observer_errors
        failures: list[Exception] = []
        for callback in observers:
            try:
                callback(self)
            except Exception as exc:
                if policy == "log":
                    _log.exception("observer failed", exc, callback=_describe(callback), state=self._state.value)
                else:
                    failures.append(exc)
        if len(failures) == 1:
            raise failures[0]
        if failures:
            raise ExceptionGroup(f"{len(failures)} observers failed", failures)

    def __repr__(self) -> str:
        match self._state:
            case FutureState.SUCCEEDED: detail = f" value={self._value!r}"
            case FutureState.FAILED: detail = f" error={self._error!r}"
            case _: detail = f" observers={len(self._observers)}"
        return f"<Future {self._state.value}{detail}>"


class _Settler(Generic[T]):
    """Write capability bound to one Future.

    Only ``Future._open()`` creates one and only the owning Promise holds
    it. Calling it settles the Future with (error, value); ``refuse()``
    reports a settlement the Promise itself has to turn down.
    """

    __slots__ = ("_future",)

    def __init__(self, future: Future[T]) -> None:
        self._future = future

    def __call__(self, error: BaseException | None, value: T | None, operation: str = "resolve") -> None:
        self._future._settle(error, value, operation)

    def refuse(self, operation: str, message: str) -> None:
        self._future._refuse(operation, message)


# ═════════════════════════════════════════════════════════════════════════════
# Pre-settled Futures
# ═════════════════════════════════════════════════════════════════════════════


def Success(value: T = None) -> Future[T]:  # noqa: N802
    """Future already succeeded with value."""
    future, settle = Future._open()
    settle(None, value, "Success")
    return future


def Failure(error: BaseException) -> Future[T]:  # noqa: N802
    """Future already failed with error."""
    require_exception("Failure", error)
    future, settle = Future._open()
    settle(error, None, "Failure")
    return future


def require_exception(operation: str, error: object) -> None:
    """Reject anything that is not an exception instance as a failure."""
    if not isinstance(error, BaseException):
        raise InvalidArgumentError.create(
            operation,
            f"failure must be an exception instance, got {type(error).__name__}",
            ErrorCode.MISSING_ERROR,
        )


def _describe(callback: object) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)
