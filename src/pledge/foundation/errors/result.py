"""Result/Either type describing a settled outcome.

A settled Future holds exactly one of a value (Ok) or a failure (Err).
``Future.outcome()`` hands that back as a Result so observers can match on
it instead of probing accessors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar, cast

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")
F = TypeVar("F")


class Result(Generic[T, E]):
    """Discriminated union of success (Ok) or failure (Err).

    Examples:
        >>> Ok(42).map(lambda x: x * 2).unwrap()
        84
        >>> Err("failed").unwrap_or(0)
        0
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        """Private constructor. Use Ok() or Err() instead."""
        self._value: T | E = value
        self._is_ok: bool = is_ok

    def is_ok(self) -> bool:
        return self._is_ok

    def is_err(self) -> bool:
        return not self._is_ok

    # ─────────────────────────────────────────────────────────────────
    # Value Extraction
    # ─────────────────────────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Ok value.

        Raises:
            RuntimeError: If Result is Err
        """
        if self._is_ok:
            return cast(T, self._value)
        raise RuntimeError(f"Called unwrap() on Err value: {self._value!r}")

    def unwrap_err(self) -> E:
        """Extract Err value.

        Raises:
            RuntimeError: If Result is Ok
        """
        if not self._is_ok:
            return cast(E, self._value)
        raise RuntimeError(f"Called unwrap_err() on Ok value: {self._value!r}")

    def unwrap_or(self, default: T) -> T:
        return cast(T, self._value) if self._is_ok else default

    def ok(self) -> T | None:
        """Ok value, or None if Err."""
        return cast(T, self._value) if self._is_ok else None

    def err(self) -> E | None:
        """Err value, or None if Ok."""
        return cast(E, self._value) if not self._is_ok else None

    # ─────────────────────────────────────────────────────────────────
    # Transformations
    # ─────────────────────────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to an Ok value, pass Err through unchanged."""
        if self._is_ok:
            return Ok(f(cast(T, self._value)))
        return Err(cast(E, self._value))

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to an Err value, pass Ok through unchanged."""
        if not self._is_ok:
            return Err(f(cast(E, self._value)))
        return Ok(cast(T, self._value))

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        if self._is_ok:
            return f(cast(T, self._value))
        return Err(cast(E, self._value))

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Exhaustive case analysis over both variants.

        Example:
            >>> Ok(1).match(ok=lambda v: f"value {v}", err=lambda e: f"error {e}")
            'value 1'
        """
        if self._is_ok:
            return ok(cast(T, self._value))
        return err(cast(E, self._value))

    def to_tuple(self) -> tuple[E | None, T | None]:
        """Convert to an (error, value) pair, the shape Promise.resolve() takes."""
        if self._is_ok:
            return (None, cast(T, self._value))
        return (cast(E, self._value), None)

    # ─────────────────────────────────────────────────────────────────
    # Dunder Methods
    # ─────────────────────────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self._is_ok

    def __repr__(self) -> str:
        variant = "Ok" if self._is_ok else "Err"
        return f"{variant}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._is_ok == other._is_ok and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._is_ok, self._value))

    def __iter__(self) -> Iterator[T]:
        if self._is_ok:
            yield cast(T, self._value)


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    """Construct Ok variant (success)."""
    return Result(value, is_ok=True)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct Err variant (failure)."""
    return Result(error, is_ok=False)


def sequence(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Convert Results to a Result of list, failing on the first Err.

    Example:
        >>> sequence([Ok(1), Ok(2)]).unwrap()
        [1, 2]
    """
    values: list[T] = []
    for result in results:
        if result.is_err():
            return Err(result.unwrap_err())
        values.append(result.unwrap())
    return Ok(values)


def collect_results(results: Iterable[Result[T, E]]) -> Result[list[T], list[E]]:
    """Collect all Results, accumulating every error instead of failing fast."""
    values: list[T] = []
    errors: list[E] = []
    for result in results:
        if result.is_ok():
            values.append(result.unwrap())
        else:
            errors.append(result.unwrap_err())
    return Ok(values) if not errors else Err(errors)
