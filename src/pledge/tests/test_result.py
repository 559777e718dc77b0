"""Tests for the Result type used as a settled outcome."""

from __future__ import annotations

import pytest

from pledge.foundation.errors import Err, Ok, Result, collect_results, sequence


def test_ok_accessors() -> None:
    result: Result[int, str] = Ok(42)
    assert result.is_ok()
    assert not result.is_err()
    assert result.unwrap() == 42
    assert result.ok() == 42
    assert result.err() is None
    assert bool(result)


def test_err_accessors() -> None:
    result: Result[int, str] = Err("failed")
    assert result.is_err()
    assert result.unwrap_err() == "failed"
    assert result.ok() is None
    assert result.unwrap_or(0) == 0
    assert not bool(result)


def test_unwrap_wrong_variant_raises() -> None:
    with pytest.raises(RuntimeError, match="unwrap"):
        Err("x").unwrap()
    with pytest.raises(RuntimeError, match="unwrap_err"):
        Ok(1).unwrap_err()


def test_map_and_map_err_touch_one_side() -> None:
    assert Ok(5).map(lambda x: x * 2) == Ok(10)
    assert Err("e").map(lambda x: x * 2) == Err("e")
    assert Err("e").map_err(str.upper) == Err("E")
    assert Ok(1).map_err(str.upper) == Ok(1)


def test_flat_map_short_circuits() -> None:
    half = lambda x: Ok(x // 2) if x % 2 == 0 else Err(f"odd: {x}")  # noqa: E731
    assert Ok(8).flat_map(half).flat_map(half) == Ok(2)
    assert Ok(6).flat_map(half).flat_map(half) == Err("odd: 3")


def test_match() -> None:
    assert Ok(1).match(ok=lambda v: f"v{v}", err=lambda e: f"e{e}") == "v1"
    assert Err(2).match(ok=lambda v: f"v{v}", err=lambda e: f"e{e}") == "e2"


def test_to_tuple_is_error_first() -> None:
    error = KeyError("k")
    assert Ok(3).to_tuple() == (None, 3)
    assert Err(error).to_tuple() == (error, None)


def test_iteration_yields_ok_value_only() -> None:
    assert list(Ok(1)) == [1]
    assert list(Err("e")) == []


def test_repr_and_hash() -> None:
    assert repr(Ok(1)) == "Ok(1)"
    assert repr(Err("e")) == "Err('e')"
    assert hash(Ok(1)) == hash(Ok(1))
    assert Ok(1) != Err(1)


def test_sequence() -> None:
    assert sequence([Ok(1), Ok(2), Ok(3)]) == Ok([1, 2, 3])
    assert sequence([Ok(1), Err("fail"), Err("later")]) == Err("fail")


def test_collect_results_accumulates_errors() -> None:
    assert collect_results([Ok(1), Err("e1"), Ok(3), Err("e2")]) == Err(["e1", "e2"])
    assert collect_results([Ok(1), Ok(2)]) == Ok([1, 2])
