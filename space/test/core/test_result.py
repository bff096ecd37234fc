"""Tests for space.core.result module."""

from space.core.result import Err, Ok, Result


def test_ok_carries_value() -> None:
    result = Ok(42)
    assert result.value == 42
    assert result == Ok(42)
    assert repr(result) == "Ok(42)"


def test_err_carries_error() -> None:
    result = Err("boom")
    assert result.error == "boom"
    assert result != Ok("boom")
    assert repr(result) == "Err('boom')"


def test_pattern_matching() -> None:
    result: Result[int, str] = Err("nope")
    match result:
        case Ok(value):
            outcome = f"ok {value}"
        case Err(error):
            outcome = f"err {error}"
    assert outcome == "err nope"
