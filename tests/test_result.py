"""Result variant and combinator tests."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st
import pytest

from sword_result import Err, Ok, UnwrapException, err, ok
from tests.helpers import AsyncRecorder, Recorder

pytestmark = pytest.mark.unit

payloads = st.one_of(st.integers(), st.text(max_size=8), st.none())


# --- Variant type ---


@given(x=payloads, y=payloads)
@settings(max_examples=50, deadline=None, derandomize=True)
def test_equality_is_structural_per_variant(x: object, y: object) -> None:
    """Property: equality follows the payload and never crosses variants."""
    assert (ok(x) == ok(y)) == (x == y)
    assert (err(x) == err(y)) == (x == y)
    assert ok(x) != err(y)
    assert err(x) != ok(x)


def test_constructors_match_classes() -> None:
    assert ok(1) == Ok(1)
    assert err("e") == Err("e")
    assert isinstance(ok(1), Ok | Err)


def test_variants_report_active_case() -> None:
    assert ok(1).is_ok() and not ok(1).is_err()
    assert err(1).is_err() and not err(1).is_ok()


def test_results_are_immutable() -> None:
    result = ok("value")
    with pytest.raises(AttributeError):
        result.value = "modified"  # type: ignore[misc]
    failure = err("boom")
    with pytest.raises(AttributeError):
        failure.error = "modified"  # type: ignore[misc]


def test_repr_shows_variant_and_payload() -> None:
    assert repr(ok(5)) == "Ok(5)"
    assert repr(err("x")) == "Err('x')"
    assert str(ok([1])) == "Ok([1])"


def test_hash_follows_payload() -> None:
    assert {ok(1), ok(1), err(1)} == {ok(1), err(1)}


def test_pattern_matching_reaches_payload() -> None:
    def describe(result: Ok[int] | Err[str]) -> str:
        match result:
            case Ok(value):
                return f"value={value}"
            case Err(error):
                return f"error={error}"

    assert describe(ok(3)) == "value=3"
    assert describe(err("bad")) == "error=bad"


# --- fold / match ---


def test_fold_invokes_only_ok_branch() -> None:
    on_ok, on_err = Recorder(returns="ok"), Recorder(returns="err")

    assert ok(5).fold(on_ok, on_err) == "ok"
    assert on_ok.calls == [5]
    assert not on_err.called


def test_fold_invokes_only_err_branch() -> None:
    on_ok, on_err = Recorder(returns="ok"), Recorder(returns="err")

    assert err("e").fold(on_ok, on_err) == "err"
    assert on_err.calls == ["e"]
    assert not on_ok.called


def test_match_is_keyword_alias_of_fold() -> None:
    assert ok(2).match(ok=lambda v: v * 10, err=lambda e: -1) == 20
    assert err("e").match(ok=lambda v: v, err=lambda e: e.upper()) == "E"


# --- map / map_err ---


def test_map_transforms_value_only() -> None:
    assert ok(2).map(lambda v: v + 1) == ok(3)


def test_map_on_err_keeps_same_error_object() -> None:
    error = ValueError("kept")
    fn = Recorder()

    mapped = err(error).map(fn)

    assert isinstance(mapped, Err)
    assert mapped.error is error
    assert not fn.called


def test_map_err_on_ok_keeps_same_value_object() -> None:
    value = ["kept"]
    fn = Recorder()

    mapped = ok(value).map_err(fn)

    assert mapped.value is value
    assert not fn.called


def test_map_err_and_map_error_transform_error() -> None:
    assert err("e").map_err(str.upper) == err("E")
    assert err(2).map_error(lambda e: e * 2) == err(4)


# --- and_then / or_else ---


def test_and_then_chain_short_circuits() -> None:
    second = Recorder(returns=ok(99))

    result = ok(1).and_then(lambda _: err("x")).and_then(second)

    assert result == err("x")
    assert not second.called


def test_and_then_passes_value_through() -> None:
    assert ok(1).and_then(lambda v: ok(v + 1)) == ok(2)


def test_or_else_recovers_only_err() -> None:
    recover = Recorder(returns=ok("recovered"))

    assert err("e").or_else(recover) == ok("recovered")
    assert recover.calls == ["e"]

    original = ok(1)
    assert original.or_else(Recorder()) is original


def test_combinators_do_not_catch_callback_exceptions() -> None:
    def explode(_: object) -> object:
        raise RuntimeError("callback failed")

    with pytest.raises(RuntimeError, match="callback failed"):
        ok(1).map(explode)
    with pytest.raises(RuntimeError, match="callback failed"):
        ok(1).and_then(explode)
    with pytest.raises(RuntimeError, match="callback failed"):
        err(1).or_else(explode)
    with pytest.raises(RuntimeError, match="callback failed"):
        ok(1).tap(explode)


# --- async combinators ---


@pytest.mark.asyncio
async def test_and_then_async_awaits_on_ok() -> None:
    step = AsyncRecorder(returns=ok("next"))

    assert await ok(1).and_then_async(step) == ok("next")
    assert step.calls == [1]


@pytest.mark.asyncio
async def test_and_then_async_skips_on_err() -> None:
    step = AsyncRecorder(returns=ok("next"))

    assert await err("e").and_then_async(step) == err("e")
    assert not step.called


@pytest.mark.asyncio
async def test_tap_async_returns_same_instance() -> None:
    side = AsyncRecorder()
    original = ok(7)

    assert await original.tap_async(side) is original
    assert side.calls == [7]

    failure = err("e")
    assert await failure.tap_async(side) is failure
    assert side.calls == [7]


# --- extraction ---


def test_unwrap_or_and_unwrap_or_else() -> None:
    assert ok(1).unwrap_or(0) == 1
    assert err("e").unwrap_or(0) == 0
    assert ok(1).unwrap_or_else(len) == 1
    assert err("abc").unwrap_or_else(len) == 3


def test_unwrap_returns_value_on_ok() -> None:
    assert ok("v").unwrap() == "v"
    assert ok("v").expect("never shown") == "v"


def test_unwrap_on_err_raises_with_error_payload() -> None:
    with pytest.raises(UnwrapException) as exc:
        err("disk full").unwrap()

    assert exc.value.payload == "disk full"
    assert exc.value.message == "Tried to unwrap Err"
    assert str(exc.value) == "Tried to unwrap Err ('disk full')"


def test_expect_uses_custom_message() -> None:
    with pytest.raises(UnwrapException, match="config must load") as exc:
        err(404).expect("config must load")

    assert exc.value.payload == 404


def test_unwrap_err_symmetry() -> None:
    assert err("e").unwrap_err() == "e"
    assert err("e").expect_err("unused") == "e"

    with pytest.raises(UnwrapException) as exc:
        ok(42).unwrap_err()
    assert exc.value.payload == 42
    assert exc.value.message == "Tried to unwrap_err Ok"

    with pytest.raises(UnwrapException, match="expected failure"):
        ok(42).expect_err("expected failure")


def test_or_none_accessors() -> None:
    assert ok(1).ok_or_none() == 1
    assert ok(1).err_or_none() is None
    assert err("e").ok_or_none() is None
    assert err("e").err_or_none() == "e"


@given(payload=payloads)
@settings(max_examples=25, deadline=None, derandomize=True)
def test_guard_populates_exactly_one_slot(payload: object) -> None:
    """Property: guard() mirrors the active variant into a two-slot tuple."""
    assert ok(payload).guard() == (payload, None)
    assert err(payload).guard() == (None, payload)


# --- side-effect passthrough ---


def test_inspect_and_tap_run_on_ok_only() -> None:
    seen = Recorder()
    original = ok("v")

    assert original.inspect(seen) is original
    assert original.tap(seen) is original
    assert seen.calls == ["v", "v"]

    failure = err("e")
    assert failure.inspect(seen) is failure
    assert failure.tap(seen) is failure
    assert seen.calls == ["v", "v"]


def test_inspect_err_runs_on_err_only() -> None:
    seen = Recorder()

    failure = err("e")
    assert failure.inspect_err(seen) is failure
    assert seen.calls == ["e"]

    original = ok("v")
    assert original.inspect_err(seen) is original
    assert seen.calls == ["e"]
