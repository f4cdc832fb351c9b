"""Behavior of the Result container and its helper constructors."""

import asyncio

import pytest

from mnotify.core.exceptions import MNotifyError, UnwrapError
from mnotify.core.types import (
    Failure,
    RequestDescriptor,
    Success,
    combine,
    err,
    ok,
    try_catch,
    try_catch_async,
)


class TestResultVariants:
    @pytest.mark.unit
    @pytest.mark.parametrize("value", [0, "", None, [1, 2], {"a": 1}])
    def test_success_is_ok_and_not_err(self, value):
        result = ok(value)
        assert result.is_ok()
        assert not result.is_err()

    @pytest.mark.unit
    @pytest.mark.parametrize("error", [MNotifyError("boom", 500), "text", 42])
    def test_failure_is_err_and_not_ok(self, error):
        result = err(error)
        assert result.is_err()
        assert not result.is_ok()

    @pytest.mark.unit
    def test_results_are_immutable(self):
        result = ok(1)
        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]


class TestTransformations:
    @pytest.mark.unit
    def test_map_applies_function_to_success(self):
        assert ok(2).map(lambda v: v * 10).unwrap() == 20

    @pytest.mark.unit
    def test_map_on_failure_keeps_the_same_error(self):
        error = MNotifyError("nope", 400)
        mapped = err(error).map(lambda v: v * 10)
        assert isinstance(mapped, Failure)
        assert mapped.error is error

    @pytest.mark.unit
    def test_map_err_only_touches_failures(self):
        assert ok(1).map_err(lambda e: "changed").unwrap() == 1
        assert err("a").map_err(lambda e: e + "b").error == "ab"

    @pytest.mark.unit
    def test_and_then_chains_and_short_circuits(self):
        def half(v: int):
            return ok(v // 2) if v % 2 == 0 else err(f"{v} is odd")

        assert ok(8).and_then(half).and_then(half).unwrap() == 2
        chained = ok(6).and_then(half).and_then(half)
        assert isinstance(chained, Failure)
        assert chained.error == "3 is odd"

    @pytest.mark.unit
    def test_match_dispatches_on_variant(self):
        assert ok(3).match(ok=lambda v: f"ok:{v}", err=lambda e: f"err:{e}") == "ok:3"
        assert err("x").match(ok=lambda v: f"ok:{v}", err=lambda e: f"err:{e}") == "err:x"


class TestUnwrapping:
    @pytest.mark.unit
    def test_unwrap_or_returns_default_only_on_failure(self):
        assert ok(5).unwrap_or(0) == 5
        assert err("bad").unwrap_or(0) == 0

    @pytest.mark.unit
    def test_unwrap_or_else_receives_the_error(self):
        assert err("bad").unwrap_or_else(lambda e: f"handled {e}") == "handled bad"
        assert ok("fine").unwrap_or_else(lambda e: "unused") == "fine"

    @pytest.mark.unit
    def test_unwrap_failure_raises_the_carried_exception(self):
        error = MNotifyError("Invalid sender ID", 400)
        with pytest.raises(MNotifyError) as exc_info:
            err(error).unwrap()
        assert exc_info.value is error

    @pytest.mark.unit
    def test_unwrap_failure_with_plain_value_raises_unwrap_error(self):
        with pytest.raises(UnwrapError) as exc_info:
            err({"code": 1}).unwrap()
        assert exc_info.value.error == {"code": 1}


class TestHelpers:
    @pytest.mark.unit
    def test_try_catch_captures_exceptions(self):
        assert try_catch(lambda: 1 + 1).unwrap() == 2
        result = try_catch(lambda: int("x"))
        assert isinstance(result, Failure)
        assert isinstance(result.error, ValueError)

    @pytest.mark.unit
    def test_try_catch_maps_errors_with_handler(self):
        result = try_catch(lambda: 1 / 0, lambda e: type(e).__name__)
        assert result.error == "ZeroDivisionError"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_try_catch_async(self):
        async def fine():
            await asyncio.sleep(0)
            return "done"

        async def broken():
            raise RuntimeError("down")

        assert (await try_catch_async(fine)).unwrap() == "done"
        failed = await try_catch_async(broken)
        assert isinstance(failed, Failure)
        assert str(failed.error) == "down"

    @pytest.mark.unit
    def test_combine_collects_values_or_returns_first_failure(self):
        assert combine([ok(1), ok(2)]).unwrap() == [1, 2]
        combined = combine([ok(1), err("first"), err("second")])
        assert isinstance(combined, Failure)
        assert combined.error == "first"
        assert isinstance(combine([]), Success)


class TestRequestDescriptor:
    @pytest.mark.unit
    def test_method_is_normalized_and_params_frozen(self):
        descriptor = RequestDescriptor("get", "/balance/sms", params={"a": 1})
        assert descriptor.method == "GET"
        with pytest.raises(TypeError):
            descriptor.params["a"] = 2  # type: ignore[index]

    @pytest.mark.unit
    def test_rejects_unknown_method(self):
        with pytest.raises(ValueError, match="method"):
            RequestDescriptor("FETCH", "/sms/quick")  # type: ignore[arg-type]

    @pytest.mark.unit
    def test_rejects_empty_path(self):
        with pytest.raises(TypeError, match="path"):
            RequestDescriptor("GET", "  ")
