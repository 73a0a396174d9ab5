"""Tests for AsyncOption and AsyncResult wrappers."""

import asyncio
import gc
import inspect
import warnings

import pytest

from waymark import Err, Nothing, Ok, Option, Result, Some
from waymark.async_ import AsyncOption, AsyncResult


async def double(x):
    return x * 2


class TestAsyncResult:
    """Tests for AsyncResult wrapper."""

    @pytest.mark.asyncio
    async def test_await_ok(self):
        """Can await AsyncResult to get Ok."""

        async def get_ok() -> Result[int, str]:
            return Ok(42)

        assert await AsyncResult(get_ok()) == Ok(42)

    @pytest.mark.asyncio
    async def test_from_constructors(self):
        """from_ok / from_err / from_result wrap existing values."""
        assert await AsyncResult.from_ok(1) == Ok(1)
        assert await AsyncResult.from_err('e') == Err('e')
        assert await AsyncResult.from_result(Ok(2)) == Ok(2)

    @pytest.mark.asyncio
    async def test_chain(self):
        """Sync and async steps chain in order."""

        async def validate(x):
            return Ok(x) if x > 5 else Err('too small')

        result = await AsyncResult.from_ok(3).amap(lambda x: x + 1).amap_async(double).aand_then_async(validate)
        assert result == Ok(8)

    @pytest.mark.asyncio
    async def test_err_short_circuits(self):
        """Err skips the Ok-side steps."""
        calls = []
        result = await AsyncResult.from_err('e').amap(calls.append).aand_then(lambda x: Ok(calls.append(x)))
        assert result == Err('e')
        assert calls == []

    @pytest.mark.asyncio
    async def test_error_side(self):
        """amap_err and aor_else operate on Err."""
        assert await AsyncResult.from_err('e').amap_err(str.upper) == Err('E')
        assert await AsyncResult.from_err('abc').aor_else(lambda e: Ok(len(e))) == Ok(3)

        async def recover(e):
            return Ok(e * 2)

        assert await AsyncResult.from_err('ab').aor_else_async(recover) == Ok('abab')

    @pytest.mark.asyncio
    async def test_inspect(self):
        """ainspect / ainspect_err pass the Result through."""
        seen = []
        assert await AsyncResult.from_ok(1).ainspect(seen.append).ainspect_err(seen.append) == Ok(1)
        assert seen == [1]

    @pytest.mark.asyncio
    async def test_terminals(self):
        """amatch and the unwrap family resolve to plain values."""
        assert await AsyncResult.from_ok(2).amatch(lambda v: v * 10, len) == 20
        assert await AsyncResult.from_err('e').aunwrap_or(5) == 5
        assert await AsyncResult.from_err('abc').aunwrap_or_else(len) == 3

    @pytest.mark.asyncio
    async def test_option_conversions(self):
        """aok / aerr produce AsyncOptions."""
        assert await AsyncResult.from_ok(1).aok() == Some(1)
        assert await AsyncResult.from_ok(1).aerr() is Nothing
        assert await AsyncResult.from_err('e').aerr() == Some('e')

    @pytest.mark.asyncio
    async def test_flatten_and_transpose(self):
        """aflatten and atranspose mirror the sync operations."""
        assert await AsyncResult.from_ok(Ok(1)).aflatten() == Ok(1)
        assert await AsyncResult.from_ok(Some(1)).atranspose() == Some(Ok(1))

    @pytest.mark.asyncio
    async def test_azip_is_sequential(self):
        """azip awaits self first and skips other on Err."""
        order = []

        async def first():
            order.append('first')
            return Ok(1)

        async def second():
            order.append('second')
            return Ok('b')

        assert await AsyncResult(first()).azip(second()) == Ok((1, 'b'))
        assert order == ['first', 'second']

        skipped = second()
        assert await AsyncResult.from_err('e').azip(skipped) == Err('e')
        assert inspect.getcoroutinestate(skipped) == inspect.CORO_CLOSED
        assert order == ['first', 'second']


class TestAsyncOption:
    """Tests for AsyncOption wrapper."""

    @pytest.mark.asyncio
    async def test_from_constructors(self):
        """from_some / from_nothing / from_option wrap existing values."""
        assert await AsyncOption.from_some(1) == Some(1)
        assert await AsyncOption.from_nothing() is Nothing
        assert await AsyncOption.from_option(Some('x')) == Some('x')

    @pytest.mark.asyncio
    async def test_chain(self):
        """Steps compose in order."""

        async def is_even(x):
            return x % 2 == 0

        option = await AsyncOption.from_some(3).amap(lambda x: x + 1).afilter_async(is_even).amap_async(double)
        assert option == Some(8)

    @pytest.mark.asyncio
    async def test_nothing_short_circuits(self):
        """Nothing skips every Some-side step."""
        calls = []
        option = await AsyncOption.from_nothing().amap(calls.append).ainspect(calls.append).afilter(bool)
        assert option is Nothing
        assert calls == []

    @pytest.mark.asyncio
    async def test_and_then_and_or_else(self):
        """aand_then / aor_else and their async forms."""

        async def lookup(key):
            return Option.of({'a': 1}.get(key))

        async def fallback():
            return Some(0.5)

        assert await AsyncOption.from_some('a').aand_then_async(lookup) == Some(1)
        assert await AsyncOption.from_some('a').aand_then(lambda k: Nothing) is Nothing
        assert await AsyncOption.from_nothing().aor_else(lambda: Some(2)) == Some(2)
        assert await AsyncOption.from_nothing().aor_else_async(fallback) == Some(0.5)

    @pytest.mark.asyncio
    async def test_result_conversions(self):
        """aok_or / aok_or_else / atranspose produce AsyncResults."""
        assert await AsyncOption.from_some(1).aok_or('missing') == Ok(1)
        assert await AsyncOption.from_nothing().aok_or_else(lambda: 'missing') == Err('missing')
        assert await AsyncOption.from_option(Some(Ok(1))).atranspose() == Ok(Some(1))

    @pytest.mark.asyncio
    async def test_zip(self):
        """azip / azip_with pair two Somes."""
        assert await AsyncOption.from_some(1).azip(AsyncOption.from_some(2)) == Some((1, 2))
        assert await AsyncOption.from_some(1).azip_with(AsyncOption.from_some(2), max) == Some(2)
        assert await AsyncOption.from_some(1).azip(AsyncOption.from_nothing()) is Nothing

    @pytest.mark.asyncio
    async def test_terminals(self):
        """amatch and the unwrap family resolve to plain values."""

        async def fallback():
            return 'async default'

        assert await AsyncOption.from_some(2).amatch(lambda v: v * 10, lambda: -1) == 20
        assert await AsyncOption.from_nothing().aunwrap_or('d') == 'd'
        assert await AsyncOption.from_nothing().aunwrap_or_else(lambda: 'lazy') == 'lazy'
        assert await AsyncOption.from_nothing().aunwrap_or_else_async(fallback) == 'async default'
        assert await AsyncOption.from_option(Some(Some(1))).aflatten() == Some(1)


class TestSkippedAwaitables:
    """Short-circuited zips release the awaitable they never await."""

    @pytest.mark.asyncio
    async def test_no_never_awaited_warnings(self):
        """Skipping other leaves no 'never awaited' RuntimeWarning behind."""

        async def pending_result():
            return Ok('b')

        async def pending_option():
            return Some('b')

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            assert await AsyncResult.from_err('e').azip(pending_result()) == Err('e')
            assert await AsyncOption.from_nothing().azip(pending_option()) is Nothing
            assert await AsyncOption.from_nothing().azip_with(pending_option(), max) is Nothing
            assert await AsyncOption.from_nothing().azip(AsyncOption.from_some(2)) is Nothing
            assert await AsyncResult.from_err('e').azip(AsyncResult.from_ok(2)) == Err('e')
            gc.collect()

        assert [w for w in caught if issubclass(w.category, RuntimeWarning)] == []

    @pytest.mark.asyncio
    async def test_option_skipped_coroutine_is_closed(self):
        """AsyncOption.azip and azip_with close the skipped coroutine."""
        zipped = AsyncOption.from_some(1).azip(AsyncOption.from_some(2))
        assert await zipped == Some((1, 2))

        async def other():
            return Some('x')

        skipped = other()
        assert await AsyncOption.from_nothing().azip_with(skipped, max) is Nothing
        assert inspect.getcoroutinestate(skipped) == inspect.CORO_CLOSED

    @pytest.mark.asyncio
    async def test_tasks_are_left_alone(self):
        """Non-coroutine awaitables are not cancelled or closed."""
        task = asyncio.ensure_future(AsyncOption.from_some(1))
        assert await AsyncOption.from_nothing().azip(task) is Nothing
        assert not task.cancelled()
        assert await task == Some(1)
