"""Tests for the async variants of Result combinators and Result.try_async."""

import anyio
import pytest

from waymark import Err, Ok, Result


async def double(x):
    return x * 2


async def shout(e):
    return e.upper()


async def fail(*_):
    pytest.fail('callback should not be awaited')


class TestAsyncQueries:
    """Tests for is_ok_and_async / is_err_and_async."""

    @pytest.mark.asyncio
    async def test_is_ok_and_async(self):
        """The predicate is awaited only for Ok."""

        async def positive(x):
            return x > 0

        assert await Ok(1).is_ok_and_async(positive)
        assert not await Err('e').is_ok_and_async(fail)

    @pytest.mark.asyncio
    async def test_is_err_and_async(self):
        """The predicate is awaited only for Err."""

        async def is_timeout(e):
            return e == 'timeout'

        assert await Err('timeout').is_err_and_async(is_timeout)
        assert not await Ok(1).is_err_and_async(fail)


class TestAsyncTransforms:
    """Tests for map_async, map_err_async and the folding forms."""

    @pytest.mark.asyncio
    async def test_match_async(self):
        """Only the selected branch is awaited."""
        assert await Ok(2).match_async(double, fail) == 4
        assert await Err('e').match_async(fail, shout) == 'E'

    @pytest.mark.asyncio
    async def test_map_async(self):
        """map_async maps Ok only."""
        assert await Ok(2).map_async(double) == Ok(4)
        assert await Err('e').map_async(fail) == Err('e')

    @pytest.mark.asyncio
    async def test_map_err_async(self):
        """map_err_async maps Err only."""
        assert await Err('e').map_err_async(shout) == Err('E')
        assert await Ok(1).map_err_async(fail) == Ok(1)

    @pytest.mark.asyncio
    async def test_map_or_async(self):
        """map_or_async folds to a value."""
        assert await Ok(2).map_or_async(0, double) == 4
        assert await Err('e').map_or_async(0, fail) == 0

    @pytest.mark.asyncio
    async def test_map_or_else_async(self):
        """map_or_else_async awaits exactly one side."""
        assert await Ok(2).map_or_else_async(fail, double) == 4
        assert await Err('e').map_or_else_async(shout, fail) == 'E'

    @pytest.mark.asyncio
    async def test_inspect_variants(self):
        """inspect_async / inspect_err_async see their own variant."""
        seen = []

        async def record(x):
            seen.append(x)

        await (await Ok(1).inspect_async(record)).inspect_err_async(record)
        await (await Err('e').inspect_async(record)).inspect_err_async(record)
        assert seen == [1, 'e']


class TestAsyncControlFlow:
    """Tests for and_then_async, or_else_async and unwrap_or_else_async."""

    @pytest.mark.asyncio
    async def test_and_then_async(self):
        """and_then_async chains async fallible steps."""

        async def positive(x):
            return Ok(x) if x > 0 else Err('not positive')

        assert await Ok(1).and_then_async(positive) == Ok(1)
        assert await Ok(-1).and_then_async(positive) == Err('not positive')
        assert await Err('earlier').and_then_async(fail) == Err('earlier')

    @pytest.mark.asyncio
    async def test_or_else_async(self):
        """or_else_async recovers using the error."""

        async def recover(e):
            return Ok(len(e))

        assert await Err('abc').or_else_async(recover) == Ok(3)
        assert await Ok(1).or_else_async(fail) == Ok(1)

    @pytest.mark.asyncio
    async def test_unwrap_or_else_async(self):
        """The fallback is awaited only for Err."""

        async def length(e):
            return len(e)

        assert await Err('abcd').unwrap_or_else_async(length) == 4
        assert await Ok(1).unwrap_or_else_async(fail) == 1


class TestTryAsync:
    """Tests for Result.try_async."""

    @pytest.mark.asyncio
    async def test_try_async_ok(self):
        """A successful factory yields Ok."""

        async def value():
            await anyio.sleep(0)
            return 42

        assert await Result.try_async(value, str) == Ok(42)

    @pytest.mark.asyncio
    async def test_try_async_err(self, logged_exceptions):
        """A raising factory is projected and logged once."""

        async def boom():
            raise LookupError('gone')

        assert await Result.try_async(boom, lambda e: f'mapped {e}') == Err('mapped gone')
        assert len(logged_exceptions) == 1
        assert logged_exceptions[0][1].member_name == 'test_try_async_err'

    @pytest.mark.asyncio
    async def test_try_async_forwards_cancel_scope(self):
        """The cancel scope is passed to the factory untouched."""
        received = []

        async def factory(scope):
            received.append(scope)
            return 'done'

        with anyio.CancelScope() as scope:
            assert await Result.try_async(factory, str, scope) == Ok('done')
        assert received == [scope]

    @pytest.mark.asyncio
    async def test_try_async_propagates_cancellation(self, logged_exceptions):
        """Cancellation is never converted into an Err."""
        outcomes = []

        async def sleeper():
            await anyio.sleep(10)
            return 'late'

        with anyio.CancelScope() as scope:
            scope.cancel()
            outcomes.append(await Result.try_async(sleeper, str))

        assert outcomes == []
        assert scope.cancelled_caught
        assert logged_exceptions == []
