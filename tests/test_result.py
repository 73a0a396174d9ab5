"""Tests for Result type (Ok and Err)."""

import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tests.strategies import results, results_of_options
from waymark import (
    Err,
    Error,
    Nothing,
    Ok,
    Result,
    Some,
    UnmetExpectationError,
    UnwrapError,
    UnwrapPayloadError,
    collect,
)


class TestCreation:
    """Tests for Ok/Err construction."""

    def test_ok_and_err(self):
        """Factories build the variants."""
        assert Result.ok(1) == Ok(1)
        assert Result.err('e') == Err('e')

    def test_ok_accepts_default_values(self):
        """Unlike Some, Ok may hold a default value."""
        assert Ok(0).unwrap() == 0
        assert Ok(None).is_ok()

    def test_frozen(self):
        """Variants are immutable."""
        with pytest.raises(AttributeError):
            Ok(1).value = 2  # type: ignore[misc]

    def test_equality(self):
        """Equality is structural and variant-aware."""
        assert Ok(1) == Ok(1)
        assert Ok(1) != Err(1)
        assert Err('a') == Err('a')

    def test_pattern_matching(self):
        """Variants work in match statements."""
        match Err('boom'):
            case Ok(value):
                outcome = value
            case Err(error):
                outcome = f'failed: {error}'
        assert outcome == 'failed: boom'


class TestQueries:
    """Tests for is_ok / is_err and predicate queries."""

    def test_is_ok_is_err(self, sample_ok, sample_err):
        """State queries report the variant."""
        assert sample_ok.is_ok()
        assert not sample_ok.is_err()
        assert sample_err.is_err()
        assert not sample_err.is_ok()

    def test_is_ok_and(self):
        """is_ok_and applies the predicate to Ok only."""
        assert Ok(2).is_ok_and(lambda x: x == 2)
        assert not Err(2).is_ok_and(lambda x: x == 2)

    def test_is_err_and(self):
        """is_err_and applies the predicate to Err only."""
        assert Err('e').is_err_and(lambda e: e == 'e')
        assert not Ok('e').is_err_and(lambda e: e == 'e')


class TestMatch:
    """Tests for match."""

    def test_match(self):
        """Each variant invokes exactly one branch."""
        assert Ok(2).match(lambda v: v + 1, len) == 3
        assert Err('abc').match(lambda v: v + 1, len) == 3


class TestUnwrap:
    """Tests for the unwrap and expect families."""

    def test_unwrap_err_carries_payload(self):
        """Err.unwrap raises UnwrapPayloadError holding the error."""
        with pytest.raises(UnwrapPayloadError, match=re.escape('Unwrap called on an `Err` result.')) as info:
            Err('boom').unwrap()
        assert info.value.value == 'boom'
        assert isinstance(info.value, UnwrapError)

    def test_unwrap_err_on_ok(self):
        """Ok.unwrap_err raises UnwrapPayloadError holding the value."""
        with pytest.raises(UnwrapPayloadError, match=re.escape('Unwrap called on an `Ok` result.')) as info:
            Ok(5).unwrap_err()
        assert info.value.value == 5

    def test_expect(self):
        """expect includes the error in the message."""
        assert Ok(1).expect('needed') == 1
        with pytest.raises(UnmetExpectationError, match='needed: boom'):
            Err('boom').expect('needed')

    def test_expect_err(self):
        """expect_err includes the value in the message."""
        assert Err('e').expect_err('wanted failure') == 'e'
        with pytest.raises(UnmetExpectationError, match='wanted failure: 5'):
            Ok(5).expect_err('wanted failure')

    def test_unwrap_or_family(self):
        """Fallbacks apply only to Err."""
        assert Ok(1).unwrap_or(9) == 1
        assert Err('e').unwrap_or(9) == 9
        assert Err('abc').unwrap_or_else(len) == 3
        assert Ok(1).unwrap_or_else(lambda e: pytest.fail('lazy')) == 1
        assert Err('e').unwrap_or_default(int) == 0
        assert Err('e').unwrap_or_default() is None


class TestTransforms:
    """Tests for map, map_err and the folding forms."""

    def test_map(self):
        """map transforms Ok only."""
        assert Ok(2).map(lambda x: x * 2) == Ok(4)
        assert Err('e').map(lambda x: x * 2) == Err('e')

    def test_map_err(self):
        """map_err transforms Err only."""
        assert Err('e').map_err(str.upper) == Err('E')
        assert Ok(1).map_err(str.upper) == Ok(1)

    @given(results())
    def test_functor_composition(self, result):
        """map(f).map(g) == map(g . f) for Ok and Err."""

        def f(x):
            return x - 3

        def g(x):
            return x * 7

        assert result.map(f).map(g) == result.map(lambda x: g(f(x)))

    def test_map_or(self):
        """map_or folds to a value."""
        assert Ok(2).map_or(0, lambda x: x + 1) == 3
        assert Err('e').map_or(0, lambda x: x + 1) == 0

    def test_map_or_else_passes_error(self):
        """map_or_else hands the error to the error branch."""
        assert Ok(2).map_or_else(len, lambda x: x + 1) == 3
        assert Err('four').map_or_else(len, lambda x: x + 1) == 4

    def test_inspect(self):
        """inspect / inspect_err run on their own variant only."""
        seen = []
        Ok(1).inspect(seen.append).inspect_err(seen.append)
        Err('e').inspect(seen.append).inspect_err(seen.append)
        assert seen == [1, 'e']


class TestControlFlow:
    """Tests for and_, and_then, or_ and or_else."""

    def test_and(self):
        """and_ short-circuits on Err."""
        assert Ok(1).and_(Ok('b')) == Ok('b')
        assert Ok(1).and_(Err('x')) == Err('x')
        assert Err('e').and_(Ok('b')) == Err('e')

    def test_and_then(self):
        """and_then chains fallible steps."""

        def positive(x):
            return Ok(x) if x > 0 else Err('not positive')

        assert Ok(3).and_then(positive) == Ok(3)
        assert Ok(-3).and_then(positive) == Err('not positive')
        assert Err('earlier').and_then(positive) == Err('earlier')

    def test_or(self):
        """or_ short-circuits on Ok."""
        assert Ok(1).or_(Ok(2)) == Ok(1)
        assert Err('e').or_(Ok(2)) == Ok(2)
        assert Err('e').or_(Err('f')) == Err('f')

    def test_or_else(self):
        """or_else recovers from Err using the error."""
        assert Err('abc').or_else(lambda e: Ok(len(e))) == Ok(3)
        assert Ok(1).or_else(lambda e: pytest.fail('lazy')) == Ok(1)


class TestConversions:
    """Tests for get_ok, get_err, flatten and transpose."""

    def test_get_ok_get_err(self):
        """Each side converts to an Option, discarding the other."""
        assert Ok(1).get_ok() == Some(1)
        assert Ok(1).get_err() is Nothing
        assert Err('e').get_ok() is Nothing
        assert Err('e').get_err() == Some('e')

    def test_get_ok_default_value(self):
        """A default Ok value becomes Nothing."""
        assert Ok(0).get_ok() is Nothing

    def test_flatten(self):
        """flatten removes one level of nesting."""
        assert Ok(Ok(1)).flatten() == Ok(1)
        assert Ok(Err('inner')).flatten() == Err('inner')
        assert Err('outer').flatten() == Err('outer')
        assert Ok(Ok(Ok(1))).flatten() == Ok(Ok(1))

    def test_flatten_requires_nested_result(self):
        """flatten on a non-nested Ok is a type error."""
        with pytest.raises(TypeError):
            Ok(1).flatten()

    def test_transpose(self):
        """Result[Option] transposes into Option[Result]."""
        assert Ok(Some(1)).transpose() == Some(Ok(1))
        assert Ok(Nothing).transpose() is Nothing
        assert Err('e').transpose() == Some(Err('e'))

    @given(results_of_options())
    def test_transpose_involution(self, result):
        """transpose(transpose(x)) == x."""
        assert result.transpose().transpose() == result


class TestTry:
    """Tests for Result.try_."""

    def test_try_ok(self, logged_exceptions):
        """A successful factory yields Ok and logs nothing."""
        assert Result.try_(lambda: 42, str) == Ok(42)
        assert logged_exceptions == []

    def test_try_err_logs_once(self, logged_exceptions):
        """A raising factory is projected into Err and logged once."""
        error = RuntimeError('kaput')

        def boom():
            raise error

        result = Result.try_(boom, lambda e: 'mapped')
        assert result == Err('mapped')
        assert len(logged_exceptions) == 1
        exc, caller = logged_exceptions[0]
        assert exc is error
        assert caller.member_name == 'test_try_err_logs_once'
        assert 'Result.try_(boom' in caller.argument_expression
        assert caller.line_number > 0

    def test_try_with_error_value(self):
        """The projection can build structured errors."""
        result = Result.try_(lambda: int('x'), Error.from_exception)
        assert result.unwrap_err().code.value == 'ValueError'

    def test_try_does_not_catch_base_exceptions(self):
        """Only Exception subclasses become Err."""

        def interrupt():
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            Result.try_(interrupt, str)

    def test_try_without_logger(self):
        """No logger configured is fine."""
        assert Result.try_(lambda: 1 / 0, type) == Err(ZeroDivisionError)


class TestCollect:
    """Tests for collect."""

    def test_collect_all_ok(self):
        """All Ok values are gathered in order."""
        assert collect([Ok(1), Ok(2), Ok(3)]) == Ok([1, 2, 3])

    def test_collect_first_err(self):
        """The first Err short-circuits."""
        consumed = []

        def gen():
            for result in (Ok(1), Err('a'), Err('b')):
                consumed.append(result)
                yield result

        assert collect(gen()) == Err('a')
        assert len(consumed) == 2

    @given(st.lists(st.integers()))
    def test_collect_ok_list(self, values):
        """Collecting Ok-wrapped values returns the values."""
        assert collect(Ok(v) for v in values) == Ok(values)
