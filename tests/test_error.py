"""Tests for Error and ErrorCode values."""

from enum import Enum

import pytest

from waymark import Error, ErrorCode, Err, Result
from waymark.config import configure


class OrderError(Enum):
    OUT_OF_STOCK = 1


class PaymentDeclinedException(Exception):
    pass


class TestErrorCode:
    """Tests for ErrorCode normalisation."""

    def test_trims_value(self):
        """Surrounding whitespace is removed."""
        assert ErrorCode('  orders.missing  ').value == 'orders.missing'

    @pytest.mark.parametrize('blank', ['', '   '])
    def test_blank_uses_fallback(self, blank):
        """Blank codes fall back to the configured code."""
        assert ErrorCode(blank).value == 'Unspecified'

    def test_blank_uses_configured_fallback(self):
        """The fallback code is read from the options."""
        configure(lambda o: o.use_fallback_error_code('E000'))
        assert ErrorCode('').value == 'E000'

    def test_str(self):
        """str() is the bare value."""
        assert str(ErrorCode('a.b')) == 'a.b'

    def test_from_enum(self):
        """Enum members derive TypeName.MEMBER codes."""
        assert ErrorCode.from_enum(OrderError.OUT_OF_STOCK) == ErrorCode('OrderError.OUT_OF_STOCK')

    def test_from_exception(self):
        """Exception types derive codes without the Exception suffix."""
        assert ErrorCode.from_exception(PaymentDeclinedException()) == ErrorCode('PaymentDeclined')


class TestError:
    """Tests for Error values."""

    def test_str(self):
        """str() renders [code] message."""
        assert str(Error(ErrorCode('auth.denied'), 'Access denied')) == '[auth.denied] Access denied'

    def test_string_code_is_converted(self):
        """A plain string code becomes an ErrorCode."""
        assert Error('  auth.denied ', 'no').code == ErrorCode('auth.denied')

    def test_blank_message_uses_fallback(self):
        """Blank messages fall back to the configured message."""
        assert Error('c', ' ').message == 'An unexpected error occurred.'
        configure(lambda o: o.use_fallback_error_message('Nope.'))
        assert Error('c', '').message == 'Nope.'

    def test_equality(self):
        """Errors compare structurally."""
        assert Error('a', 'm') == Error(ErrorCode('a'), 'm')
        assert Error('a', 'm') != Error('a', 'n')

    def test_from_enum(self):
        """Error.from_enum pairs a derived code with a message."""
        error = Error.from_enum(OrderError.OUT_OF_STOCK, 'Item 7 is gone')
        assert str(error) == '[OrderError.OUT_OF_STOCK] Item 7 is gone'

    def test_from_exception(self):
        """Error.from_exception uses the exception's type and message."""
        error = Error.from_exception(PaymentDeclinedException('card expired'))
        assert str(error) == '[PaymentDeclined] card expired'

    def test_from_exception_without_message(self):
        """An exception without a message gets the fallback message."""
        assert Error.from_exception(KeyError()).message == 'An unexpected error occurred.'

    def test_as_result_payload(self):
        """Errors travel in Err."""

        def charge() -> int:
            raise PaymentDeclinedException('limit')

        result: Result[int, Error] = Result.try_(charge, Error.from_exception)
        assert result == Err(Error('PaymentDeclined', 'limit'))
