"""Pytest configuration and shared fixtures for waymark tests."""

import pytest


@pytest.fixture(autouse=True)
def _reset_options():
    """Every test starts from, and leaves behind, the default options."""
    from waymark.config import reset_options

    reset_options()
    yield
    reset_options()


@pytest.fixture
def logged_exceptions():
    """Install an exception logger that records (exception, caller) pairs."""
    from waymark.config import configure

    calls = []
    configure(lambda options: options.use_exception_logger(lambda exc, caller: calls.append((exc, caller))))
    return calls


@pytest.fixture
def sample_ok():
    """Sample Ok value for testing."""
    from waymark import Ok

    return Ok(42)


@pytest.fixture
def sample_err():
    """Sample Err value for testing."""
    from waymark import Err

    return Err('test error')


@pytest.fixture
def sample_some():
    """Sample Some value for testing."""
    from waymark import Some

    return Some('hello')


@pytest.fixture
def sample_nothing():
    """Sample Nothing value for testing."""
    from waymark import Nothing

    return Nothing
