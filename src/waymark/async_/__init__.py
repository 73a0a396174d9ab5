"""Awaitable wrappers for chaining Option/Result operations in async code."""

from waymark.async_.option import AsyncOption
from waymark.async_.result import AsyncResult

__all__ = ['AsyncOption', 'AsyncResult']
