"""
Result envelope for the processor's batch boundary.

A batch action either completes or raises. ``try_result`` turns that into a
value: ``Ok`` wrapping the return value or ``Err`` wrapping the exception, so
the processor loop can decide what to report without an open-ended
``try``/``except`` around every call site.

Some failures must never become values. Configuration errors describe a
caller mistake and always propagate; pass their types as ``reraise``.

Architecture:
    ::

        ┌─────────────┐                    ┌─────────────┐
        │ f() returns │ ─────────────────> │  Ok(value)  │
        └─────────────┘                    └─────────────┘
        ┌─────────────┐                    ┌─────────────┐
        │ f() raises  │ ─────────────────> │  Err(exc)   │
        └─────────────┘                    └─────────────┘
        ┌──────────────────────┐
        │ f() raises reraise[] │ ────────> propagates unchanged
        └──────────────────────┘

Examples:
    >>> try_result(lambda: 1 + 1)
    Ok(2)
    >>> try_result(lambda: int("x")).is_err()
    True

Tags:
    result-pattern, error-handling, batchheap
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """Failed result containing the exception that was raised."""

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[T]


def try_result(
    f: Callable[[], T],
    *,
    reraise: tuple[type[BaseException], ...] = (),
) -> Result[T]:
    """
    Execute a function and wrap its outcome in a Result.

    Args:
        f: Zero-argument callable that may raise
        reraise: Exception types that must not be converted; they propagate
            to the caller unchanged

    Returns:
        Ok with the return value, or Err with the raised exception
    """
    try:
        return Ok(f())
    except Exception as e:
        if reraise and isinstance(e, reraise):
            raise
        return Err(e)


__all__ = ["Ok", "Err", "Result", "try_result"]
