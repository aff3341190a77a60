"""
Structured error types for batchheap.

Every error raised by the package carries a category, structured batch
context, and an optional chained cause. The split that matters most at
runtime is between configuration errors, which always reach the caller, and
operation errors, which the processor traps at its batch boundary.

Manifesto:
    - **Typed Error Hierarchy:** Configuration vs. operation failures
    - **Rich Context:** Errors carry the batch and property they refer to
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                     BatchHeapError                        │
        │            (category, context, cause)                     │
        ├──────────────────────────────────────────────────────────┤
        │  ConfigError (CONFIG)          OperationError (OPERATION) │
        │       │                              │                    │
        │  InvalidConfigError            HeapCapacityError          │
        │  BatchSizeError                PropertyStateError         │
        │  CapacityExceededError         ElementTypeError           │
        └──────────────────────────────────────────────────────────┘

Examples:
    Adding context to an error:

    >>> error = PropertyStateError("is_even", 4)
    >>> error.with_context(batch_index=3, total_batches=5)
    PropertyStateError(...)
    >>> error.context.batch_index
    3

    Unwinding a chain of causes:

    >>> try:
    ...     raise ValueError("bad element")
    ... except ValueError as e:
    ...     error = OperationError("Classify failed", cause=e)
    >>> list(iter_error_messages(error))
    ['Classify failed', 'bad element']

Guardrails:
    ❌ DON'T: Raise ConfigError from inside an operation's action to signal
       a data problem; it will not be trapped
    ✅ DO: Raise OperationError (or let the underlying exception escape)

Tags:
    error-handling, exception-hierarchy, error-context, batchheap

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and reporting."""

    CONFIG = "CONFIG"
    OPERATION = "OPERATION"
    STORAGE = "STORAGE"
    STATE = "STATE"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured context attached to an error.

    Attributes:
        operation: Name of the operation being performed
        batch_index: 1-based index of the batch that failed
        total_batches: Number of batches in the run
        property_name: Property the failing call targeted
        position: Heap position the failing call targeted
        metadata: Additional key-value pairs
    """

    operation: str | None = None
    batch_index: int | None = None
    total_batches: int | None = None
    property_name: str | None = None
    position: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["operation", "batch_index", "total_batches", "property_name", "position"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class BatchHeapError(Exception):
    """
    Base exception for all batchheap errors.

    Subclasses set ``default_category`` to classify themselves. The optional
    ``cause`` is also chained as ``__cause__`` so tracebacks and
    :func:`iter_error_messages` see it.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> BatchHeapError:
        """
        Add context to this error (fluent API).

        Unknown keys land in ``context.metadata``.
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS (never trapped)
# =============================================================================


class ConfigError(BatchHeapError):
    """
    Configuration error.

    Raised before any batch runs. The processor never converts these into a
    boolean outcome.
    """

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


class BatchSizeError(ConfigError):
    """Batch size is greater than the number of items to process."""

    def __init__(self, batch_size: int, item_count: int):
        self.batch_size = batch_size
        self.item_count = item_count
        super().__init__(
            f"Batch size {batch_size} is greater than count of items received {item_count}"
        )


class CapacityExceededError(ConfigError):
    """More items were received than the heap can ever hold."""

    def __init__(self, item_count: int, capacity: int):
        self.item_count = item_count
        self.capacity = capacity
        super().__init__(
            f"Count of items received {item_count} greater than heap capacity {capacity}"
        )


# =============================================================================
# OPERATION ERRORS (trapped at the batch boundary)
# =============================================================================


class OperationError(BatchHeapError):
    """Failure inside an operation's action."""

    default_category = ErrorCategory.OPERATION


class HeapCapacityError(OperationError):
    """A write would run past the end of the heap buffer."""

    default_category = ErrorCategory.STORAGE

    def __init__(self, pos: int, count: int, capacity: int):
        self.pos = pos
        self.count = count
        self.capacity = capacity
        super().__init__(
            f"Cannot write {count} items at position {pos}: heap capacity is {capacity}",
            context=ErrorContext(position=pos),
        )


class PropertyStateError(OperationError):
    """
    A property was extended before its array was allocated.

    The first batch for a property (at position 0) allocates its array. Seeing
    a later position first means that batch never ran.
    """

    default_category = ErrorCategory.STATE

    def __init__(self, name: str, pos: int):
        self.property_name = name
        self.pos = pos
        super().__init__(
            f"Property '{name}' has no values to extend at position {pos}; "
            "its first batch must start at position 0",
            context=ErrorContext(property_name=name, position=pos),
        )


class ElementTypeError(OperationError):
    """Input values cannot be stored as the heap's element type without a lossy cast."""

    def __init__(self, source_dtype: Any, heap_dtype: Any):
        self.source_dtype = source_dtype
        self.heap_dtype = heap_dtype
        super().__init__(f"Cannot store {source_dtype} values in a heap of {heap_dtype}")


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def iter_error_messages(error: BaseException) -> Iterator[str]:
    """
    Yield the message of an error followed by each nested cause.

    Outermost first. Follows ``__cause__`` and falls back to ``__context__``
    when no explicit cause was set. Stops if the chain loops back on itself.
    """
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current.message if isinstance(current, BatchHeapError) else str(current)
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "BatchHeapError",
    # Config
    "ConfigError",
    "InvalidConfigError",
    "BatchSizeError",
    "CapacityExceededError",
    # Operation
    "OperationError",
    "HeapCapacityError",
    "PropertyStateError",
    "ElementTypeError",
    # Utilities
    "iter_error_messages",
]
