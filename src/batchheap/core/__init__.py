"""
batchheap core - the heap, the error hierarchy and the result type.

These modules have no knowledge of batching; the framework package builds
the processor on top of them.
"""

from batchheap.core.errors import (
    BatchHeapError,
    BatchSizeError,
    CapacityExceededError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    HeapCapacityError,
    InvalidConfigError,
    ElementTypeError,
    OperationError,
    PropertyStateError,
    iter_error_messages,
)
from batchheap.core.heap import Heap
from batchheap.core.result import Err, Ok, Result, try_result

__all__ = [
    "Heap",
    # Errors
    "BatchHeapError",
    "ConfigError",
    "InvalidConfigError",
    "BatchSizeError",
    "CapacityExceededError",
    "ElementTypeError",
    "OperationError",
    "HeapCapacityError",
    "PropertyStateError",
    "ErrorCategory",
    "ErrorContext",
    "iter_error_messages",
    # Result
    "Ok",
    "Err",
    "Result",
    "try_result",
]
