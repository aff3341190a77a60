"""
batchheap - batch-oriented processing over a bounded heap.

Usage:
    from batchheap import Heap, KeylessIngest, Classify, Processor

    heap = Heap(100)
    processor = Processor()
    processor.perform(KeylessIngest(), [2, 1, 3], heap, batch_size=2)
    processor.perform(Classify("odd", lambda x: x % 2 == 1), None, heap, batch_size=2)
    heap.get_property("odd")[:3]   # array([False,  True,  True])
"""

from batchheap.core import (
    BatchHeapError,
    ConfigError,
    Heap,
    OperationError,
    PropertyStateError,
)
from batchheap.framework import (
    Classify,
    Instruction,
    KeylessIngest,
    MemorySink,
    Operation,
    PerformResult,
    Processor,
    perform,
)

__version__ = "0.1.0"

__all__ = [
    "Heap",
    "Operation",
    "KeylessIngest",
    "Classify",
    "Instruction",
    "Processor",
    "PerformResult",
    "MemorySink",
    "perform",
    "BatchHeapError",
    "ConfigError",
    "OperationError",
    "PropertyStateError",
    "__version__",
]
