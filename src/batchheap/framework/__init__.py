"""
batchheap framework - operations and the batch processor.

This module provides:
- Operation base class and the built-in KeylessIngest / Classify operations
- Batch partitioning
- The Processor and its failure boundary
- Structured logging with batch context
"""

from batchheap.framework.batching import BatchSpec, count_batches, plan_batches
from batchheap.framework.operations import Classify, ClassifyArg, KeylessIngest, Operation
from batchheap.framework.processor import (
    Instruction,
    PerformResult,
    PerformStatus,
    Processor,
    get_processor,
    perform,
)
from batchheap.framework.sinks import MemorySink, StreamSink, TextSink, write_lines

__all__ = [
    # Operations
    "Operation",
    "KeylessIngest",
    "Classify",
    "ClassifyArg",
    # Batching
    "BatchSpec",
    "plan_batches",
    "count_batches",
    # Processor
    "Processor",
    "PerformResult",
    "PerformStatus",
    "Instruction",
    "get_processor",
    "perform",
    # Sinks
    "TextSink",
    "StreamSink",
    "MemorySink",
    "write_lines",
]
