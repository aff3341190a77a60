"""
Batch processor.

Processes like a processor, but at application data level: an operation
knows how to change the heap, an instruction pairs an operation with its
total input, and the processor cuts that input into batches and drives the
operation over each one in order.

Manifesto:
    The processor owns partitioning, ordering and the failure boundary so
    operations only ever see one batch and never manage their own error
    reporting.

    - **Fail fast on configuration:** Bad batch sizes and oversized inputs
      raise before the heap is touched
    - **Trap at the batch boundary:** Anything an action raises stops the run
      and becomes ``False`` plus a text report
    - **Strict order:** Batch k+1 starts only after batch k finished; the
      first batch may allocate state later batches rely on
    - **No rollback:** Batches that completed before a failure stay applied

Architecture:
    ::

        perform(operation, items, heap, batch_size)
          │
          ├─ data = items or operation.source(heap)
          ├─ validate (ConfigError propagates)
          ├─ plan_batches(len(data), batch_size)
          │
          └─ for batch in batches:
               try_result(make_arg → do, reraise=ConfigError)
                 ├─ Ok  → next batch
                 └─ Err → report to sink, log, return False

Examples:
    >>> heap = Heap(100)
    >>> processor = Processor()
    >>> processor.perform(KeylessIngest(), [2, 1, 3], heap, batch_size=2)
    True
    >>> heap.data[:4].tolist()
    [2, 1, 3, 0]

Tags:
    processor, batching, dispatch, error-boundary, batchheap

Doc-Types:
    api-reference
"""

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from batchheap.core.errors import (
    BatchHeapError,
    BatchSizeError,
    CapacityExceededError,
    ConfigError,
    InvalidConfigError,
    iter_error_messages,
)
from batchheap.core.heap import Heap
from batchheap.core.result import try_result
from batchheap.core.settings import BatchHeapSettings, get_settings
from batchheap.framework.batching import BatchSpec, plan_batches
from batchheap.framework.logging import get_logger, log_step, push_context
from batchheap.framework.operations import Operation
from batchheap.framework.sinks import StreamSink, TextSink, write_line, write_lines

log = get_logger(__name__)


class PerformStatus(str, Enum):
    """Outcome of a perform run."""

    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class PerformResult:
    """Structured outcome of one perform run."""

    status: PerformStatus
    operation: str
    total_batches: int
    completed_batches: int
    started_at: datetime
    completed_at: datetime | None = None
    failed_batch: int | None = None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == PerformStatus.COMPLETED

    @property
    def duration_seconds(self) -> float | None:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    @property
    def error_messages(self) -> list[str]:
        """The failure and each of its causes, outermost first."""
        if self.error is None:
            return []
        return list(iter_error_messages(self.error))

    def __bool__(self) -> bool:
        return self.succeeded


@dataclass(frozen=True)
class Instruction:
    """An operation paired with the total input it will process.

    ``items=None`` means the operation runs over the heap's own data.
    """

    operation: Operation
    items: Sequence[Any] | None = field(default=None)

    @property
    def name(self) -> str:
        return self.operation.label


class Processor:
    """
    Drives operations over a heap in batches.

    Args:
        sink: Text channel for failure reports and trace lines
            (default: standard output)
        trace: Write per-batch trace lines to the sink
            (default: ``settings.trace``)
        settings: Settings to read defaults from (default: ``get_settings()``)
    """

    def __init__(
        self,
        sink: TextSink | None = None,
        trace: bool | None = None,
        settings: BatchHeapSettings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.sink: TextSink = sink if sink is not None else StreamSink()
        self.trace = self.settings.trace if trace is None else trace

    def perform(
        self,
        operation: Operation,
        items: Sequence[Any] | None,
        heap: Heap,
        batch_size: int | None = None,
    ) -> bool:
        """
        Run ``operation`` over ``items`` (or the heap's data) in batches.

        Returns:
            True if every batch completed, False if a batch failed. The
            failure is reported to the sink, not raised.

        Raises:
            ConfigError: The batch size or input length is invalid. Nothing
                has been applied to the heap.
        """
        return self.run(operation, items, heap, batch_size).succeeded

    def perform_instruction(self, instruction: Instruction, heap: Heap, batch_size: int | None = None) -> bool:
        """Run an :class:`Instruction`; see :meth:`perform`."""
        return self.perform(instruction.operation, instruction.items, heap, batch_size)

    def run(
        self,
        operation: Operation,
        items: Sequence[Any] | None,
        heap: Heap,
        batch_size: int | None = None,
    ) -> PerformResult:
        """Same as :meth:`perform` but returns the full :class:`PerformResult`."""
        started_at = datetime.now(UTC)
        data = items if items is not None else operation.source(heap)
        total = len(data)
        batch_size = self._validate(operation, total, heap, batch_size)

        if total == 0:
            log.info("processor.empty_input", operation=operation.label)
            return PerformResult(
                status=PerformStatus.COMPLETED,
                operation=operation.label,
                total_batches=0,
                completed_batches=0,
                started_at=started_at,
                completed_at=datetime.now(UTC),
            )

        batches = plan_batches(total, batch_size)
        completed = 0

        token = push_context(
            run_id=uuid.uuid4().hex[:12],
            operation=operation.name,
            instance=operation.label,
            total_batches=len(batches),
        )
        try:
            with log_step("processor.perform", items=total, batch_size=batch_size, batches=len(batches)) as timer:
                if self.trace:
                    self._trace(
                        f"Perform {operation.label} {{ {_join(data)} }} "
                        f"with batch size {batch_size} ({len(batches)} batches)"
                    )

                for batch in batches:
                    if self.trace:
                        self._trace(f"    rem is {batch.count}")
                        self._trace(f"        from {batch.pos} to {batch.end - 1}")

                    outcome = try_result(
                        lambda batch=batch: self._run_batch(operation, data, heap, batch),
                        reraise=(ConfigError,),
                    )
                    if outcome.is_err():
                        error = outcome.error
                        self._report_failure(operation, error, batch, len(batches))
                        timer.add_metric("failed_batch", batch.index)
                        return PerformResult(
                            status=PerformStatus.FAILED,
                            operation=operation.label,
                            total_batches=len(batches),
                            completed_batches=completed,
                            started_at=started_at,
                            completed_at=datetime.now(UTC),
                            failed_batch=batch.index,
                            error=error,
                        )

                    completed += 1
                    if self.trace:
                        self._trace(f"        pos is {batch.end}")

                if self.trace:
                    self._trace("Finished perform")
                timer.add_metric("completed_batches", completed)
        finally:
            token.restore()

        return PerformResult(
            status=PerformStatus.COMPLETED,
            operation=operation.label,
            total_batches=len(batches),
            completed_batches=completed,
            started_at=started_at,
            completed_at=datetime.now(UTC),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _validate(self, operation: Operation, total: int, heap: Heap, batch_size: int | None) -> int:
        if batch_size is None:
            batch_size = self.settings.default_batch_size
        if batch_size < 1:
            raise InvalidConfigError(
                "batch_size", batch_size, f"Batch size must be >= 1, got {batch_size}"
            ).with_context(operation=operation.label)
        if total == 0:
            return batch_size
        if batch_size > total:
            raise BatchSizeError(batch_size, total).with_context(operation=operation.label)
        if total > heap.capacity:
            raise CapacityExceededError(total, heap.capacity).with_context(operation=operation.label)
        return batch_size

    def _run_batch(self, operation: Operation, data: Sequence[Any], heap: Heap, batch: BatchSpec) -> None:
        token = push_context(batch_index=batch.index)
        try:
            log.debug("processor.batch", pos=batch.pos, count=batch.count)
            arg = operation.make_arg(data, batch.index, batch.size, batch.pos, batch.count)
            operation.do(heap, arg)
        finally:
            token.restore()

    def _report_failure(self, operation: Operation, error: Exception, batch: BatchSpec, total_batches: int) -> None:
        if isinstance(error, BatchHeapError):
            error.with_context(operation=operation.label, batch_index=batch.index, total_batches=total_batches)

        messages = list(iter_error_messages(error))
        log.error(
            "processor.batch.failed",
            batch_index=batch.index,
            total_batches=total_batches,
            error_type=type(error).__name__,
            causes=messages,
        )

        write_line(self.sink, f"ERROR: Instruction failed at batch {batch.index} of {total_batches}")
        write_lines(messages, self.sink)

    def _trace(self, text: str) -> None:
        write_line(self.sink, text)


def _join(items: Sequence[Any]) -> str:
    return ", ".join(str(item) for item in items)


# Default processor instance
_processor: Processor | None = None


def get_processor() -> Processor:
    """Get or create the default processor."""
    global _processor
    if _processor is None:
        _processor = Processor()
    return _processor


def perform(
    operation: Operation,
    items: Sequence[Any] | None,
    heap: Heap,
    batch_size: int | None = None,
) -> bool:
    """Run ``operation`` with the default processor; see :meth:`Processor.perform`."""
    return get_processor().perform(operation, items, heap, batch_size)
