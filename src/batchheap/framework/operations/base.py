"""Base operation interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

if TYPE_CHECKING:
    from batchheap.core.heap import Heap

A = TypeVar("A")


class Operation(ABC, Generic[A]):
    """
    Base class for all batch operations.

    An operation is driven by the processor once per batch: ``make_arg``
    builds the per-batch argument from the batch geometry, then ``do``
    applies it to the heap. ``A`` is the argument type.
    """

    # Operation metadata
    name: ClassVar[str] = ""
    description: ClassVar[str] = ""

    @abstractmethod
    def make_arg(
        self,
        data: Sequence[Any],
        batch_index: int,
        batch_size: int,
        pos: int,
        count: int,
    ) -> A:
        """
        Build the argument for one batch.

        Must not touch the heap. ``batch_index`` is 1-based; ``pos`` and
        ``count`` locate the batch within ``data``.
        """
        ...

    @abstractmethod
    def do(self, heap: "Heap", arg: A) -> None:
        """Apply one batch to the heap. May raise."""
        ...

    def source(self, heap: "Heap") -> Sequence[Any]:
        """Data to process when the caller supplies no input."""
        return heap.resident

    @property
    def label(self) -> str:
        """Name used in logs for this instance."""
        return self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
