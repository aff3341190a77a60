"""Ingestion of new data at the tail of the heap."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from batchheap.core.errors import OperationError
from batchheap.framework.operations.base import Operation

if TYPE_CHECKING:
    from batchheap.core.heap import Heap


class KeylessIngest(Operation[Sequence[Any]]):
    """
    Append unordered input to the heap, one batch slice at a time.

    Use it when the input is new data, disjoint from what the heap holds.
    """

    name = "KeylessIngest"
    description = "Appends input data at the tail of the heap"

    def make_arg(
        self,
        data: Sequence[Any],
        batch_index: int,
        batch_size: int,
        pos: int,
        count: int,
    ) -> Sequence[Any]:
        return data[pos : pos + count]

    def do(self, heap: "Heap", arg: Sequence[Any]) -> None:
        if arg is None:
            raise OperationError(f"{self.name} received no batch to append")
        heap.append(arg)
