"""Batch partitioning.

Splits ``total`` items into consecutive batches of ``batch_size``. Every
batch is full except possibly the last, which holds the remainder.

    >>> [(b.index, b.pos, b.count) for b in plan_batches(5, 2)]
    [(1, 0, 2), (2, 2, 2), (3, 4, 1)]
"""

from dataclasses import dataclass

from batchheap.core.errors import InvalidConfigError


@dataclass(frozen=True)
class BatchSpec:
    """Geometry of one batch.

    Attributes:
        index: 1-based batch number
        size: Configured batch size
        pos: Start position within the data
        count: Number of items in this batch
    """

    index: int
    size: int
    pos: int
    count: int

    @property
    def end(self) -> int:
        """One past the last position of the batch."""
        return self.pos + self.count


def count_batches(total: int, batch_size: int) -> int:
    """Number of batches needed to cover ``total`` items."""
    if batch_size < 1:
        raise InvalidConfigError("batch_size", batch_size, f"Batch size must be >= 1, got {batch_size}")
    full, rem = divmod(total, batch_size)
    return full + (1 if rem > 0 else 0)


def plan_batches(total: int, batch_size: int) -> list[BatchSpec]:
    """Partition ``total`` items into batches of ``batch_size``."""
    if total < 0:
        raise InvalidConfigError("total", total, f"Item count must be >= 0, got {total}")
    batches = count_batches(total, batch_size)
    full, rem = divmod(total, batch_size)

    return [
        BatchSpec(
            index=index,
            size=batch_size,
            pos=(index - 1) * batch_size,
            count=batch_size if index <= full else rem,
        )
        for index in range(1, batches + 1)
    ]
