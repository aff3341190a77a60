"""
Bounded, append-only heap with named boolean property arrays.

The heap owns a fixed-capacity numpy buffer of one scalar dtype. Data is
appended at the tail and never removed. Alongside the buffer the heap keeps
named boolean arrays ("properties"), one entry per buffer slot, produced by
evaluating a predicate over resident data.

Manifesto:
    - **Fixed capacity:** The buffer is allocated once and never resized
    - **Plain values only:** Elements are fixed-layout numpy scalars, so an
      append is a single contiguous copy
    - **Lazy properties:** A property array exists only once a batch at
      position 0 has written it; reads of unknown names return ``None``

Architecture:
    ::

        Heap(capacity=8, dtype=int64)
        ┌───┬───┬───┬───┬───┬───┬───┬───┐
        │ 2 │ 1 │ 3 │ 5 │ 0 │ 0 │ 0 │ 0 │   data     (size = 4)
        └───┴───┴───┴───┴───┴───┴───┴───┘
        ┌───┬───┬───┬───┬───┬───┬───┬───┐
        │ T │ F │ T │ F │ F │ F │ F │ F │   properties["is_odd"]
        └───┴───┴───┴───┴───┴───┴───┴───┘
                      ↑ frontier = 3

Examples:
    >>> heap = Heap(5)
    >>> heap.append([2, 1, 3])
    >>> heap.resident.tolist()
    [2, 1, 3]
    >>> heap.get_property("odd") is None
    True
    >>> heap.set_or_extend_property("odd", 0, 3, lambda x: x % 2 == 1)
    >>> heap.get_property("odd").tolist()
    [False, True, True, False, False]

Guardrails:
    ❌ DON'T: Write into ``heap.data`` directly; it is a read-only view
    ✅ DO: Mutate through ``append`` and ``set_or_extend_property``

Tags:
    heap, buffer, numpy, properties, batchheap
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import numpy as np
import structlog

from batchheap.core.errors import (
    ElementTypeError,
    HeapCapacityError,
    InvalidConfigError,
    PropertyStateError,
)

logger = structlog.get_logger(__name__)

Predicate = Callable[[Any], Any]


def _readonly(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


class Heap:
    """
    Fixed-capacity buffer of scalar values plus named property arrays.

    Args:
        capacity: Number of slots; fixed for the life of the heap
        dtype: numpy scalar dtype of the elements (default int64)
    """

    def __init__(self, capacity: int, dtype: Any = np.int64) -> None:
        if capacity < 0:
            raise InvalidConfigError("capacity", capacity, f"Heap capacity must be >= 0, got {capacity}")
        dtype = np.dtype(dtype)
        if dtype.hasobject:
            raise InvalidConfigError(
                "dtype", dtype, f"Heap elements must be plain scalar values, got dtype {dtype}"
            )

        self._capacity = int(capacity)
        self._data = np.zeros(self._capacity, dtype=dtype)
        self._size = 0
        self._properties: dict[str, np.ndarray] = {}
        self._frontiers: dict[str, int] = {}

    # ------------------------------------------------------------------
    # Buffer
    # ------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def size(self) -> int:
        """Count of slots holding appended data."""
        return self._size

    @property
    def data(self) -> np.ndarray:
        """The whole buffer, ``capacity`` long, read-only."""
        return _readonly(self._data)

    @property
    def resident(self) -> np.ndarray:
        """The filled prefix ``data[:size]``, read-only."""
        return _readonly(self._data[: self._size])

    def append(self, items: Iterable[Any]) -> None:
        """
        Copy ``items`` to the tail of the buffer and advance ``size``.

        Values must cast to the heap dtype under numpy ``same_kind`` rules;
        ints into a float heap are fine, floats into an int heap are not.

        Raises:
            ElementTypeError: If the values would need a lossy cast.
            HeapCapacityError: If the items do not fit in the remaining slots.
            The buffer is left unchanged in both cases.
        """
        values = np.asarray(items).reshape(-1)
        count = len(values)
        pos = self._size

        logger.debug("heap.append", length=count, pos=pos)

        if count and not np.can_cast(values.dtype, self._data.dtype, casting="same_kind"):
            raise ElementTypeError(values.dtype, self._data.dtype)
        if pos + count > self._capacity:
            raise HeapCapacityError(pos, count, self._capacity)

        self._data[pos : pos + count] = values
        self._size = pos + count

        logger.debug("heap.append.done", size=self._size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def get_property(self, name: str) -> np.ndarray | None:
        """Return the boolean array for ``name``, or ``None`` if absent."""
        values = self._properties.get(name)
        if values is None:
            return None
        return _readonly(values)

    def has_property(self, name: str) -> bool:
        return name in self._properties

    def property_names(self) -> list[str]:
        return sorted(self._properties)

    def property_frontier(self, name: str) -> int | None:
        """One past the highest index written for ``name`` since allocation."""
        return self._frontiers.get(name)

    def set_or_extend_property(
        self,
        name: str,
        pos: int,
        count: int,
        predicate: Predicate,
        vectorized: bool = False,
    ) -> None:
        """
        Evaluate ``predicate`` over ``data[pos:pos+count]`` into property ``name``.

        At ``pos == 0`` a fresh all-False array of length ``capacity`` is
        allocated and replaces any previous one once the predicate has
        succeeded; if it raises, the old array stays. At any other position
        the array must already exist.

        Args:
            name: Property name
            pos: First buffer position to evaluate
            count: Number of positions to evaluate
            predicate: Called once per element, or once with the whole slice
                when ``vectorized`` is set
            vectorized: Treat ``predicate`` as a numpy function of the slice
                returning a boolean array of the same length

        Raises:
            PropertyStateError: ``pos > 0`` and ``name`` has no array
            HeapCapacityError: The range runs past ``capacity``
        """
        if pos < 0 or count < 0 or pos + count > self._capacity:
            raise HeapCapacityError(pos, count, self._capacity)

        if pos != 0 and name not in self._properties:
            raise PropertyStateError(name, pos)

        window = self._data[pos : pos + count]
        if vectorized:
            result = np.asarray(predicate(window), dtype=bool).reshape(-1)
            if len(result) != count:
                raise ValueError(
                    f"Vectorized predicate for '{name}' returned {len(result)} values for {count} elements"
                )
        else:
            result = np.fromiter((bool(predicate(x)) for x in window), dtype=bool, count=count)

        if pos == 0:
            logger.debug("heap.property.allocate", property=name, length=self._capacity)
            values = np.zeros(self._capacity, dtype=bool)
            values[:count] = result
            self._properties[name] = values
            self._frontiers[name] = count
        else:
            self._properties[name][pos : pos + count] = result
            self._frontiers[name] = max(self._frontiers[name], pos + count)

        logger.debug("heap.property.write", property=name, pos=pos, count=count)

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return (
            f"Heap(capacity={self._capacity}, size={self._size}, "
            f"dtype={self._data.dtype}, properties={self.property_names()})"
        )
