"""Classification of resident heap data into a named property."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from batchheap.core.errors import InvalidConfigError
from batchheap.core.heap import Predicate
from batchheap.framework.operations.base import Operation

if TYPE_CHECKING:
    from batchheap.core.heap import Heap


@dataclass(frozen=True)
class ClassifyArg:
    """Per-batch argument for :class:`Classify`."""

    name: str
    pos: int
    count: int
    predicate: Predicate
    vectorized: bool = False


class Classify(Operation[ClassifyArg]):
    """
    Evaluate a predicate over heap data and record it as a property.

    With no input, the processor runs this over the heap's own data from
    ``start`` up to the current size. ``start=0`` (re)builds the property;
    a ``start`` equal to the property's frontier extends it over data
    appended since the last run.

    Args:
        instance_name: Name of the property to write
        predicate: Element predicate (or slice predicate if ``vectorized``)
        start: Heap position the first batch maps to
        vectorized: Pass whole numpy slices to ``predicate``
    """

    name = "Classify"
    description = "Evaluates a predicate over resident data into a named property"

    def __init__(
        self,
        instance_name: str,
        predicate: Predicate,
        start: int = 0,
        vectorized: bool = False,
    ) -> None:
        if start < 0:
            raise InvalidConfigError("start", start, f"Classify start must be >= 0, got {start}")
        self.instance_name = instance_name
        self.predicate = predicate
        self.start = start
        self.vectorized = vectorized

    def make_arg(
        self,
        data: Sequence[Any],
        batch_index: int,
        batch_size: int,
        pos: int,
        count: int,
    ) -> ClassifyArg:
        return ClassifyArg(
            name=self.instance_name,
            pos=self.start + pos,
            count=count,
            predicate=self.predicate,
            vectorized=self.vectorized,
        )

    def do(self, heap: "Heap", arg: ClassifyArg) -> None:
        heap.set_or_extend_property(arg.name, arg.pos, arg.count, arg.predicate, vectorized=arg.vectorized)

    def source(self, heap: "Heap") -> Sequence[Any]:
        return heap.data[self.start : heap.size]

    @property
    def label(self) -> str:
        return f"{self.name}:{self.instance_name}"

    def __repr__(self) -> str:
        return f"Classify(instance_name={self.instance_name!r}, start={self.start})"
