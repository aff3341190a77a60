"""Tests for the Operation contract and the built-in operations."""

import numpy as np
import pytest

from batchheap.core.errors import InvalidConfigError, OperationError, PropertyStateError
from batchheap.core.heap import Heap
from batchheap.framework.operations import Classify, ClassifyArg, KeylessIngest, Operation


class TestOperationBase:
    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            Operation()

    def test_default_source_is_resident_data(self):
        class Noop(Operation[None]):
            name = "Noop"

            def make_arg(self, data, batch_index, batch_size, pos, count):
                return None

            def do(self, heap, arg):
                pass

        heap = Heap(5)
        heap.append([4, 5])
        assert Noop().source(heap).tolist() == [4, 5]
        assert Noop().label == "Noop"
        assert repr(Noop()) == "Noop()"


class TestKeylessIngest:
    def test_name(self):
        assert KeylessIngest.name == "KeylessIngest"

    def test_make_arg_slices_batch(self):
        op = KeylessIngest()
        data = [2, 1, 3, 5, 4]
        assert op.make_arg(data, 1, 2, 0, 2) == [2, 1]
        assert op.make_arg(data, 3, 2, 4, 1) == [4]

    def test_make_arg_does_not_touch_heap(self):
        heap = Heap(5)
        KeylessIngest().make_arg([1, 2], 1, 2, 0, 2)
        assert heap.size == 0

    def test_do_appends(self):
        heap = Heap(5)
        KeylessIngest().do(heap, [7, 8])
        assert heap.resident.tolist() == [7, 8]

    def test_do_rejects_none(self):
        with pytest.raises(OperationError):
            KeylessIngest().do(Heap(5), None)


class TestClassify:
    def test_name_and_label(self):
        op = Classify("is_odd", lambda x: x % 2)
        assert Classify.name == "Classify"
        assert op.label == "Classify:is_odd"
        assert "is_odd" in repr(op)

    def test_make_arg_builds_record(self):
        pred = lambda x: True  # noqa: E731
        op = Classify("all", pred)
        arg = op.make_arg([1, 2, 3], 2, 2, 2, 1)
        assert arg == ClassifyArg(name="all", pos=2, count=1, predicate=pred, vectorized=False)

    def test_make_arg_offsets_by_start(self):
        op = Classify("all", lambda x: True, start=5)
        assert op.make_arg([0, 0, 0], 2, 2, 2, 1).pos == 7

    def test_negative_start_rejected(self):
        with pytest.raises(InvalidConfigError):
            Classify("p", lambda x: True, start=-1)

    def test_do_writes_property(self):
        heap = Heap(10)
        heap.append([1, 2, 3])
        op = Classify("odd", lambda x: x % 2 == 1)
        op.do(heap, op.make_arg(heap.resident, 1, 3, 0, 3))
        assert heap.get_property("odd")[:4].tolist() == [True, False, True, False]

    def test_do_extension_without_array_fails(self):
        heap = Heap(10)
        heap.append([1, 2, 3])
        op = Classify("odd", lambda x: x % 2 == 1)
        with pytest.raises(PropertyStateError):
            op.do(heap, op.make_arg(heap.resident, 2, 2, 2, 1))

    def test_source_covers_start_to_size(self):
        heap = Heap(10)
        heap.append([1, 2, 3, 4, 5])
        assert Classify("p", bool).source(heap).tolist() == [1, 2, 3, 4, 5]
        assert Classify("p", bool, start=3).source(heap).tolist() == [4, 5]

    def test_vectorized_flag_passed_through(self):
        heap = Heap(4)
        heap.append([3, 9])
        op = Classify("big", lambda a: a > 5, vectorized=True)
        op.do(heap, op.make_arg(heap.resident, 1, 2, 0, 2))
        assert heap.get_property("big")[:2].tolist() == [False, True]
        assert isinstance(heap.get_property("big"), np.ndarray)
