"""Tests for batchheap.core.errors."""

import pytest

from batchheap.core.errors import (
    BatchHeapError,
    BatchSizeError,
    CapacityExceededError,
    ConfigError,
    ElementTypeError,
    ErrorCategory,
    ErrorContext,
    HeapCapacityError,
    InvalidConfigError,
    OperationError,
    PropertyStateError,
    iter_error_messages,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            InvalidConfigError("batch_size", 0),
            BatchSizeError(5, 3),
            CapacityExceededError(200, 100),
        ],
    )
    def test_config_errors(self, error):
        assert isinstance(error, ConfigError)
        assert not isinstance(error, OperationError)
        assert error.category == ErrorCategory.CONFIG

    @pytest.mark.parametrize(
        "error, category",
        [
            (HeapCapacityError(3, 2, 4), ErrorCategory.STORAGE),
            (PropertyStateError("p", 2), ErrorCategory.STATE),
            (ElementTypeError("float64", "int64"), ErrorCategory.OPERATION),
        ],
    )
    def test_operation_errors(self, error, category):
        assert isinstance(error, OperationError)
        assert not isinstance(error, ConfigError)
        assert error.category == category

    def test_messages(self):
        assert str(BatchSizeError(5, 3)) == "Batch size 5 is greater than count of items received 3"
        assert str(CapacityExceededError(200, 100)) == "Count of items received 200 greater than heap capacity 100"
        assert "'p'" in str(PropertyStateError("p", 2))
        assert "position 2" in str(PropertyStateError("p", 2))


class TestBatchHeapError:
    def test_defaults(self):
        error = BatchHeapError("oops")
        assert error.message == "oops"
        assert error.category == ErrorCategory.INTERNAL
        assert error.cause is None

    def test_cause_is_chained(self):
        cause = ValueError("inner")
        error = OperationError("outer", cause=cause)
        assert error.cause is cause
        assert error.__cause__ is cause

    def test_with_context_known_and_unknown_keys(self):
        error = OperationError("failed").with_context(batch_index=2, total_batches=3, host="x")
        assert error.context.batch_index == 2
        assert error.context.total_batches == 3
        assert error.context.metadata == {"host": "x"}

    def test_to_dict(self):
        error = OperationError("failed", cause=ValueError("bad")).with_context(operation="Classify")
        d = error.to_dict()
        assert d["error_type"] == "OperationError"
        assert d["category"] == "OPERATION"
        assert d["context"] == {"operation": "Classify"}
        assert d["cause"] == "bad"

    def test_context_to_dict_skips_none(self):
        assert ErrorContext(position=0).to_dict() == {"position": 0}

    def test_repr(self):
        assert repr(ConfigError("x")) == "ConfigError('x', category=CONFIG)"


class TestIterErrorMessages:
    def test_single(self):
        assert list(iter_error_messages(ValueError("only"))) == ["only"]

    def test_explicit_cause_chain(self):
        try:
            try:
                try:
                    raise KeyError("k")
                except KeyError as e:
                    raise ValueError("middle") from e
            except ValueError as e:
                raise OperationError("top") from e
        except OperationError as e:
            error = e

        assert list(iter_error_messages(error)) == ["top", "middle", "'k'"]

    def test_cause_argument(self):
        error = OperationError("outer", cause=RuntimeError("inner"))
        assert list(iter_error_messages(error)) == ["outer", "inner"]

    def test_implicit_context(self):
        try:
            try:
                raise RuntimeError("first")
            except RuntimeError:
                raise ValueError("second")
        except ValueError as e:
            error = e

        assert list(iter_error_messages(error)) == ["second", "first"]

    def test_suppressed_context_not_followed(self):
        try:
            try:
                raise RuntimeError("hidden")
            except RuntimeError:
                raise ValueError("shown") from None
        except ValueError as e:
            error = e

        assert list(iter_error_messages(error)) == ["shown"]

    def test_cycle_terminates(self):
        a = ValueError("a")
        b = ValueError("b")
        a.__cause__ = b
        b.__cause__ = a
        assert list(iter_error_messages(a)) == ["a", "b"]
