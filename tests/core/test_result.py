"""Tests for batchheap.core.result module."""

import pytest

from batchheap.core.errors import BatchSizeError, ConfigError, OperationError
from batchheap.core.result import Err, Ok, try_result


class TestOk:
    def test_create_ok(self):
        result = Ok(42)
        assert result.value == 42
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_repr(self):
        assert repr(Ok(1)) == "Ok(1)"


class TestErr:
    def test_create_err(self):
        error = ValueError("bad")
        result = Err(error)
        assert result.error is error
        assert result.is_ok() is False
        assert result.is_err() is True

    def test_repr(self):
        assert repr(Err(KeyError("k"))) == "Err(KeyError('k'))"


class TestTryResult:
    def test_success(self):
        assert try_result(lambda: 1 + 1) == Ok(2)

    def test_failure_becomes_err(self):
        result = try_result(lambda: int("x"))
        assert result.is_err()
        assert isinstance(result.error, ValueError)

    def test_none_return(self):
        assert try_result(lambda: None).is_ok()

    def test_reraise_types_propagate(self):
        def fail():
            raise BatchSizeError(5, 3)

        with pytest.raises(BatchSizeError):
            try_result(fail, reraise=(ConfigError,))

    def test_other_types_still_trapped_with_reraise(self):
        def fail():
            raise OperationError("trapped")

        result = try_result(fail, reraise=(ConfigError,))
        assert result.is_err()
        assert str(result.error) == "trapped"

    def test_base_exceptions_not_trapped(self):
        def interrupt():
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            try_result(interrupt)
