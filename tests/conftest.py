"""
Shared pytest fixtures for batchheap tests.

This module provides:
- Quiet structured logging for the whole session
- Settings and log context cleanup for test isolation
- Fresh heaps and memory sinks
"""

import sys
from pathlib import Path

import pytest

# Ensure batchheap package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from batchheap.core.heap import Heap
from batchheap.core.settings import reset_settings
from batchheap.framework.logging import clear_context, configure_logging
from batchheap.framework.processor import Processor
from batchheap.framework.sinks import MemorySink


def pytest_configure(config: pytest.Config) -> None:
    configure_logging(level="WARNING", force=True)


@pytest.fixture(autouse=True)
def _isolate():
    """Reset cached settings and log context around each test."""
    reset_settings()
    clear_context()
    yield
    reset_settings()
    clear_context()


@pytest.fixture
def heap() -> Heap:
    """Empty integer heap with capacity 100."""
    return Heap(100)


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def processor(sink: MemorySink) -> Processor:
    """Processor reporting into the ``sink`` fixture, tracing off."""
    return Processor(sink=sink, trace=False)
