"""Operation base class and built-in operations."""

from batchheap.framework.operations.base import Operation
from batchheap.framework.operations.classify import Classify, ClassifyArg
from batchheap.framework.operations.ingest import KeylessIngest

__all__ = ["Operation", "KeylessIngest", "Classify", "ClassifyArg"]
