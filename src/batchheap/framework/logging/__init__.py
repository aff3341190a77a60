"""
batchheap logging - structured, batch-aware logging.

Usage:
    from batchheap.framework.logging import get_logger, configure_logging, log_step

    configure_logging()
    log = get_logger(__name__)

    with log_step("processor.perform", operation="KeylessIngest"):
        run_batches()
"""

from batchheap.framework.logging.config import configure_logging, is_configured, is_debug_enabled
from batchheap.framework.logging.context import (
    LogContext,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    push_context,
    set_context,
)
from batchheap.framework.logging.timing import TimingResult, log_step, timed_block

__all__ = [
    # Configuration
    "configure_logging",
    "is_configured",
    "is_debug_enabled",
    # Context
    "get_logger",
    "set_context",
    "clear_context",
    "get_context",
    "bind_context",
    "push_context",
    "LogContext",
    # Timing
    "log_step",
    "timed_block",
    "TimingResult",
]
