"""
Logging context management using contextvars.

The processor pushes the operation name and batch position into a context
variable; a structlog processor copies those fields onto every event logged
while the batch runs, including events from the heap and from caller
predicates that log through structlog.
"""

from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Any

import structlog


@dataclass
class LogContext:
    """
    Execution context attached to all log entries.

    Run identifiers:
        run_id: Unique id of one perform() call
        operation: Operation name (e.g., "Classify")
        instance: Operation instance label (e.g., a property name)

    Batch position:
        batch_index: 1-based index of the running batch
        total_batches: Number of batches in the run

    Tracing (for nested timing blocks):
        span_id: Current span identifier
        parent_span_id: Parent span for nested steps
        step: Current step name
    """

    run_id: str | None = None
    operation: str | None = None
    instance: str | None = None

    batch_index: int | None = None
    total_batches: int | None = None

    span_id: str | None = None
    parent_span_id: str | None = None
    step: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def merge(self, **kwargs) -> "LogContext":
        """Create new context with merged values."""
        current = asdict(self)
        current.update({k: v for k, v in kwargs.items() if v is not None})
        return LogContext(**current)


_log_context: ContextVar[LogContext] = ContextVar("batchheap_log_context")  # noqa: B039


def get_context() -> LogContext:
    """Get the current log context."""
    return _log_context.get(LogContext())


def set_context(**kwargs) -> LogContext:
    """Replace the current context. Use bind_context() to add to it."""
    ctx = LogContext(**kwargs)
    _log_context.set(ctx)
    return ctx


def bind_context(**kwargs) -> LogContext:
    """Merge values into the current context."""
    updated = get_context().merge(**kwargs)
    _log_context.set(updated)
    return updated


def clear_context() -> None:
    """Reset the current context to empty."""
    _log_context.set(LogContext())


class _ContextToken:
    """Token for restoring context after a scoped block."""

    def __init__(self, token):
        self._token = token

    def restore(self):
        _log_context.reset(self._token)


def push_context(**kwargs) -> _ContextToken:
    """
    Push new context values, returning a token to restore later.

    Usage:
        token = push_context(batch_index=2)
        try:
            run_batch()
        finally:
            token.restore()
    """
    updated = get_context().merge(**kwargs)
    return _ContextToken(_log_context.set(updated))


def add_context_processor(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Structlog processor that adds the current LogContext to every entry.

    Keys already present on the event win.
    """
    for key, value in get_context().to_dict().items():
        event_dict.setdefault(key, value)
    return event_dict


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (typically ``get_logger(__name__)``)."""
    return structlog.get_logger(name)
