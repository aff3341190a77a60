"""
Text sinks for processor diagnostics.

The processor reports failed runs (and, when tracing, each batch) as plain
text lines. Anything with a ``write(str)`` method can receive them: an open
file, ``sys.stderr``, or one of the sinks below.
"""

import io
import sys
from collections.abc import Callable, Iterable
from typing import Protocol, TextIO, runtime_checkable


@runtime_checkable
class TextSink(Protocol):
    """Append-only text channel."""

    def write(self, text: str) -> int | None:
        ...


class StreamSink:
    """Write to a text stream, ``sys.stdout`` unless one is given.

    The stream is looked up on every write so redirected or captured stdout
    is honoured.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str) -> None:
        self.stream.write(text)


class MemorySink:
    """Collect everything written, for inspection in tests and tools."""

    def __init__(self) -> None:
        self._buffer = io.StringIO()

    def write(self, text: str) -> None:
        self._buffer.write(text)

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def lines(self) -> list[str]:
        return self.getvalue().splitlines()

    def clear(self) -> None:
        self._buffer = io.StringIO()


def write_line(sink: TextSink, text: str = "") -> None:
    """Write ``text`` followed by a newline."""
    sink.write(f"{text}\n")


def write_lines(
    lines: Iterable[str],
    sink: TextSink,
    no_newlines: bool = False,
    modifier: Callable[[str], str] | None = None,
) -> None:
    """
    Write ``lines`` separated by newlines.

    No newline follows the last line; callers that need one write it
    themselves. With ``no_newlines`` the lines are written back to back.
    ``modifier`` is applied to every line first.
    """
    first = True
    for line in lines:
        if not first and not no_newlines:
            sink.write("\n")
        sink.write(modifier(line) if modifier is not None else line)
        first = False
