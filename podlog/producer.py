"""
Producers feeding raw log lines into a LogStream.

Each tailed pod/container runs its own producer. A producer turns raw lines
into LogEntry objects tagged with the source identity, sends them in order,
and finishes its sub-stream with the end-of-stream marker.
"""

import asyncio
import logging
from pathlib import Path
from typing import AsyncIterable, Iterable, Union

from .models import LogEntry
from .stream import LogStream

logger = logging.getLogger(__name__)

RawLine = Union[bytes, str]


def _strip_newline(line: bytes) -> bytes:
    if line.endswith(b"\r\n"):
        return line[:-2]
    if line.endswith(b"\n"):
        return line[:-1]
    return line


# Returned by next() once a blocking source is exhausted.
_EXHAUSTED = object()


async def _iterate(lines):
    if hasattr(lines, "__aiter__"):
        async for line in lines:
            yield line
        return

    # Blocking sources (files, pipes) are read in a worker thread.
    iterator = iter(lines)
    while True:
        line = await asyncio.to_thread(next, iterator, _EXHAUSTED)
        if line is _EXHAUSTED:
            break
        yield line


async def pump_lines(
    stream: LogStream,
    lines: Union[Iterable[RawLine], AsyncIterable[RawLine]],
    pod: str = "",
    container: str = "",
    single_container: bool = False,
    is_error: bool = False,
    send_eof: bool = True,
) -> int:
    """
    Send raw lines from one source onto a stream.

    Args:
        stream: The stream to send entries on
        lines: Sync or async iterable of raw lines (bytes or str)
        pod: Pod name stamped on every entry
        container: Container name stamped on every entry
        single_container: Whether the pod runs a single container
        is_error: Whether the lines come from stderr
        send_eof: Send the end-of-stream marker once lines are exhausted

    Returns:
        int: Number of entries sent, not counting the marker
    """
    count = 0
    async for line in _iterate(lines):
        if isinstance(line, str):
            line = line.encode("utf-8")
        await stream.send(LogEntry(
            pod=pod,
            container=container,
            single_container=single_container,
            payload=_strip_newline(line),
            is_error=is_error,
        ))
        count += 1

    if send_eof:
        await stream.send_eof()

    logger.debug(f"Source {pod}::{container} sent {count} lines")
    return count


async def tail_file(
    stream: LogStream,
    path: Path,
    pod: str = "",
    container: str = "",
    single_container: bool = False,
    is_error: bool = False,
) -> int:
    """
    Send every line of a local log file onto a stream.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    with open(path, "rb") as f:
        return await pump_lines(
            stream,
            f,
            pod=pod,
            container=container,
            single_container=single_container,
            is_error=is_error,
        )
