"""
Podlog - Container Log Line Rendering

This package models streamed container log lines and renders them into
timestamp-aligned, color-annotated display markup, with an asyncio stream
that fans log entries in from many pod/container sources to one consumer.
"""

from .models import END_OF_STREAM, EndOfStream, LogEntry, StreamItem, is_end_of_stream
from .render import LineRenderer
from .stream import LogStream, StreamClosedError
from .timestamps import convert_timezone

__version__ = "0.1.0"
__author__ = "Podlog Team"

__all__ = [
    "END_OF_STREAM",
    "EndOfStream",
    "LineRenderer",
    "LogEntry",
    "LogStream",
    "StreamClosedError",
    "StreamItem",
    "convert_timezone",
    "is_end_of_stream",
]
