"""
Rendering of log entries into display markup.

A rendered line is laid out as ``<timestamp> <pod> <container> <message>``.
The timestamp column is padded to a fixed width so that lines stay aligned
even when timestamps differ in length; the pod and container columns are
only emitted when the entry carries those identifiers.
"""

import io
from datetime import tzinfo
from typing import Optional

from .colors import Colors
from .models import EndOfStream, LogEntry
from .timestamps import convert_timezone, parse_timestamp

TIMESTAMP_WIDTH = 30
TIME_COLOR = "gray"


class LineRenderer:
    """Writes log entries as markup into caller-owned text buffers."""

    def __init__(self, time_color: str = TIME_COLOR, timestamp_width: int = TIMESTAMP_WIDTH):
        """
        Initialize the renderer.

        Args:
            time_color: Color of the timestamp column
            timestamp_width: Width the raw timestamp token is padded to
        """
        self.time_color = time_color
        self.timestamp_width = timestamp_width

    @staticmethod
    def timestamp_boundary(payload: bytes) -> int:
        """
        Find where the leading timestamp of a payload ends.

        Returns:
            int: Index of the space following a valid timestamp, or -1 when
                 the payload does not start with one.
        """
        index = payload.find(b" ")
        if index <= 0:
            return -1
        token = payload[:index].decode("ascii", errors="replace")
        if parse_timestamp(token) is None:
            return -1
        return index

    def render(self, entry: LogEntry, paint: str, show_time: bool, tz: Optional[tzinfo], buffer) -> None:
        """
        Write a log entry as markup into ``buffer``.

        Args:
            entry: The log entry to render
            paint: Color of the pod and container columns
            show_time: Whether to emit the timestamp column
            tz: Optional timezone the timestamp is converted to
            buffer: Any object with a ``write(str)`` method

        Raises:
            TypeError: If an end-of-stream marker is passed instead of an entry
        """
        if isinstance(entry, EndOfStream):
            raise TypeError("end-of-stream marker cannot be rendered")

        payload = entry.payload
        index = self.timestamp_boundary(payload)

        if show_time and index > 0:
            buffer.write(Colors.tag(self.time_color, "b"))
            buffer.write(convert_timezone(payload[:index].decode("ascii"), tz))
            buffer.write(" ")
            pad = self.timestamp_width - index
            if pad > 0:
                buffer.write(" " * pad)
            buffer.write(Colors.CLOSE)

        if entry.pod:
            buffer.write(Colors.tag(paint) + entry.pod)

        if not entry.single_container and entry.container:
            if entry.pod:
                buffer.write(" ")
            buffer.write(Colors.tag(paint, "b") + entry.container + Colors.CLOSE + " ")
        elif entry.pod:
            buffer.write(Colors.CLOSE_COLOR + " ")

        message = payload[index + 1:] if index > 0 else payload
        buffer.write(message.decode("utf-8", errors="replace"))

    def render_line(self, entry: LogEntry, paint: str, show_time: bool, tz: Optional[tzinfo] = None) -> str:
        """Render a log entry and return the markup as a string."""
        buffer = io.StringIO()
        self.render(entry, paint, show_time, tz, buffer)
        return buffer.getvalue()


# Renderer used by LogEntry.render
default_renderer = LineRenderer()
