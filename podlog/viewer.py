"""
Consumer side of a log stream.

The LogViewer reads entries from a LogStream, renders each one with the
color assigned to its source and hands the resulting line to a sink. It
keeps running until every producer has finished its sub-stream or the
stream is closed.
"""

import logging
from typing import Callable, Dict, Optional

from .colors import Colors
from .config import Config, config as default_config
from .models import LogEntry, is_end_of_stream
from .render import LineRenderer
from .stream import LogStream, StreamClosedError

logger = logging.getLogger(__name__)


class LogViewer:
    """Renders entries received from a log stream."""

    def __init__(
        self,
        stream: LogStream,
        sink: Callable[[str], None],
        config: Optional[Config] = None,
    ):
        """
        Initialize the viewer.

        Args:
            stream: Stream to consume
            sink: Callable receiving each rendered line
            config: Configuration, defaults to the global instance
        """
        self.stream = stream
        self.sink = sink
        self.config = config or default_config
        self.renderer = LineRenderer(
            time_color=self.config.display.time_color,
            timestamp_width=self.config.display.timestamp_width,
        )
        self.tz = self.config.get_timezone()
        self._stats: Dict[str, int] = {
            'lines': 0,
            'error_lines': 0,
            'finished_sources': 0,
            'bytes': 0,
        }

    def format_entry(self, entry: LogEntry) -> str:
        """Render an entry to a line in the configured output style."""
        paint = self.config.get_source_color(entry.id)
        line = self.renderer.render_line(entry, paint, self.config.display.show_time, self.tz)
        if self.config.display.markup:
            return line
        if self.config.display.plain:
            return Colors.strip(line)
        return Colors.to_ansi(line)

    def handle(self, entry: LogEntry) -> None:
        """Render one entry and pass it to the sink."""
        self.sink(self.format_entry(entry))
        self._stats['lines'] += 1
        self._stats['bytes'] += entry.size()
        if entry.is_error:
            self._stats['error_lines'] += 1

    async def run(self, producers: int = 0) -> Dict[str, int]:
        """
        Consume the stream.

        Args:
            producers: Number of producers feeding the stream. The viewer
                       returns once that many end-of-stream markers arrived;
                       0 means run until the stream is closed.

        Returns:
            Dict[str, int]: Statistics for the session
        """
        while True:
            try:
                item = await self.stream.receive()
            except StreamClosedError:
                logger.info("Log stream closed")
                break

            if is_end_of_stream(item):
                self._stats['finished_sources'] += 1
                logger.info(f"Source finished ({self._stats['finished_sources']}/{producers or '?'})")
                if producers and self._stats['finished_sources'] >= producers:
                    break
                continue

            self.handle(item)

        return self.get_stats()

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about rendered lines.

        Returns:
            Dict[str, int]: Lines and error lines rendered, finished sources,
                            and accounted bytes (sum of entry sizes)
        """
        return dict(self._stats)
