"""
Pydantic models for streamed container log lines.

This module defines the items carried on a log stream: a LogEntry for every
raw log line read from a pod/container, and the EndOfStream marker a producer
sends when its own sub-stream is finished.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

# Fixed per-entry overhead used for memory accounting by consumers.
ENTRY_OVERHEAD = 100


class LogEntry(BaseModel):
    """Model representing a single container log line."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["line"] = "line"
    pod: str = Field(default="", description="Name of the pod the line came from")
    container: str = Field(default="", description="Name of the container the line came from")
    single_container: bool = Field(
        default=False, description="True when the owning pod runs a single container"
    )
    payload: bytes = Field(default=b"", description="Raw log line, possibly prefixed by a timestamp")
    is_error: bool = Field(default=False, description="True when the line was read from stderr")

    @classmethod
    def from_bytes(cls, data: bytes) -> "LogEntry":
        """Create an entry carrying only a raw payload."""
        return cls(payload=data)

    @classmethod
    def from_string(cls, text: str) -> "LogEntry":
        """Create an entry carrying only a payload given as text."""
        return cls(payload=text.encode("utf-8"))

    @property
    def id(self) -> str:
        """Grouping key: the pod name, or the container name when no pod is set."""
        if self.pod:
            return self.pod
        return self.container

    def get_timestamp(self) -> str:
        """
        Return the leading token of the payload.

        Returns:
            str: Everything before the first space, or an empty string when the
                 payload has no space. The token is not validated.
        """
        index = self.payload.find(b" ")
        if index < 0:
            return ""
        return self.payload[:index].decode("utf-8", errors="replace")

    def info(self) -> str:
        """Return a ``pod::container`` label."""
        return f"{self.pod}::{self.container}"

    def is_empty(self) -> bool:
        return len(self.payload) == 0

    def size(self) -> int:
        """
        Approximate footprint of the entry for buffer accounting.

        Returns:
            int: Fixed overhead plus payload and identifier lengths.
        """
        return ENTRY_OVERHEAD + len(self.payload) + len(self.pod) + len(self.container)

    def render(self, paint: str, show_time: bool, tz, buffer) -> None:
        """
        Write this entry as display markup into ``buffer``.

        Args:
            paint: Color name used for the pod and container columns
            show_time: Whether to emit the timestamp column
            tz: Optional tzinfo to convert the timestamp into
            buffer: Writable text buffer owned by the caller
        """
        from .render import default_renderer

        default_renderer.render(self, paint, show_time, tz, buffer)


class EndOfStream(BaseModel):
    """Marker sent by a producer once its sub-stream has no more lines."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["eof"] = "eof"

    @property
    def id(self) -> str:
        return ""

    def is_empty(self) -> bool:
        return True


StreamItem = Annotated[Union[LogEntry, EndOfStream], Field(discriminator="kind")]

# Shared marker instance; consumers must test with is_end_of_stream().
END_OF_STREAM = EndOfStream()


def is_end_of_stream(item) -> bool:
    """Check whether a stream item marks the end of a sub-stream."""
    return isinstance(item, EndOfStream)
