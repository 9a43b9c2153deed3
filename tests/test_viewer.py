"""Tests for the stream consumer."""

from __future__ import annotations

import asyncio

from podlog.models import LogEntry
from podlog.producer import pump_lines
from podlog.stream import LogStream
from podlog.viewer import LogViewer

TS = "2023-01-01T00:00:00.000000000Z"


def test_viewer_stops_after_all_producers_finish(plain_config):
    lines = []

    async def scenario():
        stream = LogStream()
        viewer = LogViewer(stream, lines.append, plain_config)
        consumer = asyncio.ensure_future(viewer.run(producers=2))
        await asyncio.gather(
            pump_lines(stream, [f"{TS} a1", f"{TS} a2"], pod="pa", container="web"),
            pump_lines(stream, [f"{TS} b1"], pod="pb", container="db", is_error=True),
        )
        stats = await asyncio.wait_for(consumer, timeout=1)
        return stream.closed, stats

    closed, stats = asyncio.run(scenario())
    assert not closed
    assert stats == {'lines': 3, 'error_lines': 1, 'finished_sources': 2, 'bytes': sum(
        100 + len(f"{TS} {m}") + 2 + len(c) for m, c in (("a1", "web"), ("a2", "web"), ("b1", "db"))
    )}
    assert lines[0] == f"[gray::b]{TS} [-::-][green::]pa [green::b]web[-::-] a1"
    assert f"[blue::]pb [blue::b]db[-::-] b1" in lines[2]


def test_viewer_stops_on_close(plain_config):
    lines = []

    async def scenario():
        stream = LogStream()
        viewer = LogViewer(stream, lines.append, plain_config)
        await stream.send(LogEntry(payload=b"only line"))
        stream.close()
        return await viewer.run()

    stats = asyncio.run(scenario())
    assert lines == ["only line"]
    assert stats['finished_sources'] == 0


def test_viewer_ansi_output(plain_config):
    plain_config.display.markup = False
    plain_config.display.show_time = False
    stream = LogStream()
    viewer = LogViewer(stream, lambda line: None, plain_config)
    line = viewer.format_entry(LogEntry(pod="p1", single_container=True, payload=f"{TS} hi".encode()))
    assert line == "\033[0m\033[32mp1\033[0m hi\033[0m"


def test_viewer_applies_timezone(plain_config):
    plain_config.display.timezone = "Asia/Tokyo"
    viewer = LogViewer(LogStream(), lambda line: None, plain_config)
    line = viewer.format_entry(LogEntry(payload=f"{TS} hi".encode()))
    assert line == "[gray::b]2023-01-01T09:00:00.000000000+09:00 [-::-]hi"


def test_viewer_plain_output(plain_config):
    plain_config.display.markup = False
    plain_config.display.plain = True
    viewer = LogViewer(LogStream(), lambda line: None, plain_config)
    line = viewer.format_entry(LogEntry(pod="p1", container="c1", payload=f"{TS} hi".encode()))
    assert line == f"{TS} p1 c1 hi"
