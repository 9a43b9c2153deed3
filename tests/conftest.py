from __future__ import annotations

import pytest

from podlog.config import Config
from podlog.models import LogEntry

TIMESTAMP = "2023-01-01T00:00:00.000000000Z"


@pytest.fixture
def timestamped_entry() -> LogEntry:
    """Entry from a multi-container pod with a full-precision timestamp."""
    return LogEntry(
        pod="p1",
        container="c1",
        payload=f"{TIMESTAMP} hello".encode(),
    )


@pytest.fixture
def plain_config(tmp_path, monkeypatch) -> Config:
    """Config isolated from the environment, emitting raw markup."""
    for name in (
        "PODLOG_SHOW_TIME",
        "PODLOG_TIMEZONE",
        "PODLOG_TIME_COLOR",
        "PODLOG_SINGLE_CONTAINER",
        "PODLOG_MARKUP",
        "PODLOG_STREAM_MAXSIZE",
        "PODLOG_LOG_LEVEL",
        "PODLOG_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)
    cfg = Config(config_file=str(tmp_path / "missing.yml"))
    cfg.display.markup = True
    cfg.display.palette = ["green", "blue"]
    return cfg
