"""Tests for configuration loading."""

from __future__ import annotations

import logging

import pytest

from podlog.config import DEFAULT_PALETTE, Config, resolve_timezone


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("PODLOG_SHOW_TIME", "PODLOG_TIMEZONE", "PODLOG_STREAM_MAXSIZE", "PODLOG_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfig:
    """Tests for environment and file based configuration."""

    def test_defaults(self, clean_env, tmp_path):
        cfg = Config(config_file=str(tmp_path / "missing.yml"))
        assert cfg.display.show_time is True
        assert cfg.display.timezone is None
        assert cfg.display.timestamp_width == 30
        assert cfg.display.palette == DEFAULT_PALETTE
        assert cfg.stream.max_size == 0
        assert cfg.get_timezone() is None

    def test_environment_overrides(self, clean_env, tmp_path):
        clean_env.setenv("PODLOG_SHOW_TIME", "false")
        clean_env.setenv("PODLOG_TIMEZONE", "Europe/Paris")
        clean_env.setenv("PODLOG_STREAM_MAXSIZE", "500")
        cfg = Config(config_file=str(tmp_path / "missing.yml"))
        assert cfg.display.show_time is False
        assert cfg.stream.max_size == 500
        assert str(cfg.get_timezone()) == "Europe/Paris"

    def test_invalid_integer_environment_keeps_default(self, clean_env, tmp_path, caplog):
        clean_env.setenv("PODLOG_STREAM_MAXSIZE", "lots")
        with caplog.at_level(logging.WARNING, logger="podlog.config"):
            cfg = Config(config_file=str(tmp_path / "missing.yml"))
        assert cfg.stream.max_size == 0
        assert "PODLOG_STREAM_MAXSIZE" in caplog.text

    def test_non_string_timezone_in_file(self, clean_env, tmp_path, caplog):
        path = tmp_path / "podlog-config.yml"
        path.write_text("display:\n  timezone: 5\n")
        cfg = Config(config_file=str(path))
        assert cfg.display.timezone == "5"
        with caplog.at_level(logging.WARNING, logger="podlog.config"):
            assert cfg.get_timezone() is None
        assert "Unknown timezone" in caplog.text

    def test_non_mapping_display_section_keeps_defaults(self, clean_env, tmp_path):
        path = tmp_path / "podlog-config.yml"
        path.write_text("display: [a, b]\n")
        cfg = Config(config_file=str(path))
        assert cfg.display.show_time is True

    def test_yaml_file(self, clean_env, tmp_path):
        path = tmp_path / "podlog-config.yml"
        path.write_text(
            "log_level: DEBUG\n"
            "display:\n"
            "  timezone: Asia/Tokyo\n"
            "  time_color: yellow\n"
            "  palette: [red, blue]\n"
            "stream:\n"
            "  max_size: 10\n"
        )
        cfg = Config(config_file=str(path))
        assert cfg.log_level == "debug"
        assert cfg.display.timezone == "Asia/Tokyo"
        assert cfg.display.time_color == "yellow"
        assert cfg.display.palette == ["red", "blue"]
        assert cfg.stream.max_size == 10

    def test_config_file_from_environment(self, clean_env, tmp_path):
        path = tmp_path / "custom.yml"
        path.write_text("display:\n  show_time: false\n")
        clean_env.setenv("PODLOG_CONFIG", str(path))
        assert Config().display.show_time is False

    def test_broken_yaml_keeps_defaults(self, clean_env, tmp_path, caplog):
        path = tmp_path / "podlog-config.yml"
        path.write_text("display: [unclosed\n")
        with caplog.at_level(logging.WARNING, logger="podlog.config"):
            cfg = Config(config_file=str(path))
        assert cfg.display.show_time is True
        assert "Failed to load config file" in caplog.text

    def test_non_mapping_yaml_keeps_defaults(self, clean_env, tmp_path):
        path = tmp_path / "podlog-config.yml"
        path.write_text("- a\n- b\n")
        cfg = Config(config_file=str(path))
        assert not cfg.load_file(path)
        assert cfg.display.palette == DEFAULT_PALETTE

    def test_source_colors_assigned_in_order(self, plain_config):
        assert plain_config.get_source_color("p1") == "green"
        assert plain_config.get_source_color("p2") == "blue"
        assert plain_config.get_source_color("p3") == "green"
        assert plain_config.get_source_color("p1") == "green"


def test_resolve_timezone():
    assert resolve_timezone(None) is None
    assert resolve_timezone("") is None
    assert str(resolve_timezone("UTC")) == "UTC"


def test_resolve_unknown_timezone_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="podlog.config"):
        assert resolve_timezone("Mars/Olympus") is None
    assert "Unknown timezone" in caplog.text
