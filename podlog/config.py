"""
Configuration management for podlog.

Settings come from environment variables, optionally overridden by a YAML
file (``podlog-config.yml`` in the working directory, or the path given in
``PODLOG_CONFIG``). A broken config file or an unknown timezone is logged
and the defaults are kept.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytz
import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "podlog-config.yml"

DEFAULT_PALETTE = [
    'dodgerblue',
    'greenyellow',
    'orange',
    'fuchsia',
    'aqua',
    'coral',
    'lightskyblue',
    'yellow',
]


@dataclass
class DisplayConfig:
    """Configuration for rendered log lines."""

    show_time: bool = True
    timezone: Optional[str] = None
    time_color: str = "gray"
    timestamp_width: int = 30
    single_container: bool = False
    markup: bool = False
    plain: bool = False
    palette: List[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))


@dataclass
class StreamConfig:
    """Configuration for the log stream."""

    max_size: int = 0  # 0 = unbounded


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: '{value}', using {default}")
        return default


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """
    Resolve a timezone name such as ``Europe/Paris``.

    Args:
        name: IANA timezone name, or None/empty for no conversion

    Returns:
        Optional[tzinfo]: The timezone, or None if unset or unknown
    """
    if not name:
        return None
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        logger.warning(f"Unknown timezone '{name}', timestamps will not be converted")
        return None


class Config:
    """Main configuration class for podlog."""

    def __init__(self, config_file: Optional[str] = None):
        self.log_level = os.getenv("PODLOG_LOG_LEVEL", "info").lower()

        self.display = DisplayConfig(
            show_time=_env_bool("PODLOG_SHOW_TIME", True),
            timezone=os.getenv("PODLOG_TIMEZONE") or None,
            time_color=os.getenv("PODLOG_TIME_COLOR", "gray"),
            single_container=_env_bool("PODLOG_SINGLE_CONTAINER", False),
            markup=_env_bool("PODLOG_MARKUP", False),
            plain=_env_bool("PODLOG_PLAIN", False),
        )

        self.stream = StreamConfig(
            max_size=_env_int("PODLOG_STREAM_MAXSIZE", 0),
        )

        self._source_colors: Dict[str, str] = {}

        path = config_file or os.getenv("PODLOG_CONFIG", DEFAULT_CONFIG_FILE)
        self.load_file(Path(path))

    def load_file(self, path: Path) -> bool:
        """
        Apply settings from a YAML file.

        Args:
            path: Path to the YAML config file

        Returns:
            bool: True if the file existed and was applied
        """
        if not path.exists():
            return False

        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
            self._apply(data)
        except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
            logger.warning(f"Failed to load config file {path}: {e}")
            return False

        logger.debug(f"Loaded config file {path}")
        return True

    def _apply(self, data: Dict[str, Any]) -> None:
        if not isinstance(data, dict):
            raise TypeError("config file must contain a mapping")

        self.log_level = str(data.get("log_level", self.log_level)).lower()

        display = data.get("display") or {}
        self.display.show_time = bool(display.get("show_time", self.display.show_time))
        timezone = display.get("timezone", self.display.timezone)
        self.display.timezone = str(timezone) if timezone is not None else None
        self.display.time_color = str(display.get("time_color", self.display.time_color))
        self.display.timestamp_width = int(display.get("timestamp_width", self.display.timestamp_width))
        self.display.single_container = bool(display.get("single_container", self.display.single_container))
        self.display.markup = bool(display.get("markup", self.display.markup))
        self.display.plain = bool(display.get("plain", self.display.plain))
        if display.get("palette"):
            self.display.palette = [str(c) for c in display["palette"]]

        stream = data.get("stream") or {}
        self.stream.max_size = int(stream.get("max_size", self.stream.max_size))

    def get_timezone(self) -> Optional[tzinfo]:
        """Get the configured display timezone, if any."""
        return resolve_timezone(self.display.timezone)

    def get_source_color(self, source_id: str) -> str:
        """Get the color for a log source, assigning palette colors in first-seen order."""
        if source_id not in self._source_colors:
            palette = self.display.palette or DEFAULT_PALETTE
            self._source_colors[source_id] = palette[len(self._source_colors) % len(palette)]
        return self._source_colors[source_id]


# Global configuration instance
config = Config()
