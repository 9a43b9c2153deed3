#!/usr/bin/env python3
"""
Podlog CLI

Renders local container log files (or stdin) as aligned, colored log lines,
one producer per source, the way a log view shows several containers of a
pod side by side.
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from . import __version__
from .config import Config
from .producer import pump_lines, tail_file
from .stream import LogStream
from .viewer import LogViewer

logger = logging.getLogger(__name__)

STDIN = "-"


@dataclass
class Source:
    """A log source given on the command line."""

    pod: str
    container: str
    path: str

    @property
    def is_stdin(self) -> bool:
        return self.path == STDIN


def parse_source(arg: str) -> Source:
    """
    Parse a source argument.

    Accepted forms are ``pod/container=path``, ``pod=path`` and ``path``.
    A bare path uses the file stem as container name; ``-`` reads stdin.

    Raises:
        ValueError: If the path part is empty
    """
    name, sep, path = arg.partition("=")
    if not sep:
        path = arg
        container = "stdin" if path == STDIN else Path(path).stem
        return Source(pod="", container=container, path=path)

    if not path:
        raise ValueError(f"missing path in source '{arg}'")
    pod, _, container = name.partition("/")
    return Source(pod=pod, container=container, path=path)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="podlog",
        description="Podlog - render container logs as aligned, colored lines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  podlog web/nginx=nginx.log web/sidecar=sidecar.log
  podlog --timezone Europe/Paris api=api.log
  kubectl logs --timestamps mypod | podlog mypod=-
        """
    )

    parser.add_argument(
        "sources",
        nargs="*",
        default=[STDIN],
        help="Log sources: pod/container=path, pod=path, path or - for stdin"
    )
    parser.add_argument(
        "--timezone", "-z",
        help="Convert timestamps to this timezone (e.g. UTC, Europe/Paris)"
    )
    parser.add_argument(
        "--no-timestamps",
        action="store_true",
        help="Hide the timestamp column"
    )
    parser.add_argument(
        "--single-container",
        action="store_true",
        help="Hide the container column"
    )
    parser.add_argument(
        "--markup",
        action="store_true",
        help="Print raw style markup instead of ANSI colors"
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        help="Print uncolored text"
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to a YAML config file"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"podlog v{__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    return parser


def setup_logging(level: int) -> None:
    """Configure logging to stderr."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


async def _produce(stream: LogStream, source: Source, single_container: bool) -> int:
    if source.is_stdin:
        return await pump_lines(
            stream,
            sys.stdin.buffer,
            pod=source.pod,
            container=source.container,
            single_container=single_container,
        )
    return await tail_file(
        stream,
        Path(source.path),
        pod=source.pod,
        container=source.container,
        single_container=single_container,
    )


async def run_sources(
    sources: List[Source],
    cfg: Config,
    sink: Callable[[str], None],
) -> Dict[str, int]:
    """
    Stream all sources through a single viewer.

    Returns:
        Dict[str, int]: The viewer statistics
    """
    stream = LogStream(maxsize=cfg.stream.max_size)
    viewer = LogViewer(stream, sink, cfg)
    consumer = asyncio.ensure_future(viewer.run(producers=len(sources)))

    producers = [
        asyncio.ensure_future(_produce(stream, s, cfg.display.single_container))
        for s in sources
    ]

    try:
        await asyncio.gather(*producers)
    except BaseException:
        for task in (*producers, consumer):
            task.cancel()
        await asyncio.gather(*producers, consumer, return_exceptions=True)
        raise
    finally:
        stream.close()

    return await consumer


def _write_line(line: str) -> None:
    sys.stdout.write(line + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    cfg = Config(config_file=args.config)
    log_level = logging.DEBUG if args.verbose else getattr(logging, cfg.log_level.upper(), logging.INFO)
    setup_logging(log_level)

    if args.timezone:
        cfg.display.timezone = args.timezone
    if args.no_timestamps:
        cfg.display.show_time = False
    if args.single_container:
        cfg.display.single_container = True
    if args.markup:
        cfg.display.markup = True
    if args.plain:
        cfg.display.plain = True

    try:
        if args.config and not Path(args.config).is_file():
            raise FileNotFoundError(args.config)
        sources = [parse_source(arg) for arg in args.sources]
        for source in sources:
            if not source.is_stdin and not Path(source.path).is_file():
                raise FileNotFoundError(source.path)

        stats = asyncio.run(run_sources(sources, cfg, _write_line))
        logger.debug(f"Rendered {stats['lines']} lines ({stats['bytes']} bytes accounted)")
        return 0

    except KeyboardInterrupt:
        logger.warning("Operation cancelled by user")
        return 130
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except OSError as e:
        logger.error(f"Failed to read log source: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid source: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
