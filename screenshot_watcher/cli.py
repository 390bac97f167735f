"""Command-line interface for the screenshot watcher."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from screenshot_watcher import __version__
from screenshot_watcher.archive import LocalFrameArchiver
from screenshot_watcher.client import EventDeliveryClient
from screenshot_watcher.config import ServerConfig, WatcherConfig
from screenshot_watcher.encoding import PillowImageEncoder
from screenshot_watcher.screen import MSSDisplayEnumerator, MSSFrameCapturer
from screenshot_watcher.watcher import ScreenshotWatcher


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Periodically capture every display and send the screenshots to an ActivityWatch server."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", default=None, help="Enable debug logging.")
    parser.add_argument("-s", "--server", type=str, default=None, help="Server host name (default from env).")
    parser.add_argument("-p", "--port", type=int, default=None, help="Server port (default from env).")
    parser.add_argument("--scheme", choices=("http", "https"), default=None, help="Server URL scheme.")
    parser.add_argument("--auth-token", type=str, default=None, help="Token attached to delivery requests.")
    parser.add_argument("--device-id", type=str, default=None, help="Device identifier used in the bucket name.")
    parser.add_argument("--bucket-id", type=str, default=None, help="Explicit bucket identifier.")
    parser.add_argument(
        "-t",
        "--time-interval",
        type=int,
        default=None,
        help="Seconds to wait between capture cycles (default from env).",
    )
    parser.add_argument("--archive-dir", type=Path, default=None, help="Directory for archived screenshots.")
    parser.add_argument("--once", action="store_true", help="Run one capture cycle and exit.")
    parser.add_argument("--max-cycles", type=int, default=None, help="Maximum cycles before exit.")
    return parser


def configure_logging(level: str) -> None:
    """Configure process logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def resolve_config(args: argparse.Namespace) -> WatcherConfig:
    """Merge environment config with CLI overrides."""
    if args.max_cycles is not None and args.max_cycles < 1:
        raise ValueError(f"Maximum cycles must be at least 1, got {args.max_cycles}.")
    config: WatcherConfig = WatcherConfig.from_env()

    server_overrides: dict[str, object] = {
        name: value
        for name, value in (
            ("host", args.server),
            ("port", args.port),
            ("scheme", args.scheme),
            ("auth_token", args.auth_token),
            ("device_id", args.device_id),
            ("bucket_id", args.bucket_id),
        )
        if value is not None
    }
    server: ServerConfig = replace(config.server, **server_overrides)

    watcher_overrides: dict[str, object] = {"server": server}
    if args.time_interval is not None:
        watcher_overrides["interval_seconds"] = args.time_interval
    if args.archive_dir is not None:
        watcher_overrides["archive_dir"] = args.archive_dir
    if args.verbose is not None:
        watcher_overrides["verbose"] = args.verbose
    return replace(config, **watcher_overrides)


def build_watcher(config: WatcherConfig) -> ScreenshotWatcher:
    """Construct a fully wired watcher from configuration."""
    return ScreenshotWatcher(
        enumerator=MSSDisplayEnumerator(logger=logging.getLogger("screenshot_watcher.screen")),
        capturer=MSSFrameCapturer(),
        encoder=PillowImageEncoder(),
        archiver=LocalFrameArchiver(archive_dir=config.archive_dir),
        sink=EventDeliveryClient(config=config.server),
        logger=logging.getLogger("screenshot_watcher.watcher"),
    )


def run(args: argparse.Namespace) -> int:
    """Run the watcher command and return exit code."""
    load_dotenv()
    logger = logging.getLogger(__name__)
    try:
        config = resolve_config(args)
    except ValueError as error:
        configure_logging("INFO")
        logger.error("Invalid configuration: %s", error)
        return 2

    configure_logging(config.effective_log_level)
    logger.info(
        "Watching displays every %ds, sending to %s.",
        config.interval_seconds,
        config.server.events_url,
    )
    watcher = build_watcher(config)
    max_cycles: int | None = 1 if args.once else args.max_cycles

    try:
        watcher.run_loop(interval_seconds=config.interval_seconds, max_cycles=max_cycles)
    except KeyboardInterrupt:
        logger.info("Stopped by user.")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    return run(args)
