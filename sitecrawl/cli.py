"""
Command-line interface for the crawler.
"""
from __future__ import annotations

import argparse
import logging
import os
import signal
import sys
import threading
from typing import List, Optional

from sitecrawl import config
from sitecrawl.container import Container, build_crawl_executor
from sitecrawl.domain.run_config import RunConfig
from sitecrawl.exceptions import InvalidSeedUrlError
from sitecrawl.services.report_writer import ReportWriter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_URL = 1


def _non_negative_int(raw: Optional[str], default: int) -> int:
    """Parse a count, falling back to `default` for missing or malformed values."""
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitecrawl",
        description="Crawl every page of one host reachable from a seed URL.",
        allow_abbrev=False,
    )
    parser.add_argument("-t", dest="threads", nargs="?", default=None, help="Max concurrent fetches (default: 1)")
    parser.add_argument("-v", dest="verbose", action="store_true", help="Log one line per completed task")
    parser.add_argument("-filter", dest="filter", nargs="?", default=None, help="Comma-separated URL substrings to blacklist")
    parser.add_argument("-limit", dest="limit", nargs="?", default=None, help="Max in-flight + fetched tasks (0 = unlimited)")
    parser.add_argument("-o", dest="output", nargs="?", default=None, help="Report file path")
    parser.add_argument("urls", nargs="*", help="Seed URL (the last one wins)")
    return parser


def parse_args(argv: Optional[List[str]] = None):
    """Parse arguments into `(RunConfig, seed_url or None)`.

    Unknown options are ignored and non-numeric counts fall back to their
    defaults rather than aborting.
    """
    parser = build_parser()
    args, unknown = parser.parse_known_args(argv)
    positionals = list(args.urls) + [u for u in unknown if not u.startswith("-")]
    run_config = RunConfig(
        concurrency=_non_negative_int(args.threads, 1),
        limit=_non_negative_int(args.limit, 0),
        filters=RunConfig.parse_filters(args.filter),
        verbose=args.verbose,
        output_path=args.output or None,
    )
    seed = positionals[-1] if positionals else None
    return run_config, seed


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        stream=sys.stdout,
        level=getattr(logging, config.log_level(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    progress = logging.getLogger("sitecrawl.progress")
    progress.propagate = False
    if verbose and not progress.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("[%(asctime)s] %(message)s", datefmt="%H:%M:%S"))
        progress.addHandler(handler)
        progress.setLevel(logging.INFO)


def _install_signal_handlers(stop_event: threading.Event) -> None:
    def _handler(signum, frame):
        logger.warning("Received signal %s; stopping crawl", signum)
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, _handler)


def main(argv: Optional[List[str]] = None, container: Optional[Container] = None, stop_event=None, hard_exit: bool = True) -> int:
    run_config, seed = parse_args(argv)
    configure_logging(run_config.verbose)

    if seed is None:
        logger.error("no url - exit")
        return EXIT_INVALID_URL

    writer = ReportWriter(run_config.output_path)
    writer.create_empty()

    container = container or Container()
    executor = build_crawl_executor(container, run_config)

    if stop_event is None:
        stop_event = threading.Event()
        _install_signal_handlers(stop_event)

    try:
        result = executor.crawl(seed, stop_event=stop_event)
    except InvalidSeedUrlError as e:
        logger.error("%s - exit", e)
        return EXIT_INVALID_URL

    writer.write(executor.pool.all_tasks())

    if result.stopped and hard_exit:
        # Abandoned in-flight fetches must not keep the interpreter alive.
        logging.shutdown()
        sys.stdout.flush()
        os._exit(EXIT_OK)
    return EXIT_OK


def run() -> None:
    sys.exit(main())
