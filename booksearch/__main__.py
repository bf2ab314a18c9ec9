#!/usr/bin/env python3
"""
Book Search - Main executable entry point
Allows the module to be executed with: python -m booksearch
"""

import sys
import curses
import logging
import argparse

from wasabi import Printer

from . import config
from .controller import SearchController
from .main_app import main_app, create_session
from .lifecycle import ResultStatus
from .network_utils import SearchClient
from .views import render_page

msg = Printer()


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="booksearch", description="Terminal client for a full-text book search service")
    p.add_argument("location", nargs="?", default="/",
                   help="Location to open, e.g. '/search?q=poe&language=fr' (default: landing page)")
    p.add_argument("--base-url", default=config.SEARCH_BASE_URL, help="Base URL of the search service")
    p.add_argument("--timeout", type=float, default=config.REQUEST_TIMEOUT, help="Request timeout in seconds")
    p.add_argument("--log-file", default=config.LOG_FILE, help="Where to write the activity log")
    p.add_argument("--verbose", action="store_true", help="Log debug details (requests, navigation)")
    p.add_argument("--print", dest="print_only", action="store_true",
                   help="Run the location's search once and print the page instead of starting the UI")
    return p.parse_args(argv)


def setup_logging(log_file, verbose=False):
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] %(name)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def print_location(client, location):
    """Render a location once to stdout. Returns the process exit code."""
    controller = SearchController(client, location=location)
    controller.start()

    msg.divider(controller.title)
    for line in render_page(controller):
        print(line)

    if controller.status is ResultStatus.FAILED:
        msg.fail(controller.alerts[-1] if controller.alerts else "Search failed")
        return 1
    return 0


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    client = SearchClient(base_url=args.base_url, timeout=args.timeout)

    if args.print_only:
        sys.exit(print_location(client, args.location))

    controller, runner = create_session(client, args.location)
    try:
        curses.wrapper(main_app, controller, runner)
    except Exception as e:
        logging.getLogger("booksearch").exception("Fatal error")
        msg.fail(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
