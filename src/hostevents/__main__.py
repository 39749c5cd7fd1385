from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .config import DispatchSettings
from .errors import ConfigError
from .examples.internet import build_demo
from .logging_config import configure_logging

logger = logging.getLogger("hostevents")


def run_demo(person: str, settings: DispatchSettings) -> int:
    it = build_demo(settings=settings)
    steps = [
        ("connect", lambda: it.connect(person)),
        ("wait", lambda: it.wait(person)),
        ("disconnect", lambda: it.disconnect(person)),
        ("error", lambda: it.error(person, "Error 1")),
    ]
    for label, step in steps:
        step()
        print(f"{label}: event fired: {it.output}")
    logger.info("Final status map: %r", it.person_status_map)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="hostevents",
        description="Run the connection status demo and print every dispatched event",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--person", default="🦀", help="Name used for the demo connection")
    parser.add_argument("--settings", default=None, help="YAML file with dispatch settings")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    try:
        settings = DispatchSettings.from_sources(file_path=args.settings)
    except ConfigError as exc:
        parser.error(str(exc))
    configure_logging(settings, verbosity=args.verbose)
    return run_demo(args.person, settings)


if __name__ == "__main__":
    sys.exit(main())
