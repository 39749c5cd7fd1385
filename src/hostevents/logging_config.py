from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import DispatchSettings


def resolve_level(settings: Optional[DispatchSettings] = None, verbosity: int = 0) -> int:
    """Pick a log level: -v gives INFO, -vv gives DEBUG, otherwise the settings level."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    settings = settings or DispatchSettings.from_sources()
    return logging.getLevelName(settings.log_level)


def configure_logging(settings: Optional[DispatchSettings] = None, verbosity: int = 0) -> None:
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger()
    root.setLevel(resolve_level(settings, verbosity))
    # Drop previous handlers so repeated calls don't duplicate output
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
