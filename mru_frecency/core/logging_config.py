"""Logging setup for hosts embedding the frecency store."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from mru_frecency.core.settings import Settings, get_settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings.

    Library code only ever logs through module loggers; hosts that want the
    store's diagnostics on stderr call this once at startup.

    Args:
        settings: Settings to read ``log_level``/``debug`` from. Uses the
            global settings when omitted.
    """
    settings = settings or get_settings()
    log_format = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
    date_format = "%H:%M:%S"

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=log_format,
        datefmt=date_format,
        stream=sys.stderr,
        force=True,
    )

    if settings.debug:
        logging.getLogger("mru_frecency").setLevel(logging.DEBUG)
