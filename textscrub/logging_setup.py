from __future__ import annotations

import logging
import os
from typing import Optional


def setup_logging(level: Optional[str] = None, verbose: bool = False) -> None:
    raw_level = level or os.getenv("TEXTSCRUB_LOG_LEVEL", "DEBUG" if verbose else "WARNING")
    level_name = str(raw_level).strip().upper()
    log_level = getattr(logging, level_name, logging.WARNING)

    # The CLI prints JSON on stdout, so log records stay on stderr.
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )
