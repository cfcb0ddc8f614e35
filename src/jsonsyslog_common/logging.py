from __future__ import annotations

import logging
import sys
from typing import Union


def setup_logging(name: str = "jsonsyslog", level: Union[int, str] = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    # stderr keeps stdout free for command output
    h = logging.StreamHandler(sys.stderr)
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    h.setFormatter(fmt)
    logger.addHandler(h)
    return logger
