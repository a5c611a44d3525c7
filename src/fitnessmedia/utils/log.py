"""
Logging setup for the FitnessMedia application.

Functions:
    configure_logging: Configure the root logger once per process
"""

import logging
import os
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_LEVEL = "INFO"


def configure_logging(level: Optional[Union[int, str]] = None) -> int:
    """
    Configure application logging.

    The level comes from the argument, then the FITNESSMEDIA_LOG_LEVEL
    environment variable, then INFO. Unknown level names fall back to INFO.

    Args:
        level: Optional level name or number

    Returns:
        The numeric level that was applied
    """
    if level is None:
        level = os.getenv("FITNESSMEDIA_LOG_LEVEL", DEFAULT_LEVEL)

    if isinstance(level, str):
        numeric = logging.getLevelName(level.strip().upper())
        if not isinstance(numeric, int):
            numeric = logging.INFO
    else:
        numeric = int(level)

    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger("fitnessmedia").setLevel(numeric)
    return numeric
