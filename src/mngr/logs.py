"""Logging setup for the server process."""

import logging
import sys

from mngr.config import LoggingConfig
from mngr.middleware import ACCESS_LOGGER

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(config: LoggingConfig) -> logging.Logger:
    """Configure application logging and the access log sink.

    Application records go to stderr at the configured level. Access records
    go to ``config.access_log`` (appended to) or stderr, one bare line each.

    Returns:
        The access logger
    """
    logging.basicConfig(level=config.level, format=LOG_FORMAT)

    access_log = logging.getLogger(ACCESS_LOGGER)
    for old in list(access_log.handlers):
        access_log.removeHandler(old)
        old.close()

    if config.access_log is not None:
        handler: logging.Handler = logging.FileHandler(config.access_log, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    access_log.addHandler(handler)
    access_log.setLevel(logging.INFO)
    access_log.propagate = False
    return access_log
