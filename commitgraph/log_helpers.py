import logging
from os import getenv

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_log_level() -> int:
    """COMMITGRAPH_DEBUG forces DEBUG, otherwise COMMITGRAPH_LOG_LEVEL, defaulting to WARNING."""
    if getenv("COMMITGRAPH_DEBUG"):
        return logging.DEBUG
    levels = logging.getLevelNamesMapping()
    return levels.get(getenv("COMMITGRAPH_LOG_LEVEL", "warning").upper(), logging.WARNING)


def configure_logging() -> None:
    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT)
