"""Logging configuration helpers."""

import logging


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure the ``nutrilog`` logger with a single stream handler.

    ``level`` accepts a level number or name such as ``"DEBUG"``. Repeated calls
    only adjust the level.
    """
    logger = logging.getLogger("nutrilog")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
