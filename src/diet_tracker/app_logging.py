"""Logging configuration helpers."""

import logging

_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(environment: str = "production") -> None:
    """Configure the ``diet_tracker`` logger once.

    Local runs log at DEBUG; everything else at INFO. HTTP client libraries
    log every request at INFO, so they are capped at WARNING.
    """
    logger = logging.getLogger("diet_tracker")
    logger.setLevel(logging.DEBUG if environment == "local" else logging.INFO)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
