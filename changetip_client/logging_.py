from __future__ import annotations

import logging

PACKAGE_LOGGER = "changetip_client"
HANDLER_NAME = "changetip_client.stderr"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(verbose: bool) -> logging.Logger:
    """Route this package's records to stderr; debug output only when verbose."""
    level = logging.DEBUG if verbose else logging.WARNING
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.setLevel(level)
    if not any(h.get_name() == HANDLER_NAME for h in pkg_logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        pkg_logger.addHandler(handler)

    # request lines from httpx would repeat what the transport already logs
    logging.getLogger("httpx").setLevel(level)
    logging.getLogger("httpcore").setLevel(level)
    return pkg_logger
