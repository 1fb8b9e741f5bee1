"""Logging setup for the portal.

Everything logs under the ``elective_portal`` namespace so operators can
raise or lower verbosity for the whole service in one place.
"""

import logging

_LOGGER_NAME = "elective_portal"


def setup_logging(app) -> None:
    """Attach a single stream handler to the portal logger.

    Safe to call once per app instance; existing handlers are replaced so
    repeated factory calls (tests) don't duplicate output.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s - %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    # e.g. get_logger("services.admission") -> elective_portal.services.admission
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")
