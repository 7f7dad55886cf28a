"""Logging setup for the API process."""
import logging


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging once at startup.

    Uvicorn installs its own handlers for its loggers; this only sets up the
    application loggers (``api``, ``core``, ``services``, ...).
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
