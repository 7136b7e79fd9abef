# booking/utils/my_logging.py
"""Logging configuration"""
import logging
import sys

from booking.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that flood the output at INFO
LIBRARY_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "alembic.runtime.migration",
    "uvicorn.access",
)


def setup_logging(verbose=True):
    """
    Configure root logging from LOG_LEVEL.

    With verbose=False the application still logs at LOG_LEVEL but the
    database driver and access-log chatter is cut down to errors.
    """
    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    library_level = logging.WARNING if verbose else logging.ERROR
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
