"""
Logging setup for the application.
"""
import logging
import sys


def setup_logging(level: str = "INFO", fmt: str = "%(levelname)s %(message)s"):
    """Attach a stdout handler to the root logger. Safe to call more than once."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in root.handlers:
        if getattr(handler, "_chatapp_handler", False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    handler._chatapp_handler = True
    root.addHandler(handler)

    # SQL echo is controlled by DB_ECHO, keep the engine logger quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.info("Logging is set up.")
