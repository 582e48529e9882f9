"""Logger factory shared by services and views."""
import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
ROOT_LOGGER = "member_demo"

_level = logging.INFO


def configure(level: str = "INFO", provider_level: Optional[str] = None) -> None:
    """Set the app log level and, optionally, the Firestore client log level."""
    global _level
    _level = getattr(logging, str(level).upper(), logging.INFO)
    logging.getLogger(ROOT_LOGGER).setLevel(_level)
    if provider_level:
        logging.getLogger("google.cloud.firestore").setLevel(
            getattr(logging, str(provider_level).upper(), logging.DEBUG))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a configured logger under the app namespace."""
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        root.setLevel(_level)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.propagate = False
    if not name:
        return root
    return root.getChild(name)
