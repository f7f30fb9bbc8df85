import logging

from fairshare.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler: logging.Handler | None = None


def configure_logging(level: str | None = None) -> None:
    """Install the application stream handler on the root logger (once)."""
    global _handler

    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())
    if _handler is not None:
        return

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)
