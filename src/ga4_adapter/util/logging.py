"""Logging helpers shared across the adapter."""

import logging

_ROOT = "ga4_adapter"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package root."""
    return logging.getLogger(f"{_ROOT}.{name}")


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
    root.setLevel(level.upper())
