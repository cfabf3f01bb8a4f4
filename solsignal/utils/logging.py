"""Logging setup shared by the API, worker and dashboard."""
import logging
import sys

from config.settings import get_settings

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_configured = False


def configure_logging(level: str = None) -> None:
    """Install a single stream handler on the package root logger."""
    global _configured
    root = logging.getLogger("solsignal")
    root.setLevel((level or get_settings().LOG_LEVEL).upper())
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace."""
    configure_logging()
    if not name.startswith("solsignal"):
        name = f"solsignal.{name}"
    return logging.getLogger(name)
