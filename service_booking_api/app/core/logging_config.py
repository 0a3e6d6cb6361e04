"""
Logging configuration for the service.

``setup_logging`` is called once by ``create_app``.  Modules only ask
for ``logging.getLogger(__name__)``; procedure failures, storage errors
and notification outcomes are all reported through those loggers.
"""

import logging
from pathlib import Path
from typing import List, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that log every request at INFO.
NOISY_LOGGERS = ("httpx", "httpcore")


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        path = Path(logfile).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger for the service.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"``.  Unknown names fall back to
        ``INFO``.
    logfile : Optional[str]
        Optional file receiving the same records as the console.

    A root logger that already has handlers (pytest, a second
    ``create_app`` call) is left alone.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(logfile):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
