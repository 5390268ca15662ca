"""
Root logging setup.

Modules log through ``logging.getLogger(__name__)``; this only decides
where those records go and at which level.
"""

import logging

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-8s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def resolve_level(name: str | None, default: str = "INFO") -> int:
    """Map a level name (case-insensitive) to a logging constant."""
    value = (name or "").strip().upper()
    return _LEVELS.get(value, _LEVELS[default])


def setup_logging(level: str | None = None, logger: logging.Logger | None = None) -> None:
    """
    Configure root logging once. Idempotent.

    If the logger (root by default) already has handlers, for example from
    pytest or an embedding app, only the level is adjusted.
    """
    root = logger if logger is not None else logging.getLogger()
    resolved = resolve_level(level)

    if root.handlers:
        root.setLevel(resolved)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root.setLevel(resolved)
    root.addHandler(handler)
