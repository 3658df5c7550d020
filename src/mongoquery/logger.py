"""Logging for mongoquery.

Every logger lives under the ``mongoquery`` namespace (``mongoquery.compiler.*``
for the query and expression compilers, ``mongoquery.engine`` for the
database), so compiler debug output can be raised or silenced on its own::

    logging.getLogger("mongoquery.compiler").setLevel(logging.DEBUG)

Handlers are attached to the ``mongoquery`` logger only; the root logger of
the host application is left alone.
"""

import logging
from typing import Any, Optional

from mongoquery.settings import settings as api_settings

ROOT_LOGGER = "mongoquery"

_LEVELS = {
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

_configured = False


def setup_global_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the ``mongoquery`` logger once.

    Args:
        level: Log level name (e.g., "DEBUG", "INFO")
    """
    global _configured
    if _configured:
        return
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(_LEVELS.get(level.upper(), logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    root.addHandler(handler)
    _configured = True


def qualified_name(name: Optional[str]) -> str:
    """Place `name` under the ``mongoquery`` namespace."""
    if not name:
        return ROOT_LOGGER
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return name
    return f"{ROOT_LOGGER}.{name}"


class Logger:
    """Thin wrapper over a namespaced standard logger.

    - Configures the ``mongoquery`` logger from `LOG_LEVEL` on first use.
    - `.message(text)` logs at the configured `LOG_LEVEL`.
    - `.compiled(kind, source, result)` records one compiler input/output pair
      at debug level.
    """

    def __init__(self, name: Optional[str] = None) -> None:
        if not _configured:
            setup_global_logging(api_settings.LOG_LEVEL)
        self._logger = logging.getLogger(qualified_name(name))

    @property
    def name(self) -> str:
        return self._logger.name

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)

    def message(self, msg: str, *args, **kwargs) -> None:
        level = _LEVELS.get((api_settings.LOG_LEVEL or "").upper(), logging.INFO)
        self._logger.log(level, msg, *args, **kwargs)

    def compiled(self, kind: str, source: Any, result: Any) -> None:
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug("%s %r -> %r", kind, source, result)
