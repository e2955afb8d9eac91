from __future__ import annotations

import logging
from typing import Optional, TextIO

from smarttemplate.core.interfaces.logging import LoggerFactoryProtocol
from smarttemplate.logging.helpers import get_logger, setup_base_logger


class DefaultLoggerFactory(LoggerFactoryProtocol):
    """Hand out ``smarttemplate.<component>`` loggers.

    The first request configures the base ``smarttemplate`` logger (plain or
    JSON output, level, stream) through `setup_base_logger`; an
    EngineBuilder uses this factory unless it is given another one.
    """

    def __init__(self, *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
        self._json = bool(json_logs)
        self._level = int(level)
        self._stream: Optional[TextIO] = stream
        self._base: Optional[logging.Logger] = None

    @property
    def base(self) -> logging.Logger:
        """The configured ``smarttemplate`` logger."""
        if self._base is None:
            self._base = setup_base_logger(json_logs=self._json, level=self._level, stream=self._stream)
        return self._base

    def get_logger(self, name: str) -> logging.Logger:
        base = self.base
        return get_logger(name) if name else base
