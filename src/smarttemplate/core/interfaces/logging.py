from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggerLikeProtocol(Protocol):
    """Logging calls made by the engine, the finder and the loaders."""

    def debug(self, msg: str, *args, **kwargs) -> None: ...

    def warning(self, msg: str, *args, **kwargs) -> None: ...


@runtime_checkable
class LoggerFactoryProtocol(Protocol):
    """Source of the loggers an EngineBuilder hands to the engine and finder."""

    def get_logger(self, name: str) -> LoggerLikeProtocol:
        """Return the logger for component *name* (e.g. ``'engine'``)."""
        ...
