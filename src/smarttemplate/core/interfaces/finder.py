from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable


@runtime_checkable
class TemplateSourceProtocol(Protocol):
    """One readable template file."""

    @property
    def path(self) -> Path:
        ...

    def load(self) -> Mapping[str, Any]:
        """Return the raw nested mapping defined by the source."""
        ...


@runtime_checkable
class FileFinderProtocol(Protocol):
    def find(self, name: str) -> Sequence[TemplateSourceProtocol]:
        """Return every source matching *name*, in merge order (may be empty)."""
        ...


@runtime_checkable
class TemplateLoaderProtocol(Protocol):
    def load(self, path: Path) -> Mapping[str, Any]:
        ...
