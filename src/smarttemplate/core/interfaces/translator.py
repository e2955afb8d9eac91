from __future__ import annotations
from typing import Any, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class TranslatorProtocol(Protocol):
    """Message translator exposed to templates through ``engine.trans``."""

    def trans(
        self,
        id: Optional[str],
        parameters: Optional[Mapping[str, Any]] = None,
        domain: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> str:
        ...
