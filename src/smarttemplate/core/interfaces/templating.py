from __future__ import annotations
from typing import Any, Callable, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class TemplateEngineProtocol(Protocol):
    """Callback-driven renderer over named template namespaces."""

    def render(self, name: Optional[str], callback: Callable[..., Any]) -> Any:
        ...

    def add_custom(self, namespace: str, templates: Mapping[str, Any]) -> "TemplateEngineProtocol":
        ...

    def vnsprintf(self, template: str, args: Optional[Mapping[str, Any]] = None, context: Any = None) -> str:
        ...

    def attributes(self, attribs: Mapping[str, Any], clean: bool = True, separator: str = " ") -> str:
        ...
