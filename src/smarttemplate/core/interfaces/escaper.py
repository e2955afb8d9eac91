from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class EscaperProtocol(Protocol):
    """Context-aware escaping used by the attribute render hook."""

    def escape_html(self, text: str) -> str:
        """Escape *text* for the HTML body context."""
        ...

    def escape_html_attr(self, text: str) -> str:
        """Escape *text* for a quoted HTML attribute value."""
        ...

    def escape_js(self, text: str) -> str:
        ...

    def escape_css(self, text: str) -> str:
        ...

    def escape_url(self, text: str) -> str:
        """Escape a URI component (not a whole URI)."""
        ...
