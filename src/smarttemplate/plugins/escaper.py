from __future__ import annotations

import html
from urllib.parse import quote

from smarttemplate.core.interfaces.escaper import EscaperProtocol


class BaseEscaper(EscaperProtocol):
    """Minimal escaper: HTML entity escaping everywhere, RFC 3986 for URLs."""

    def escape_html(self, text: str) -> str:
        return html.escape(str(text), quote=True)

    def escape_html_attr(self, text: str) -> str:
        return self.escape_html(text)

    def escape_js(self, text: str) -> str:
        return self.escape_html(text)

    def escape_css(self, text: str) -> str:
        return self.escape_html(text)

    def escape_url(self, text: str) -> str:
        return quote(str(text), safe="")
