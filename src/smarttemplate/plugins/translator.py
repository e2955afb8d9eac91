from __future__ import annotations

from typing import Any, Mapping, Optional

from smarttemplate.core.interfaces.translator import TranslatorProtocol


class BaseTranslator(TranslatorProtocol):
    """Does not translate anything, simply returns the id."""

    def trans(
        self,
        id: Optional[str],
        parameters: Optional[Mapping[str, Any]] = None,
        domain: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> str:
        return "" if id is None else str(id)
