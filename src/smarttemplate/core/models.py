from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Optional

from smarttemplate.core.interfaces.finder import TemplateLoaderProtocol

if TYPE_CHECKING:  # pragma: no cover
    from smarttemplate.collection.render_collection import RenderCollection
    from smarttemplate.rendering.engine import TemplateEngine


@dataclass(frozen=True, eq=False)
class RenderContext:
    """Handles a compiled leaf needs to call back into its namespace."""
    collection: 'RenderCollection'
    engine: 'TemplateEngine'
    namespace: Optional[str] = None


@dataclass(frozen=True)
class TemplateFile:
    """A template source on disk paired with the loader for its suffix."""
    path: Path
    loader: TemplateLoaderProtocol

    def load(self) -> Mapping[str, Any]:
        return self.loader.load(self.path)
