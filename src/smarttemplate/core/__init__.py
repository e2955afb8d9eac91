from __future__ import annotations

"""Public surface for smarttemplate.core.

Protocol types and the small value objects shared by the engine, the finder
and the loaders:

    from smarttemplate.core import RenderContext, FileFinderProtocol, ...
"""

from smarttemplate.core.interfaces import (
    EscaperProtocol,
    FileFinderProtocol,
    LoggerFactoryProtocol,
    LoggerLikeProtocol,
    TemplateEngineProtocol,
    TemplateLoaderProtocol,
    TemplateSourceProtocol,
    TranslatorProtocol,
)
from smarttemplate.core.models import RenderContext, TemplateFile

__all__ = [
    "EscaperProtocol",
    "FileFinderProtocol",
    "LoggerFactoryProtocol",
    "LoggerLikeProtocol",
    "TemplateEngineProtocol",
    "TemplateLoaderProtocol",
    "TemplateSourceProtocol",
    "TranslatorProtocol",
    "RenderContext",
    "TemplateFile",
]
