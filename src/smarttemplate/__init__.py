from __future__ import annotations

from smarttemplate.collection.render_collection import RenderCollection
from smarttemplate.core.models import RenderContext
from smarttemplate.discovery.file_finder import DirectoryFileFinder
from smarttemplate.errors import (
    InvalidConfiguration,
    KeyNotFound,
    StringifyError,
    TemplateError,
    TemplateLoadError,
    TemplateNotFound,
)
from smarttemplate.plugins.escaper import BaseEscaper
from smarttemplate.plugins.translator import BaseTranslator
from smarttemplate.processing.stringifier import Stringifier
from smarttemplate.rendering.deferred import ContextualRenderer, DeferredRenderer, contextual
from smarttemplate.rendering.engine import TemplateEngine
from smarttemplate.runtime.container import EngineBuilder, EngineConfig, build_engine

__version__ = '0.3.0'

__all__ = [
    'TemplateEngine',
    'RenderCollection',
    'RenderContext',
    'DeferredRenderer',
    'ContextualRenderer',
    'contextual',
    'DirectoryFileFinder',
    'Stringifier',
    'BaseEscaper',
    'BaseTranslator',
    'EngineBuilder',
    'EngineConfig',
    'build_engine',
    'TemplateError',
    'TemplateNotFound',
    'KeyNotFound',
    'InvalidConfiguration',
    'StringifyError',
    'TemplateLoadError',
]
