"""
smarttemplate.rendering – Engine and compiled leaf renderers.
"""
from .deferred import ContextualRenderer, DeferredRenderer, contextual
from .engine import TemplateEngine

__all__ = ["ContextualRenderer", "DeferredRenderer", "contextual", "TemplateEngine"]
