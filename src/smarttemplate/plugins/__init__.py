"""
smarttemplate.plugins – Default escaper/translator and their registry.
"""
from .escaper import BaseEscaper
from .translator import BaseTranslator

__all__ = ["BaseEscaper", "BaseTranslator"]
