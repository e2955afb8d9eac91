"""Public API surface for smarttemplate.io."""
from .loaders import (
    JsonTemplateLoader,
    LoaderRegistry,
    PythonTemplateLoader,
    TemplateLoader,
    get_global_loader_registry,
)

__all__ = [
    "JsonTemplateLoader",
    "LoaderRegistry",
    "PythonTemplateLoader",
    "TemplateLoader",
    "get_global_loader_registry",
]
