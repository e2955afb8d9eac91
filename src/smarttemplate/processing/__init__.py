"""Public API surface for smarttemplate.processing."""
__all__ = [
    "named_formatter",
    "stringifier",
]
