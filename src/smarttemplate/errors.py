from __future__ import annotations

"""Exception hierarchy for smarttemplate.

Every error raised by the package derives from :class:`TemplateError`, and
each concrete kind also inherits the closest builtin so that callers can catch
``KeyError``/``LookupError``/``ValueError`` the usual way.
"""


class TemplateError(Exception):
    """Base class for all smarttemplate errors."""


class TemplateNotFound(TemplateError, LookupError):
    """No source could be resolved for the requested namespace."""

    def __init__(self, name: str, reason: str | None = None) -> None:
        self.name = name
        msg = reason or f"Could not find template {name!r} in templates folder."
        super().__init__(msg)


class KeyNotFound(TemplateError, KeyError):
    """A collection key was requested that the template does not define."""

    def __init__(self, key: object, namespace: str | None = None) -> None:
        self.key = key
        self.namespace = namespace
        where = f" in namespace {namespace!r}" if namespace else ""
        super().__init__(f"template key {key!r} not found{where}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])


class InvalidConfiguration(TemplateError, ValueError):
    """The engine or one of its collaborators was configured incorrectly."""


class StringifyError(InvalidConfiguration, TypeError):
    """A placeholder value has no stringify rule."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"cannot stringify value of type {type(value).__name__!r} for placeholder substitution"
        )


class TemplateLoadError(TemplateError):
    """A template source exists but could not be loaded into a mapping."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        super().__init__(f"could not load template {path}: {reason}")
