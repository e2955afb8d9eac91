from __future__ import annotations

"""
Minimal plugin registry for escapers and translators.

This registry provides:
- `register_escaper(name, factory)` / `get_escaper(name)`
- `register_translator(name, factory)` / `get_translator(name)`
- `resolve_escaper(ref)` / `resolve_translator(ref)`

A *ref* is either a registered name (case-insensitive) or a dynamic
'module.path:AttrName' reference loaded with `load_object_from_ref`. A class
or factory is called with no arguments; an instance is returned as-is.
"""

from typing import Any, Callable, Dict, Optional

from smarttemplate.core.interfaces.escaper import EscaperProtocol
from smarttemplate.core.interfaces.translator import TranslatorProtocol
from smarttemplate.errors import InvalidConfiguration
from smarttemplate.plugins.escaper import BaseEscaper
from smarttemplate.plugins.translator import BaseTranslator
from smarttemplate.utils.imports import load_object_from_ref

_ESCAPER_FACTORIES: Dict[str, Callable[[], EscaperProtocol]] = {'base': BaseEscaper}
_TRANSLATOR_FACTORIES: Dict[str, Callable[[], TranslatorProtocol]] = {'base': BaseTranslator}


def _key(name: str, kind: str) -> str:
    key = (name or '').strip().lower()
    if not key:
        raise ValueError(f'{kind} name must be non-empty')
    return key


def register_escaper(name: str, factory: Callable[[], EscaperProtocol]) -> None:
    _ESCAPER_FACTORIES[_key(name, 'escaper')] = factory


def get_escaper(name: str) -> Optional[Callable[[], EscaperProtocol]]:
    return _ESCAPER_FACTORIES.get((name or '').strip().lower())


def register_translator(name: str, factory: Callable[[], TranslatorProtocol]) -> None:
    _TRANSLATOR_FACTORIES[_key(name, 'translator')] = factory


def get_translator(name: str) -> Optional[Callable[[], TranslatorProtocol]]:
    return _TRANSLATOR_FACTORIES.get((name or '').strip().lower())


def _instantiate(obj: Any, protocol: type) -> Any:
    if isinstance(obj, type):
        return obj()
    if isinstance(obj, protocol):
        return obj
    return obj() if callable(obj) else obj


def _resolve(ref: str, lookup: Callable[[str], Any], protocol: type, kind: str) -> Any:
    factory = lookup(ref)
    if factory is None:
        if ':' not in (ref or ''):
            raise InvalidConfiguration(f"unknown {kind} {ref!r}")
        try:
            factory = load_object_from_ref(ref)
        except ImportError as exc:
            raise InvalidConfiguration(str(exc)) from exc
    instance = _instantiate(factory, protocol)
    if not isinstance(instance, protocol):
        raise InvalidConfiguration(f"{ref!r} does not provide a {kind}")
    return instance


def resolve_escaper(ref: str) -> EscaperProtocol:
    return _resolve(ref, get_escaper, EscaperProtocol, 'escaper')


def resolve_translator(ref: str) -> TranslatorProtocol:
    return _resolve(ref, get_translator, TranslatorProtocol, 'translator')
