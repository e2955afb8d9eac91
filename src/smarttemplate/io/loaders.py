from __future__ import annotations

"""
Template loader registry and built-in loaders.

This module exposes:
  * `LoaderRegistry`: maps file suffixes to template loaders.
  * `PythonTemplateLoader`: executes a `.py` template and reads `TEMPLATES`.
  * `JsonTemplateLoader`: reads a `.json` object of string fragments.
  * `get_global_loader_registry`: process-wide registry (cloned per finder).
"""

import hashlib
import importlib.util
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from smarttemplate.constants import TEMPLATES_ATTR
from smarttemplate.core.interfaces.logging import LoggerLikeProtocol
from smarttemplate.errors import TemplateLoadError
from smarttemplate.logging.helpers import get_logger, trace_io


class TemplateLoader(ABC):
    @abstractmethod
    def load(self, path: Path) -> Mapping[str, Any]:
        raise NotImplementedError


class PythonTemplateLoader(TemplateLoader):
    """Execute a Python template file and return its ``TEMPLATES`` mapping.

    Template files are trusted code. Each load executes the module afresh
    under a private name derived from its path; nothing is added to
    ``sys.modules``.
    """

    def __init__(self, *, attr: str = TEMPLATES_ATTR, logger: Optional[LoggerLikeProtocol] = None) -> None:
        self._attr = attr
        self._log = logger or get_logger('io.loaders.py')

    @staticmethod
    def _module_name(path: Path) -> str:
        digest = hashlib.sha1(str(path).encode('utf-8')).hexdigest()[:12]
        return f'_smarttemplate_tpl_{path.stem}_{digest}'

    def load(self, path: Path) -> Mapping[str, Any]:
        trace_io(self._log, 'loading python template', path=str(path))
        spec = importlib.util.spec_from_file_location(self._module_name(path), path)
        if spec is None or spec.loader is None:
            raise TemplateLoadError(path, 'not an importable Python file')
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:  # noqa: BLE001 - template code is arbitrary
            raise TemplateLoadError(path, f'{type(exc).__name__}: {exc}') from exc
        templates = getattr(module, self._attr, None)
        if not isinstance(templates, Mapping):
            raise TemplateLoadError(path, f'module does not define a {self._attr} mapping')
        return templates


class JsonTemplateLoader(TemplateLoader):
    """Read a JSON object whose leaves are template strings."""

    def __init__(self, *, logger: Optional[LoggerLikeProtocol] = None) -> None:
        self._log = logger or get_logger('io.loaders.json')

    def load(self, path: Path) -> Mapping[str, Any]:
        trace_io(self._log, 'loading json template', path=str(path))
        try:
            data = json.loads(path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as exc:
            raise TemplateLoadError(path, str(exc)) from exc
        if not isinstance(data, dict):
            raise TemplateLoadError(path, 'top-level JSON value must be an object')
        return data


def _normalize_suffix(suffix: str) -> str:
    s = (suffix or '').strip().lower()
    if s and not s.startswith('.'):
        s = f'.{s}'
    return s


class LoaderRegistry:
    """Suffix → loader mapping (case-insensitive)."""

    def __init__(self) -> None:
        self._map: Dict[str, TemplateLoader] = {}

    def register(self, suffixes: Sequence[str], loader: TemplateLoader) -> None:
        for raw in suffixes:
            key = _normalize_suffix(raw)
            if key:
                self._map[key] = loader

    def unregister(self, suffix: str) -> bool:
        return self._map.pop(_normalize_suffix(suffix), None) is not None

    def for_suffix(self, suffix: str) -> Optional[TemplateLoader]:
        return self._map.get(_normalize_suffix(suffix))

    def for_path(self, path: Path) -> Optional[TemplateLoader]:
        return self.for_suffix(path.suffix)

    def supports(self, path: Path) -> bool:
        return self.for_path(path) is not None

    @property
    def suffixes(self) -> tuple[str, ...]:
        return tuple(self._map)

    def clone(self) -> 'LoaderRegistry':
        cloned = LoaderRegistry()
        cloned._map = dict(self._map)
        return cloned


_GLOBAL_REGISTRY: Optional[LoaderRegistry] = None


def get_global_loader_registry(logger: Optional[LoggerLikeProtocol] = None) -> LoaderRegistry:
    global _GLOBAL_REGISTRY
    if _GLOBAL_REGISTRY is None:
        reg = LoaderRegistry()
        reg.register(['.py'], PythonTemplateLoader(logger=logger))
        reg.register(['.json'], JsonTemplateLoader(logger=logger))
        _GLOBAL_REGISTRY = reg
    return _GLOBAL_REGISTRY
