from __future__ import annotations

"""
Template file discovery.

`DirectoryFileFinder` resolves a template name to zero or more template
files. A name that is an existing file path resolves directly; otherwise it is
matched, component by component, against the tail of every file indexed under
the template root. All matches are returned in relative-path order so that the
engine can merge them into one namespace deterministically.

The file index is built lazily, swapped in whole, and rebuilt once on a miss
so that files added after the first lookup are still found.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from smarttemplate.core.interfaces.finder import FileFinderProtocol
from smarttemplate.core.interfaces.logging import LoggerLikeProtocol
from smarttemplate.core.models import TemplateFile
from smarttemplate.errors import InvalidConfiguration
from smarttemplate.io.loaders import LoaderRegistry, get_global_loader_registry
from smarttemplate.logging.helpers import get_logger, trace_io
from smarttemplate.utils.paths import is_hidden_path, matches_path_tail


class DirectoryFileFinder(FileFinderProtocol):
    """Find template files by direct path or by path tail under *root*."""

    def __init__(
        self,
        root: Optional[Path | str] = None,
        *,
        loaders: Optional[LoaderRegistry] = None,
        logger: Optional[LoggerLikeProtocol] = None,
    ) -> None:
        self._log = logger or get_logger('discovery.finder')
        self._root: Optional[Path] = None
        if root is not None:
            pth = Path(root).expanduser()
            if not pth.is_dir():
                raise InvalidConfiguration(f"template directory {str(root)!r} does not exist")
            self._root = pth.resolve()
        self._loaders = loaders or get_global_loader_registry(self._log).clone()
        self._index: Optional[List[Tuple[str, Path]]] = None
        self._proxies: Dict[str, List[TemplateFile]] = {}

    @property
    def root(self) -> Optional[Path]:
        return self._root

    @property
    def loaders(self) -> LoaderRegistry:
        return self._loaders

    # -------- Index --------

    def _build_index(self) -> List[Tuple[str, Path]]:
        assert self._root is not None
        collected: List[Tuple[str, Path]] = []
        for dirpath, dirnames, filenames in os.walk(self._root):
            dirnames[:] = sorted(d for d in dirnames if not d.startswith('.') and d != '__pycache__')
            for fn in filenames:
                fp = Path(dirpath, fn)
                rel = fp.relative_to(self._root)
                if is_hidden_path(rel) or not self._loaders.supports(fp):
                    continue
                collected.append((rel.as_posix(), fp))
        collected.sort(key=lambda item: item[0])
        trace_io(self._log, 'template index built', root=str(self._root), files=len(collected))
        return collected

    def refresh(self) -> None:
        """Drop the file index and the name → files cache."""
        self._index = None
        self._proxies.clear()

    def _match(self, name: str) -> List[Path]:
        assert self._index is not None
        return [fp for rel, fp in self._index if matches_path_tail(rel, name)]

    # -------- FileFinderProtocol --------

    def find(self, name: str) -> List[TemplateFile]:
        """Return the template files for *name* (empty list when none match)."""
        cached = self._proxies.get(name)
        if cached is not None:
            return list(cached)

        paths: List[Path] = []
        direct = Path(name).expanduser()
        if direct.is_file():
            paths = [direct.resolve()]
        elif self._root is not None:
            fresh = self._index is None
            if fresh:
                self._index = self._build_index()
            paths = self._match(name)
            if not paths and not fresh:
                self._index = self._build_index()
                paths = self._match(name)

        files: List[TemplateFile] = []
        for fp in paths:
            loader = self._loaders.for_path(fp)
            if loader is None:
                self._log.warning('✘ %s: no template loader for suffix %r', fp, fp.suffix)
                continue
            files.append(TemplateFile(path=fp, loader=loader))

        if files:
            self._proxies[name] = files
            self._log.debug('template %r resolved to %d file(s)', name, len(files))
        return list(files)
