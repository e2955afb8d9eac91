# src/smarttemplate/utils/paths.py
"""
paths – Small, centralized path helpers for template discovery.

Provides:
  • is_hidden_path(Path)            – dot-segment detection
  • matches_path_tail(rel, name)    – component-bounded suffix match
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath


def is_hidden_path(p: Path) -> bool:
    """Return True if *p* has any hidden segment (leading-dot component)."""
    return any(part.startswith(".") and part not in (".", "..") for part in p.parts)


def matches_path_tail(relpath: str, name: str) -> bool:
    """Return True if POSIX *relpath* equals *name* or ends with '/' + *name*.

    Matching is per path component, so 'table.py' matches 'custom/table.py'
    but not 'mytable.py'.
    """
    tail = str(PurePosixPath(name.replace("\\", "/"))).lstrip("/")
    if not tail or tail == ".":
        return False
    return relpath == tail or relpath.endswith("/" + tail)
