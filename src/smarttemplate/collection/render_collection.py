from __future__ import annotations

"""
render_collection – Ordered, recursive container for one template namespace.

A RenderCollection maps keys to either nested RenderCollections
(sub-namespaces) or leaves. Before compilation the leaves are raw template
strings/callables; after compilation every leaf is a callable renderer.

Missing keys raise :class:`KeyNotFound` instead of returning ``None`` so
that template-authoring mistakes surface at the call site. Nested
collections are never shared: assigning or merging one stores a copy
owned by the receiving namespace.
"""

import inspect
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Dict, Iterator, Optional

from smarttemplate.errors import KeyNotFound


class RenderCollection(MutableMapping):
    """Recursive ordered mapping with structural merge and in-place walk."""

    def __init__(self, items: Optional[Mapping[Any, Any]] = None, *, namespace: Optional[str] = None) -> None:
        self._items: Dict[Any, Any] = {}
        self.namespace = namespace
        if items:
            self.merge(items)

    @classmethod
    def from_raw(cls, data: Any, *, namespace: Optional[str] = None) -> 'RenderCollection':
        """Build a collection from a raw nested mapping/list structure."""
        if isinstance(data, RenderCollection):
            return cls(data, namespace=namespace)
        if isinstance(data, Mapping):
            return cls(data, namespace=namespace)
        if isinstance(data, (list, tuple)):
            return cls(dict(enumerate(data)), namespace=namespace)
        raise TypeError(f"cannot build a RenderCollection from {type(data).__name__!r}")

    @staticmethod
    def _is_branch(value: Any) -> bool:
        return isinstance(value, (Mapping, list, tuple))

    # MutableMapping --------------------------------------------------------

    def __getitem__(self, key: Any) -> Any:
        try:
            return self._items[key]
        except KeyError:
            raise KeyNotFound(key, self.namespace) from None

    def __setitem__(self, key: Any, value: Any) -> None:
        if isinstance(value, RenderCollection):
            value = value.copy(namespace=self.namespace)
        elif self._is_branch(value):
            value = RenderCollection.from_raw(value, namespace=self.namespace)
        self._items[key] = value

    def __delitem__(self, key: Any) -> None:
        try:
            del self._items[key]
        except KeyError:
            raise KeyNotFound(key, self.namespace) from None

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __repr__(self) -> str:
        return f"RenderCollection({self._items!r})"

    # Explicit accessors ----------------------------------------------------

    def get(self, key: Any) -> Any:  # type: ignore[override]
        """Return the value under *key*; raise KeyNotFound when missing."""
        return self[key]

    def set(self, key: Any, value: Any) -> None:
        self[key] = value

    def copy(self, *, namespace: Optional[str] = None) -> 'RenderCollection':
        """Return a structural copy; leaves are shared, branches are not."""
        return RenderCollection(self, namespace=self.namespace if namespace is None else namespace)

    # Structural operations -------------------------------------------------

    def walk(self, transform: Callable[[Any], Any]) -> None:
        """Replace every leaf, depth-first, with ``transform(leaf)``."""
        for key, value in self._items.items():
            if isinstance(value, RenderCollection):
                value.walk(transform)
            else:
                self._items[key] = transform(value)

    def merge(self, other: Mapping[Any, Any] | list | tuple) -> None:
        """Recursively merge *other* into this collection.

        Nested branches on both sides merge key by key; anything else is
        overwritten by the right-hand value. Existing key order is kept and
        new keys are appended in encounter order.
        """
        if isinstance(other, (list, tuple)):
            other = dict(enumerate(other))
        for key, value in other.items():
            current = self._items.get(key)
            if isinstance(current, RenderCollection) and self._is_branch(value):
                current.merge(value)
            else:
                self[key] = value

    def resolve(self, args: Optional[Mapping[str, Any]] = None) -> Dict[Any, Any]:
        """Invoke every renderer leaf and return a plain nested dict.

        A callable leaf is called with *args* (or with nothing when *args* is
        ``None``). Callables whose signature does not accept that call, such
        as ``@contextual`` helpers taking extra parameters, are kept as they
        are.
        """
        out: Dict[Any, Any] = {}
        for key, value in self._items.items():
            if isinstance(value, RenderCollection):
                out[key] = value.resolve(args)
            elif callable(value):
                out[key] = self._invoke(value, args)
            else:
                out[key] = value
        return out

    @staticmethod
    def _invoke(value: Callable[..., Any], args: Optional[Mapping[str, Any]]) -> Any:
        call_args = () if args is None else (args,)
        try:
            inspect.signature(value).bind(*call_args)
        except TypeError:
            return value
        except ValueError:
            # No introspectable signature (some builtins); call it anyway.
            pass
        return value(*call_args)

    def to_dict(self) -> Dict[Any, Any]:
        """Return a plain nested copy with leaves left untouched."""
        return {
            k: (v.to_dict() if isinstance(v, RenderCollection) else v)
            for k, v in self._items.items()
        }
