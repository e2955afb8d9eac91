from __future__ import annotations

"""
Extensible value → text policy used before placeholder substitution.

This module exposes:
  * `Stringifier`: type-keyed rules (MRO lookup) plus predicate rules with
    priorities, falling back to the built-in canonical conversions.
  * `canonical_json`: compact, key-sorted JSON used for structured values.
"""

import datetime as _dt
import enum
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from smarttemplate.errors import StringifyError

StringifyFn = Callable[[Any], str]


def _json_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    if isinstance(value, (_dt.date, _dt.time)):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def canonical_json(value: Any) -> str:
    """Serialize *value* as compact JSON with sorted keys."""
    return json.dumps(value, default=_json_default, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


@dataclass(frozen=True)
class _Rule:
    fn: StringifyFn
    predicate: Callable[[Any], bool]
    priority: int = 0


class Stringifier:
    """Convert arbitrary placeholder values to text.

    Lookup order:
      1. predicate rules, highest priority first;
      2. exact/MRO match in the type map;
      3. the built-in canonical conversions.

    A value that matches nothing raises :class:`StringifyError`.
    """

    def __init__(self) -> None:
        self._types: Dict[type, StringifyFn] = {}
        self._rules: List[_Rule] = []
        self._rules_sorted_cache: List[_Rule] | None = None

    def register(self, type_: type, fn: StringifyFn) -> 'Stringifier':
        self._types[type_] = fn
        return self

    def register_rule(self, *, fn: StringifyFn, predicate: Callable[[Any], bool], priority: int = 0) -> 'Stringifier':
        self._rules.append(_Rule(fn=fn, predicate=predicate, priority=priority))
        self._rules_sorted_cache = None
        return self

    def _sorted_rules(self) -> List[_Rule]:
        if self._rules_sorted_cache is None:
            self._rules_sorted_cache = sorted(self._rules, key=lambda r: r.priority, reverse=True)
        return self._rules_sorted_cache

    def _for_type(self, tp: type) -> Optional[StringifyFn]:
        for klass in tp.__mro__:
            fn = self._types.get(klass)
            if fn is not None:
                return fn
        return None

    def __call__(self, value: Any) -> str:
        return self.stringify(value)

    def stringify(self, value: Any) -> str:
        for rule in self._sorted_rules():
            if rule.predicate(value):
                return rule.fn(value)
        fn = self._for_type(type(value))
        if fn is not None:
            return fn(value)
        return self._builtin(value)

    @staticmethod
    def _has_own_str(value: Any) -> bool:
        return type(value).__str__ is not object.__str__

    def _builtin(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, enum.Enum):
            return self.stringify(value.value)
        if isinstance(value, str):
            return str(value)
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, (_dt.date, _dt.time)):
            return value.isoformat()
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("utf-8", errors="replace")
        if isinstance(value, (Mapping, list, tuple, set, frozenset)):
            return self._to_json(value)
        if self._has_own_str(value):
            return str(value)
        if isinstance(value, Iterable):
            return self._to_json(list(value))
        raise StringifyError(value)

    @staticmethod
    def _to_json(value: Any) -> str:
        try:
            return canonical_json(value)
        except (TypeError, ValueError) as exc:
            raise StringifyError(value) from exc
