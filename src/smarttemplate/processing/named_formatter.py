"""
named_formatter – Named-placeholder substitution on top of ``str.format``.

This module encapsulates the text half of smarttemplate's ``vnsprintf``:

  • each argument token ({name}) is assigned a positional slot in the
    iteration order of the argument mapping (first key → slot 0, …)
  • one regex pass rewrites known tokens to ``{<slot>}`` and doubles every
    other brace, so literal braces and unknown placeholders survive
    ``str.format`` verbatim
  • the token alternation is ordered longest-first, so ``{row}`` can never
    shadow ``{rowgroup}``

Values must already be strings; resolving deferred renderers and custom
parameters is the engine's job.
"""

import re
from typing import Dict, List, Mapping, Pattern, Tuple

from smarttemplate.constants import PLACEHOLDER_CLOSE, PLACEHOLDER_OPEN


def to_token(key: str) -> str:
    """Return the placeholder token for *key* ("name" and "{name}" → "{name}")."""
    key = str(key)
    if key.startswith(PLACEHOLDER_OPEN) and key.endswith(PLACEHOLDER_CLOSE) and len(key) > 1:
        return key
    return f"{PLACEHOLDER_OPEN}{key}{PLACEHOLDER_CLOSE}"


class NamedFormatter:
    """Map named tokens to positional ``str.format`` slots and render."""

    _BRACE_RX = r"[{}]"

    def __init__(self) -> None:
        self._pattern_cache: Dict[Tuple[str, ...], Pattern[str]] = {}

    def _pattern_for(self, tokens: Tuple[str, ...]) -> Pattern[str]:
        rx = self._pattern_cache.get(tokens)
        if rx is None:
            ordered = sorted(tokens, key=len, reverse=True)
            alternation = "|".join(re.escape(t) for t in ordered)
            if alternation:
                rx = re.compile(f"(?P<tok>{alternation})|(?P<brace>{self._BRACE_RX})")
            else:
                rx = re.compile(f"(?P<brace>{self._BRACE_RX})")
            self._pattern_cache[tokens] = rx
        return rx

    def prepare(self, template: str, tokens: Tuple[str, ...]) -> str:
        """Return *template* rewritten as a ``str.format`` string.

        ``tokens[i]`` becomes ``{i}``; every other brace is escaped.
        """
        slots = {tok: i for i, tok in enumerate(tokens)}
        rx = self._pattern_for(tokens)

        def _sub(m: re.Match) -> str:
            tok = m.groupdict().get("tok")
            if tok is not None:
                return "{%d}" % slots[tok]
            return m.group("brace") * 2

        return rx.sub(_sub, template)

    def format(self, template: str, values: Mapping[str, str]) -> str:
        """Substitute *values* (token or bare key → string) into *template*.

        Parameters
        ----------
        template:
            Text potentially containing {placeholders}, literal braces or %.
        values:
            Ordered mapping; keys are normalised with :func:`to_token`.
            Later duplicates of the same token overwrite earlier ones.

        Returns
        -------
        str
            The substituted text; placeholders without a value are kept.
        """
        ordered: Dict[str, str] = {}
        for key, val in values.items():
            ordered[to_token(key)] = val
        tokens = tuple(ordered)
        positional: List[str] = list(ordered.values())
        return self.prepare(template, tokens).format(*positional)
