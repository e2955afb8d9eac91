from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

# Placeholder delimiters. Argument keys given without them are wrapped.
PLACEHOLDER_OPEN: str = '{'
PLACEHOLDER_CLOSE: str = '}'

# Module attribute that Python template files must define.
TEMPLATES_ATTR: str = 'TEMPLATES'

# Attribute names escaped with escape_html_attr() by the default render hook.
DEFAULT_SENSITIVE_ATTRIBUTES: frozenset[str] = frozenset({'title', 'name', 'alt'})

# Custom-parameter injection policies.
INJECT_ALWAYS: str = 'always'
INJECT_PRESENT: str = 'present'
INJECT_POLICIES: frozenset[str] = frozenset({INJECT_ALWAYS, INJECT_PRESENT})

# Environment variables read by runtime.container.EngineConfig.from_env().
ENV_PREFIX: str = 'SMARTTEMPLATE_'
