from __future__ import annotations

"""
Compiled leaf renderers.

A template leaf is classified once, at compile time:

  • str                 → DeferredRenderer(template, context)
  • @contextual callable → ContextualRenderer(fn, context)
  • other callable      → kept as-is
  • other scalar        → DeferredRenderer over its stringified text
"""

import functools
import inspect
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, TypeVar

if TYPE_CHECKING:  # pragma: no cover
    from smarttemplate.core.models import RenderContext

_CONTEXTUAL_ATTR = "__smarttemplate_contextual__"

F = TypeVar("F", bound=Callable[..., Any])


def contextual(fn: F) -> F:
    """Mark a template callable as wanting its RenderContext as first argument.

    Example (inside a template file)::

        @contextual
        def table(ctx, message):
            return ctx.engine.vnsprintf("{message}: {rows}", {"message": message, "rows": "..."}, ctx)
    """
    setattr(fn, _CONTEXTUAL_ATTR, True)
    return fn


def is_contextual(fn: Any) -> bool:
    return bool(getattr(fn, _CONTEXTUAL_ATTR, False))


def bind_context(fn: Callable[..., Any], context: 'RenderContext') -> 'ContextualRenderer':
    return ContextualRenderer(fn, context)


class ContextualRenderer:
    """A ``@contextual`` callable bound to the namespace context it was compiled in.

    Direct calls receive the context as first argument. Used as a placeholder
    value the renderer is invoked with no arguments, like a DeferredRenderer.
    """

    __slots__ = ("_fn", "_context")

    def __init__(self, fn: Callable[..., Any], context: 'RenderContext') -> None:
        self._fn = fn
        self._context = context

    @property
    def func(self) -> Callable[..., Any]:
        return self._fn

    @property
    def context(self) -> 'RenderContext':
        return self._context

    @property
    def __signature__(self) -> inspect.Signature:
        # Parameters left once the context is bound.
        return inspect.signature(functools.partial(self._fn, self._context))

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._fn(self._context, *args, **kwargs)

    def __repr__(self) -> str:
        name = getattr(self._fn, "__qualname__", repr(self._fn))
        return f"ContextualRenderer({name}, namespace={self._context.namespace!r})"


class DeferredRenderer:
    """A template fragment bound to the namespace context it was compiled in.

    Calling the renderer substitutes the supplied arguments through
    ``context.engine.vnsprintf``. Keyword arguments are merged over *args*::

        render["row"]({"text": "hi"}) == render["row"](text="hi")
    """

    __slots__ = ("_template", "_context")

    def __init__(self, template: str, context: 'RenderContext') -> None:
        self._template = template
        self._context = context

    @property
    def template(self) -> str:
        return self._template

    @property
    def context(self) -> 'RenderContext':
        return self._context

    def __call__(self, args: Optional[Mapping[str, Any]] = None, /, **kwargs: Any) -> str:
        merged = dict(args) if args else {}
        merged.update(kwargs)
        return self._context.engine.vnsprintf(self._template, merged, self._context)

    def __repr__(self) -> str:
        return f"DeferredRenderer({self._template!r}, namespace={self._context.namespace!r})"
