"""
engine – Callback-driven template resolver and renderer.

A :class:`TemplateEngine` owns a cache of compiled namespaces. A namespace is
compiled on first use from the files returned by the injected finder (or
registered directly with :meth:`TemplateEngine.add_custom`): raw mappings are
merged in discovery order into one :class:`RenderCollection`, and every leaf
is turned into a renderer bound to the namespace's :class:`RenderContext`.

``render()`` never substitutes anything itself. Output is produced when the
caller's callback invokes leaf renderers, each of which runs
:meth:`TemplateEngine.vnsprintf`::

    engine.render("table.py", lambda r, *_: r["table"](rows=r["row"](text="hi")))
"""

import re
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from smarttemplate.collection.render_collection import RenderCollection
from smarttemplate.constants import DEFAULT_SENSITIVE_ATTRIBUTES, INJECT_ALWAYS, INJECT_POLICIES
from smarttemplate.core.interfaces.escaper import EscaperProtocol
from smarttemplate.core.interfaces.finder import FileFinderProtocol
from smarttemplate.core.interfaces.logging import LoggerLikeProtocol
from smarttemplate.core.interfaces.templating import TemplateEngineProtocol
from smarttemplate.core.interfaces.translator import TranslatorProtocol
from smarttemplate.core.models import RenderContext
from smarttemplate.discovery.file_finder import DirectoryFileFinder
from smarttemplate.errors import InvalidConfiguration, TemplateNotFound
from smarttemplate.logging.helpers import get_logger
from smarttemplate.plugins.escaper import BaseEscaper
from smarttemplate.plugins.translator import BaseTranslator
from smarttemplate.processing.named_formatter import NamedFormatter, to_token
from smarttemplate.processing.stringifier import Stringifier
from smarttemplate.rendering.deferred import ContextualRenderer, DeferredRenderer, bind_context, is_contextual

RenderCallback = Callable[[RenderCollection, 'TemplateEngine', str], Any]
AttributeComposer = Callable[[Any, Any], str]
CustomParamCallback = Callable[[Any], Any]

_WS_RX = re.compile(r"\s+")


class TemplateEngine(TemplateEngineProtocol):
    """Resolve, compile and cache template namespaces; run substitutions."""

    def __init__(
        self,
        directory: Optional[str] = None,
        *,
        default: Optional[str] = None,
        finder: Optional[FileFinderProtocol] = None,
        escaper: Optional[EscaperProtocol] = None,
        translator: Optional[TranslatorProtocol] = None,
        stringifier: Optional[Stringifier] = None,
        formatter: Optional[NamedFormatter] = None,
        uglify: bool = False,
        inject_custom_params: str = INJECT_ALWAYS,
        sensitive_attributes: Iterable[str] = DEFAULT_SENSITIVE_ATTRIBUTES,
        logger: Optional[LoggerLikeProtocol] = None,
    ) -> None:
        self._log = logger or get_logger('engine')
        if finder is None and directory is not None:
            finder = DirectoryFileFinder(directory, logger=self._log)
        self._finder = finder
        self._default = default
        self._escaper = escaper
        self._translator = translator
        self._stringifier = stringifier or Stringifier()
        self._formatter = formatter or NamedFormatter()
        self.uglify = bool(uglify)
        self.inject_custom_params = inject_custom_params
        self.sensitive_attributes = frozenset(sensitive_attributes)

        self._renders: Dict[str, RenderCollection] = {}
        self._custom_param_callbacks: Dict[str, CustomParamCallback] = {}
        self._attribute_composer: AttributeComposer = self._compose_attribute
        self._attribute_render: AttributeComposer = self._render_attribute

    # Rendering --------------------------------------------------------------

    def render(self, name: Optional[str], callback: RenderCallback) -> Any:
        """Compile *name* if needed and return ``callback(collection, engine, name)``.

        A ``None`` result becomes ``""``. With *name* ``None`` the engine's
        default namespace is rendered.
        """
        namespace = name if name is not None else self._default
        if namespace is None:
            raise TemplateNotFound('<default>', 'no template name given and no default namespace configured')
        collection = self._renders.get(namespace)
        if collection is None:
            collection = self._compile_from_sources(namespace)
        else:
            self._log.debug('namespace %r served from cache', namespace)
        result = callback(collection, self, namespace)
        return '' if result is None else result

    def vnsprintf(
        self,
        template: str,
        args: Optional[Mapping[str, Any]] = None,
        context: Optional[RenderContext] = None,
    ) -> str:
        """Named-parameter substitution of *args* into *template*.

        Each value is resolved (compiled leaf renderers are invoked with no
        arguments, other callables with *context*), passed through the custom
        parameter callback registered for its name, then stringified.
        Registered custom parameters the caller omitted are synthesized from
        ``callback(None)`` when the injection policy is ``"always"``.
        Placeholders without a value are left in the output untouched.
        """
        ctx = context or self._throwaway_context(None)
        values: Dict[str, str] = {}
        for key, arg in (args or {}).items():
            tok = to_token(key)
            arg = self._resolve_arg(arg, ctx)
            custom = self._custom_param_callbacks.get(tok)
            if custom is not None:
                arg = custom(arg)
            values[tok] = self._stringifier(arg)

        if self.inject_custom_params == INJECT_ALWAYS:
            for tok, custom in self._custom_param_callbacks.items():
                if tok not in values:
                    values[tok] = self._stringifier(custom(None))

        return self._formatter.format(template, values)

    @staticmethod
    def _resolve_arg(arg: Any, ctx: RenderContext) -> Any:
        if isinstance(arg, (DeferredRenderer, ContextualRenderer)):
            return arg()
        if callable(arg) and not isinstance(arg, type):
            return arg(ctx)
        return arg

    # Namespaces -------------------------------------------------------------

    def _compile_from_sources(self, namespace: str) -> RenderCollection:
        if self._finder is None:
            self._log.warning('template %r requested but no search directory was set', namespace)
            raise TemplateNotFound(namespace, 'Template not found because search directory was not set')
        sources = self._finder.find(namespace)
        if not sources:
            self._log.warning('template %r not found', namespace)
            raise TemplateNotFound(namespace)

        # Built off to the side; only a fully compiled namespace is cached.
        collection = RenderCollection(namespace=namespace)
        for source in sources:
            self._log.debug('loading %s into namespace %r', source.path, namespace)
            collection.merge(source.load())
        self._compile(collection, RenderContext(collection, self, namespace))
        self._renders[namespace] = collection
        self._log.debug('namespace %r compiled from %d source(s)', namespace, len(sources))
        return collection

    def add_custom(self, namespace: str, templates: Mapping[str, Any]) -> 'TemplateEngine':
        """Register *templates* under *namespace*, merging into any existing one."""
        existing = self._renders.get(namespace)
        target = existing if existing is not None else RenderCollection(namespace=namespace)
        incoming = RenderCollection.from_raw(templates, namespace=namespace)
        self._compile(incoming, RenderContext(target, self, namespace))
        target.merge(incoming)
        if existing is None:
            self._renders[namespace] = target
        self._log.debug('custom templates %s namespace %r',
                        'merged into' if existing is not None else 'registered as', namespace)
        return self

    def get_collection(self, namespace: str) -> Optional[RenderCollection]:
        return self._renders.get(namespace)

    def forget(self, namespace: str) -> bool:
        """Drop a compiled namespace from the cache; report whether it existed."""
        return self._renders.pop(namespace, None) is not None

    @property
    def namespaces(self) -> tuple:
        return tuple(self._renders)

    # Compilation ------------------------------------------------------------

    def _compile(self, collection: RenderCollection, context: RenderContext) -> None:
        collection.walk(lambda value: self._compile_leaf(value, context))

    def _compile_leaf(self, value: Any, context: RenderContext) -> Any:
        if isinstance(value, (DeferredRenderer, ContextualRenderer)):
            return value
        if isinstance(value, str):
            return DeferredRenderer(self._minify(value), context)
        if callable(value):
            return bind_context(value, context) if is_contextual(value) else value
        return DeferredRenderer(self._minify(self._stringifier(value)), context)

    def _minify(self, text: str) -> str:
        if not self.uglify:
            return text
        return _WS_RX.sub(' ', text).strip()

    def _throwaway_context(self, namespace: Optional[str]) -> RenderContext:
        collection = self._renders.get(namespace) if namespace is not None else None
        if collection is None:
            collection = RenderCollection(namespace=namespace)
        return RenderContext(collection, self, namespace)

    def make_render(self, value: Any, namespace: Optional[str] = None) -> Callable[..., Any]:
        """Compile a single value into a renderer without registering it."""
        return self._compile_leaf(value, self._throwaway_context(namespace))

    def make_render_collection(self, templates: Mapping[str, Any], namespace: Optional[str] = None) -> RenderCollection:
        """Compile *templates* into a standalone collection (not cached)."""
        collection = RenderCollection.from_raw(templates, namespace=namespace)
        self._compile(collection, RenderContext(collection, self, namespace))
        return collection

    # Attributes -------------------------------------------------------------

    def attributes(self, attribs: Mapping[str, Any], clean: bool = True, separator: str = ' ') -> str:
        """Build an attribute string such as ``id="a-b" class="x"``.

        With *clean* set, ``None`` and empty-string values are skipped.
        """
        parts = []
        for name, value in attribs.items():
            if isinstance(value, DeferredRenderer):
                value = value()
            if clean and (value is None or value == ''):
                continue
            parts.append(self._attribute_render(name, value))
        return separator.join(parts)

    @staticmethod
    def _compose_attribute(name: Any, value: Any) -> str:
        return f'{name}="{value}"'

    def _render_attribute(self, name: Any, value: Any) -> str:
        text = self._stringifier(value)
        if name == 'id':
            text = self.escaper.escape_html_attr(self.normalize_id(text))
        elif name in self.sensitive_attributes:
            text = self.escaper.escape_html_attr(text)
        return self._attribute_composer(name, text)

    def set_attribute_render(self, attribute_render: AttributeComposer) -> 'TemplateEngine':
        self._attribute_render = attribute_render
        return self

    def set_attribute_composer(self, attribute_composer: AttributeComposer) -> 'TemplateEngine':
        self._attribute_composer = attribute_composer
        return self

    @property
    def attribute_composer(self) -> AttributeComposer:
        return self._attribute_composer

    @staticmethod
    def normalize_id(value: str) -> str:
        """Canonicalize bracket notation: ``user[address][city]`` → ``user-address-city``."""
        return str(value).replace('[', '-').replace(']', '').strip('-')

    # Custom parameters ------------------------------------------------------

    def add_custom_param_callback(self, name: str, callback: CustomParamCallback) -> 'TemplateEngine':
        self._custom_param_callbacks[to_token(name)] = callback
        return self

    def remove_custom_param_callback(self, name: str) -> bool:
        return self._custom_param_callbacks.pop(to_token(name), None) is not None

    @property
    def custom_param_callbacks(self) -> Dict[str, CustomParamCallback]:
        return dict(self._custom_param_callbacks)

    @property
    def inject_custom_params(self) -> str:
        return self._inject_custom_params

    @inject_custom_params.setter
    def inject_custom_params(self, policy: str) -> None:
        if policy not in INJECT_POLICIES:
            raise InvalidConfiguration(
                f"inject_custom_params must be one of {sorted(INJECT_POLICIES)}, got {policy!r}"
            )
        self._inject_custom_params = policy

    # Collaborators ----------------------------------------------------------

    def trans(
        self,
        id: Optional[str],
        parameters: Optional[Mapping[str, Any]] = None,
        domain: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> str:
        """Translate *id* with the configured translator."""
        return self.translator.trans(id, parameters, domain, locale)

    @property
    def escaper(self) -> EscaperProtocol:
        if self._escaper is None:
            self._escaper = BaseEscaper()
        return self._escaper

    @escaper.setter
    def escaper(self, escaper: EscaperProtocol) -> None:
        self._escaper = escaper

    @property
    def translator(self) -> TranslatorProtocol:
        if self._translator is None:
            self._translator = BaseTranslator()
        return self._translator

    @translator.setter
    def translator(self, translator: TranslatorProtocol) -> None:
        self._translator = translator

    @property
    def stringifier(self) -> Stringifier:
        return self._stringifier

    @stringifier.setter
    def stringifier(self, stringifier: Stringifier) -> None:
        self._stringifier = stringifier

    @property
    def finder(self) -> Optional[FileFinderProtocol]:
        return self._finder

    @property
    def default(self) -> Optional[str]:
        return self._default
