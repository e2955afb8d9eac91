from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Mapping, Optional

from smarttemplate.constants import DEFAULT_SENSITIVE_ATTRIBUTES, ENV_PREFIX, INJECT_ALWAYS
from smarttemplate.core.interfaces.finder import FileFinderProtocol
from smarttemplate.core.interfaces.logging import LoggerFactoryProtocol, LoggerLikeProtocol
from smarttemplate.discovery.file_finder import DirectoryFileFinder
from smarttemplate.errors import InvalidConfiguration
from smarttemplate.io.loaders import LoaderRegistry
from smarttemplate.logging.factory import DefaultLoggerFactory
from smarttemplate.plugins.registry import resolve_escaper, resolve_translator
from smarttemplate.processing.stringifier import Stringifier
from smarttemplate.rendering.engine import TemplateEngine

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off', ''}


def _env_bool(raw: Optional[str], default: bool, var: str) -> bool:
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    raise InvalidConfiguration(f'{var} must be a boolean, got {raw!r}')


def _env_level(raw: Optional[str], default: int, var: str) -> int:
    if raw is None or not raw.strip():
        return default
    val = raw.strip()
    if val.isdigit():
        return int(val)
    level = logging.getLevelName(val.upper())
    if not isinstance(level, int):
        raise InvalidConfiguration(f'{var} must be a logging level, got {raw!r}')
    return level


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration blob used to seed the EngineBuilder."""
    template_dir: Optional[str] = None
    default: Optional[str] = None
    uglify: bool = False
    inject_custom_params: str = INJECT_ALWAYS
    sensitive_attributes: FrozenSet[str] = field(default_factory=lambda: DEFAULT_SENSITIVE_ATTRIBUTES)
    escaper_ref: str = 'base'
    translator_ref: str = 'base'
    json_logs: bool = False
    log_level: int = logging.WARNING

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'EngineConfig':
        """Build a config from ``SMARTTEMPLATE_*`` environment variables.

        Recognised: TEMPLATE_DIR, DEFAULT, UGLIFY, INJECT_CUSTOM_PARAMS,
        SENSITIVE_ATTRIBUTES (comma separated), ESCAPER, TRANSLATOR,
        JSON_LOGS, LOG_LEVEL.
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> Optional[str]:
            return env.get(f'{ENV_PREFIX}{name}')

        sensitive = _get('SENSITIVE_ATTRIBUTES')
        return cls(
            template_dir=_get('TEMPLATE_DIR') or None,
            default=_get('DEFAULT') or None,
            uglify=_env_bool(_get('UGLIFY'), False, f'{ENV_PREFIX}UGLIFY'),
            inject_custom_params=(_get('INJECT_CUSTOM_PARAMS') or INJECT_ALWAYS).strip().lower(),
            sensitive_attributes=(
                frozenset(a.strip() for a in sensitive.split(',') if a.strip())
                if sensitive is not None else DEFAULT_SENSITIVE_ATTRIBUTES
            ),
            escaper_ref=_get('ESCAPER') or 'base',
            translator_ref=_get('TRANSLATOR') or 'base',
            json_logs=_env_bool(_get('JSON_LOGS'), False, f'{ENV_PREFIX}JSON_LOGS'),
            log_level=_env_level(_get('LOG_LEVEL'), logging.WARNING, f'{ENV_PREFIX}LOG_LEVEL'),
        )


@dataclass
class EngineBuilder:
    """Composable builder that wires finder, plugins and logging into a TemplateEngine."""
    config: EngineConfig
    logger: Optional[LoggerLikeProtocol] = None
    logger_factory: Optional[LoggerFactoryProtocol] = None
    finder_factory: Optional[Callable[[Optional[str], LoggerLikeProtocol], Optional[FileFinderProtocol]]] = None
    loaders: Optional[LoaderRegistry] = None
    stringifier: Optional[Stringifier] = None

    @classmethod
    def from_config(cls, cfg: EngineConfig) -> 'EngineBuilder':
        return cls(config=cfg)

    def _logger(self) -> LoggerLikeProtocol:
        if self.logger is not None:
            return self.logger
        factory = self.logger_factory or DefaultLoggerFactory(
            json_logs=self.config.json_logs, level=self.config.log_level
        )
        return factory.get_logger('engine')

    def _finder(self, log: LoggerLikeProtocol) -> Optional[FileFinderProtocol]:
        if self.finder_factory is not None:
            return self.finder_factory(self.config.template_dir, log)
        if self.config.template_dir is None:
            return None
        return DirectoryFileFinder(self.config.template_dir, loaders=self.loaders, logger=log)

    def build(self) -> TemplateEngine:
        """Materialize a TemplateEngine from the current configuration."""
        cfg = self.config
        log = self._logger()
        return TemplateEngine(
            default=cfg.default,
            finder=self._finder(log),
            escaper=resolve_escaper(cfg.escaper_ref),
            translator=resolve_translator(cfg.translator_ref),
            stringifier=self.stringifier,
            uglify=cfg.uglify,
            inject_custom_params=cfg.inject_custom_params,
            sensitive_attributes=cfg.sensitive_attributes,
            logger=log,
        )


def build_engine(cfg: Optional[EngineConfig] = None) -> TemplateEngine:
    """Build an engine from *cfg* (or from the environment when omitted)."""
    return EngineBuilder.from_config(cfg or EngineConfig.from_env()).build()
