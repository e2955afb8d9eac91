from .escaper import EscaperProtocol
from .finder import FileFinderProtocol, TemplateLoaderProtocol, TemplateSourceProtocol
from .logging import LoggerFactoryProtocol, LoggerLikeProtocol
from .templating import TemplateEngineProtocol
from .translator import TranslatorProtocol

__all__ = [
    'EscaperProtocol',
    'FileFinderProtocol',
    'TemplateLoaderProtocol',
    'TemplateSourceProtocol',
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
    'TemplateEngineProtocol',
    'TranslatorProtocol',
]
