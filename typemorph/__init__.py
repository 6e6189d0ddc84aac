# __init__.py

from .logger import Logger
from .config import TypeMorphConfig
from .errors import TypeMorphError, ConfigurationError, LifecycleError, ContentError, CallbackError
from .content import ContentNode, Element, TextRun, build_content, parse_html, sanitize_html
from .display import RenderSurface, MemorySurface, ConsoleSurface
from .interface import TypeMorph

__all__ = [
    "TypeMorph", "TypeMorphConfig", "Logger",
    "TypeMorphError", "ConfigurationError", "LifecycleError", "ContentError", "CallbackError",
    "ContentNode", "Element", "TextRun", "build_content", "parse_html", "sanitize_html",
    "RenderSurface", "MemorySurface", "ConsoleSurface",
]

__version__ = "0.1.0"
