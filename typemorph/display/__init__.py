# display/__init__.py

from .surface import NodeId, RenderSurface, ScrollListener
from .memory import MemorySurface, VOID_TAGS
from .console import ConsoleSurface

__all__ = ['NodeId', 'RenderSurface', 'ScrollListener', 'MemorySurface', 'ConsoleSurface', 'VOID_TAGS']
