"""Layout Package

This package provides the page layout and rendering engine:

Core Classes:
- DocumentGenerator: Main orchestrator class (from generator.py)
- LayoutState: Cursor, margins and font state
- TextCompositor: Text cells, paragraphs and formatted cells
- TableRenderer: Table header, body and footer bands
- ImageCache: Image download, registration and placement
- FooterOrchestrator: Footer content and deferred page numbering
- PageCanvas: Page buffers and PDF output through ReportLab
- FontManager: Font registration and style variants

Utilities:
- coordinate_utils: Coordinate conversion functions
- wrap_lines: Split text into lines
"""

# Import core classes
from .generator import DocumentGenerator
from .layout_state import FontState, LayoutState, PageMetrics
from .text_compositor import TextCompositor, wrap_lines
from .table_renderer import TableRenderer, TableSpec
from .image_cache import ImageCache, RegisteredImage
from .page_orchestrator import FooterOrchestrator, PageLifecycleObserver
from .canvas import PageCanvas, PageBuffer
from .error_state import ErrorState
from .font_manager import FontManager
from . import coordinate_utils

# Expose public API
__all__ = [
    # Main generator class
    'DocumentGenerator',

    # Component classes
    'LayoutState',
    'PageMetrics',
    'FontState',
    'TextCompositor',
    'TableRenderer',
    'TableSpec',
    'ImageCache',
    'RegisteredImage',
    'PageLifecycleObserver',
    'FooterOrchestrator',
    'PageCanvas',
    'PageBuffer',
    'ErrorState',
    'FontManager',

    # Helper functions
    'wrap_lines',

    # Utilities module
    'coordinate_utils',
]
