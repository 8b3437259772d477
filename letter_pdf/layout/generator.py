"""Document Generator Module

Orchestrates page composition by coordinating specialized components:
- PageCanvas: page buffers, font metrics and PDF output
- LayoutState: cursor, margins and current font
- TextCompositor: text cells, paragraphs and formatted cells
- TableRenderer: table header, body and footer bands
- ImageCache: image download, registration and placement
- PageLifecycleObserver: header/footer hooks and page numbering

All placement methods share one ErrorState. Layout errors never propagate
out of a placement call; they are recorded and returned by finalize().
"""
import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import List, Optional, Tuple

from ..config import DEFAULT_PAGE_BREAK_MARGIN_PT
from ..exceptions import InvalidArgumentError, PdfOutputError
from ..options import GeneratorOptions
from ..result import RenderResult
from . import coordinate_utils
from .canvas import PageCanvas
from .error_state import ErrorState, guarded
from .font_manager import FontManager
from .image_cache import ImageCache
from .layout_state import FontState, LayoutState, PageMetrics
from .table_renderer import TableRenderer, TableSpec
from .text_compositor import TextCompositor

logger = logging.getLogger(__name__)


class DocumentGenerator:
    """Compose one paginated PDF document.

    The first page is started on construction. Placement calls write at the
    cursor and move it; finalize() ends the last page, lets the observer run
    its second pass (page numbering) and writes the PDF.

    Example:
        generator = DocumentGenerator(GeneratorOptions(margin_top=20))
        generator.print_text_line("Hello\\nWorld")
        result = generator.finalize()
    """

    def __init__(self, options: GeneratorOptions = None, observer=None, session=None,
                 title: str = None, author: str = None):
        """
        Initialize document generator.

        Args:
            options: GeneratorOptions (defaults if None)
            observer: Optional PageLifecycleObserver for header/footer content
            session: Optional requests.Session used for image downloads
            title, author: Optional PDF metadata
        """
        self.options = options or GeneratorOptions()
        self.observer = observer
        self.title = title
        self.author = author

        self.errors = ErrorState(strict=self.options.strict)
        self.fonts = FontManager(self.options.font_family, self.options.font_dir)
        self.canvas = PageCanvas(
            self.options.unit,
            line_color=self.options.default_line_color,
            line_width=self.options.default_line_width,
        )
        self.metrics = PageMetrics(
            page_width=self.canvas.page_width,
            page_height=self.canvas.page_height,
            margin_left=self.options.margin_left,
            margin_top=self.options.margin_top,
            margin_right=self.options.margin_right,
            margin_bottom=self.options.margin_bottom,
        )
        self.layout = LayoutState(
            self.metrics,
            FontState(self.options.font_family, self.options.font_size, self.options.line_gap),
            self.errors,
            self.canvas,
        )

        self.text = TextCompositor(self.canvas, self.layout, self.fonts, self.errors, pager=self)
        self.tables = TableRenderer(self.text, self.layout, self.errors)
        self.images = ImageCache(self.canvas, self.layout, self.errors, session, self.options.image_timeout)

        if self.options.auto_page_break_margin is not None:
            break_margin = self.options.auto_page_break_margin
        else:
            break_margin = coordinate_utils.to_units(DEFAULT_PAGE_BREAK_MARGIN_PT, self.canvas.scale)
        # Never below the writable rectangle
        self.page_break_trigger = min(self.metrics.page_height - break_margin, self.metrics.safe_max_y)

        self._in_page_event = False
        self._result: Optional[RenderResult] = None

        self.new_page()

    # Error state

    def ok(self) -> bool:
        return self.errors.ok()

    def get_error(self) -> Optional[Exception]:
        """The sticky error, or None."""
        return self.errors.err()

    def set_error(self, error: Exception):
        """Record an error of the calling code in the sticky error slot."""
        self.errors.record(error)

    # Pages

    @property
    def page_count(self) -> int:
        return self.canvas.page_count

    @property
    def current_page(self) -> int:
        return self.canvas.current_page

    @guarded
    def select_page(self, number: int):
        """Make an existing page the drawing target (1-based)."""
        self.canvas.select_page(number)

    @guarded
    def new_page(self):
        """End the current page (if any) and start a new one at the top margin."""
        if self.canvas.page_count > 0:
            self._end_page(False)
        self.canvas.add_page()
        self.layout.move_to(self.metrics.margin_left, self.metrics.margin_top)
        self._start_page()

    def ensure_room(self, height: float):
        """
        Start a new page if a cell of the given height would cross the
        page break line.

        Does nothing while header/footer content is drawn, when automatic page
        breaks are disabled, or at the top of a page (a cell higher than the
        page would break forever). The cursor x is kept, y moves to the top
        margin.
        """
        if not self.options.auto_page_break or self._in_page_event:
            return
        if self.layout.y + height <= self.page_break_trigger:
            return
        if self.layout.y <= self.metrics.margin_top:
            return

        x = self.layout.x
        logger.debug(f"Page break at y = {self.layout.y:.2f} on page {self.current_page}")
        self.new_page()
        self.layout.move_to(x, self.metrics.margin_top)

    @contextmanager
    def _page_event(self):
        """Run observer hooks without page breaks, restoring cursor and font afterwards."""
        cursor = self.layout.get_cursor()
        font = replace(self.layout.font)
        self._in_page_event = True
        try:
            yield
        finally:
            self._in_page_event = False
            self.layout.move_to(*cursor)
            self.layout.font = font

    @guarded
    def _start_page(self):
        if self.observer is None:
            return
        with self._page_event():
            self.observer.on_page_start(self)

    @guarded
    def _end_page(self, is_last_page: bool):
        if self.observer is None:
            return
        with self._page_event():
            self.observer.on_page_end(self, is_last_page)

    @guarded
    def _end_document(self):
        if self.observer is None:
            return
        with self._page_event():
            self.observer.on_document_end(self)

    # Cursor

    def get_cursor(self) -> Tuple[float, float]:
        return self.layout.get_cursor()

    def set_cursor(self, x: float, y: float):
        """Move the cursor inside the writable rectangle (RangeError otherwise)."""
        self.layout.set_cursor(x, y)

    def set_unsafe_cursor(self, x: float, y: float):
        """Move the cursor anywhere on the page, margins included."""
        self.layout.set_unsafe_cursor(x, y)

    def new_line(self, reference_x: float):
        self.layout.new_line(reference_x)

    def previous_line(self, reference_x: float):
        self.layout.previous_line(reference_x)

    # Font

    @property
    def font_size(self) -> float:
        """Current font size in points."""
        return self.layout.font.size

    @property
    def line_gap(self) -> float:
        return self.layout.font.line_gap

    def line_height(self) -> float:
        return self.layout.line_height()

    @guarded
    def set_font_size(self, size: float):
        if size <= 0:
            raise InvalidArgumentError(f"Font size must be greater than 0, got {size}")
        self.layout.font.size = size

    @guarded
    def set_line_gap(self, line_gap: float):
        if line_gap < 0:
            raise InvalidArgumentError(f"A negative line gap ({line_gap}) is not allowed")
        self.layout.font.line_gap = line_gap

    def string_width(self, text: str, style: str = "") -> float:
        """Width of text in the current font and the document unit."""
        return self.text.string_width(text, style)

    # Text

    def print_text(self, text: str, style: str = "", align: str = "L"):
        self.text.print_text(text, style, align)

    def print_text_line(self, text: str, style: str = "", align: str = "L"):
        self.text.print_text_line(text, style, align)

    def print_formatted_cell(self, text: str, style: str, align: str, border: str, fill: bool,
                             fill_color, height: float, width: float):
        self.text.print_formatted_cell(text, style, align, border, fill, fill_color, height, width)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color=None, width: float = 0.0):
        self.text.draw_line(x1, y1, x2, y2, color, width)

    # Tables

    def table_header(self, cells: List[str], widths: List[float], alignments: List[str]):
        self.tables.header(cells, widths, alignments)

    def table_body(self, rows: List[List[str]], widths: List[float], alignments: List[str]):
        self.tables.body(rows, widths, alignments)

    def table_footer(self, rows: List[List[str]], widths: List[float], alignments: List[str]):
        self.tables.footer(rows, widths, alignments)

    def render_table(self, spec: TableSpec):
        self.tables.render(spec)

    # Images

    def is_image_registered(self, identifier: str) -> bool:
        return self.images.is_registered(identifier)

    def register_image(self, identifier: str):
        """Fetch and register an image once; returns the RegisteredImage or None on error."""
        return self.images.register(identifier)

    @guarded
    def image_extent(self, identifier: str) -> Optional[Tuple[float, float]]:
        """Natural (width, height) of a registered image, None if it is not registered."""
        return self.images.extent(identifier)

    def place_registered_image(self, identifier: str, align: str = "L", scale: float = 1.0):
        self.images.place(identifier, align, scale)

    # Output

    def finalize(self) -> RenderResult:
        """
        End the last page, run the observer's second pass and write the PDF.

        Calling finalize() again returns the first result.

        Returns:
            RenderResult with the PDF bytes and the sticky error (if any);
            content drawn before an error is kept
        """
        if self._result is not None:
            return self._result

        self._end_page(True)
        self._end_document()
        self.images.close()

        try:
            pdf_bytes = self.canvas.render(title=self.title, author=self.author)
        except Exception as e:
            error = PdfOutputError(f"Failed to write PDF: {e}")
            logger.error(str(error))
            self._result = RenderResult(pdf_bytes=None, page_count=self.page_count, error=error)
            return self._result

        error = self.errors.err()
        if error is not None:
            logger.warning(f"Document finished with error: {error}")
        else:
            logger.debug(f"Document finished with {self.page_count} page(s)")

        self._result = RenderResult(pdf_bytes=pdf_bytes, page_count=self.page_count, error=error)
        return self._result
