"""Layout State Module

Owns the write cursor, the page margins and the current font state of one
document. Every placement operation reads the cursor from here and moves it.
"""
import logging
from dataclasses import dataclass
from typing import Tuple

from ..exceptions import InvalidArgumentError, InvalidConfigurationError, RangeError
from .error_state import ErrorState, guarded

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageMetrics:
    """Page size and margins in the document unit."""

    page_width: float
    page_height: float
    margin_left: float
    margin_top: float
    margin_right: float
    margin_bottom: float

    def __post_init__(self):
        if not self.margin_left < self.safe_max_x <= self.page_width:
            raise InvalidConfigurationError(
                f"Left and right margins ({self.margin_left}, {self.margin_right}) "
                f"leave no writable width on a {self.page_width} wide page"
            )
        if not self.margin_top < self.safe_max_y <= self.page_height:
            raise InvalidConfigurationError(
                f"Top and bottom margins ({self.margin_top}, {self.margin_bottom}) "
                f"leave no writable height on a {self.page_height} high page"
            )

    @property
    def safe_max_x(self) -> float:
        return self.page_width - self.margin_right

    @property
    def safe_max_y(self) -> float:
        return self.page_height - self.margin_bottom

    @property
    def safe_width(self) -> float:
        """Width of the writable rectangle."""
        return self.safe_max_x - self.margin_left


@dataclass
class FontState:
    """Current font. Size in points, line gap in the document unit."""

    family: str
    size: float
    line_gap: float


class LayoutState:
    """Cursor and font state of one document.

    The cursor is never clamped: a rejected position is recorded in the
    ErrorState and the cursor keeps its previous value.

    Attributes:
        metrics: Page size and margins
        font: Current FontState
        x, y: Current cursor position in the document unit
    """

    def __init__(self, metrics: PageMetrics, font: FontState, errors: ErrorState, canvas):
        self.metrics = metrics
        self.font = font
        self.errors = errors
        self.canvas = canvas
        self.x = metrics.margin_left
        self.y = metrics.margin_top

    def glyph_height(self) -> float:
        """Height of the current font in the document unit."""
        return self.canvas.font_height(self.font.size)

    def line_height(self) -> float:
        """Distance between two text lines: glyph height plus line gap."""
        return self.glyph_height() + self.font.line_gap

    def get_cursor(self) -> Tuple[float, float]:
        return self.x, self.y

    def move_to(self, x: float, y: float):
        """Move the cursor without any range check (internal use)."""
        self.x = x
        self.y = y

    @guarded
    def set_cursor(self, x: float, y: float):
        """
        Move the cursor inside the writable rectangle bounded by the margins.

        Raises:
            RangeError: If (x, y) lies outside the writable rectangle
        """
        m = self.metrics
        if x < m.margin_left or x > m.safe_max_x:
            raise RangeError("x", x, m.margin_left, m.safe_max_x)
        if y < m.margin_top or y > m.safe_max_y:
            raise RangeError("y", y, m.margin_top, m.safe_max_y)
        self.move_to(x, y)

    @guarded
    def set_unsafe_cursor(self, x: float, y: float):
        """
        Move the cursor anywhere on the page, including the margin zones.

        Raises:
            RangeError: If (x, y) lies outside the page
        """
        m = self.metrics
        if x < 0 or x > m.page_width:
            raise RangeError("x", x, 0.0, m.page_width)
        if y < 0 or y > m.page_height:
            raise RangeError("y", y, 0.0, m.page_height)
        self.move_to(x, y)

    @guarded
    def new_line(self, reference_x: float):
        """Move one line down and reset x to reference_x."""
        if reference_x < 0:
            raise InvalidArgumentError(f"A negative reference_x ({reference_x}) is not allowed")
        self.move_to(reference_x, self.y + self.line_height())

    @guarded
    def previous_line(self, reference_x: float):
        """Move one line up and reset x to reference_x."""
        if reference_x < 0:
            raise InvalidArgumentError(f"A negative reference_x ({reference_x}) is not allowed")
        self.move_to(reference_x, self.y - self.line_height())
