"""Text Compositor Module

Places text at the cursor: simple text cells, multi-line paragraphs and
formatted cells with borders and background fill.
"""
import logging
from typing import List, Optional, Tuple

from ..config import TABLE_FILL_COLOR, TEXT_CELL_PADDING
from ..exceptions import InvalidArgumentError, RangeError
from .error_state import guarded

logger = logging.getLogger(__name__)

LINE_BREAK = "\n"

HORIZONTAL_ALIGNS = ("L", "C", "R")
VERTICAL_ALIGNS = ("T", "M", "B", "A")
BORDER_SIDES = "LTRB"


def wrap_lines(text: str) -> List[str]:
    """
    Split text on line breaks and strip leading spaces of every line.

    Only ASCII spaces are stripped (tabs stay) and trailing spaces are kept.

    Examples:
        >>> wrap_lines("")
        ['']
        >>> wrap_lines("  a\\n b\\n  ")
        ['a', 'b', '']
    """
    return [line.lstrip(" ") for line in text.split(LINE_BREAK)]


def parse_text_align(align: str) -> str:
    """Validate a horizontal alignment code for simple text cells."""
    if align not in HORIZONTAL_ALIGNS:
        raise InvalidArgumentError(f"\"{align}\" is not a valid align of \"L\", \"R\" or \"C\"")
    return align


def parse_cell_align(align: str) -> Tuple[str, str]:
    """
    Split a cell alignment code into horizontal and vertical parts.

    The code holds at most one of L/C/R and at most one of T/M/B/A in any
    order, e.g. "LM", "R" or "CT". Horizontal defaults to "L", vertical to ""
    (middle).

    Raises:
        InvalidArgumentError: For unknown or repeated codes
    """
    horizontal = ""
    vertical = ""
    for char in (align or "").upper():
        if char in HORIZONTAL_ALIGNS and not horizontal:
            horizontal = char
        elif char in VERTICAL_ALIGNS and not vertical:
            vertical = char
        else:
            raise InvalidArgumentError(
                f"\"{align}\" is not a valid cell align (one of L/C/R plus one of T/M/B/A)"
            )
    return horizontal or "L", vertical


def parse_border(border: str) -> str:
    """
    Normalize a border code to the sides it draws.

    "" draws no border, "1" the full frame, otherwise any combination of
    L, T, R and B.

    Raises:
        InvalidArgumentError: For unknown codes
    """
    if not border:
        return ""
    if border == "1":
        return BORDER_SIDES
    sides = ""
    for char in border.upper():
        if char not in BORDER_SIDES:
            raise InvalidArgumentError(
                f"\"{border}\" is not a valid border of \"\", \"1\" or a combination of L, T, R and B"
            )
        if char not in sides:
            sides += char
    return sides


class TextCompositor:
    """Places text cells through the page canvas and advances the cursor.

    Attributes:
        canvas: PageCanvas receiving the cells
        layout: LayoutState holding cursor and font
        fonts: FontManager resolving style codes
        errors: The document's ErrorState
        pager: Optional object with ensure_room(height), asked before every
            cell so that it can start a new page
    """

    def __init__(self, canvas, layout, fonts, errors, pager=None):
        self.canvas = canvas
        self.layout = layout
        self.fonts = fonts
        self.errors = errors
        self.pager = pager

    def string_width(self, text: str, style: str = "") -> float:
        """Measured width of text in the current font, without padding."""
        font_name = self.fonts.get_font_name(style)
        return self.canvas.string_width(text, font_name, self.layout.font.size)

    @guarded
    def print_text(self, text: str, style: str = "", align: str = "L"):
        """
        Print a one-line text cell at the cursor.

        The cell is as wide as the text plus padding and as high as the
        glyphs. "L" starts the cell at the cursor, "R" ends it there and
        "C" centers it on the cursor. The cursor moves to the right edge of
        the cell.
        """
        parse_text_align(align)
        font_name = self.fonts.get_font_name(style)
        size = self.layout.font.size
        height = self.canvas.font_height(size)
        width = self.canvas.string_width(text, font_name, size) + TEXT_CELL_PADDING

        x, y = self.layout.get_cursor()
        if align == "R":
            x -= width
        elif align == "C":
            x -= width / 2

        self._cell(x, width, height, text, font_name, "L", "", "", None)

    @guarded
    def print_text_line(self, text: str, style: str = "", align: str = "L"):
        """
        Print text line by line, moving one line down after every line.

        Line breaks in text start new lines. Every line starts at the x
        position the cursor had before the first line.
        """
        parse_text_align(align)
        start_x = self.layout.x
        for line in wrap_lines(text):
            self.print_text(line, style, align)
            self.layout.new_line(start_x)

    @guarded
    def print_formatted_cell(self, text: str, style: str, align: str, border: str, fill: bool,
                             fill_color: Optional[Tuple[int, int, int]], height: float, width: float):
        """
        Print a cell of fixed size with optional borders and background.

        Args:
            text: One line of text
            style: Font style code
            align: Horizontal (L/C/R) and optional vertical (T/M/B/A) alignment
                of the text inside the cell, e.g. "LM"
            border: "", "1" or a combination of L, T, R, B
            fill: Paint the background with fill_color (table fill if None)
            height, width: Cell size, both greater than 0

        The cursor moves to the right edge of the cell, y is unchanged.
        """
        horizontal, vertical = parse_cell_align(align)
        sides = parse_border(border)
        if height <= 0:
            raise InvalidArgumentError(f"Cell height must be greater than 0, got {height}")
        if width <= 0:
            raise InvalidArgumentError(f"Cell width must be greater than 0, got {width}")

        font_name = self.fonts.get_font_name(style)
        color = None
        if fill:
            color = fill_color if fill_color is not None else TABLE_FILL_COLOR

        self._cell(self.layout.x, width, height, text, font_name, horizontal, vertical, sides, color)

    @guarded
    def draw_line(self, x1: float, y1: float, x2: float, y2: float,
                  color: Optional[Tuple[int, int, int]] = None, width: float = 0.0):
        """
        Draw a line between two points anywhere on the page.

        Width 0 draws the default line width. The cursor does not move.
        """
        if width < 0:
            raise InvalidArgumentError(f"A negative line width ({width}) is not allowed")

        m = self.layout.metrics
        for name, value in (("x1", x1), ("x2", x2)):
            if value < 0 or value > m.page_width:
                raise RangeError(name, value, 0.0, m.page_width)
        for name, value in (("y1", y1), ("y2", y2)):
            if value < 0 or value > m.page_height:
                raise RangeError(name, value, 0.0, m.page_height)

        self.canvas.line(x1, y1, x2, y2, color or self.canvas.line_color, width)

    def _cell(self, x, width, height, text, font_name, align, valign, border, fill_color):
        if self.pager is not None:
            self.pager.ensure_room(height)
        y = self.layout.y
        self.canvas.cell(x, y, width, height, text, font_name, self.layout.font.size,
                         align, valign, border, fill_color)
        self.layout.move_to(x + width, y)
