"""Table Renderer Module

Draws tables as a header band, body rows and a summary footer using
formatted cells of the text compositor.

Every table call validates all of its input before the first cell is drawn,
so a rejected table leaves the page untouched.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from ..config import TABLE_FILL_COLOR
from ..exceptions import DimensionMismatchError, RangeError
from .error_state import guarded
from .text_compositor import parse_cell_align, wrap_lines

logger = logging.getLogger(__name__)

FOOTER_COLUMNS = 3

# Rounding slack when footer widths are derived from percentages
WIDTH_TOLERANCE = 1e-6


@dataclass
class TableSpec:
    """A complete table: header, body rows and optional summary footer.

    Attributes:
        header: Column titles
        column_widths: Width of every column in the document unit
        column_alignments: Cell alignment code of every column (e.g. "LM", "RM")
        rows: Body rows, one string per column; line breaks wrap a cell
        footer_rows: Summary rows of three cells (spacer, label, value)
        footer_widths: Widths of the three summary columns
        footer_alignments: Alignment codes of the three summary columns
    """

    header: List[str]
    column_widths: List[float]
    column_alignments: List[str]
    rows: List[List[str]] = field(default_factory=list)
    footer_rows: List[List[str]] = field(default_factory=list)
    footer_widths: List[float] = field(default_factory=list)
    footer_alignments: List[str] = field(default_factory=list)


def check_columns(widths: Sequence[float], alignments: Sequence[str]):
    if len(widths) != len(alignments):
        raise DimensionMismatchError("column widths and column alignments", len(widths), len(alignments))
    for alignment in alignments:
        parse_cell_align(alignment)


def check_rows(rows: Sequence[Sequence[str]], widths: Sequence[float], what: str):
    for index, row in enumerate(rows):
        if len(row) != len(widths):
            raise DimensionMismatchError(f"{what} row {index + 1} and column widths", len(widths), len(row))


class TableRenderer:
    """Renders table bands at the cursor.

    All physical rows of one table call share one row height, computed
    once from the current font when the call starts.
    """

    def __init__(self, compositor, layout, errors, fill_color=TABLE_FILL_COLOR):
        self.compositor = compositor
        self.layout = layout
        self.errors = errors
        self.fill_color = fill_color

    def row_height(self) -> float:
        """Glyph height of the current font plus the line gap above and below."""
        return self.layout.glyph_height() + 2 * self.layout.font.line_gap

    @guarded
    def header(self, cells: List[str], widths: List[float], alignments: List[str]):
        """Draw a bold, filled header row with top and bottom borders."""
        check_columns(widths, alignments)
        check_rows([cells], widths, "header")
        self._header(cells, widths, alignments, self.row_height())

    @guarded
    def body(self, rows: List[List[str]], widths: List[float], alignments: List[str]):
        """
        Draw body rows.

        A cell containing line breaks spans several physical lines; every
        column of the row gets the same number of lines and only the last
        one carries the bottom border.
        """
        check_columns(widths, alignments)
        check_rows(rows, widths, "body")
        self._body(rows, widths, alignments, self.row_height())

    @guarded
    def footer(self, rows: List[List[str]], widths: List[float], alignments: List[str]):
        """Draw summary rows; the last one is styled like the header."""
        self._check_footer(rows, widths, alignments)
        self._footer(rows, widths, alignments, self.row_height())

    @guarded
    def render(self, spec: TableSpec):
        """Validate a whole TableSpec, then draw header, body and footer."""
        check_columns(spec.column_widths, spec.column_alignments)
        check_rows([spec.header], spec.column_widths, "header")
        check_rows(spec.rows, spec.column_widths, "body")
        if spec.footer_rows:
            self._check_footer(spec.footer_rows, spec.footer_widths, spec.footer_alignments)

        row_height = self.row_height()
        self._header(spec.header, spec.column_widths, spec.column_alignments, row_height)
        self._body(spec.rows, spec.column_widths, spec.column_alignments, row_height)
        if spec.footer_rows:
            self._footer(spec.footer_rows, spec.footer_widths, spec.footer_alignments, row_height)

    def _check_footer(self, rows, widths, alignments):
        check_columns(widths, alignments)
        if len(widths) != FOOTER_COLUMNS:
            raise DimensionMismatchError("footer columns", FOOTER_COLUMNS, len(widths))
        check_rows(rows, widths, "footer")

        safe_width = self.layout.metrics.safe_width
        total = sum(widths)
        if total > safe_width + WIDTH_TOLERANCE:
            raise RangeError("footer width", total, 0.0, safe_width)

    def _header(self, cells, widths, alignments, row_height):
        reference_x = self.layout.x
        for text, width, alignment in zip(cells, widths, alignments):
            self.compositor.print_formatted_cell(
                text, "b", alignment, "TB", True, self.fill_color, row_height, width
            )
        self._next_row(reference_x, row_height)

    def _body(self, rows, widths, alignments, row_height):
        reference_x = self.layout.x
        for row in rows:
            wrapped = [wrap_lines(text) for text in row]
            line_count = max((len(lines) for lines in wrapped), default=0)

            for line in range(line_count):
                border = "B" if line == line_count - 1 else ""
                for lines, width, alignment in zip(wrapped, widths, alignments):
                    text = lines[line] if line < len(lines) else ""
                    self.compositor.print_formatted_cell(
                        text, "", alignment, border, False, None, row_height, width
                    )
                self._next_row(reference_x, row_height)

    def _footer(self, rows, widths, alignments, row_height):
        reference_x = self.layout.x
        for index, row in enumerate(rows):
            total_row = index == len(rows) - 1
            for text, width, alignment in zip(row, widths, alignments):
                if text == "" or not total_row:
                    self.compositor.print_formatted_cell(
                        text, "", alignment, "", False, None, row_height, width
                    )
                else:
                    self.compositor.print_formatted_cell(
                        text, "b", alignment, "TB", True, self.fill_color, row_height, width
                    )
            self._next_row(reference_x, row_height)

    def _next_row(self, reference_x, row_height):
        self.layout.set_cursor(reference_x, self.layout.y + row_height)
