"""Page Canvas Module

Adapter around the ReportLab canvas. Drawing calls are not written to the
PDF immediately: each page is an addressable PageBuffer that records
semantic operations (text cells, lines, images). This lets the footer
orchestrator revisit already finished pages by number (page numbering needs
the final page count) before render() replays every buffer onto a
ReportLab Canvas.

All coordinates handed to the canvas are in the document unit with the
origin at the top-left corner of the page.
"""
import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import List, Optional, Tuple

from PIL import Image as PILImage
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas as pdfcanvas

from ..config import (
    CELL_PADDING_PT,
    DEFAULT_LINE_COLOR,
    DEFAULT_LINE_WIDTH_PT,
    PAGE_SIZE_PT,
    TEXT_COLOR,
)
from ..exceptions import RangeError
from . import coordinate_utils

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]


def _rgb(color: Color) -> Tuple[float, float, float]:
    return color[0] / 255.0, color[1] / 255.0, color[2] / 255.0


@dataclass
class CellOp:
    """A text cell: optional fill, optional borders, one line of text."""

    x: float
    y: float
    width: float
    height: float
    text: str
    font_name: str
    font_size: float  # points
    align: str = "L"
    valign: str = ""
    border: str = ""
    fill_color: Optional[Color] = None

    def draw(self, pdf, page_canvas: "PageCanvas"):
        x, bottom, w, h = coordinate_utils.box_to_points(
            self.x, self.y, self.width, self.height,
            page_canvas.page_height_pt, page_canvas.scale
        )
        top = bottom + h

        if self.fill_color is not None:
            pdf.setFillColorRGB(*_rgb(self.fill_color))
            pdf.rect(x, bottom, w, h, stroke=0, fill=1)

        if self.border:
            pdf.setStrokeColorRGB(*_rgb(page_canvas.line_color))
            pdf.setLineWidth(page_canvas.line_width_pt)
            if "L" in self.border:
                pdf.line(x, bottom, x, top)
            if "T" in self.border:
                pdf.line(x, top, x + w, top)
            if "R" in self.border:
                pdf.line(x + w, bottom, x + w, top)
            if "B" in self.border:
                pdf.line(x, bottom, x + w, bottom)

        if not self.text:
            return

        text_width = pdfmetrics.stringWidth(self.text, self.font_name, self.font_size)
        if self.align == "R":
            text_x = x + w - CELL_PADDING_PT - text_width
        elif self.align == "C":
            text_x = x + (w - text_width) / 2
        else:
            text_x = x + CELL_PADDING_PT

        # Baseline offset from the top edge of the cell
        size = self.font_size
        if self.valign == "A":
            _, descent = pdfmetrics.getAscentDescent(self.font_name, size)
            baseline = h + descent
        else:
            if self.valign == "T":
                dy = (size - h) / 2
            elif self.valign == "B":
                dy = (h - size) / 2
            else:
                dy = 0
            baseline = dy + 0.5 * h + 0.3 * size

        pdf.setFillColorRGB(*_rgb(TEXT_COLOR))
        pdf.setFont(self.font_name, size)
        pdf.drawString(text_x, top - baseline, self.text)


@dataclass
class LineOp:
    """A straight line between two points."""

    x1: float
    y1: float
    x2: float
    y2: float
    color: Color
    width: float  # document unit, 0 = default width

    def draw(self, pdf, page_canvas: "PageCanvas"):
        x1, y1 = coordinate_utils.point_to_points(self.x1, self.y1, page_canvas.page_height_pt, page_canvas.scale)
        x2, y2 = coordinate_utils.point_to_points(self.x2, self.y2, page_canvas.page_height_pt, page_canvas.scale)
        width = self.width * page_canvas.scale if self.width > 0 else DEFAULT_LINE_WIDTH_PT
        pdf.setStrokeColorRGB(*_rgb(self.color))
        pdf.setLineWidth(width)
        pdf.line(x1, y1, x2, y2)


@dataclass
class ImageOp:
    """A registered image drawn into a top-left anchored box."""

    identifier: str
    handle: ImageReader
    x: float
    y: float
    width: float
    height: float

    def draw(self, pdf, page_canvas: "PageCanvas"):
        x, bottom, w, h = coordinate_utils.box_to_points(
            self.x, self.y, self.width, self.height,
            page_canvas.page_height_pt, page_canvas.scale
        )
        pdf.drawImage(self.handle, x, bottom, width=w, height=h, mask='auto')


@dataclass
class PageBuffer:
    """Recorded operations of one page."""

    number: int
    ops: list = field(default_factory=list)

    def cells(self) -> List[CellOp]:
        return [op for op in self.ops if isinstance(op, CellOp)]

    def texts(self) -> List[str]:
        """Text of every non-empty cell, in drawing order."""
        return [op.text for op in self.cells() if op.text]

    def lines(self) -> List[LineOp]:
        return [op for op in self.ops if isinstance(op, LineOp)]

    def images(self) -> List[ImageOp]:
        return [op for op in self.ops if isinstance(op, ImageOp)]


class PageCanvas:
    """Arena of page buffers plus font metrics in the document unit.

    Attributes:
        unit: Document unit ("pt", "mm", "cm" or "in")
        scale: Points per document unit
        page_width, page_height: A4 page size in the document unit
        pages: Page buffers, page n is pages[n - 1]
    """

    def __init__(self, unit: str = "mm", line_color: Color = DEFAULT_LINE_COLOR,
                 line_width: float = 0.0):
        self.unit = unit
        self.scale = coordinate_utils.unit_scale(unit)
        self.page_width_pt, self.page_height_pt = PAGE_SIZE_PT
        self.page_width = coordinate_utils.to_units(self.page_width_pt, self.scale)
        self.page_height = coordinate_utils.to_units(self.page_height_pt, self.scale)
        self.line_color = line_color
        self.line_width_pt = line_width * self.scale if line_width > 0 else DEFAULT_LINE_WIDTH_PT
        self.pages: List[PageBuffer] = []
        self._current = 0

    # Page lifecycle

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def current_page(self) -> int:
        """Number of the page drawing calls go to (0 before the first page)."""
        return self._current

    def add_page(self) -> int:
        """Append an empty page, select it and return its number."""
        page = PageBuffer(number=len(self.pages) + 1)
        self.pages.append(page)
        self._current = page.number
        logger.debug(f"Started page {page.number}")
        return page.number

    def select_page(self, number: int):
        """
        Make an existing page the active drawing target.

        Raises:
            RangeError: If the page does not exist
        """
        if number < 1 or number > len(self.pages):
            raise RangeError("page", number, 1, len(self.pages))
        self._current = number

    def page(self, number: int) -> PageBuffer:
        return self.pages[number - 1]

    def _target(self) -> PageBuffer:
        if self._current == 0:
            raise RangeError("page", 0, 1, len(self.pages))
        return self.pages[self._current - 1]

    # Metrics

    def string_width(self, text: str, font_name: str, size: float) -> float:
        """Width of text in the document unit for a font size in points."""
        return coordinate_utils.to_units(pdfmetrics.stringWidth(text, font_name, size), self.scale)

    def font_height(self, size: float) -> float:
        """Height of a glyph box in the document unit for a font size in points."""
        return coordinate_utils.to_units(size, self.scale)

    # Drawing

    def cell(self, x: float, y: float, width: float, height: float, text: str,
             font_name: str, font_size: float, align: str = "L", valign: str = "",
             border: str = "", fill_color: Optional[Color] = None) -> CellOp:
        op = CellOp(x, y, width, height, text, font_name, font_size, align, valign, border, fill_color)
        self._target().ops.append(op)
        return op

    def line(self, x1: float, y1: float, x2: float, y2: float, color: Color, width: float = 0.0) -> LineOp:
        op = LineOp(x1, y1, x2, y2, color, width)
        self._target().ops.append(op)
        return op

    def decode_image(self, data: bytes) -> Tuple[ImageReader, float, float]:
        """
        Decode image bytes.

        Returns:
            Tuple of (handle, natural width, natural height). The natural
            extent treats one pixel as one point (72 dpi), converted to the
            document unit.

        Raises:
            OSError: If the data is not a readable image
        """
        with PILImage.open(BytesIO(data)) as img:
            img.load()
            width_px, height_px = img.size

        handle = ImageReader(BytesIO(data))
        return (
            handle,
            coordinate_utils.to_units(width_px, self.scale),
            coordinate_utils.to_units(height_px, self.scale),
        )

    def image(self, identifier: str, handle: ImageReader, x: float, y: float,
              width: float, height: float) -> ImageOp:
        op = ImageOp(identifier, handle, x, y, width, height)
        self._target().ops.append(op)
        return op

    # Output

    def render(self, title: Optional[str] = None, author: Optional[str] = None) -> bytes:
        """Replay every page buffer onto a ReportLab canvas and return the PDF bytes."""
        buffer = BytesIO()
        pdf = pdfcanvas.Canvas(buffer, pagesize=PAGE_SIZE_PT)
        if title:
            pdf.setTitle(title)
        if author:
            pdf.setAuthor(author)

        for page in self.pages:
            for op in page.ops:
                op.draw(pdf, self)
            pdf.showPage()

        pdf.save()
        logger.debug(f"Rendered {len(self.pages)} page(s)")
        return buffer.getvalue()
