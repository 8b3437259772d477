"""Page Orchestrator Module

Page lifecycle hooks and the footer/page-numbering logic built on them.

The document generator calls an observer when a page begins, when a page
ends and once more when the whole document is composed. FooterOrchestrator
uses the last hook for its second pass: page numbers are stamped only after
the final page count is known, by revisiting every page.
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple

from ..config import DEFAULT_PAGE_LABEL
from ..exceptions import LayoutOverflowError

logger = logging.getLogger(__name__)

# Distance of the footer rule above the footer content
FOOTER_RULE_GAP = 1.0


class PageLifecycleObserver(ABC):
    """Receives page boundary events from a DocumentGenerator."""

    @abstractmethod
    def on_page_start(self, generator):
        """Called right after a new page was added, before any body content."""

    @abstractmethod
    def on_page_end(self, generator, is_last_page_hint: bool):
        """
        Called before a page is left.

        is_last_page_hint is True only when the document is finalized; a page
        ended by a page break always gets False.
        """

    def on_document_end(self, generator):
        """Called once after the last page has ended."""


class FooterOrchestrator(PageLifecycleObserver):
    """Draws header and footer content and numbers the pages.

    The footer content function draws the footer and returns the y at which
    it started, since footer height depends on its content. The value of
    the first page is kept and used for page numbering.

    Args:
        footer_content: Callable(generator) -> footer start y, or None
        header_content: Callable(generator) run at the start of every page
        body_start_y: Lower (exclusive) bound for the footer start y;
            defaults to the top margin
        rule_color: Colour of the footer rules (None = default line colour)
        rule_span: (start_x, stop_x) of the footer rules; defaults to the margins
        bottom_rule_y: Optional y of a second rule closing the footer
        page_number_x: Right edge of the page label; defaults to the right margin
        page_number_offset: Distance of the page label above the footer start
        page_number_font_size: Font size of the page label (None = current)
        label: Page label format with {page} and {total} fields
        prefix: Text put in front of every page label
    """

    def __init__(
        self,
        footer_content: Optional[Callable] = None,
        header_content: Optional[Callable] = None,
        body_start_y: Optional[float] = None,
        rule_color: Optional[Tuple[int, int, int]] = None,
        rule_span: Optional[Tuple[float, float]] = None,
        bottom_rule_y: Optional[float] = None,
        page_number_x: Optional[float] = None,
        page_number_offset: float = 0.0,
        page_number_font_size: Optional[float] = None,
        label: str = DEFAULT_PAGE_LABEL,
        prefix: str = "",
    ):
        self.footer_content = footer_content
        self.header_content = header_content
        self.body_start_y = body_start_y
        self.rule_color = rule_color
        self.rule_span = rule_span
        self.bottom_rule_y = bottom_rule_y
        self.page_number_x = page_number_x
        self.page_number_offset = page_number_offset
        self.page_number_font_size = page_number_font_size
        self.label = label
        self.prefix = prefix
        self.footer_y: Optional[float] = None

    def on_page_start(self, generator):
        if self.header_content is not None:
            self.header_content(generator)

    def on_page_end(self, generator, is_last_page_hint: bool):
        """
        Draw the footer of the current page and the rules around it.

        Raises:
            LayoutOverflowError: If the footer content starts outside the
                band (body_start_y, page_height]; no rule is drawn then
        """
        if self.footer_content is None:
            return

        footer_y = self.footer_content(generator)

        metrics = generator.metrics
        lower = self.body_start_y if self.body_start_y is not None else metrics.margin_top
        upper = metrics.page_height
        if not lower < footer_y <= upper:
            raise LayoutOverflowError(footer_y, lower, upper)

        if self.footer_y is None:
            self.footer_y = footer_y
            logger.debug(f"Footer starts at y = {footer_y:.2f}")

        start_x, stop_x = self.rule_span or (metrics.margin_left, metrics.safe_max_x)
        generator.draw_line(start_x, footer_y - FOOTER_RULE_GAP, stop_x, footer_y - FOOTER_RULE_GAP, self.rule_color)
        if self.bottom_rule_y is not None:
            generator.draw_line(start_x, self.bottom_rule_y, stop_x, self.bottom_rule_y, self.rule_color)

    def on_document_end(self, generator):
        self.stamp_page_numbers(generator)

    def page_label(self, page: int, total: int) -> str:
        return self.prefix + self.label.format(page=page, total=total)

    def stamp_page_numbers(self, generator) -> int:
        """
        Print the page label on every page, right aligned above the footer.

        A document with a single page gets no page number.

        Returns:
            Number of labels printed
        """
        total = generator.page_count
        if total <= 1:
            logger.debug("Single page document, no page numbers")
            return 0

        metrics = generator.metrics
        x = self.page_number_x if self.page_number_x is not None else metrics.safe_max_x
        footer_y = self.footer_y if self.footer_y is not None else metrics.safe_max_y
        y = footer_y - self.page_number_offset

        if self.page_number_font_size is not None:
            generator.set_font_size(self.page_number_font_size)
        generator.set_line_gap(0)

        for page in range(1, total + 1):
            generator.select_page(page)
            generator.set_unsafe_cursor(x, y)
            generator.previous_line(x)
            generator.print_text(self.page_label(page, total), "", "R")

        generator.select_page(total)
        logger.debug(f"Stamped page numbers on {total} pages")
        return total
