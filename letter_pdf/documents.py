"""Document Types

Invoice, delivery note and table attachment as DIN 5008 A letters. Each
document type only contributes the body of the letter; amounts, dates and
numbers arrive as already formatted strings.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple

from .exceptions import InvalidArgumentError
from .layout.generator import DocumentGenerator
from .layout.table_renderer import TableSpec
from .letter import Letter, MetaEntry, PersonInfo, SenderInfo, letter_options
from .norms import din5008a as din

logger = logging.getLogger(__name__)

# Invoice table
INVOICE_HEADER = ["Pos", "Anzahl", "Preis", "Beschreibung", "USt", "Netto"]
INVOICE_COLUMN_PERCENTAGES = [6, 10, 10, 54, 8, 12]
INVOICE_ALIGNMENTS = ["LM", "LM", "LM", "LM", "RM", "RM"]
SUMMARY_COLUMN_PERCENTAGES = [60, 25, 15]
SUMMARY_ALIGNMENTS = ["LM", "LM", "RM"]

# Delivery note table
DELIVERY_HEADER = ["Pos", "Anzahl", "Beschreibung", "Notiz"]
DELIVERY_COLUMN_PERCENTAGES = [7, 18, 40, 35]
DELIVERY_ALIGNMENTS = ["LM", "LM", "LM", "LM"]

# Signature section of a delivery note
SIGNATURE_SECTION_Y = 230.0
SIGNATURE_SECTION_HEIGHT = 35.0
SIGNATURE_NAME_LENGTH = 60.0
SIGNATURE_DATE_LENGTH = 20.0
SIGNATURE_GAP_LENGTH = 5.0
SIGNATURE_LENGTH = 35.0

# Allowed deviation of column percentages from 100
PERCENTAGE_TOLERANCE = 0.1

BodyFn = Callable[[DocumentGenerator], None]


def column_widths_from_percentages(generator: DocumentGenerator, percentages: Sequence[float]) -> List[float]:
    """Convert column percentages of the writable width into widths."""
    safe_width = generator.metrics.safe_width
    return [percentage * safe_width / 100.0 for percentage in percentages]


def check_percentages(percentages: Sequence[float]):
    """
    Raises:
        InvalidArgumentError: If the percentages do not add up to 100 (+-0.1)
    """
    total = sum(percentages)
    if abs(total - 100.0) > PERCENTAGE_TOLERANCE:
        raise InvalidArgumentError(f"Sum of column percentages is {total}, expected 100")


def print_headline(generator: DocumentGenerator, text: str):
    """Print a bold headline and leave one empty line below it."""
    generator.set_font_size(din.FONT_SIZE_HEADLINE)
    generator.print_text_line(text, "b", "L")
    generator.set_font_size(din.FONT_SIZE_10)
    generator.new_line(din.BODY_START_X)


def print_small_note(generator: DocumentGenerator, text: str):
    generator.set_font_size(din.FONT_SIZE_SENDER)
    generator.print_text_line(text, "i", "L")
    generator.set_font_size(din.FONT_SIZE_10)


@dataclass
class InvoiceContent:
    """Texts and pre-computed rows of an invoice.

    Attributes:
        items: One row per position: Pos, Anzahl, Preis, Beschreibung, USt, Netto
        summary: (label, value) rows; the last one is the grand total
    """

    number: str
    headline: str = "Rechnung"
    opening_text: str = ""
    service_period_text: str = ""
    closing_text: str = ""
    tax_notice: str = ""
    items: List[List[str]] = field(default_factory=list)
    summary: List[Tuple[str, str]] = field(default_factory=list)


@dataclass
class DeliveryNoteContent:
    """Texts and rows of a delivery note.

    Attributes:
        items: One row per position: Pos, Anzahl, Beschreibung, Notiz
        supplier_name: Name under the supplier signature (sender company or
            "Lieferant" if empty)
    """

    number: str
    headline: str = "Lieferschein"
    opening_text: str = ""
    terms_text: str = ""
    closing_text: str = ""
    items: List[List[str]] = field(default_factory=list)
    supplier_name: str = ""


@dataclass
class TableAttachmentContent:
    headline: str
    table_info: str
    header: List[str]
    rows: List[List[str]]
    column_percentages: List[float]
    page_number_prefix: str = ""


def invoice_body(content: InvoiceContent) -> BodyFn:
    def body(generator: DocumentGenerator):
        print_headline(generator, f"{content.headline} {content.number}")
        generator.print_text_line(content.opening_text)

        generator.new_line(din.BODY_START_X)
        print_small_note(generator, content.service_period_text)

        table = TableSpec(
            header=INVOICE_HEADER,
            column_widths=column_widths_from_percentages(generator, INVOICE_COLUMN_PERCENTAGES),
            column_alignments=INVOICE_ALIGNMENTS,
            rows=content.items,
            footer_rows=[["", label, value] for label, value in content.summary],
            footer_widths=column_widths_from_percentages(generator, SUMMARY_COLUMN_PERCENTAGES),
            footer_alignments=SUMMARY_ALIGNMENTS,
        )
        generator.render_table(table)

        generator.new_line(din.BODY_START_X)
        generator.new_line(din.BODY_START_X)
        generator.print_text_line(content.closing_text)
        generator.new_line(din.BODY_START_X)
        generator.print_text_line(content.tax_notice)

    return body


def delivery_note_body(content: DeliveryNoteContent, default_supplier_name: str = "") -> BodyFn:
    """Body of a delivery note; default_supplier_name is used when the content names no supplier."""
    supplier_name = content.supplier_name or default_supplier_name or "Lieferant"

    def body(generator: DocumentGenerator):
        print_headline(generator, f"{content.headline} {content.number}")
        generator.print_text_line(content.opening_text)
        generator.new_line(din.BODY_START_X)

        widths = column_widths_from_percentages(generator, DELIVERY_COLUMN_PERCENTAGES)
        generator.table_header(DELIVERY_HEADER, widths, DELIVERY_ALIGNMENTS)
        generator.table_body(content.items, widths, DELIVERY_ALIGNMENTS)

        generator.new_line(din.BODY_START_X)
        generator.new_line(din.BODY_START_X)
        generator.print_text_line(content.terms_text)
        generator.new_line(din.BODY_START_X)
        generator.print_text_line(content.closing_text)

        print_signature_section(generator, supplier_name)

    return body


def print_signature_section(generator: DocumentGenerator, supplier_name: str):
    """
    Print signature fields for supplier and customer side by side.

    The section starts at a fixed height, or below the text if the text
    reaches further down; a new page is started if it does not fit.
    """
    _, y = generator.get_cursor()
    start_y = max(y + generator.line_height(), SIGNATURE_SECTION_Y)
    if start_y + SIGNATURE_SECTION_HEIGHT > generator.page_break_trigger:
        generator.new_page()
        start_y = generator.metrics.margin_top

    color = generator.options.default_line_color
    print_signature_part(generator, supplier_name, din.BODY_START_X, start_y, color)
    print_signature_part(generator, "Kunde", din.WIDTH / 2, start_y, color)


def print_signature_part(generator: DocumentGenerator, head_text: str, start_x: float, start_y: float, color):
    generator.draw_line(start_x, start_y, start_x + SIGNATURE_NAME_LENGTH, start_y, color)
    generator.set_cursor(start_x, start_y + 1)
    generator.set_font_size(din.FONT_SIZE_SENDER)
    generator.print_text(head_text, "b", "L")
    generator.print_text("(Name)", "", "L")
    generator.new_line(start_x)
    generator.set_font_size(din.FONT_SIZE_10)
    for _ in range(3):
        generator.new_line(start_x)

    _, y = generator.get_cursor()
    date_end_x = start_x + SIGNATURE_DATE_LENGTH
    signature_start_x = date_end_x + SIGNATURE_GAP_LENGTH
    signature_end_x = signature_start_x + SIGNATURE_LENGTH
    generator.draw_line(start_x, y, date_end_x, y, color)
    generator.draw_line(signature_start_x, y, signature_end_x, y, color)

    generator.set_font_size(din.FONT_SIZE_SENDER)
    generator.set_cursor(start_x, y + 1)
    generator.print_text("Datum", "", "L")
    generator.set_cursor(signature_start_x, y + 1)
    generator.print_text("Unterschrift", "", "L")
    generator.set_font_size(din.FONT_SIZE_10)


def table_attachment_body(content: TableAttachmentContent) -> BodyFn:
    def body(generator: DocumentGenerator):
        try:
            check_percentages(content.column_percentages)
        except InvalidArgumentError as e:
            generator.set_error(e)
            return

        x, _ = generator.get_cursor()
        generator.set_cursor(x, din.HEADER_STOP_Y + 5)
        print_headline(generator, content.headline)
        print_small_note(generator, content.table_info)

        widths = column_widths_from_percentages(generator, content.column_percentages)
        alignments = ["LM"] * len(widths)
        generator.table_header(content.header, widths, alignments)
        generator.table_body(content.rows, widths, alignments)

    return body


def invoice_meta(customer_number: str, invoice_number: str, date: str) -> List[MetaEntry]:
    return [
        MetaEntry("Kundennummer:", customer_number),
        MetaEntry("Rechnungsnummer:", invoice_number),
        MetaEntry("Datum:", date),
    ]


def delivery_note_meta(customer_number: str, delivery_number: str, date: str) -> List[MetaEntry]:
    return [
        MetaEntry("Kundennummer:", customer_number),
        MetaEntry("Liefernummer:", delivery_number),
        MetaEntry("Datum:", date),
    ]


def invoice_letter(content: InvoiceContent, sender: PersonInfo, receiver: PersonInfo,
                   sender_info: SenderInfo, meta: List[MetaEntry], **kwargs) -> Letter:
    """Build an invoice letter; kwargs are passed on to Letter."""
    kwargs.setdefault("title", f"{content.headline} {content.number}")
    return Letter(invoice_body(content), sender=sender, receiver=receiver,
                  sender_info=sender_info, meta=meta, **kwargs)


def delivery_note_letter(content: DeliveryNoteContent, sender: PersonInfo, receiver: PersonInfo,
                         sender_info: SenderInfo, meta: List[MetaEntry], **kwargs) -> Letter:
    """Build a delivery note letter; kwargs are passed on to Letter."""
    kwargs.setdefault("title", f"{content.headline} {content.number}")
    return Letter(delivery_note_body(content, sender.company_name), sender=sender, receiver=receiver,
                  sender_info=sender_info, meta=meta, **kwargs)


def table_attachment_letter(content: TableAttachmentContent, options=None, **kwargs) -> Letter:
    """Build a table attachment: body and page numbers only, with thicker grey lines."""
    if options is None:
        options = letter_options(default_line_width=0.4, default_line_color=(162, 162, 162))
    kwargs.setdefault("title", content.headline)
    kwargs.setdefault("page_number_prefix", content.page_number_prefix)
    return Letter(table_attachment_body(content), options=options, **kwargs)
