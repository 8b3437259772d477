"""Letter Template Module

A DIN 5008 A business letter: logo, return address, receiver address, meta
information, body and footer on fixed zones of an A4 page. Document types
only supply the body content as a callable receiving the DocumentGenerator.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple
from urllib.parse import urlparse

from .config import DEBUG_FRAME_COLOR, DEFAULT_PAGE_LABEL
from .exceptions import InvalidArgumentError
from .layout.generator import DocumentGenerator
from .layout.page_orchestrator import FooterOrchestrator
from .norms import din5008a as din
from .options import GeneratorOptions
from .result import RenderResult

logger = logging.getLogger(__name__)


@dataclass
class Address:
    road: str = ""
    house_number: str = ""
    street_supplement: str = ""
    zip_code: str = ""
    city_name: str = ""
    country: str = ""
    country_code: str = ""


@dataclass
class PersonInfo:
    """A person or company with a postal address."""

    full_forename: str = ""
    full_surname: str = ""
    company_name: str = ""
    name_title: str = ""
    address: Address = field(default_factory=Address)

    @property
    def full_name(self) -> str:
        parts = [self.name_title, self.full_forename, self.full_surname]
        if not (self.full_forename or self.full_surname):
            return ""
        return " ".join(part for part in parts if part)


@dataclass
class SenderInfo:
    """Contact, bank and tax data of the sender shown in the footer."""

    web: str = ""
    phone: str = ""
    email: str = ""
    tax_number: str = ""
    bank_name: str = ""
    iban: str = ""
    bic: str = ""
    logo_url: str = ""


@dataclass
class MetaEntry:
    """One name/value line of the meta information block."""

    name: str
    value: str


def return_address_lines(person: PersonInfo) -> Tuple[str, str]:
    """
    Build the two small return address lines printed above the receiver.

    Examples:
        >>> person = PersonInfo("Max", "Muster", "ACME GmbH",
        ...                     address=Address("Weg", "1", zip_code="12345", city_name="Berlin"))
        >>> return_address_lines(person)
        ('ACME GmbH, Max Muster', 'Weg 1, 12345 Berlin')
    """
    name_line = person.company_name
    if person.company_name and (person.full_forename or person.full_surname):
        name_line += ", "
    name_line += person.full_name

    address = person.address
    road_line = f"{address.road} {address.house_number}"
    if address.street_supplement:
        road_line += f", {address.street_supplement}"
    road_line += f", {address.zip_code} {address.city_name}"
    if address.country_code:
        road_line += f", {address.country_code}"

    return name_line, road_line


def letter_options(**overrides) -> GeneratorOptions:
    """GeneratorOptions with the margins of a DIN 5008 A letter."""
    values = dict(
        font_size=din.FONT_SIZE_10,
        line_gap=1.3,
        margin_left=din.MARGIN_LEFT,
        margin_top=din.MARGIN_TOP,
        margin_right=din.MARGIN_RIGHT,
        margin_bottom=din.MARGIN_BOTTOM,
        unit="mm",
        auto_page_break_margin=din.HEIGHT - din.BODY_STOP_Y,
    )
    values.update(overrides)
    return GeneratorOptions(**values)


class Letter:
    """DIN 5008 A letter composed around a body content callable.

    Every block is optional: without a sender no return address is printed,
    without sender_info no footer, without meta entries no meta block.

    Args:
        body: Callable(generator) drawing the body, starting at the body zone
        sender: Sender shown in the return address line
        receiver: Receiver address block
        sender_info: Footer data and optional logo URL
        meta: Meta information lines (e.g. customer number, date)
        options: GeneratorOptions (letter_options() if None)
        session: Optional requests.Session for the logo download
        page_label: Page number format with {page} and {total}
        page_number_prefix: Text put in front of every page number
        show_debug_frames: Draw the zone borders in red
        title: PDF title
    """

    def __init__(
        self,
        body: Callable[[DocumentGenerator], None],
        sender: Optional[PersonInfo] = None,
        receiver: Optional[PersonInfo] = None,
        sender_info: Optional[SenderInfo] = None,
        meta: Optional[List[MetaEntry]] = None,
        options: Optional[GeneratorOptions] = None,
        session=None,
        page_label: str = DEFAULT_PAGE_LABEL,
        page_number_prefix: str = "",
        show_debug_frames: bool = False,
        title: Optional[str] = None,
    ):
        self.body = body
        self.sender = sender
        self.receiver = receiver
        self.sender_info = sender_info
        self.meta = meta or []
        self.options = options or letter_options()
        self.session = session
        self.page_label = page_label
        self.page_number_prefix = page_number_prefix
        self.show_debug_frames = show_debug_frames
        self.title = title

    def build(self) -> DocumentGenerator:
        """Compose all blocks and return the generator, ready to finalize."""
        orchestrator = FooterOrchestrator(
            footer_content=self.footer_block if self.sender_info else None,
            body_start_y=din.BODY_START_Y,
            rule_color=self.options.default_line_color,
            rule_span=(din.BODY_START_X, din.BODY_STOP_X),
            bottom_rule_y=din.HEIGHT - din.MARGIN_PAGE_NUMBER_Y if self.sender_info else None,
            page_number_x=din.BODY_STOP_X,
            page_number_offset=din.MARGIN_PAGE_NUMBER_Y,
            page_number_font_size=din.FONT_SIZE_10,
            label=self.page_label,
            prefix=self.page_number_prefix,
        )
        if not self.sender_info:
            orchestrator.footer_y = din.PAGE_NUMBER_Y_WITHOUT_FOOTER

        generator = DocumentGenerator(self.options, observer=orchestrator, session=self.session, title=self.title)

        if self.show_debug_frames:
            self.debug_frames(generator)
        if self.sender_info and self.sender_info.logo_url:
            self.logo_block(generator)
        if self.sender:
            self.sender_block(generator)
        if self.receiver:
            self.receiver_block(generator)
        if self.meta:
            self.meta_block(generator)
        self.body_block(generator)

        return generator

    def render(self) -> RenderResult:
        """Compose the letter and return the finished PDF."""
        logger.debug(f"Rendering letter '{self.title or ''}'")
        return self.build().finalize()

    def logo_block(self, generator: DocumentGenerator):
        """Place the logo right aligned in the header zone, scaled to its height."""
        url = self.sender_info.logo_url
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            generator.set_error(InvalidArgumentError(f"Logo URL '{url}' is not a valid URL"))
            return

        max_height = din.HEADER_STOP_Y - din.LOGO_MARGIN_TOP
        generator.set_unsafe_cursor(din.HEADER_STOP_X - din.LOGO_MARGIN_RIGHT, din.HEADER_START_Y + din.LOGO_MARGIN_TOP)

        if not generator.is_image_registered(url):
            generator.register_image(url)
        # fetch errors are already recorded
        if not generator.is_image_registered(url):
            return

        extent = generator.image_extent(url)
        if extent is None:
            return
        _, height = extent
        generator.place_registered_image(url, "R", max_height / height)

    def sender_block(self, generator: DocumentGenerator):
        """Print the two-line return address at the bottom of its zone."""
        name_line, road_line = return_address_lines(self.sender)

        generator.set_font_size(din.FONT_SIZE_SENDER)
        generator.set_line_gap(din.FONT_GAP_SENDER)
        generator.set_cursor(din.ADDRESS_SENDER_START_X, din.ADDRESS_SENDER_STOP_Y)
        generator.previous_line(din.ADDRESS_SENDER_START_X)
        generator.previous_line(din.ADDRESS_SENDER_START_X)
        generator.print_text_line(name_line)
        generator.print_text(road_line)

        generator.set_font_size(din.FONT_SIZE_10)
        generator.set_line_gap(din.FONT_GAP_10)

    def receiver_block(self, generator: DocumentGenerator):
        receiver = self.receiver
        address = receiver.address

        generator.set_cursor(din.ADDRESS_RECEIVER_START_X, din.ADDRESS_RECEIVER_START_Y)
        generator.set_font_size(din.FONT_SIZE_10)
        generator.set_line_gap(din.FONT_GAP_SENDER)

        if receiver.company_name:
            generator.print_text_line(receiver.company_name)
        if receiver.full_name:
            generator.print_text_line(receiver.full_name)
        generator.print_text_line(f"{address.road} {address.house_number}")
        if address.street_supplement:
            generator.print_text_line(address.street_supplement)
        generator.print_text_line(f"{address.zip_code} {address.city_name}")
        if address.country:
            generator.print_text_line(address.country)

    def meta_block(self, generator: DocumentGenerator):
        """Print names and values in two columns with a rule on the left."""
        generator.set_font_size(din.FONT_SIZE_10)
        generator.set_line_gap(din.FONT_GAP_10)

        max_name_width = max(generator.string_width(entry.name) for entry in self.meta)

        generator.set_cursor(din.META_INFO_START_X, din.META_INFO_START_Y)
        for entry in self.meta:
            generator.print_text_line(entry.name)

        generator.set_cursor(din.META_INFO_START_X + max_name_width + din.META_INFO_NAME_VALUE_GAP, din.META_INFO_START_Y)
        for entry in self.meta:
            generator.print_text_line(entry.value)

        _, y = generator.get_cursor()
        generator.draw_line(din.META_INFO_START_X, din.META_INFO_START_Y,
                            din.META_INFO_START_X, y - din.FONT_GAP_10, self.options.default_line_color)

    def body_block(self, generator: DocumentGenerator):
        generator.set_cursor(din.BODY_START_X, din.BODY_START_Y)
        generator.set_font_size(din.FONT_SIZE_10)
        generator.set_line_gap(din.FONT_GAP_10)
        self.body(generator)

    def footer_block(self, generator: DocumentGenerator) -> float:
        """
        Print contact, address and bank columns above the bottom rule.

        Returns:
            The y at which the footer starts
        """
        info = self.sender_info
        start_at_y = din.HEIGHT - din.MARGIN_PAGE_NUMBER_Y

        generator.set_font_size(din.FONT_SIZE_10)
        generator.set_line_gap(din.FONT_GAP_RECEIVER)

        # Footer height: one line per row of the highest column
        generator.set_unsafe_cursor(0, start_at_y)
        for _ in range(din.FOOTER_LINES):
            generator.previous_line(0)
        _, footer_y = generator.get_cursor()

        generator.set_cursor(din.BODY_START_X, footer_y)
        generator.print_text_line(info.web)
        generator.print_text_line(info.phone)
        generator.print_text_line(info.email)

        center_x = (din.BODY_STOP_X - din.BODY_START_X) / 2 + din.BODY_START_X
        generator.set_cursor(center_x, footer_y)
        if self.sender:
            address = self.sender.address
            generator.print_text_line(self.sender.company_name, "", "C")
            generator.print_text_line(f"{address.road} {address.house_number}", "", "C")
            generator.print_text_line(f"{address.zip_code} {address.city_name}", "", "C")
        generator.print_text_line(info.tax_number, "", "C")

        generator.set_cursor(din.BODY_STOP_X, footer_y)
        generator.print_text_line(info.bank_name, "", "R")
        generator.print_text_line(info.iban, "", "R")
        generator.print_text_line(info.bic, "", "R")

        return footer_y

    def debug_frames(self, generator: DocumentGenerator):
        """Draw the borders of every zone in red."""
        logger.warning("Showing debug frames")
        frames = [
            (din.HEADER_START_X, din.HEADER_STOP_Y, din.HEADER_STOP_X, din.HEADER_STOP_Y),

            (din.ADDRESS_SENDER_START_X, din.ADDRESS_SENDER_START_Y, din.ADDRESS_SENDER_START_X, din.ADDRESS_SENDER_STOP_Y),
            (din.ADDRESS_SENDER_START_X, din.ADDRESS_SENDER_STOP_Y, din.ADDRESS_SENDER_STOP_X, din.ADDRESS_SENDER_STOP_Y),
            (din.ADDRESS_SENDER_STOP_X, din.ADDRESS_SENDER_START_Y, din.ADDRESS_SENDER_STOP_X, din.ADDRESS_SENDER_STOP_Y),

            (din.ADDRESS_RECEIVER_START_X, din.ADDRESS_RECEIVER_START_Y, din.ADDRESS_RECEIVER_START_X, din.ADDRESS_RECEIVER_STOP_Y),
            (din.ADDRESS_RECEIVER_START_X, din.ADDRESS_RECEIVER_STOP_Y, din.ADDRESS_RECEIVER_STOP_X, din.ADDRESS_RECEIVER_STOP_Y),
            (din.ADDRESS_RECEIVER_STOP_X, din.ADDRESS_RECEIVER_START_Y, din.ADDRESS_RECEIVER_STOP_X, din.ADDRESS_RECEIVER_STOP_Y),

            (din.META_INFO_START_X, din.META_INFO_START_Y, din.META_INFO_STOP_X, din.META_INFO_START_Y),
            (din.META_INFO_START_X, din.META_INFO_STOP_Y, din.META_INFO_STOP_X, din.META_INFO_STOP_Y),
            (din.META_INFO_START_X, din.META_INFO_START_Y, din.META_INFO_START_X, din.META_INFO_STOP_Y),
            (din.META_INFO_STOP_X, din.META_INFO_START_Y, din.META_INFO_STOP_X, din.META_INFO_STOP_Y),

            (din.BODY_START_X, din.BODY_START_Y, din.BODY_STOP_X, din.BODY_START_Y),
            (din.BODY_START_X, din.BODY_START_Y, din.BODY_START_X, din.HEIGHT - 10),
            (din.BODY_STOP_X, din.BODY_START_Y, din.BODY_STOP_X, din.HEIGHT - 10),
        ]
        for x1, y1, x2, y2 in frames:
            generator.draw_line(x1, y1, x2, y2, DEBUG_FRAME_COLOR)
