"""Tests for page lifecycle events, page breaks, footers and page numbers."""
import pytest

from letter_pdf.exceptions import LayoutOverflowError
from letter_pdf.layout.generator import DocumentGenerator
from letter_pdf.layout.page_orchestrator import FOOTER_RULE_GAP, FooterOrchestrator, PageLifecycleObserver


class RecordingObserver(PageLifecycleObserver):

    def __init__(self):
        self.events = []

    def on_page_start(self, generator):
        self.events.append(("start", generator.current_page))

    def on_page_end(self, generator, is_last_page_hint):
        self.events.append(("end", generator.current_page, is_last_page_hint))

    def on_document_end(self, generator):
        self.events.append(("document", generator.page_count))


def fill_pages(generator, lines):
    for i in range(lines):
        generator.print_text_line(f"Zeile {i + 1}")


def simple_footer(y):
    def footer(generator):
        generator.set_unsafe_cursor(25, y)
        generator.print_text("Fusszeile")
        return y
    return footer


def test_events_in_order(options, image_session):
    observer = RecordingObserver()
    generator = DocumentGenerator(options, observer=observer, session=image_session)
    generator.new_page()
    generator.new_page()

    generator.finalize()

    assert observer.events == [
        ("start", 1),
        ("end", 1, False),
        ("start", 2),
        ("end", 2, False),
        ("start", 3),
        ("end", 3, True),
        ("document", 3),
    ]


def test_auto_page_break_keeps_x(options, image_session):
    observer = RecordingObserver()
    generator = DocumentGenerator(options, observer=observer, session=image_session)
    generator.set_cursor(60, 275)

    generator.print_text("does not fit")

    assert generator.page_count == 2
    cell = generator.canvas.page(2).cells()[0]
    assert (cell.x, cell.y) == (60, 45)
    assert ("end", 1, False) in observer.events
    assert generator.canvas.page(1).cells() == []


def test_no_break_at_top_of_page(options, image_session):
    generator = DocumentGenerator(options, session=image_session)
    generator.set_cursor(25, 45)
    generator.print_formatted_cell("tall", "", "L", "", False, None, 250, 50)
    assert generator.page_count == 1


def test_page_breaks_disabled(options, image_session):
    options.auto_page_break = False
    generator = DocumentGenerator(options, session=image_session)
    generator.set_cursor(25, 270)

    generator.print_text("at the bottom")

    assert generator.page_count == 1
    assert generator.canvas.page(1).cells()[0].y == pytest.approx(270)


def test_custom_page_break_margin(options, image_session):
    options.auto_page_break_margin = 100
    generator = DocumentGenerator(options, session=image_session)
    assert generator.page_break_trigger == pytest.approx(generator.metrics.page_height - 100)

    generator.set_cursor(25, 195)
    generator.print_text("below the break line")

    assert generator.page_count == 2


def test_footer_rules_and_first_footer_y(options, image_session):
    orchestrator = FooterOrchestrator(footer_content=simple_footer(280), bottom_rule_y=292)
    generator = DocumentGenerator(options, observer=orchestrator, session=image_session)

    result = generator.finalize()

    assert result.error is None
    assert orchestrator.footer_y == 280
    lines = generator.canvas.page(1).lines()
    assert len(lines) == 2
    rule, bottom = lines
    assert rule.y1 == rule.y2 == pytest.approx(280 - FOOTER_RULE_GAP)
    assert rule.x1 == pytest.approx(25)
    assert rule.x2 == pytest.approx(generator.metrics.safe_max_x)
    assert bottom.y1 == pytest.approx(292)
    assert "Fusszeile" in generator.canvas.page(1).texts()


def test_footer_drawn_on_every_page(options, image_session):
    orchestrator = FooterOrchestrator(footer_content=simple_footer(280))
    generator = DocumentGenerator(options, observer=orchestrator, session=image_session)
    fill_pages(generator, 100)

    generator.finalize()

    assert generator.page_count > 2
    for number in range(1, generator.page_count + 1):
        assert "Fusszeile" in generator.canvas.page(number).texts()


@pytest.mark.parametrize("footer_y", [45, 30, 297.5])
def test_footer_outside_band(options, image_session, footer_y):
    orchestrator = FooterOrchestrator(footer_content=lambda generator: footer_y)
    generator = DocumentGenerator(options, observer=orchestrator, session=image_session)

    result = generator.finalize()

    assert isinstance(result.error, LayoutOverflowError)
    assert result.error.footer_y == footer_y
    assert generator.canvas.page(1).lines() == []
    assert orchestrator.footer_y is None


def test_footer_band_uses_body_start(options, image_session):
    orchestrator = FooterOrchestrator(footer_content=lambda generator: 90, body_start_y=100)
    generator = DocumentGenerator(options, observer=orchestrator, session=image_session)
    assert isinstance(generator.finalize().error, LayoutOverflowError)


def test_page_numbers_on_every_page(options, image_session):
    orchestrator = FooterOrchestrator(footer_content=simple_footer(280), page_number_offset=4)
    generator = DocumentGenerator(options, observer=orchestrator, session=image_session)
    generator.new_page()
    generator.new_page()

    result = generator.finalize()

    assert result.page_count == 3
    labels = []
    for number in range(1, 4):
        label = generator.canvas.page(number).cells()[-1]
        labels.append(label)
        assert label.text == f"Seite {number} von 3"
        assert label.x + label.width == pytest.approx(generator.metrics.safe_max_x)
    assert len({round(label.y, 6) for label in labels}) == 1
    # one line of gap-free text above footer_y - offset
    assert labels[0].y == pytest.approx(280 - 4 - generator.canvas.font_height(10))
    assert generator.current_page == 3


def test_single_page_has_no_page_number(options, image_session):
    orchestrator = FooterOrchestrator(footer_content=simple_footer(280))
    generator = DocumentGenerator(options, observer=orchestrator, session=image_session)

    generator.finalize()

    assert not any(text.startswith("Seite") for text in generator.canvas.page(1).texts())
    assert orchestrator.stamp_page_numbers(generator) == 0


def test_page_number_prefix_and_label(options, image_session):
    orchestrator = FooterOrchestrator(
        footer_content=simple_footer(280),
        label="{page}/{total}",
        prefix="Anlage 1 - ",
        page_number_font_size=8,
    )
    generator = DocumentGenerator(options, observer=orchestrator, session=image_session)
    generator.new_page()

    generator.finalize()

    label = generator.canvas.page(2).cells()[-1]
    assert label.text == "Anlage 1 - 2/2"
    assert label.font_size == 8


def test_page_numbers_without_footer_content(options, image_session):
    orchestrator = FooterOrchestrator(page_number_x=190)
    generator = DocumentGenerator(options, observer=orchestrator, session=image_session)
    generator.new_page()

    generator.finalize()

    label = generator.canvas.page(1).cells()[-1]
    assert label.text == "Seite 1 von 2"
    assert label.y == pytest.approx(generator.metrics.safe_max_y - generator.canvas.font_height(10))
    assert generator.canvas.page(1).lines() == []


def test_header_content_on_every_page(options, image_session):
    def header(generator):
        generator.set_unsafe_cursor(25, 10)
        generator.print_text("Kopfzeile")

    orchestrator = FooterOrchestrator(header_content=header)
    generator = DocumentGenerator(options, observer=orchestrator, session=image_session)
    fill_pages(generator, 70)

    assert generator.page_count >= 2
    for number in range(1, generator.page_count + 1):
        assert generator.canvas.page(number).texts()[0] == "Kopfzeile"


def test_callbacks_do_not_leak_state(options, image_session):
    def footer(generator):
        generator.set_font_size(6)
        generator.set_line_gap(0)
        generator.set_unsafe_cursor(0, 290)
        generator.print_text("klein")
        return 290

    orchestrator = FooterOrchestrator(footer_content=footer)
    generator = DocumentGenerator(options, observer=orchestrator, session=image_session)
    generator.set_cursor(70, 120)

    generator.new_page()

    assert generator.get_cursor() == (25, 45)
    assert generator.font_size == 10
    assert generator.line_gap == 1.3

    generator.set_cursor(70, 120)
    fill_pages(generator, 1)
    assert generator.canvas.page(2).cells()[-1].font_size == 10


def test_callbacks_never_break_pages(options, image_session):
    def footer(generator):
        generator.set_unsafe_cursor(25, 295)
        generator.print_text_line("one\ntwo\nthree")
        return 295

    orchestrator = FooterOrchestrator(footer_content=footer)
    generator = DocumentGenerator(options, observer=orchestrator, session=image_session)

    result = generator.finalize()

    assert result.page_count == 1
    assert generator.canvas.page(1).texts() == ["one", "two", "three"]
