"""Tests for table header, body and footer bands."""
import pytest

from conftest import glyph_height
from letter_pdf.config import TABLE_FILL_COLOR
from letter_pdf.exceptions import DimensionMismatchError, InvalidArgumentError, RangeError
from letter_pdf.layout.table_renderer import TableSpec

WIDTHS = [20, 80, 30]
ALIGNMENTS = ["LM", "LM", "RM"]


def row_height(size=10, gap=1.3):
    return glyph_height(size) + 2 * gap


def test_header_style_and_height(generator):
    generator.set_cursor(25, 100)

    generator.table_header(["Pos", "Beschreibung", "Netto"], WIDTHS, ALIGNMENTS)

    cells = generator.canvas.page(1).cells()
    assert [cell.text for cell in cells] == ["Pos", "Beschreibung", "Netto"]
    assert [cell.x for cell in cells] == pytest.approx([25, 45, 125])
    for cell in cells:
        assert cell.font_name == "Helvetica-Bold"
        assert cell.border == "TB"
        assert cell.fill_color == TABLE_FILL_COLOR
        assert cell.height == pytest.approx(row_height())
        assert cell.y == pytest.approx(100)
    assert cells[2].align == "R"
    assert generator.get_cursor() == pytest.approx((25, 100 + row_height()))
    assert generator.ok()


def test_body_rows_share_one_row_height(generator):
    generator.set_cursor(25, 100)
    rows = [
        ["1", "Beratung\nvor Ort", "100,00"],
        ["2", "Fahrtkosten", "20,00"],
    ]

    generator.table_body(rows, WIDTHS, ALIGNMENTS)

    cells = generator.canvas.page(1).cells()
    # first row spans two physical lines, second row one
    assert len(cells) == 9
    heights = {round(cell.height, 6) for cell in cells}
    assert heights == {round(row_height(), 6)}

    first_line, second_line, third_line = cells[0:3], cells[3:6], cells[6:9]
    assert [cell.text for cell in first_line] == ["1", "Beratung", "100,00"]
    assert [cell.text for cell in second_line] == ["", "vor Ort", ""]
    assert [cell.border for cell in first_line] == ["", "", ""]
    assert [cell.border for cell in second_line] == ["B", "B", "B"]
    assert [cell.border for cell in third_line] == ["B", "B", "B"]
    assert [cell.y for cell in third_line] == pytest.approx([100 + 2 * row_height()] * 3)
    for cell in cells:
        assert cell.fill_color is None
        assert cell.font_name == "Helvetica"

    assert generator.get_cursor() == pytest.approx((25, 100 + 3 * row_height()))


def test_footer_styles_only_the_total_row(generator):
    generator.set_cursor(25, 100)
    rows = [
        ["", "Summe netto", "120,00"],
        ["", "Gesamt", "142,80"],
    ]

    generator.table_footer(rows, [60, 70, 35], ["LM", "LM", "RM"])

    cells = generator.canvas.page(1).cells()
    assert len(cells) == 6
    for cell in cells[:3]:
        assert cell.border == ""
        assert cell.fill_color is None
        assert cell.font_name == "Helvetica"

    spacer, label, total = cells[3:]
    assert spacer.text == ""
    assert spacer.border == ""
    assert spacer.fill_color is None
    for cell in (label, total):
        assert cell.font_name == "Helvetica-Bold"
        assert cell.border == "TB"
        assert cell.fill_color == TABLE_FILL_COLOR
    assert total.y == pytest.approx(100 + row_height())


def test_body_row_length_mismatch_draws_nothing(generator):
    generator.set_cursor(25, 100)
    rows = [["1", "ok", "1,00"], ["2", "missing"]]

    generator.table_body(rows, WIDTHS, ALIGNMENTS)

    error = generator.get_error()
    assert isinstance(error, DimensionMismatchError)
    assert error.expected == 3
    assert error.actual == 2
    assert generator.canvas.page(1).cells() == []
    assert generator.get_cursor() == (25, 100)


def test_widths_and_alignments_mismatch(generator):
    generator.set_cursor(25, 100)
    generator.table_header(["a", "b"], [10, 20], ["LM"])
    assert isinstance(generator.get_error(), DimensionMismatchError)
    assert generator.canvas.page(1).cells() == []


def test_invalid_alignment_draws_nothing(generator):
    generator.set_cursor(25, 100)
    generator.table_header(["a", "b"], [10, 20], ["LM", "XX"])
    assert isinstance(generator.get_error(), InvalidArgumentError)
    assert generator.canvas.page(1).cells() == []


def test_render_table_validates_before_drawing(generator):
    generator.set_cursor(25, 100)
    spec = TableSpec(
        header=["Pos", "Beschreibung", "Netto"],
        column_widths=WIDTHS,
        column_alignments=ALIGNMENTS,
        rows=[["1", "ok", "1,00"], ["2", "bad"]],
    )

    generator.render_table(spec)

    assert isinstance(generator.get_error(), DimensionMismatchError)
    assert generator.canvas.page(1).cells() == []


def test_footer_wider_than_writable_area(generator):
    generator.set_cursor(25, 100)
    generator.table_footer([["", "Gesamt", "1,00"]], [100, 50, 20], ["LM", "LM", "RM"])

    error = generator.get_error()
    assert isinstance(error, RangeError)
    assert error.value == pytest.approx(170)
    assert generator.canvas.page(1).cells() == []


def test_footer_needs_three_columns(generator):
    generator.set_cursor(25, 100)
    generator.table_footer([["Gesamt", "1,00"]], [50, 20], ["LM", "RM"])
    assert isinstance(generator.get_error(), DimensionMismatchError)
    assert generator.canvas.page(1).cells() == []


def test_render_table_with_footer(generator):
    generator.set_cursor(25, 100)
    spec = TableSpec(
        header=["Pos", "Beschreibung", "Netto"],
        column_widths=WIDTHS,
        column_alignments=ALIGNMENTS,
        rows=[["1", "Beratung", "100,00"], ["2", "Fahrt", "20,00"]],
        footer_rows=[["", "Gesamt", "120,00"]],
        footer_widths=[60, 40, 30],
        footer_alignments=["LM", "LM", "RM"],
    )

    generator.render_table(spec)

    assert generator.ok()
    cells = generator.canvas.page(1).cells()
    assert len(cells) == 12
    total = cells[-1]
    assert total.text == "120,00"
    assert total.border == "TB"
    assert total.font_name == "Helvetica-Bold"
    assert total.y == pytest.approx(100 + 3 * row_height())
    assert generator.get_cursor() == pytest.approx((25, 100 + 4 * row_height()))


def test_row_height_follows_current_font(generator):
    generator.set_cursor(25, 100)
    generator.set_font_size(12)
    generator.set_line_gap(2)

    generator.table_header(["a", "b", "c"], WIDTHS, ALIGNMENTS)

    cell = generator.canvas.page(1).cells()[0]
    assert cell.height == pytest.approx(row_height(12, 2))


def test_long_table_breaks_onto_new_page(generator):
    generator.set_cursor(25, 100)
    rows = [[str(i), f"Position {i}", "1,00"] for i in range(1, 41)]

    generator.table_body(rows, WIDTHS, ALIGNMENTS)

    assert generator.ok()
    assert generator.page_count == 2
    first_page = generator.canvas.page(1).cells()
    second_page = generator.canvas.page(2).cells()
    assert len(first_page) + len(second_page) == 120
    assert all(cell.y + cell.height <= generator.page_break_trigger + 1e-6 for cell in first_page)
    assert second_page[0].y == pytest.approx(45)
    assert second_page[0].x == pytest.approx(25)


def test_three_line_row_has_bottom_border_on_last_line_only(generator):
    generator.set_cursor(25, 100)

    generator.table_body([["1", "a\nb\nc", "x"]], WIDTHS, ALIGNMENTS)

    cells = generator.canvas.page(1).cells()
    assert len(cells) == 9
    lines = [cells[0:3], cells[3:6], cells[6:9]]
    assert [cell.text for cell in lines[1]] == ["", "b", ""]
    assert [cell.text for cell in lines[2]] == ["", "c", ""]
    assert [[cell.border for cell in line] for line in lines] == [
        ["", "", ""],
        ["", "", ""],
        ["B", "B", "B"],
    ]
    assert generator.get_cursor() == pytest.approx((25, 100 + 3 * row_height()))
