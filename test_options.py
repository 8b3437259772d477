import pytest

from letter_pdf.config import DEFAULT_LINE_COLOR
from letter_pdf.exceptions import InvalidConfigurationError
from letter_pdf.options import GeneratorOptions


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no LETTER_PDF_ variables set."""
    monkeypatch.chdir(tmp_path)
    for name in ("FONT_SIZE", "STRICT", "DEFAULT_LINE_COLOR", "MARGIN_TOP", "UNIT"):
        # setenv first so that undo also removes values loaded from .env
        monkeypatch.setenv("LETTER_PDF_" + name, "")
        monkeypatch.delenv("LETTER_PDF_" + name)
    return monkeypatch


def test_defaults():
    options = GeneratorOptions()
    assert options.font_family == "Helvetica"
    assert options.font_size == 10
    assert options.unit == "mm"
    assert options.default_line_color == DEFAULT_LINE_COLOR
    assert options.strict is False
    assert options.auto_page_break is True
    assert options.scale == pytest.approx(72 / 25.4)


@pytest.mark.parametrize("overrides", [
    {"unit": "px"},
    {"font_size": 0},
    {"line_gap": -1},
    {"margin_left": -5},
    {"margin_top": -1},
    {"default_line_width": -0.1},
    {"auto_page_break_margin": -3},
    {"default_line_color": (0, 0, 256)},
    {"default_line_color": (0, 0)},
])
def test_invalid_options(overrides):
    with pytest.raises(InvalidConfigurationError):
        GeneratorOptions(**overrides)


def test_negative_right_margin_mirrors_left():
    options = GeneratorOptions(margin_left=30, margin_right=-1)
    assert options.margin_right == 30


def test_from_env(clean_env):
    clean_env.setenv("LETTER_PDF_FONT_SIZE", "11")
    clean_env.setenv("LETTER_PDF_STRICT", "yes")
    clean_env.setenv("LETTER_PDF_DEFAULT_LINE_COLOR", "10,20,30")
    clean_env.setenv("LETTER_PDF_UNIT", "cm")

    options = GeneratorOptions.from_env(margin_top=4)

    assert options.font_size == 11.0
    assert options.strict is True
    assert options.default_line_color == (10, 20, 30)
    assert options.unit == "cm"
    assert options.margin_top == 4


def test_from_env_overrides_win(clean_env):
    clean_env.setenv("LETTER_PDF_MARGIN_TOP", "60")
    options = GeneratorOptions.from_env(margin_top=30)
    assert options.margin_top == 30


def test_from_env_reads_dotenv_file(clean_env, tmp_path):
    dotenv_file = tmp_path / ".env"
    dotenv_file.write_text("LETTER_PDF_FONT_SIZE=12\n")
    options = GeneratorOptions.from_env(dotenv_path=str(dotenv_file))
    assert options.font_size == 12.0


@pytest.mark.parametrize("name, value", [
    ("LETTER_PDF_FONT_SIZE", "large"),
    ("LETTER_PDF_STRICT", "maybe"),
    ("LETTER_PDF_DEFAULT_LINE_COLOR", "1,2"),
])
def test_from_env_invalid_value(clean_env, name, value):
    clean_env.setenv(name, value)
    with pytest.raises(InvalidConfigurationError):
        GeneratorOptions.from_env()
