"""Shared pytest fixtures."""
from io import BytesIO
from unittest.mock import MagicMock

import pytest
from PIL import Image

from letter_pdf.config import UNIT_SCALE
from letter_pdf.layout.generator import DocumentGenerator
from letter_pdf.options import GeneratorOptions

MM = UNIT_SCALE["mm"]


def make_image_bytes(width=200, height=100, image_format="PNG"):
    """Encode a solid colour image in memory."""
    buffer = BytesIO()
    Image.new("RGB", (width, height), (30, 120, 200)).save(buffer, format=image_format)
    return buffer.getvalue()


def make_response(content=b"", content_type="image/png"):
    response = MagicMock()
    response.content = content
    response.headers = {"Content-Type": content_type}
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def png_bytes():
    return make_image_bytes()


@pytest.fixture
def image_session(png_bytes):
    """A requests.Session stand-in answering every GET with a 200x100 PNG."""
    session = MagicMock()
    session.get.return_value = make_response(png_bytes, "image/png")
    return session


@pytest.fixture
def options():
    return GeneratorOptions(
        margin_left=25,
        margin_top=45,
        margin_right=20,
        margin_bottom=0,
        font_size=10,
        line_gap=1.3,
        unit="mm",
    )


@pytest.fixture
def generator(options, image_session):
    return DocumentGenerator(options, session=image_session)


@pytest.fixture
def strict_generator(options, image_session):
    options.strict = True
    return DocumentGenerator(options, session=image_session)


def glyph_height(size_pt):
    """Glyph height in mm for a font size in points."""
    return size_pt / MM
