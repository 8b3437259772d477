"""Generator Options Dataclass

Configuration options consumed by DocumentGenerator at construction.
"""
import os
from dataclasses import dataclass, field, fields
from typing import Optional, Tuple

from dotenv import load_dotenv

from .config import (
    DEFAULT_IMAGE_TIMEOUT,
    DEFAULT_LINE_COLOR,
    ENV_PREFIX,
    UNIT_SCALE,
)
from .exceptions import InvalidConfigurationError


@dataclass
class GeneratorOptions:
    """Configuration options for one generated document.

    All lengths except font sizes are given in the document unit.

    Attributes:
        font_family: Font family name ("Helvetica", "Times", "Courier" or a
            TrueType family found in font_dir, e.g. "OpenSans")
        font_dir: Optional directory holding <Family>-<Style>.ttf files
        font_size: Default font size in points
        line_gap: Gap between two text lines in the document unit

        # Page margins
        margin_left, margin_top, margin_right, margin_bottom: Margins bounding
            the safe writable rectangle. A negative right margin is replaced
            by the left margin.

        unit: One of "pt", "mm", "cm" or "in"

        # Lines
        default_line_color: RGB tuple used by draw_line callers and rules
        default_line_width: Line width in the document unit (0 = thinnest)

        # Error handling
        strict: If True, the first recorded error turns every later placement
            call into a no-op; otherwise calls keep executing and the last
            error wins

        # Pagination
        auto_page_break: If True, cells crossing the break line start a new page
        auto_page_break_margin: Distance of the break line from the page
            bottom in the document unit (None = 2 cm)

        image_timeout: Timeout in seconds for image downloads
    """

    font_family: str = "Helvetica"
    font_dir: Optional[str] = None
    font_size: float = 10.0
    line_gap: float = 1.3

    # Page margins
    margin_left: float = 25.0
    margin_top: float = 45.0
    margin_right: float = 20.0
    margin_bottom: float = 0.0

    unit: str = "mm"

    # Lines
    default_line_color: Tuple[int, int, int] = field(default=DEFAULT_LINE_COLOR)
    default_line_width: float = 0.0

    # Error handling
    strict: bool = False

    # Pagination
    auto_page_break: bool = True
    auto_page_break_margin: Optional[float] = None

    image_timeout: float = DEFAULT_IMAGE_TIMEOUT

    def __post_init__(self):
        """Validate configuration options after initialization."""
        if self.unit not in UNIT_SCALE:
            raise InvalidConfigurationError(
                f"unit must be one of {', '.join(UNIT_SCALE)}, got {self.unit!r}"
            )

        if self.font_size <= 0:
            raise InvalidConfigurationError(
                f"font_size must be greater than 0, got {self.font_size}"
            )

        if self.line_gap < 0:
            raise InvalidConfigurationError(
                f"A negative line_gap ({self.line_gap}) is not allowed"
            )

        if self.margin_right < 0:
            self.margin_right = self.margin_left

        for name in ("margin_left", "margin_top", "margin_bottom"):
            if getattr(self, name) < 0:
                raise InvalidConfigurationError(
                    f"A negative {name} ({getattr(self, name)}) is not allowed"
                )

        if self.default_line_width < 0:
            raise InvalidConfigurationError(
                f"A negative default_line_width ({self.default_line_width}) is not allowed"
            )

        if self.auto_page_break_margin is not None and self.auto_page_break_margin < 0:
            raise InvalidConfigurationError(
                f"A negative auto_page_break_margin ({self.auto_page_break_margin}) is not allowed"
            )

        if len(self.default_line_color) != 3 or not all(0 <= c <= 255 for c in self.default_line_color):
            raise InvalidConfigurationError(
                f"default_line_color must be an RGB tuple of 0-255 values, got {self.default_line_color}"
            )

    @property
    def scale(self) -> float:
        """Points per document unit."""
        return UNIT_SCALE[self.unit]

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, dotenv_path: Optional[str] = None,
                 **overrides) -> "GeneratorOptions":
        """
        Build options from environment variables.

        Loads a .env file if present (dotenv_path, or the nearest .env
        found by python-dotenv), then reads <prefix><FIELD> for every
        field (e.g. LETTER_PDF_FONT_SIZE=11). Keyword overrides win over the
        environment.

        Raises:
            InvalidConfigurationError: If a variable cannot be converted
        """
        load_dotenv(dotenv_path)

        values = {}
        for f in fields(cls):
            raw = os.getenv(prefix + f.name.upper())
            if raw is None:
                continue
            try:
                values[f.name] = _convert(f.name, raw)
            except ValueError as e:
                raise InvalidConfigurationError(
                    f"Invalid value for {prefix + f.name.upper()}: {raw!r} ({e})"
                )

        values.update(overrides)
        return cls(**values)


_FLOAT_FIELDS = {
    "font_size", "line_gap", "margin_left", "margin_top", "margin_right",
    "margin_bottom", "default_line_width", "auto_page_break_margin", "image_timeout",
}
_BOOL_FIELDS = {"strict", "auto_page_break"}


def _convert(name: str, raw: str):
    if name in _FLOAT_FIELDS:
        return float(raw)
    if name in _BOOL_FIELDS:
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError("expected a boolean")
    if name == "default_line_color":
        parts = [int(p) for p in raw.split(",")]
        if len(parts) != 3:
            raise ValueError("expected R,G,B")
        return tuple(parts)
    return raw
