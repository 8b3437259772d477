"""Font Manager Module

Handles font registration, style variants and font fallback.
"""
import logging
import os
from typing import Dict, Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError

from ..exceptions import FontError, InvalidArgumentError

logger = logging.getLogger(__name__)

# Style codes: "" regular, "b" bold, "i" italic, "l" light, "m" medium
STYLE_FILE_SUFFIXES = {
    "": "Regular",
    "b": "Bold",
    "i": "Italic",
    "l": "Light",
    "m": "Medium",
}

# Base-14 fallbacks. Light maps to regular and medium to bold.
BASE14_FAMILIES = {
    "helvetica": {
        "": "Helvetica", "b": "Helvetica-Bold", "i": "Helvetica-Oblique",
        "l": "Helvetica", "m": "Helvetica-Bold",
    },
    "times": {
        "": "Times-Roman", "b": "Times-Bold", "i": "Times-Italic",
        "l": "Times-Roman", "m": "Times-Bold",
    },
    "courier": {
        "": "Courier", "b": "Courier-Bold", "i": "Courier-Oblique",
        "l": "Courier", "m": "Courier-Bold",
    },
}
BASE14_ALIASES = {"arial": "helvetica", "times-roman": "times"}


class FontManager:
    """Maps a font family and style code to a registered ReportLab font name.

    This class handles:
    - Base-14 families (Helvetica/Arial, Times, Courier) without registration
    - TrueType families found as <Family>-<Style>.ttf in a font directory
      (e.g. OpenSans-Regular.ttf, OpenSans-Bold.ttf)
    - Fallback to Helvetica when the TrueType regular face is missing, and
      to the regular face when a single TrueType style is missing

    Attributes:
        family: Requested family name
        font_names: Mapping of style code to registered ReportLab font name
    """

    def __init__(self, family: str = "Helvetica", font_dir: Optional[str] = None):
        self.family = family
        self.font_dir = font_dir
        self.font_names: Dict[str, str] = {}
        self._setup_fonts()

    def _setup_fonts(self):
        """
        Resolve every style code of the family to a usable font name.

        Tries, in order:
        1. A base-14 family if the name matches one
        2. TrueType files in font_dir (or the bundled fonts/ directory)
        3. Helvetica as the last resort (logged as a warning)

        Raises:
            FontError: If a TrueType file exists but cannot be registered
        """
        key = self.family.lower()
        key = BASE14_ALIASES.get(key, key)
        if key in BASE14_FAMILIES:
            self.font_names = dict(BASE14_FAMILIES[key])
            return

        font_dirs = [self.font_dir] if self.font_dir else []
        font_dirs.append(os.path.join(os.path.dirname(__file__), '..', '..', 'fonts'))

        for font_dir in font_dirs:
            regular = self._register(font_dir, "")
            if regular is None:
                continue

            self.font_names[""] = regular
            for style in STYLE_FILE_SUFFIXES:
                if style == "":
                    continue
                name = self._register(font_dir, style)
                if name is None:
                    logger.warning(
                        f"Font style '{style}' of {self.family} not found in {font_dir}, using regular face"
                    )
                    name = regular
                self.font_names[style] = name
            return

        logger.warning(
            f"No TrueType files for font family '{self.family}' found, falling back to Helvetica"
        )
        self.font_names = dict(BASE14_FAMILIES["helvetica"])

    def _register(self, font_dir: str, style: str) -> Optional[str]:
        font_name = f"{self.family}-{STYLE_FILE_SUFFIXES[style]}"
        font_path = os.path.join(font_dir, font_name + ".ttf")

        if font_name in pdfmetrics.getRegisteredFontNames():
            return font_name
        if not os.path.exists(font_path):
            return None

        try:
            pdfmetrics.registerFont(TTFont(font_name, font_path))
        except TTFError as e:
            raise FontError(f"Failed to register font {font_path}: {e}") from e

        logger.debug(f"Registered font {font_name} from {font_path}")
        return font_name

    def get_font_name(self, style: str = "") -> str:
        """
        Get the registered font name for a style code.

        Args:
            style: "" regular, "b" bold, "i" italic, "l" light or "m" medium
                   (case insensitive)

        Returns:
            Font name string suitable for use with ReportLab

        Raises:
            InvalidArgumentError: If the style code is unknown
        """
        normalized = (style or "").lower()
        if normalized not in self.font_names:
            raise InvalidArgumentError(
                f"\"{style}\" is not a valid style of \"\", \"l\", \"i\", \"b\" or \"m\""
            )
        return self.font_names[normalized]
