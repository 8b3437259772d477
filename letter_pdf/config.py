"""Configuration Constants

Constants for document generation: units, colours, cell geometry and defaults.
"""

# Units of measure (points per unit)
UNIT_SCALE = {
    "pt": 1.0,
    "mm": 72.0 / 25.4,
    "cm": 72.0 / 2.54,
    "in": 72.0,
}

# A4 portrait in points
PAGE_SIZE_PT = (595.28, 841.89)

# Colours (RGB, 0-255)
DEFAULT_LINE_COLOR = (200, 200, 200)
TABLE_FILL_COLOR = (239, 239, 239)
TEXT_COLOR = (0, 0, 0)
DEBUG_FRAME_COLOR = (255, 64, 64)

# Line width used when 0 is requested (0.2 mm, in points)
DEFAULT_LINE_WIDTH_PT = 0.567

# Inner cell padding (1 mm, in points)
CELL_PADDING_PT = 2.835

# Extra width added to measured text in simple text cells (document units)
TEXT_CELL_PADDING = 2

# Automatic page break distance from the page bottom (2 cm, in points)
DEFAULT_PAGE_BREAK_MARGIN_PT = 56.69

# Image fetching
DEFAULT_IMAGE_TIMEOUT = 30  # seconds
IMAGE_MIME_TYPES = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
}

# Page numbering
DEFAULT_PAGE_LABEL = "Seite {page} von {total}"

# Environment variable prefix for GeneratorOptions.from_env()
ENV_PREFIX = "LETTER_PDF_"
