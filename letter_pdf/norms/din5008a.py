"""DIN 5008 Form A

Zone coordinates of a German business letter on A4 paper, in millimetres
from the top-left corner of the page.
"""

# A4 paper
WIDTH = 210.0
HEIGHT = 297.0

# Font sizes (pt) and matching line gaps (mm)
FONT_SIZE_10 = 10.0
FONT_SIZE_11 = 11.0
FONT_SIZE_12 = 12.0
FONT_GAP_10 = 3.0
FONT_GAP_11 = 3.3
FONT_GAP_12 = 3.6

FONT_SIZE_SENDER = 8.0
FONT_GAP_SENDER = 0.5
FONT_SIZE_RECEIVER = 8.0
FONT_GAP_RECEIVER = 1.0

FONT_SIZE_HEADLINE = FONT_SIZE_10 + 5

# Header (logo)
HEADER_START_X = 0.0
HEADER_START_Y = 0.0
HEADER_STOP_X = WIDTH
HEADER_STOP_Y = 27.0

# Return address line above the receiver
ADDRESS_SENDER_START_X = 25.0
ADDRESS_SENDER_START_Y = 27.0
ADDRESS_SENDER_STOP_X = 105.0
ADDRESS_SENDER_STOP_Y = 44.7

ADDRESS_RECEIVER_START_X = 25.0
ADDRESS_RECEIVER_START_Y = 44.7
ADDRESS_RECEIVER_STOP_X = 105.0
ADDRESS_RECEIVER_STOP_Y = 72.0

META_INFO_START_X = 125.0
META_INFO_START_Y = 32.0
META_INFO_STOP_X = 200.0
META_INFO_STOP_Y = 95.0

BODY_START_X = 25.0
BODY_START_Y = 103.46
BODY_STOP_X = 190.0

MARGIN_PAGE_NUMBER_Y = 4.23

# Lowest y of flowing body text, above the page number line
BODY_STOP_Y = 265.0

# Page number reference line of pages without footer content
PAGE_NUMBER_Y_WITHOUT_FOOTER = HEIGHT - 5

# Contact lines of the footer (the address column holds one more)
FOOTER_LINES = 4

# Logo placement inside the header zone
LOGO_MARGIN_TOP = 5.0
LOGO_MARGIN_RIGHT = WIDTH - META_INFO_STOP_X

# Gap between meta info names and values
META_INFO_NAME_VALUE_GAP = 2.0

# Page margins of a letter: the writable rectangle starts at the return address
MARGIN_LEFT = BODY_START_X
MARGIN_TOP = ADDRESS_SENDER_START_Y
MARGIN_RIGHT = WIDTH - BODY_STOP_X
MARGIN_BOTTOM = 0.0
