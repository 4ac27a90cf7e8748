# section_numbering/config.py
from __future__ import annotations

import os

from docx.shared import RGBColor

# -------------------------
# Fonts / sizes
# -------------------------
TITLE_FONT = "Cambria"
TITLE_SIZE = 16  # Heading 1 titles
SUBTITLE_SIZE = 12  # Heading 2 titles

BODY_FONT = "Times New Roman"
BODY_SIZE = 11

# -------------------------
# Colours
# -------------------------
TITLE_BLUE = RGBColor(0, 112, 192)
ORANGE_HEX = "ED7D31"

# -------------------------
# TOC
# -------------------------
TOC_TITLE_TEXT = "Table of Contents"
DEFAULT_TOC_LEVELS = os.environ.get("SECTION_NUMBERING_TOC_LEVELS", "1-2").strip() or "1-2"

# -------------------------
# Page (A4, mm): python-docx Section attribute -> value
# -------------------------
A4_LAYOUT_MM = {
    "page_width": 210,
    "page_height": 297,
    "top_margin": 12.7,
    "bottom_margin": 12.7,
    "left_margin": 12.5,
    "right_margin": 12.5,
    "header_distance": 5,
    "footer_distance": 5,
}

# Spaces between the number and the title text ("3.  Findings")
NUMBER_TITLE_GAP = "  "
