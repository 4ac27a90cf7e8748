# section_numbering/report_sections/numbered_heading.py
from __future__ import annotations

import re
from typing import Any, Optional, Tuple, Union

from docx.document import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import RGBColor, Pt
from docx.text.paragraph import Paragraph

from section_numbering.config import (
    NUMBER_TITLE_GAP,
    ORANGE_HEX,
    SUBTITLE_SIZE,
    TITLE_BLUE,
    TITLE_FONT,
    TITLE_SIZE,
)
from section_numbering.section_counter import SectionCounter


# ============================================================
# Inline helpers
# ============================================================
def s(v: Any) -> str:
    return "" if v is None else str(v).strip()


def set_run(
    run,
    font: str,
    size: Union[int, float],
    bold: bool = False,
    color: Optional[RGBColor] = None,
) -> None:
    """Safe run styling with eastAsia font set."""
    run.font.name = font
    try:
        run._element.rPr.rFonts.set(qn("w:eastAsia"), font)  # type: ignore[attr-defined]
    except AttributeError:
        # no rPr/rFonts on this run (custom templates)
        pass
    run.font.size = Pt(float(size))
    run.bold = bool(bold)
    if color is not None:
        run.font.color.rgb = color


def tight_paragraph(
    p: Paragraph,
    *,
    align=WD_ALIGN_PARAGRAPH.LEFT,
    before_pt: Union[int, float] = 0,
    after_pt: Union[int, float] = 0,
    line_spacing: float = 1.0,
) -> None:
    p.alignment = align
    pf = p.paragraph_format
    pf.space_before = Pt(float(before_pt))
    pf.space_after = Pt(float(after_pt))
    pf.line_spacing = float(line_spacing)


def _child(parent, tag: str):
    el = parent.find(qn(tag))
    if el is None:
        el = OxmlElement(tag)
        parent.append(el)
    return el


def set_paragraph_bottom_border(
    paragraph: Paragraph,
    *,
    color_hex: str,
    size_eighths: int = 12,
    space: int = 2,
) -> None:
    """
    Single rule under the paragraph (w:pBdr/w:bottom). Re-running updates it in place.
    size_eighths is in 1/8 pt: 12 => 1.5pt.
    """
    bottom = _child(_child(paragraph._p.get_or_add_pPr(), "w:pBdr"), "w:bottom")
    attrs = {
        "w:val": "single",
        "w:sz": int(size_eighths),
        "w:space": int(space),
        "w:color": s(color_hex).lstrip("#"),
    }
    for name, value in attrs.items():
        bottom.set(qn(name), str(value))


def add_heading(
    doc: Document,
    text: str,
    *,
    level: int = 1,
    align=WD_ALIGN_PARAGRAPH.LEFT,
    font: str = TITLE_FONT,
    size: int = TITLE_SIZE,
    bold: bool = True,
    color: Optional[RGBColor] = None,
) -> Paragraph:
    """
    Add a REAL Word heading paragraph (TOC-safe).
    """
    lvl = max(1, min(int(level), 9))
    p = doc.add_paragraph(style=f"Heading {lvl}")

    tight_paragraph(p, align=align, before_pt=0, after_pt=0, line_spacing=1.0)
    r = p.add_run(s(text))
    set_run(r, font, size, bold=bold, color=color)
    return p


# ============================================================
# Numbering
# ============================================================
# "3. ", "2.1) ", "(4) - ", "1.2 "
_NUMBER_PREFIX = re.compile(r"^\(?\d+(?:\.\d+)*\)?(?:\s*[.):\-]\s*|\s+)")


def strip_heading_numbering(text: Any) -> str:
    """Drop ONE leading number typed by the user; the counter supplies the real one."""
    return _NUMBER_PREFIX.sub("", s(text), count=1).strip()


def format_numbered_title(number: str, title: Any) -> str:
    """
    "3" + "Findings" -> "3.  Findings"
    `title` is used as given (already normalized by the caller).
    """
    return f"{s(number)}.{NUMBER_TITLE_GAP}{s(title)}"


def add_numbered_heading(
    doc: Document,
    title: Any,
    *,
    level: int,
    counter: SectionCounter,
    orange_hex: str = ORANGE_HEX,
    after_pt: float = 6,
) -> Tuple[str, Paragraph]:
    """
    Number a heading with `counter` and write it into `doc`.
    `title` is written as given (strip typed numbering beforehand, see normalize_outline).

    - level == 1  -> Heading 1, blue, orange bottom rule
    - otherwise   -> Heading 2, black (two-level numbering only)

    Returns (number, paragraph).
    """
    number = counter.increment_and_get_counter(level)
    text = format_numbered_title(number, title)

    if level == 1:
        p = add_heading(doc, text, level=1, size=TITLE_SIZE, color=TITLE_BLUE)
        tight_paragraph(p, before_pt=0, after_pt=float(after_pt), line_spacing=1)
        set_paragraph_bottom_border(p, color_hex=orange_hex, size_eighths=12, space=2)
    else:
        p = add_heading(doc, text, level=2, size=SUBTITLE_SIZE, color=None)
        tight_paragraph(p, before_pt=4, after_pt=4, line_spacing=1)

    return number, p
