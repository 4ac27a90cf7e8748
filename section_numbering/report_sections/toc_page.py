# section_numbering/report_sections/toc_page.py
from __future__ import annotations

from typing import Union

from docx.document import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import RGBColor
from docx.text.paragraph import Paragraph

from section_numbering.config import (
    BODY_FONT,
    BODY_SIZE,
    DEFAULT_TOC_LEVELS,
    ORANGE_HEX,
    TITLE_BLUE,
    TITLE_FONT,
    TITLE_SIZE,
    TOC_TITLE_TEXT,
)
from section_numbering.report_sections.numbered_heading import (
    set_paragraph_bottom_border,
    set_run,
    tight_paragraph,
)


def title_with_orange_line(
    doc: Document,
    *,
    text: str,
    font: str = TITLE_FONT,
    size: int = TITLE_SIZE,
    color: RGBColor = TITLE_BLUE,
    orange_hex: str = ORANGE_HEX,
    after_pt: Union[int, float] = 10,
) -> Paragraph:
    """
    Title paragraph with orange underline. NOT a heading, so it stays out of the TOC
    and does not consume a section number.
    """
    p = doc.add_paragraph()
    tight_paragraph(p, align=WD_ALIGN_PARAGRAPH.LEFT, before_pt=0, after_pt=float(after_pt), line_spacing=1.0)

    r = p.add_run(str(text))
    set_run(r, font, size, bold=True, color=color)

    set_paragraph_bottom_border(p, color_hex=orange_hex, size_eighths=12, space=2)
    return p


def _fld_char(kind: str):
    el = OxmlElement("w:fldChar")
    el.set(qn("w:fldCharType"), kind)
    return el


def toc_instruction(levels: str = DEFAULT_TOC_LEVELS, *, hyperlinks: bool = True, hide_page_numbers_in_web_layout: bool = False) -> str:
    instr = f'TOC \\o "{levels}"'
    if hyperlinks:
        instr += " \\h"
    if hide_page_numbers_in_web_layout:
        instr += " \\z"
    instr += " \\u"  # use outline levels
    return instr


def add_toc_field(
    doc: Document,
    *,
    levels: str = DEFAULT_TOC_LEVELS,
    hyperlinks: bool = True,
    hide_page_numbers_in_web_layout: bool = False,
) -> Paragraph:
    """
    Inserts a Word TOC field code.
    - levels: like "1-2"
    - hyperlinks: adds \\h
    - hide_page_numbers_in_web_layout: adds \\z
    """
    p = doc.add_paragraph()
    tight_paragraph(p, align=WD_ALIGN_PARAGRAPH.LEFT, before_pt=0, after_pt=0, line_spacing=1.0)

    r = p.add_run()
    r._r.append(_fld_char("begin"))

    instr_text = OxmlElement("w:instrText")
    instr_text.set(qn("xml:space"), "preserve")
    instr_text.text = toc_instruction(
        levels,
        hyperlinks=hyperlinks,
        hide_page_numbers_in_web_layout=hide_page_numbers_in_web_layout,
    )
    r._r.append(instr_text)
    r._r.append(_fld_char("separate"))

    # Placeholder text (Word replaces it when fields are updated)
    r2 = p.add_run("Table of Contents will be generated here.")
    set_run(r2, BODY_FONT, BODY_SIZE, bold=False)

    p.runs[-1]._r.append(_fld_char("end"))
    return p


def add_toc_page(
    doc: Document,
    *,
    toc_levels: str = DEFAULT_TOC_LEVELS,
    include_hyperlinks: bool = True,
    hide_page_numbers_in_web_layout: bool = False,
) -> None:
    """
    Adds a TOC page using a Word field code, followed by a page break.
    """
    title_with_orange_line(doc, text=TOC_TITLE_TEXT, after_pt=10)

    p = doc.add_paragraph()
    tight_paragraph(p, align=WD_ALIGN_PARAGRAPH.LEFT, before_pt=0, after_pt=8, line_spacing=1)
    set_run(
        p.add_run("Right-click the table and select “Update Field” in Word to refresh page numbers."),
        BODY_FONT,
        BODY_SIZE,
        bold=False,
    )

    add_toc_field(
        doc,
        levels=toc_levels,
        hyperlinks=include_hyperlinks,
        hide_page_numbers_in_web_layout=hide_page_numbers_in_web_layout,
    )
    doc.add_page_break()
