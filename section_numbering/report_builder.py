# section_numbering/report_builder.py
from __future__ import annotations

import io
import logging
import zipfile
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Mm

from section_numbering import config
from section_numbering.report_sections.numbered_heading import (
    add_numbered_heading,
    format_numbered_title,
    s,
    set_run,
    strip_heading_numbering,
    tight_paragraph,
)
from section_numbering.report_sections.toc_page import add_toc_page, title_with_orange_line
from section_numbering.section_counter import SectionCounter

__all__ = [
    "NumberedHeading",
    "OutlineError",
    "OutlineItem",
    "build_numbered_report_docx",
    "normalize_outline",
    "number_outline",
    "strip_heading_numbering",
    "update_docx_fields_bytes",
]

logger = logging.getLogger(__name__)


class OutlineError(ValueError):
    """Outline input cannot be turned into numbered headings."""


@dataclass(frozen=True)
class OutlineItem:
    level: int
    title: str
    body: str = ""


@dataclass(frozen=True)
class NumberedHeading:
    level: int
    title: str
    number: str

    @property
    def text(self) -> str:
        """Same text the DOCX heading carries."""
        return format_numbered_title(self.number, self.title)


# =============================================================================
# Outline normalization
# =============================================================================
def _coerce_level(raw: Any, *, index: int) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise OutlineError(f"Outline item #{index}: level must be an integer, got {raw!r}") from e


def normalize_outline(items: Optional[Iterable[Any]]) -> List[OutlineItem]:
    """
    Accepts:
      - dicts: {"level": 1, "title": "Intro", "body": "..."}
      - pairs/triples: (1, "Intro") / (1, "Intro", "...")
      - OutlineItem

    Items with an empty title are dropped (blank rows from the editor).
    Level is NOT range-checked: the counter treats anything but 1 as a subsection.
    """
    out: List[OutlineItem] = []
    for i, it in enumerate(items or []):
        if isinstance(it, OutlineItem):
            raw_level, title, body = it.level, it.title, it.body
        elif isinstance(it, dict):
            raw_level, title, body = it.get("level"), it.get("title"), it.get("body")
        elif isinstance(it, (list, tuple)) and len(it) in (2, 3):
            raw_level, title = it[0], it[1]
            body = it[2] if len(it) == 3 else ""
        else:
            raise OutlineError(f"Outline item #{i}: unsupported entry {it!r}")

        title = strip_heading_numbering(title)
        if not title:
            continue

        out.append(OutlineItem(level=_coerce_level(raw_level, index=i), title=title, body=s(body)))
    return out


def number_outline(
    items: Optional[Iterable[Any]],
    counter: Optional[SectionCounter] = None,
) -> List[NumberedHeading]:
    """
    Number an outline without writing a document.
    The counter (fresh one if not given) is reset first: one document = one numbering run.
    """
    counter = counter or SectionCounter()
    counter.reset()

    return [
        NumberedHeading(level=it.level, title=it.title, number=counter.increment_and_get_counter(it.level))
        for it in normalize_outline(items)
    ]


# =============================================================================
# Page / Word utilities
# =============================================================================
def set_page_a4(section) -> None:
    for attr, mm in config.A4_LAYOUT_MM.items():
        setattr(section, attr, Mm(mm))


_SETTINGS_PART = "word/settings.xml"
_UPDATE_FIELDS = '<w:updateFields w:val="true"/>'


def update_docx_fields_bytes(docx_bytes: bytes) -> bytes:
    """
    Ask Word to refresh fields (TOC) when the file is opened.

    Best-effort: on a damaged package the input is returned unchanged and the
    failure is logged; the document is still usable, only the TOC stays stale.
    """
    if not docx_bytes:
        return docx_bytes

    try:
        with zipfile.ZipFile(io.BytesIO(docx_bytes), "r") as zin:
            parts = {n: zin.read(n) for n in zin.namelist()}

        settings = parts.get(_SETTINGS_PART)
        if not settings:
            logger.warning("DOCX has no %s; fields will not auto-update", _SETTINGS_PART)
            return docx_bytes

        txt = settings.decode("utf-8", errors="ignore")
        if "w:updateFields" not in txt:
            parts[_SETTINGS_PART] = txt.replace("</w:settings>", _UPDATE_FIELDS + "</w:settings>").encode("utf-8")

        out = io.BytesIO()
        with zipfile.ZipFile(out, "w", zipfile.ZIP_DEFLATED) as zout:
            for n, data in parts.items():
                zout.writestr(n, data)
        return out.getvalue()

    except zipfile.BadZipFile:
        logger.exception("Could not set w:updateFields (not a DOCX package)")
        return docx_bytes


def _doc_to_bytes(doc) -> bytes:
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def _add_body(doc, text: str) -> None:
    for para in [ln.strip() for ln in text.replace("\r\n", "\n").split("\n\n")]:
        if not para:
            continue
        p = doc.add_paragraph()
        tight_paragraph(p, align=WD_ALIGN_PARAGRAPH.JUSTIFY, before_pt=0, after_pt=6, line_spacing=1.15)
        set_run(p.add_run(para), config.BODY_FONT, config.BODY_SIZE)


# =============================================================================
# MAIN PUBLIC API
# =============================================================================
def build_numbered_report_docx(
    *,
    title: str,
    outline: Sequence[Any],
    toc_levels: str = config.DEFAULT_TOC_LEVELS,
    include_toc: bool = True,
    counter: Optional[SectionCounter] = None,
) -> bytes:
    """
    Build a DOCX whose headings are numbered "1", "1.1", "2", ...

    The counter is reset before the first heading. Pass one in to inspect it afterwards
    (e.g. Streamlit session); otherwise a private one is used.
    """
    items = normalize_outline(outline)
    if not items:
        raise OutlineError("Report generation failed: outline has no titled headings.")

    counter = counter or SectionCounter()
    counter.reset()

    doc = Document()
    set_page_a4(doc.sections[0])

    if s(title):
        title_with_orange_line(doc, text=s(title), after_pt=12)

    if include_toc:
        add_toc_page(doc, toc_levels=toc_levels)

    for it in items:
        add_numbered_heading(doc, it.title, level=it.level, counter=counter)
        if it.body:
            _add_body(doc, it.body)

    logger.debug("Built report %r with %d numbered headings (%r)", s(title), len(items), counter)

    docx_bytes = _doc_to_bytes(doc)
    if include_toc:
        docx_bytes = update_docx_fields_bytes(docx_bytes)
    return docx_bytes
