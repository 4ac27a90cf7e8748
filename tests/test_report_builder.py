"""Tests for outline normalization and DOCX report generation."""

import io
import logging
import zipfile

import pytest
from docx import Document

from section_numbering.report_builder import (
    NumberedHeading,
    OutlineError,
    OutlineItem,
    build_numbered_report_docx,
    normalize_outline,
    number_outline,
    update_docx_fields_bytes,
)
from section_numbering.section_counter import SectionCounter

OUTLINE = [
    {"level": 1, "title": "Introduction", "body": "Why this visit happened."},
    {"level": 2, "title": "Background"},
    {"level": 2, "title": "Scope"},
    {"level": 1, "title": "Findings"},
    {"level": 2, "title": "Observations", "body": "First paragraph.\n\nSecond paragraph."},
]


def _settings_xml(docx_bytes: bytes) -> str:
    with zipfile.ZipFile(io.BytesIO(docx_bytes)) as z:
        return z.read("word/settings.xml").decode("utf-8")


class TestNormalizeOutline:
    def test_accepts_dicts_tuples_and_items(self) -> None:
        items = normalize_outline([
            {"level": "1", "title": "A", "body": "text"},
            (2, "B"),
            [2, "C", "more"],
            OutlineItem(level=1, title="D"),
        ])

        assert items == [
            OutlineItem(level=1, title="A", body="text"),
            OutlineItem(level=2, title="B", body=""),
            OutlineItem(level=2, title="C", body="more"),
            OutlineItem(level=1, title="D", body=""),
        ]

    def test_drops_untitled_rows(self) -> None:
        items = normalize_outline([(1, "A"), {"level": 2, "title": ""}, {"level": None, "title": None}])
        assert [it.title for it in items] == ["A"]

    def test_strips_existing_numbers(self) -> None:
        assert normalize_outline([(1, "7. Conclusion")])[0].title == "Conclusion"

    def test_level_is_not_range_checked(self) -> None:
        assert [it.level for it in normalize_outline([(0, "a"), (-5, "b"), (99, "c")])] == [0, -5, 99]

    def test_non_numeric_level(self) -> None:
        with pytest.raises(OutlineError, match="level must be an integer"):
            normalize_outline([("one", "A")])

    def test_unsupported_entry(self) -> None:
        with pytest.raises(OutlineError, match="unsupported entry"):
            normalize_outline(["just a string"])

    def test_none_is_empty(self) -> None:
        assert normalize_outline(None) == []


class TestNumberOutline:
    def test_numbers_in_order(self) -> None:
        numbered = number_outline(OUTLINE)

        assert [h.number for h in numbered] == ["1", "1.1", "1.2", "2", "2.3"]
        assert numbered[-1] == NumberedHeading(level=2, title="Observations", number="2.3")
        assert numbered[-1].text == "2.3.  Observations"

    def test_given_counter_is_reset_first(self) -> None:
        counter = SectionCounter()
        for _ in range(3):
            counter.increment_and_get_counter(1)

        numbered = number_outline([(1, "A"), (2, "B")], counter=counter)

        assert [h.number for h in numbered] == ["1", "1.1"]
        assert (counter.counter_1, counter.counter_2) == (1, 1)

    def test_is_repeatable(self) -> None:
        counter = SectionCounter()
        first = number_outline(OUTLINE, counter=counter)
        second = number_outline(OUTLINE, counter=counter)
        assert first == second


class TestBuildNumberedReport:
    def test_headings_are_numbered(self, heading_texts) -> None:
        docx_bytes = build_numbered_report_docx(title="Monitoring Report", outline=OUTLINE)

        assert heading_texts(docx_bytes) == [
            "1.  Introduction",
            "1.1.  Background",
            "1.2.  Scope",
            "2.  Findings",
            "2.3.  Observations",
        ]

    def test_body_paragraphs_follow_headings(self) -> None:
        docx_bytes = build_numbered_report_docx(title="", outline=OUTLINE, include_toc=False)
        texts = [p.text for p in Document(io.BytesIO(docx_bytes)).paragraphs]

        assert texts[:2] == ["1.  Introduction", "Why this visit happened."]
        assert texts[-2:] == ["First paragraph.", "Second paragraph."]

    def test_title_and_toc(self) -> None:
        docx_bytes = build_numbered_report_docx(title="Monitoring Report", outline=OUTLINE, toc_levels="1-3")
        d = Document(io.BytesIO(docx_bytes))

        assert d.paragraphs[0].text == "Monitoring Report"
        assert 'TOC \\o "1-3"' in d.element.xml
        assert "w:updateFields" in _settings_xml(docx_bytes)

    def test_without_toc(self) -> None:
        docx_bytes = build_numbered_report_docx(title="R", outline=OUTLINE, include_toc=False)

        assert "TOC \\o" not in Document(io.BytesIO(docx_bytes)).element.xml
        assert "w:updateFields" not in _settings_xml(docx_bytes)

    def test_caller_counter_reflects_document(self) -> None:
        counter = SectionCounter()
        counter.increment_and_get_counter(1)

        build_numbered_report_docx(title="R", outline=OUTLINE, counter=counter)

        assert (counter.counter_1, counter.counter_2) == (2, 3)

    def test_a4_page(self) -> None:
        docx_bytes = build_numbered_report_docx(title="R", outline=OUTLINE, include_toc=False)
        section = Document(io.BytesIO(docx_bytes)).sections[0]

        assert round(section.page_width.mm) == 210
        assert round(section.page_height.mm) == 297
        assert round(section.top_margin.mm, 1) == 12.7
        assert round(section.left_margin.mm, 1) == 12.5
        assert round(section.footer_distance.mm) == 5

    def test_preview_text_matches_document(self, heading_texts) -> None:
        """number_outline and the DOCX agree, even on titles with several number-like prefixes."""
        outline = [(1, "1) 2) 3) Wells"), (2, "2.1 Pumps"), (1, "Latrines")]

        preview = [h.text for h in number_outline(outline)]
        docx_bytes = build_numbered_report_docx(title="R", outline=outline, include_toc=False)

        assert preview == ["1.  2) 3) Wells", "1.1.  Pumps", "2.  Latrines"]
        assert heading_texts(docx_bytes) == preview

    def test_empty_outline_raises(self) -> None:
        with pytest.raises(OutlineError, match="no titled headings"):
            build_numbered_report_docx(title="R", outline=[{"level": 1, "title": "  "}])


class TestUpdateFields:
    def test_empty_bytes_passthrough(self) -> None:
        assert update_docx_fields_bytes(b"") == b""

    def test_damaged_package_is_returned_unchanged(self, caplog) -> None:
        with caplog.at_level(logging.ERROR, logger="section_numbering.report_builder"):
            assert update_docx_fields_bytes(b"not a zip") == b"not a zip"

        assert "w:updateFields" in caplog.text
        assert caplog.records[-1].exc_info is not None

    def test_package_without_settings_is_returned_unchanged(self, caplog) -> None:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w") as z:
            z.writestr("word/document.xml", "<w:document/>")

        with caplog.at_level(logging.WARNING, logger="section_numbering.report_builder"):
            assert update_docx_fields_bytes(buf.getvalue()) == buf.getvalue()

        assert "word/settings.xml" in caplog.text

    def test_flag_is_added_once(self) -> None:
        buf = io.BytesIO()
        Document().save(buf)

        once = update_docx_fields_bytes(buf.getvalue())
        twice = update_docx_fields_bytes(once)

        assert _settings_xml(twice).count("w:updateFields") == 1
