"""Pytest configuration and shared fixtures for section-numbering tests."""

import io
from typing import List

import pytest
from docx import Document

from section_numbering import section_counter
from section_numbering.section_counter import SectionCounter


@pytest.fixture
def counter() -> SectionCounter:
    """A fresh, privately owned counter."""
    return SectionCounter()


@pytest.fixture(autouse=True)
def _reset_default_counter():
    """Keep the process-wide counter from leaking between tests."""
    section_counter.reset()
    yield
    section_counter.reset()


@pytest.fixture
def doc():
    return Document()


@pytest.fixture
def heading_texts():
    """Texts of every Heading-styled paragraph in a DOCX payload."""

    def _texts(docx_bytes: bytes) -> List[str]:
        d = Document(io.BytesIO(docx_bytes))
        return [p.text for p in d.paragraphs if p.style.name.startswith("Heading")]

    return _texts
