# section_numbering/ui/state.py
from __future__ import annotations

from typing import Any, Dict, List

import streamlit as st

from section_numbering.section_counter import SectionCounter

K_COUNTER = "outline_counter"
K_ROWS = "outline_rows"
K_TITLE = "outline_report_title"
K_DOCX = "outline_docx_bytes"


def default_outline_rows() -> List[Dict[str, Any]]:
    return [
        {"level": 1, "title": "Introduction", "body": ""},
        {"level": 2, "title": "Background", "body": ""},
        {"level": 2, "title": "Scope", "body": ""},
        {"level": 1, "title": "Findings", "body": ""},
        {"level": 2, "title": "Observations", "body": ""},
    ]


def init_outline_state() -> None:
    """
    Per-session state for the outline page.
    Each browser session owns its SectionCounter (no numbering leaks between users).
    """
    st.session_state.setdefault(K_COUNTER, SectionCounter())
    st.session_state.setdefault(K_ROWS, default_outline_rows())
    st.session_state.setdefault(K_TITLE, "Monitoring Report")
    st.session_state.setdefault(K_DOCX, None)


def session_counter() -> SectionCounter:
    init_outline_state()
    return st.session_state[K_COUNTER]


def reset_numbering() -> None:
    session_counter().reset()
    st.session_state[K_DOCX] = None
