# Home.py
from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

import pandas as pd
import streamlit as st

from section_numbering.report_builder import OutlineError, build_numbered_report_docx, number_outline
from section_numbering.ui.state import (
    K_DOCX,
    K_ROWS,
    K_TITLE,
    init_outline_state,
    reset_numbering,
    session_counter,
)

# -------------------------
# Page config (MUST be first)
# -------------------------
st.set_page_config(page_title="Outline | Section Numbering", layout="wide")

logging.basicConfig(level=logging.INFO)
init_outline_state()


def _rows_from_editor(df: pd.DataFrame) -> List[Dict[str, Any]]:
    df = df.fillna({"title": "", "body": ""})
    return df.to_dict("records")


def _safe_filename(title: str) -> str:
    name = re.sub(r"[^A-Za-z0-9_\-]+", "_", (title or "").strip()).strip("_")
    return f"{name or 'report'}.docx"


# -------------------------
# Header
# -------------------------
st.title("Numbered Outline")
st.caption("Level 1 = section, any other level = subsection. Numbers are assigned top to bottom.")

title = st.text_input("Report title", key=K_TITLE)

edited = st.data_editor(
    pd.DataFrame(st.session_state[K_ROWS], columns=["level", "title", "body"]),
    num_rows="dynamic",
    use_container_width=True,
    column_config={
        "level": st.column_config.NumberColumn("Level", step=1, default=1),
        "title": st.column_config.TextColumn("Title"),
        "body": st.column_config.TextColumn("Body text"),
    },
    key="outline_editor",
)
# K_ROWS only seeds the editor; edits live in the widget state.
rows = _rows_from_editor(edited)

counter = session_counter()

# -------------------------
# Preview
# -------------------------
left, right = st.columns([7, 3])
with left:
    st.subheader("Preview")
    try:
        # throwaway counter: previewing must not touch the session numbering
        numbered = number_outline(rows)
    except OutlineError as e:
        st.error(str(e))
        numbered = []

    if numbered:
        st.text("\n".join(h.text if h.level == 1 else f"    {h.text}" for h in numbered))
    else:
        st.info("Add at least one row with a title.")

with right:
    st.subheader("Last generated DOCX")
    st.caption(f"Sections: {counter.counter_1} · Subsections: {counter.counter_2}")
    if st.button("Reset numbering", key="reset_numbering", use_container_width=True):
        reset_numbering()
        st.rerun()

# -------------------------
# Generate
# -------------------------
if st.button("Generate DOCX", key="generate_docx", type="primary", disabled=not numbered):
    try:
        st.session_state[K_DOCX] = build_numbered_report_docx(
            title=title,
            outline=rows,
            counter=counter,
        )
    except OutlineError as e:
        st.session_state[K_DOCX] = None
        st.error(str(e))
    else:
        st.rerun()

if st.session_state.get(K_DOCX):
    st.download_button(
        "Download report",
        data=st.session_state[K_DOCX],
        file_name=_safe_filename(title),
        mime="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    )
