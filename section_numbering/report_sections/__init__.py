# section_numbering/report_sections/__init__.py
"""
Report sections package.

This package intentionally avoids importing section modules at import-time
to keep the Streamlit page light.
"""
