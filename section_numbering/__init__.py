# section_numbering/__init__.py
"""
Two-level section numbering ("1", "1.1", "2", ...) for Word reports.
"""
from section_numbering.section_counter import (
    DEFAULT_COUNTER,
    SectionCounter,
    increment_and_get_counter,
    reset,
)

__all__ = [
    "DEFAULT_COUNTER",
    "SectionCounter",
    "increment_and_get_counter",
    "reset",
]
