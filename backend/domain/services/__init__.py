"""
Domain services - pure business logic with no I/O.
"""

from .entry_validation import EntryLimits, EntryValidator, escape_html, strip_dangerous_markup

__all__ = [
    "EntryLimits",
    "EntryValidator",
    "escape_html",
    "strip_dangerous_markup",
]
