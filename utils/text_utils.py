"""
Text utilities for comparing column headers with field names.
"""

import re
from typing import Any


_SEPARATORS = re.compile(r"[_-]")
_WORD_SPLIT = re.compile(r"[\s_-]+")
_WHITESPACE = re.compile(r"\s+")


def normalize_header(header: str) -> str:
    """
    Normalize a column header for matching.

    - "E-Mail_Address " → "e mail address"
    - "PHONE_NUMBER" → "phone number"
    """
    return _SEPARATORS.sub(" ", header.lower()).strip()


def normalize_field_key(key: str) -> str:
    """Field keys are snake_case: "first_name" → "first name"."""
    return key.replace("_", " ")


def split_words(text: str) -> list[str]:
    """Lowercase words split on whitespace, underscores and hyphens."""
    return [w for w in _WORD_SPLIT.split(text.lower()) if w]


def split_on_whitespace(text: str) -> list[str]:
    """Split on runs of whitespace, keeping hyphenated words intact."""
    return _WHITESPACE.split(text)


def clean_cell(value: Any) -> str:
    """
    Convert a raw cell value to the string shown in previews.

    None and NaN become "".
    """
    if value is None:
        return ""
    # NaN is the only value not equal to itself
    if isinstance(value, float) and value != value:
        return ""
    return str(value)
