"""
Text Normalizer

Cleans raw exercise descriptions before pattern matching.
"""

import re
from typing import Optional

_WHITESPACE_RE = re.compile(r'\s+')
_QUOTES_RE = re.compile(r'[“”„‟‘’‚‛]')
_DASHES_RE = re.compile(r'[‐‑‒–—―−]')  # hyphen variants, en/em dash, minus sign


def collapse_whitespace(text: str) -> str:
    """Trim and collapse runs of whitespace to a single space"""
    return _WHITESPACE_RE.sub(' ', text).strip()


def clean_text(text: Optional[str]) -> str:
    """
    Trim, collapse whitespace and map typographic quotes/dashes to ASCII.

    Casing is preserved so the result can be shown back to the user.
    """
    if not text:
        return ""
    text = collapse_whitespace(text)
    text = _QUOTES_RE.sub('"', text)
    return _DASHES_RE.sub('-', text)


def normalize_text(text: Optional[str]) -> str:
    """Clean text and case-fold it for pattern matching"""
    return clean_text(text).lower()
