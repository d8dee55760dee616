"""
Decides which string leaves are worth sending to machine translation.

URLs, data URIs and anything carrying markup tags pass through untouched;
rich-text fields are the caller's problem, not the translator's.
"""

from __future__ import annotations

import re

DEFAULT_MIN_LENGTH = 3

_URL_RE = re.compile(r"^(?:[a-z][a-z0-9+.\-]*://|data:)", re.IGNORECASE)
_MARKUP_RE = re.compile(r"</?[a-z][\s\S]*>", re.IGNORECASE)


def is_url(text: str) -> bool:
    return bool(_URL_RE.match(text.strip()))


def contains_markup(text: str) -> bool:
    return bool(_MARKUP_RE.search(text))


def is_eligible(text: str, min_length: int = DEFAULT_MIN_LENGTH) -> bool:
    """
    Return True when ``text`` should be machine translated.

    Length is measured on the stripped text, so whitespace-only strings
    are never eligible.
    """
    stripped = text.strip()
    if not stripped or len(stripped) < min_length:
        return False
    if is_url(stripped):
        return False
    if contains_markup(stripped):
        return False
    return True
