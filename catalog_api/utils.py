"""Utility helpers for text normalization.

Everything that compares catalog text (search terms, vendors, tags) goes
through :func:`normalize_text`, so "Café", "cafe" and "CAFÉ" are the same
string. :func:`sanitize_term` additionally reduces a term to the characters
the Shopify search syntax accepts unquoted.
"""
from __future__ import annotations

import re
import unicodedata
from typing import List, Optional

from unidecode import unidecode

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")


def normalize_text(value: Optional[str]) -> str:
    """Decompose accents, drop the combining marks and lowercase."""
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.lower()


def split_terms(text: Optional[str]) -> List[str]:
    """Whitespace-separated, non-empty raw terms."""
    return [term.strip() for term in (text or "").split() if term.strip()]


def normalized_terms(text: Optional[str]) -> List[str]:
    terms = (normalize_text(term) for term in split_terms(text))
    return [term for term in terms if term]


def sanitize_term(term: str) -> str:
    """Reduce a term to ``[a-z0-9]`` for use inside a provider filter.

    Letters with no combining-mark decomposition (``ß``, ``ø``) are
    transliterated before stripping so they are not silently dropped.
    """
    normalized = normalize_text(term)
    transliterated = unidecode(normalized).lower()
    return _NON_ALNUM_RE.sub("", transliterated)
