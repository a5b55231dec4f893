"""
Core Utility Functions.

Text normalization and matching helpers shared by the catalog, intent and
scoring layers.
"""

import re
import unicodedata
from typing import Iterable, List, Optional, TypeVar


T = TypeVar("T")


# =============================================================================
# Text normalization
# =============================================================================

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_diacritics(text: str) -> str:
    """Remove combining accents ("Atlético" -> "Atletico")."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_text(text: Optional[str]) -> str:
    """
    Normalize free text for substring matching.

    Lower-cases, strips diacritics, turns punctuation into spaces and
    collapses runs of whitespace.

    Examples:
        >>> normalize_text("  F.C. Barcelona (Home) ")
        'f c barcelona home'
        >>> normalize_text(None)
        ''
    """
    if not text:
        return ""
    lowered = strip_diacritics(str(text).lower())
    spaced = _NON_ALNUM_RE.sub(" ", lowered)
    return _WHITESPACE_RE.sub(" ", spaced).strip()


def normalize_tokens(values: Iterable[str]) -> List[str]:
    """Normalize each value, dropping the ones that end up empty."""
    out = []
    for value in values or []:
        norm = normalize_text(value)
        if norm:
            out.append(norm)
    return out


def join_normalized(*parts: Optional[str]) -> str:
    """Normalize and join text fragments into one searchable blob."""
    return " ".join(p for p in (normalize_text(part) for part in parts) if p)


# =============================================================================
# Matching
# =============================================================================

def fuzzy_contains(a: str, b: str) -> bool:
    """
    True when either normalized string contains the other.

    Team names normalize asymmetrically ("barca" vs "fc barcelona"), so
    both directions count.
    """
    if not a or not b:
        return False
    return a in b or b in a


def count_token_hits(text: str, tokens: Iterable[str]) -> int:
    """Number of non-empty tokens that occur as substrings of ``text``."""
    if not text:
        return 0
    return sum(1 for token in tokens if token and token in text)


def unique(values: Iterable[T]) -> List[T]:
    """De-duplicate while keeping first-seen order."""
    seen = set()
    out = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out
