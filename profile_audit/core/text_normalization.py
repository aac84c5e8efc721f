"""
Text normalization helpers shared by the document parser, fusion and rules.

Everything here is total: inputs may be None or empty, nothing raises.
"""

import re
from typing import Iterable, Optional, Sequence, Tuple, TypeVar
from urllib.parse import urlparse


T = TypeVar("T")


# ============================================================================
# Keyword sets
# ============================================================================

# Portfolio hints inside free-form about text
PORTFOLIO_TEXT_KEYWORDS = (
    "github.com",
    "vercel.app",
    "portfolio",
    "behance",
    "dribbble",
    "personal website",
    "my website",
)

# Portfolio hints inside a featured item's URL
PORTFOLIO_URL_KEYWORDS = ("github.com", "vercel.app", "portfolio", "behance", "dribbble")

# Words whose presence suggests the profile copy is written in English
ENGLISH_KEYWORDS = ("experience", "education", "about", "skills", "work", "professional", "career")

LOCATION_KEYWORD_RE = re.compile(r"city|country|region|area|location|address", re.IGNORECASE)
LOCATION_PATTERNS = (
    re.compile(r"^[A-Z][a-z]+,\s*[A-Z][a-z]+$"),  # "Istanbul, Turkey"
    re.compile(r"^[A-Z][a-z]+\s+[A-Z][a-z]+$"),  # "Istanbul Turkey"
)

PROFILE_SLUG_RE = re.compile(r"linkedin\.com/in/([A-Za-z0-9%_-]+)", re.IGNORECASE)
# Slugs the platform hands out by default end in a numeric or hex tail: "jane-doe-4b1a2c19"
AUTO_SLUG_SUFFIX_RE = re.compile(r"-(?=[0-9a-f]*\d)[0-9a-f]{5,}$", re.IGNORECASE)


# ============================================================================
# Strings and collections
# ============================================================================

def clean_lines(text: Optional[str]) -> Tuple[str, ...]:
    """Split into lines, trim each one and drop the blanks."""
    if not text:
        return ()
    return tuple(ln.strip() for ln in text.splitlines() if ln.strip())


def normalize_string(value: Optional[str]) -> Optional[str]:
    """Trimmed string, or None when nothing is left."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def normalize_items(items: Optional[Iterable[T]]) -> Optional[Tuple[T, ...]]:
    """Tuple of items, or None for a missing or empty collection."""
    if not items:
        return None
    out = tuple(items)
    return out or None


def normalize_strings(items: Optional[Iterable[Optional[str]]]) -> Optional[Tuple[str, ...]]:
    """Trim every string and drop the empty ones; None when nothing survives."""
    if not items:
        return None
    return normalize_items(s for s in (normalize_string(i) for i in items) if s)


def word_count(text: Optional[str]) -> int:
    if not text:
        return 0
    return len(text.split())


def contains_any(text: Optional[str], keywords: Sequence[str]) -> bool:
    """Case-insensitive substring test against a keyword list."""
    if not text:
        return False
    low = text.lower()
    return any(k in low for k in keywords)


# ============================================================================
# Line classifiers
# ============================================================================

def looks_like_name(line: str) -> bool:
    """2-4 words, every one starting with a capital letter."""
    words = line.split()
    if len(words) < 2 or len(words) > 4:
        return False
    return all(w[:1].isupper() and w[:1].isascii() for w in words)


def looks_like_location(line: str) -> bool:
    if LOCATION_KEYWORD_RE.search(line):
        return True
    return any(p.match(line) for p in LOCATION_PATTERNS)


def is_url(text: Optional[str]) -> bool:
    """Absolute URL with a scheme and a host."""
    if not text or any(c.isspace() for c in text.strip()):
        return False
    parsed = urlparse(text.strip())
    return bool(parsed.scheme and parsed.netloc)


# ============================================================================
# Profile URL
# ============================================================================

def find_profile_slug(text: Optional[str]) -> Optional[str]:
    """Public profile slug from the first linkedin.com/in/<slug> occurrence."""
    if not text:
        return None
    m = PROFILE_SLUG_RE.search(text)
    if not m:
        return None
    return m.group(1).strip("-_") or None


def is_clean_profile_slug(slug: Optional[str]) -> Optional[bool]:
    """
    True when the slug was chosen by the owner, False when it still carries the
    auto-generated tail, None when there is no slug to judge.

    Examples:
      "jane-doe"          -> True
      "jane-doe-4b1a2c19" -> False
      "jane-doe-123456"   -> False
    """
    if not slug:
        return None
    return not AUTO_SLUG_SUFFIX_RE.search(slug)
