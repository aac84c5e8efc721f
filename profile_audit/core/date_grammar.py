"""
Date grammar used by the document parser and the chronology rule.

Accepted date tokens:
  2020            bare year
  Jan 2020        month name + year (any case, optional trailing dot)
  15/01/2020      dd/mm/yyyy
  2020-01-15      yyyy-mm-dd
  Present         present / current / now, any case

A range is "<date> <dash> <date or present>" where dash is one of - – —.
"""

import re
from typing import Optional, Tuple


PRESENT = "Present"

_DATE = r"(?:\d{4}-\d{2}-\d{2}|\d{1,2}/\d{1,2}/\d{4}|[A-Za-z]{3,9}\.?\s+\d{4}|\d{4})"
_PRESENT = r"(?:present|current|now)"

DATE_TOKEN_RE = re.compile(rf"^(?:{_DATE}|{_PRESENT})$", re.IGNORECASE)
PRESENT_RE = re.compile(rf"^{_PRESENT}$", re.IGNORECASE)
DATE_RANGE_RE = re.compile(
    rf"^(?P<start>{_DATE})\s*[-–—]\s*(?P<end>{_DATE}|{_PRESENT})$",
    re.IGNORECASE,
)

# "January 2020 - Present (3 years 2 months)" -> drop the duration
DURATION_SUFFIX_RE = re.compile(r"\s*\([^()]*\)\s*$")
LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _strip_decorations(text: str) -> str:
    t = text.strip()
    stripped = DURATION_SUFFIX_RE.sub("", t)
    if stripped:
        t = stripped
    if t.startswith("(") and t.endswith(")"):
        t = t[1:-1].strip()
    return t


def is_date(text: Optional[str]) -> bool:
    """Single date token, see module docstring."""
    if not text:
        return False
    return bool(DATE_TOKEN_RE.match(_strip_decorations(text)))


def parse_date_range(text: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Split a date line into (start, end).

    Examples:
      "Jan 2020 - Present"        -> ("Jan 2020", "Present")
      "2018 – 2022"               -> ("2018", "2022")
      "March 2021 - now (1 year)" -> ("March 2021", "Present")
      "2019"                      -> ("2019", None)
      "Software Engineer"         -> (None, None)
    """
    if not text or not text.strip():
        return None, None

    t = _strip_decorations(text)
    m = DATE_RANGE_RE.match(t)
    if m:
        end = m.group("end").strip()
        if PRESENT_RE.match(end):
            end = PRESENT
        return m.group("start").strip(), end

    if DATE_TOKEN_RE.match(t):
        return t, None

    return None, None


def is_date_line(text: Optional[str]) -> bool:
    """True when the line is a date or a date range."""
    start, end = parse_date_range(text)
    return start is not None or end is not None


def _leading_int(text: str) -> int:
    m = LEADING_INT_RE.match(text)
    return int(m.group(1)) if m else 0


def month_index(date_text: Optional[str]) -> int:
    """
    Map a date string to year*12 + month for ordering.

    Only hyphenated numeric forms carry a month ("2022-03" -> 2022*12 + 3).
    Month-name forms and "Present" have no leading number and map to 0, the
    same value an unparsable string gets.
    """
    if not date_text:
        return 0
    parts = date_text.split("-")
    year = _leading_int(parts[0])
    month = _leading_int(parts[1]) if len(parts) > 1 else 0
    return year * 12 + month
