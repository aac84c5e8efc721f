"""
Entry extraction for list-shaped sections (experience, education, skills,
certifications, languages, projects).

Each extractor walks the section's lines with a LineCursor. A cursor only ever
moves forward, so every loop below terminates, and each step consumes a fixed,
inspectable number of lines.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from profile_audit.core.date_grammar import is_date_line, parse_date_range
from profile_audit.core.schemas import Certification, Education, Experience, Language, Project
from profile_audit.core.text_normalization import is_url

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

# A short line followed by another line starts the next experience entry
NEW_ENTRY_MAX_CHARS = 50

# "English — Native", "German: Professional", "French - Elementary"
# En/em dash and colon split with or without spaces; a hyphen splits only when
# spaced on both sides, so "Serbo-Croatian" and "English-Native" stay whole
LANGUAGE_RE = re.compile(r"^(.+?)(?:\s*[–—:]\s*|\s+-\s+)(.+)$")


@dataclass
class LineCursor:
    """Forward-only read position over an immutable sequence of lines."""
    lines: Tuple[str, ...]
    pos: int = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.lines)

    def peek(self, offset: int = 0) -> str:
        """Line at pos+offset, or "" past the end."""
        i = self.pos + offset
        if 0 <= i < len(self.lines):
            return self.lines[i]
        return ""

    def advance(self, n: int = 1) -> None:
        self.pos += max(1, n)

    def seek(self, index: int) -> None:
        # Never move backwards
        self.pos = max(self.pos + 1, index)


# ============================================================================
# Experience
# ============================================================================

def _collect_description(lines: Sequence[str], start: int) -> Tuple[List[str], int]:
    """
    Gather description lines from `start`.

    Stops before a short line that is followed by a non-empty line (looks like
    the title of the next entry), or at a blank line once something was
    collected. The first line is always taken. Returns (lines, next_index).
    """
    out: List[str] = []
    j = start
    while j < len(lines):
        line = lines[j]
        if line and len(line) < NEW_ENTRY_MAX_CHARS and j > start:
            if j + 1 < len(lines) and lines[j + 1]:
                break
        if line:
            out.append(line)
        elif out:
            break
        j += 1
    return out, j


def extract_experiences(lines: Sequence[str]) -> List[Experience]:
    """
    Layout per entry:
      Title
      Company
      Jan 2020 - Present
      description...
    """
    cursor = LineCursor(tuple(lines))
    out: List[Experience] = []

    while not cursor.at_end():
        title = cursor.peek()
        if not title:
            cursor.advance()
            continue

        company = cursor.peek(1)
        start_date, end_date = parse_date_range(cursor.peek(2))
        description, next_index = _collect_description(cursor.lines, cursor.pos + 3)

        out.append(
            Experience(
                title=title,
                company=company or UNKNOWN,
                description=" ".join(description).strip(),
                start_date=start_date,
                end_date=end_date,
            )
        )
        cursor.seek(next_index)

    logger.debug(f"Extracted {len(out)} experience entries")
    return out


# ============================================================================
# Education
# ============================================================================

def _split_degree(line: str) -> Tuple[str, str]:
    """'Bachelor of Science, Computer Science' -> ('Bachelor of Science', 'Computer Science')"""
    degree, _, field = line.partition(",")
    return degree.strip() or UNKNOWN, field.strip() or UNKNOWN


def extract_education(lines: Sequence[str]) -> List[Education]:
    """
    Layout per entry:
      School
      Degree, Field
      2015 - 2019        (optional)
    """
    cursor = LineCursor(tuple(lines))
    out: List[Education] = []

    while not cursor.at_end():
        school = cursor.peek()
        if not school:
            cursor.advance()
            continue

        degree, field = _split_degree(cursor.peek(1))
        date_line = cursor.peek(2)
        start_date: Optional[str] = None
        end_date: Optional[str] = None
        step = 2
        if is_date_line(date_line):
            start_date, end_date = parse_date_range(date_line)
            step = 3

        out.append(
            Education(
                school=school,
                degree=degree,
                field=field,
                start_date=start_date,
                end_date=end_date,
            )
        )
        cursor.advance(step)

    logger.debug(f"Extracted {len(out)} education entries")
    return out


# ============================================================================
# Skills
# ============================================================================

def extract_skills(lines: Sequence[str]) -> List[str]:
    """One skill per line; comma-separated lines hold several."""
    skills: List[str] = []
    for line in lines:
        t = line.strip()
        if not t:
            continue
        if "," in t:
            skills.extend(s.strip() for s in t.split(",") if s.strip())
        else:
            skills.append(t)
    return skills


# ============================================================================
# Certifications
# ============================================================================

def extract_certifications(lines: Sequence[str]) -> List[Certification]:
    """
    Layout per entry:
      Name
      Issuer
      Date               (only consumed when it parses as a date)
    """
    cursor = LineCursor(tuple(lines))
    out: List[Certification] = []

    while not cursor.at_end():
        name = cursor.peek()
        if not name:
            cursor.advance()
            continue

        issuer = cursor.peek(1) or UNKNOWN
        date_line = cursor.peek(2)
        if is_date_line(date_line):
            date = date_line
            step = 3
        else:
            # Not a date: it is the next certification's name
            date = UNKNOWN
            step = 2

        out.append(Certification(name=name, issuer=issuer, date=date))
        cursor.advance(step)

    return out


# ============================================================================
# Languages
# ============================================================================

def parse_language_line(line: str) -> Optional[Language]:
    t = line.strip()
    if not t:
        return None
    m = LANGUAGE_RE.match(t)
    if m:
        return Language(language=m.group(1).strip(), proficiency=m.group(2).strip() or UNKNOWN)
    return Language(language=t, proficiency=UNKNOWN)


def extract_languages(lines: Sequence[str]) -> List[Language]:
    return [lang for lang in (parse_language_line(ln) for ln in lines) if lang is not None]


# ============================================================================
# Projects
# ============================================================================

def extract_projects(lines: Sequence[str]) -> List[Project]:
    """
    Layout per entry:
      Name
      https://example.com   (optional)
      Description
    """
    cursor = LineCursor(tuple(lines))
    out: List[Project] = []

    while not cursor.at_end():
        name = cursor.peek()
        if not name:
            cursor.advance()
            continue

        nxt = cursor.peek(1)
        if is_url(nxt):
            url: Optional[str] = nxt
            description = cursor.peek(2)
            step = 3
        else:
            url = None
            description = nxt
            step = 2

        out.append(Project(name=name, description=description, url=url))
        cursor.advance(step)

    return out
