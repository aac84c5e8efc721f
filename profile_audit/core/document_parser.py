import logging
import re
from typing import Dict, Optional, Sequence, Tuple

from profile_audit.core.entry_parser import (
    extract_certifications,
    extract_education,
    extract_experiences,
    extract_languages,
    extract_projects,
    extract_skills,
)
from profile_audit.core.errors import InputError
from profile_audit.core.schemas import ProfileDocument
from profile_audit.core.text_normalization import (
    clean_lines,
    find_profile_slug,
    is_clean_profile_slug,
    looks_like_location,
    looks_like_name,
    normalize_items,
    word_count,
)

logger = logging.getLogger(__name__)


# ===== SECTION HEADERS =====
# Exact, case-insensitive whole-line matches

SECTION_HEADERS: Dict[str, re.Pattern] = {
    "about": re.compile(r"^about$", re.IGNORECASE),
    "experience": re.compile(r"^experience$", re.IGNORECASE),
    "education": re.compile(r"^education$", re.IGNORECASE),
    "skills": re.compile(r"^skills$", re.IGNORECASE),
    "languages": re.compile(r"^languages?$", re.IGNORECASE),
    "certifications": re.compile(r"^licenses? & certifications?$", re.IGNORECASE),
    "projects": re.compile(r"^projects?$", re.IGNORECASE),
}

HEADLINE_WINDOW = 5
HEADLINE_MIN_WORDS = 3
HEADLINE_MAX_WORDS = 15
LOCATION_WINDOW = 10


def detect_section(line: str) -> Optional[str]:
    """Section key for a header line, None for anything else."""
    t = line.strip()
    for key, pattern in SECTION_HEADERS.items():
        if pattern.match(t):
            return key
    return None


def is_section_header(line: str) -> bool:
    return detect_section(line) is not None


def split_sections(lines: Sequence[str]) -> Dict[str, Tuple[str, ...]]:
    """
    Map section key -> content lines.

    Content runs from the line after the header up to the line before the next
    recognized header. When a header repeats, the first occurrence wins.
    """
    sections: Dict[str, Tuple[str, ...]] = {}
    current: Optional[str] = None
    buf: list = []

    def flush() -> None:
        if current is not None and current not in sections:
            sections[current] = tuple(buf)

    for idx, line in enumerate(lines):
        key = detect_section(line)
        if key is None:
            if current is not None:
                buf.append(line)
            continue
        logger.debug(f"SECTION HEADER DETECTED at line {idx}: '{line}' -> section='{key}'")
        flush()
        current, buf = key, []
    flush()
    return sections


# ===== FIELD HEURISTICS =====

def _headline_word_count_ok(line: str) -> bool:
    return HEADLINE_MIN_WORDS <= word_count(line) <= HEADLINE_MAX_WORDS


def extract_headline(lines: Sequence[str]) -> Optional[str]:
    """
    The headline sits between the name and the About header:

      Jane Doe
      Senior Backend Engineer at Acme | Python, Go
      Istanbul, Turkey
      About

    Without an About header, fall back to the top lines after the name.
    """
    about_idx = next((i for i, ln in enumerate(lines) if SECTION_HEADERS["about"].match(ln)), None)

    if about_idx is None:
        for line in lines[1:HEADLINE_WINDOW]:
            if _headline_word_count_ok(line) and not is_section_header(line):
                return line
        return None

    for line in lines[max(0, about_idx - HEADLINE_WINDOW):about_idx]:
        if is_section_header(line) or not _headline_word_count_ok(line):
            continue
        if looks_like_name(line) or looks_like_location(line):
            continue
        return line
    return None


def extract_about(section: Sequence[str]) -> Optional[str]:
    text = " ".join(section).strip()
    return text or None


def extract_location(lines: Sequence[str]) -> Optional[str]:
    for line in lines[:LOCATION_WINDOW]:
        if line and looks_like_location(line):
            return line
    return None


def detect_custom_url(lines: Sequence[str], profile_url: Optional[str] = None) -> Optional[bool]:
    """Judge the public profile URL: the caller's one first, else one printed in the document."""
    slug = find_profile_slug(profile_url) or find_profile_slug("\n".join(lines))
    return is_clean_profile_slug(slug)


# ===== ENTRY POINT =====

def parse_document_text(text: str, profile_url: Optional[str] = None) -> ProfileDocument:
    """
    Parse exported profile text into a ProfileDocument.

    Raises InputError when nothing is left after whitespace cleanup. Missing
    sections are not errors; their fields stay absent.
    """
    if text is None or not isinstance(text, str):
        raise InputError("Document text is required.")

    lines = clean_lines(text)
    if not lines:
        raise InputError("Document contains no text content.")

    sections = split_sections(lines)
    logger.debug(f"Sections found: {sorted(sections)}")

    return ProfileDocument(
        headline=extract_headline(lines),
        about=extract_about(sections.get("about", ())),
        experiences=normalize_items(extract_experiences(sections.get("experience", ()))),
        education=normalize_items(extract_education(sections.get("education", ()))),
        skills=normalize_items(extract_skills(sections.get("skills", ()))),
        certifications=normalize_items(extract_certifications(sections.get("certifications", ()))),
        languages=normalize_items(extract_languages(sections.get("languages", ()))),
        projects=normalize_items(extract_projects(sections.get("projects", ()))),
        location=extract_location(lines),
        custom_url_clean=detect_custom_url(lines, profile_url),
    )
