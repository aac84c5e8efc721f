"""
Fusion of a parsed document and a live-capture snapshot into one MergedProfile.

Precedence:
  headline / about / location   document, else snapshot
  skills                        document, else snapshot featured titles
  experiences                   document, else snapshot
  education / certifications /
  languages / projects          document only
  banner / photo / resolution /
  connections / featured /
  endorsements / media          snapshot only
  customUrlClean                document only

Pure: inputs are never modified and identical inputs give identical output.
"""

import logging
from typing import Optional

from profile_audit.core.errors import InputError
from profile_audit.core.schemas import MergedProfile, ProfileDocument, ScrapedSnapshot
from profile_audit.core.text_normalization import (
    PORTFOLIO_TEXT_KEYWORDS,
    PORTFOLIO_URL_KEYWORDS,
    contains_any,
    normalize_items,
    normalize_string,
    normalize_strings,
)

logger = logging.getLogger(__name__)


def featured_has_portfolio(snapshot: Optional[ScrapedSnapshot]) -> bool:
    if snapshot is None or not snapshot.featured:
        return False
    return any(contains_any(item.url, PORTFOLIO_URL_KEYWORDS) for item in snapshot.featured)


def has_portfolio_link(document: Optional[ProfileDocument], snapshot: Optional[ScrapedSnapshot]) -> bool:
    """Portfolio hint in the document's about text, or a portfolio-looking featured URL."""
    if document is not None and contains_any(document.about, PORTFOLIO_TEXT_KEYWORDS):
        return True
    return featured_has_portfolio(snapshot)


def fuse(document: Optional[ProfileDocument], snapshot: Optional[ScrapedSnapshot]) -> MergedProfile:
    """Merge the two sources; raises InputError when both are missing."""
    if document is None and snapshot is None:
        raise InputError("At least one data source (document or snapshot) is required.")

    logger.debug(f"Fusing profile: document={'yes' if document else 'no'}, snapshot={'yes' if snapshot else 'no'}")

    doc = document or ProfileDocument()
    snap = snapshot or ScrapedSnapshot()

    featured_titles = normalize_strings(item.title for item in snap.featured or ())
    photo_url = snap.profile_photo.url if snap.profile_photo else None

    return MergedProfile(
        headline=normalize_string(doc.headline) or normalize_string(snap.headline),
        about=normalize_string(doc.about) or normalize_string(snap.about),
        location=normalize_string(doc.location) or normalize_string(snap.location),
        skills=normalize_strings(doc.skills) or featured_titles,
        education=normalize_items(doc.education),
        certifications=normalize_items(doc.certifications),
        languages=normalize_items(doc.languages),
        experiences=normalize_items(doc.experiences) or normalize_items(snap.experiences),
        projects=normalize_items(doc.projects),
        banner_url=normalize_string(snap.banner_url),
        profile_photo=normalize_string(photo_url),
        photo_resolution=normalize_string(snap.photo_resolution),
        connections=snap.connections,
        featured=normalize_items(snap.featured),
        endorsed_skills=normalize_items(snap.endorsements),
        media=normalize_items(snap.media),
        has_portfolio_link=has_portfolio_link(document, snapshot),
        custom_url_clean=doc.custom_url_clean,
    )
