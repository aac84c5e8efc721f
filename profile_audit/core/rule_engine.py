"""
Completeness checklist over a MergedProfile.

Nineteen named predicates, evaluated in a fixed order, every one of them on
every call. Each predicate is total: absent fields simply fail the check.

Score = round(100 * passed / 19), rounding halves up.
"""

import logging
from typing import Callable, Dict, Tuple

from profile_audit.core.date_grammar import month_index
from profile_audit.core.schemas import Experience, MergedProfile, RuleResultSet
from profile_audit.core.score_blender import round_half_up
from profile_audit.core.text_normalization import (
    ENGLISH_KEYWORDS,
    PORTFOLIO_URL_KEYWORDS,
    contains_any,
    word_count,
)

logger = logging.getLogger(__name__)

HEADLINE_MIN_LENGTH = 10
ABOUT_MIN_WORDS = 40
SKILLS_MIN_COUNT = 5
CONNECTIONS_MIN_COUNT = 500
EXPERIENCE_DESCRIPTION_MIN_WORDS = 20

Rule = Callable[[MergedProfile], bool]


def _experience_sort_key(exp: Experience) -> int:
    return month_index(exp.end_date or exp.start_date or "")


def is_experience_chronological(profile: MergedProfile) -> bool:
    """Newest first: a stable descending sort must leave the order untouched."""
    exps = profile.experiences or ()
    if not exps:
        return False
    keys = [_experience_sort_key(e) for e in exps]
    order = sorted(range(len(keys)), key=lambda i: keys[i], reverse=True)
    return order == list(range(len(keys)))


def is_experience_descriptive(profile: MergedProfile) -> bool:
    return any(
        word_count(e.description) >= EXPERIENCE_DESCRIPTION_MIN_WORDS
        for e in profile.experiences or ()
    )


def is_portfolio_linked(profile: MergedProfile) -> bool:
    # Featured URLs are checked again here, independently of the fusion flag
    if profile.has_portfolio_link:
        return True
    return any(contains_any(item.url, PORTFOLIO_URL_KEYWORDS) for item in profile.featured or ())


RULES: Tuple[Tuple[str, Rule], ...] = (
    ("url_customized", lambda p: p.custom_url_clean is True),
    ("profile_photo_present", lambda p: bool(p.profile_photo)),
    ("banner_present", lambda p: bool(p.banner_url)),
    ("english_profile", lambda p: contains_any(p.about, ENGLISH_KEYWORDS) or contains_any(p.headline, ENGLISH_KEYWORDS)),
    ("headline_descriptive", lambda p: len(p.headline or "") >= HEADLINE_MIN_LENGTH),
    ("location_present", lambda p: bool(p.location)),
    ("about_length_ok", lambda p: word_count(p.about) >= ABOUT_MIN_WORDS),
    ("featured_used", lambda p: bool(p.featured)),
    ("portfolio_link_present", is_portfolio_linked),
    ("connections_500", lambda p: (p.connections or 0) >= CONNECTIONS_MIN_COUNT),
    ("experience_chronological", is_experience_chronological),
    ("experience_descriptive", is_experience_descriptive),
    ("experience_media_present", lambda p: bool(p.media)),
    ("education_present", lambda p: bool(p.education)),
    ("certifications_present", lambda p: bool(p.certifications)),
    ("projects_present", lambda p: bool(p.projects)),
    ("skills_present", lambda p: len(p.skills or ()) >= SKILLS_MIN_COUNT),
    ("skills_endorsed", lambda p: bool(p.endorsed_skills)),
    ("languages_present", lambda p: bool(p.languages)),
)

RULE_NAMES: Tuple[str, ...] = tuple(name for name, _ in RULES)


def evaluate_rules(profile: MergedProfile) -> RuleResultSet:
    results: Dict[str, bool] = {}
    for name, rule in RULES:
        results[name] = bool(rule(profile))

    total = len(results)
    passed = sum(1 for ok in results.values() if ok)
    score = round_half_up(100 * passed / total)

    logger.debug(f"Rules evaluated: {passed}/{total} passed, score={score}")
    return RuleResultSet(results=results, score=score, passed=passed, total=total)
