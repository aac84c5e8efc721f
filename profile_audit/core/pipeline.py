"""
End-to-end pipeline:

  text -> ProfileDocument -> MergedProfile -> RuleResultSet -> (AI scorer) -> final score

Everything before the scorer is synchronous and pure. The scorer call is the
only await; when it times out or fails the report carries the rule score.
"""

import asyncio
import logging
from typing import Optional, Tuple

import httpx

from profile_audit.core.ai_scorer import AiScorer
from profile_audit.core.document_parser import parse_document_text
from profile_audit.core.errors import ScorerError
from profile_audit.core.fusion import fuse
from profile_audit.core.rule_engine import evaluate_rules
from profile_audit.core.schemas import (
    AiFeedback,
    MergedProfile,
    ProfileDocument,
    ProfileReport,
    RuleResultSet,
    ScrapedSnapshot,
)
from profile_audit.core.score_blender import blend, score_band

logger = logging.getLogger(__name__)


def run_rules_pipeline(
    document: Optional[ProfileDocument],
    snapshot: Optional[ScrapedSnapshot],
) -> Tuple[MergedProfile, RuleResultSet]:
    merged = fuse(document, snapshot)
    return merged, evaluate_rules(merged)


async def score_with_fallback(
    scorer: Optional[AiScorer],
    merged: MergedProfile,
    rules: RuleResultSet,
    timeout: float,
) -> Optional[AiFeedback]:
    """Ask the scorer; None on timeout, transport error, bad status or malformed reply."""
    if scorer is None:
        return None
    try:
        return await asyncio.wait_for(scorer.evaluate(merged, rules), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"AI scorer timed out after {timeout}s, using rule score only")
    except (ScorerError, httpx.HTTPError) as e:
        logger.warning(f"AI scorer failed, using rule score only: {e}")
    except Exception:
        logger.exception("Unexpected AI scorer error, using rule score only")
    return None


async def analyze_profile(
    document_text: Optional[str] = None,
    document: Optional[ProfileDocument] = None,
    snapshot: Optional[ScrapedSnapshot] = None,
    profile_url: Optional[str] = None,
    scorer: Optional[AiScorer] = None,
    timeout: float = 30.0,
) -> ProfileReport:
    """
    Run the full pipeline. A parsed `document` wins over `document_text`.

    Raises InputError for unusable input; scorer problems never raise.
    """
    if document is None and document_text is not None:
        document = parse_document_text(document_text, profile_url=profile_url)

    merged, rules = run_rules_pipeline(document, snapshot)
    feedback = await score_with_fallback(scorer, merged, rules, timeout)
    final = blend(rules.score, feedback.ai_score if feedback else None)

    logger.info(f"Profile analyzed: rule_score={rules.score}, final_score={final}, ai={'yes' if feedback else 'no'}")
    return ProfileReport(
        merged_profile=merged,
        rule_results=rules,
        ai_feedback=feedback,
        final_score=final,
        score_band=score_band(final),
    )
