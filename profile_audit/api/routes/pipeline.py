from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from profile_audit.api.deps import enforce_rate_limit, get_ai_scorer
from profile_audit.core.ai_scorer import AiScorer
from profile_audit.core.config import settings
from profile_audit.core.errors import InputError
from profile_audit.core.fusion import fuse
from profile_audit.core.pipeline import analyze_profile
from profile_audit.core.rule_engine import evaluate_rules
from profile_audit.core.schemas import AnalyzeRequest, MergedProfile, MergeRequest, ProfileReport, RuleResultSet

router = APIRouter(tags=["pipeline"])


@router.post(
    "/merge",
    response_model=MergedProfile,
    response_model_exclude_none=True,
    summary="Merge Sources",
    description="Fuse a parsed document and a live-capture snapshot into one canonical profile.",
    responses={400: {"description": "Neither document nor snapshot supplied"}},
)
def merge_sources(body: MergeRequest):
    try:
        return fuse(body.document, body.snapshot)
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/check",
    response_model=RuleResultSet,
    summary="Run Checklist",
    description="Evaluate the 19 completeness rules over a merged profile.",
)
def check_rules(profile: MergedProfile):
    return evaluate_rules(profile)


@router.post(
    "/analyze",
    response_model=ProfileReport,
    response_model_exclude_none=True,
    dependencies=[Depends(enforce_rate_limit)],
    summary="Analyze Profile",
    description=(
        "Parse (when raw text is given), merge, check and score a profile. "
        "The AI score is blended in when the external scorer answers in time; "
        "otherwise the final score is the rule score."
    ),
    responses={
        400: {"description": "No usable input"},
        429: {"description": "Rate limit exceeded"},
    },
)
async def analyze(body: AnalyzeRequest, scorer: Optional[AiScorer] = Depends(get_ai_scorer)):
    try:
        return await analyze_profile(
            document_text=body.document_text,
            document=body.document,
            snapshot=body.snapshot,
            profile_url=body.profile_url,
            scorer=scorer,
            timeout=settings.AI_SCORER_TIMEOUT_SECONDS,
        )
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))
