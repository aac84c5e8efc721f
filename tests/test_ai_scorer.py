"""
Tests for the external AI scorer client and the pipeline's fallback to the
rule score.
"""

import asyncio
import json

import httpx
import pytest

from profile_audit.core.ai_scorer import HttpAiScorer, build_scorer_payload, parse_scorer_reply
from profile_audit.core.errors import ScorerError
from profile_audit.core.pipeline import analyze_profile, run_rules_pipeline
from profile_audit.core.schemas import ScrapedSnapshot
from profile_audit.core.score_blender import blend

SCORER_URL = "http://scorer.test/evaluate"

GOOD_REPLY = {
    "aiScore": 60,
    "headlineSuggestion": "Backend engineer | Payments | Python",
    "aboutSuggestion": "Lead with impact.",
    "overallFeedback": "Solid profile.",
    "insights": {"strengths": ["Clear headline"], "improvements": ["Add media"]},
}

SNAPSHOT = ScrapedSnapshot.model_validate({
    "headline": "Backend engineer working on payments",
    "location": "Istanbul, Turkey",
    "connections": 650,
    "profilePhoto": "https://cdn.example.com/me.jpg",
})


def _scorer(handler, **kwargs) -> HttpAiScorer:
    return HttpAiScorer(url=SCORER_URL, transport=httpx.MockTransport(handler), **kwargs)


def _analyze(scorer, timeout: float = 5.0):
    return asyncio.run(analyze_profile(snapshot=SNAPSHOT, scorer=scorer, timeout=timeout))


class SlowScorer:
    async def evaluate(self, merged, rules):
        await asyncio.sleep(1)
        return parse_scorer_reply(GOOD_REPLY)


def test_payload_shape_and_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        seen["api_key"] = request.headers.get("x-api-key")
        return httpx.Response(200, json=GOOD_REPLY)

    _analyze(_scorer(handler, api_key="secret"))

    assert set(seen["body"]) == {"mergedProfile", "ruleResults"}
    assert seen["body"]["mergedProfile"]["connections"] == 650
    assert seen["body"]["mergedProfile"]["hasPortfolioLink"] is False
    assert seen["body"]["ruleResults"]["total"] == 19
    assert seen["api_key"] == "secret"


def test_successful_reply_is_blended():
    report = _analyze(_scorer(lambda request: httpx.Response(200, json=GOOD_REPLY)))

    assert report.ai_feedback.ai_score == 60
    assert report.ai_feedback.insights.strengths == ("Clear headline",)
    assert report.final_score == blend(report.rule_results.score, 60)


def test_out_of_range_ai_score_keeps_feedback_but_not_score():
    reply = dict(GOOD_REPLY, aiScore=150)
    report = _analyze(_scorer(lambda request: httpx.Response(200, json=reply)))

    assert report.ai_feedback is not None
    assert report.final_score == report.rule_results.score


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json=dict(GOOD_REPLY, aiScore="high")),
        httpx.Response(200, json=dict(GOOD_REPLY, insights={"strengths": [1], "improvements": []})),
    ],
)
def test_failed_or_malformed_reply_falls_back_to_rule_score(response):
    report = _analyze(_scorer(lambda request: response))

    assert report.ai_feedback is None
    assert report.final_score == report.rule_results.score


def test_transport_error_falls_back():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    report = _analyze(_scorer(handler))
    assert report.ai_feedback is None


def test_timeout_falls_back():
    report = _analyze(SlowScorer(), timeout=0.01)
    assert report.ai_feedback is None
    assert report.final_score == report.rule_results.score


def test_no_scorer_configured():
    report = _analyze(None)
    assert report.ai_feedback is None
    assert report.score_band in {"excellent", "good", "average", "poor"}


def test_parse_scorer_reply_rejects_bool_score():
    with pytest.raises(ScorerError):
        parse_scorer_reply(dict(GOOD_REPLY, aiScore=True))


def test_build_scorer_payload_omits_absent_fields():
    merged, rules = run_rules_pipeline(None, SNAPSHOT)
    payload = build_scorer_payload(merged, rules)
    assert "about" not in payload["mergedProfile"]
    assert payload["ruleResults"]["results"]["connections_500"] is True


def test_analyze_parses_text_when_no_document(profile_export_text):
    report = asyncio.run(analyze_profile(document_text=profile_export_text))
    assert report.merged_profile.headline == "Senior Backend Engineer building payment platforms"
    assert report.merged_profile.has_portfolio_link is True
    assert report.final_score == report.rule_results.score


class BrokenScorer:
    async def evaluate(self, merged, rules):
        raise RuntimeError("scorer exploded")


def test_unexpected_scorer_error_falls_back():
    report = _analyze(BrokenScorer())
    assert report.ai_feedback is None
    assert report.final_score == report.rule_results.score
