from io import BytesIO

import httpx
from docx import Document
from fastapi.testclient import TestClient

from profile_audit.api.deps import get_ai_scorer, get_rate_limiter
from profile_audit.core.ai_scorer import HttpAiScorer
from profile_audit.core.rate_limit import RateLimiter
from profile_audit.main import app

client = TestClient(app)

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def test_health():
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["status"] == "running"


def test_parse_txt(profile_export_text):
    files = {"file": ("profile.txt", profile_export_text.encode("utf-8"), "text/plain")}
    r = client.post("/parse", files=files)
    assert r.status_code == 200
    data = r.json()

    assert data["headline"] == "Senior Backend Engineer building payment platforms"
    assert data["customUrlClean"] is True
    assert data["experiences"][0]["startDate"] == "Jan 2021"
    assert data["experiences"][0]["endDate"] == "Present"
    assert len(data["skills"]) == 5


def test_parse_profile_url_form_field(profile_export_text):
    files = {"file": ("profile.txt", profile_export_text.encode("utf-8"), "text/plain")}
    data = {"profile_url": "https://www.linkedin.com/in/jane-doe-81a2b3c4d"}
    r = client.post("/parse", files=files, data=data)
    assert r.status_code == 200
    assert r.json()["customUrlClean"] is False


def test_parse_docx():
    doc = Document()
    for line in [
        "Jane Marie Doe",
        "Product designer crafting fintech experiences",
        "Lisbon, Portugal",
        "About",
        "I design products. Portfolio at behance.net/jane.",
        "Skills",
        "Figma, Sketch",
    ]:
        doc.add_paragraph(line)

    buf = BytesIO()
    doc.save(buf)

    files = {"file": ("profile.docx", buf.getvalue(), DOCX_TYPE)}
    r = client.post("/parse", files=files)
    assert r.status_code == 200
    data = r.json()

    assert data["headline"] == "Product designer crafting fintech experiences"
    assert data["location"] == "Lisbon, Portugal"
    assert data["skills"] == ["Figma", "Sketch"]
    # absent sections are left out of the response
    assert "experiences" not in data


def test_parse_empty_file():
    r = client.post("/parse", files={"file": ("empty.txt", b"", "text/plain")})
    assert r.status_code == 400


def test_parse_whitespace_only_text():
    r = client.post("/parse", files={"file": ("blank.txt", b"  \n \n", "text/plain")})
    assert r.status_code == 400


def test_parse_unsupported_type():
    r = client.post("/parse", files={"file": ("photo.png", b"\x89PNG....", "image/png")})
    assert r.status_code == 415


def test_merge_requires_a_source():
    r = client.post("/merge", json={})
    assert r.status_code == 400


def test_merge_document_and_snapshot():
    body = {
        "document": {"headline": "Doc headline here", "skills": ["Go"]},
        "snapshot": {"headline": "Snap", "connections": "500+", "profilePhoto": "https://cdn.example.com/me.jpg"},
    }
    r = client.post("/merge", json=body)
    assert r.status_code == 200
    data = r.json()
    assert data["headline"] == "Doc headline here"
    assert data["connections"] == 500
    assert data["profilePhoto"] == "https://cdn.example.com/me.jpg"
    assert data["hasPortfolioLink"] is False


def test_check_returns_all_rules():
    r = client.post("/check", json={"headline": "Engineer at a payments company", "location": "Istanbul", "connections": 650})
    assert r.status_code == 200
    data = r.json()
    assert data["total"] == 19
    assert data["results"]["connections_500"] is True
    assert data["results"]["headline_descriptive"] is True
    assert data["score"] == 16


def test_analyze_without_scorer(profile_export_text):
    app.dependency_overrides[get_ai_scorer] = lambda: None
    r = client.post("/analyze", json={"documentText": profile_export_text})
    assert r.status_code == 200
    data = r.json()

    assert data["finalScore"] == data["ruleResults"]["score"]
    assert data["scoreBand"] in {"excellent", "good", "average", "poor"}
    assert "aiFeedback" not in data
    assert data["mergedProfile"]["hasPortfolioLink"] is True


def test_analyze_with_scorer():
    reply = {"aiScore": 90, "overallFeedback": "Nice.", "insights": {"strengths": [], "improvements": ["Add a banner"]}}
    scorer = HttpAiScorer(
        url="http://scorer.test/evaluate",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=reply)),
    )
    app.dependency_overrides[get_ai_scorer] = lambda: scorer

    body = {"snapshot": {"headline": "Engineer at a payments company", "location": "Istanbul", "connections": 650}}
    r = client.post("/analyze", json=body)
    assert r.status_code == 200
    data = r.json()

    # 3/19 rules -> 16, blended with 90 -> 53
    assert data["ruleResults"]["score"] == 16
    assert data["aiFeedback"]["aiScore"] == 90
    assert data["finalScore"] == 53
    assert data["scoreBand"] == "average"


def test_analyze_requires_input():
    app.dependency_overrides[get_ai_scorer] = lambda: None
    r = client.post("/analyze", json={})
    assert r.status_code == 400


def test_analyze_rate_limited():
    limiter = RateLimiter(max_requests=2, window_seconds=60)
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    app.dependency_overrides[get_ai_scorer] = lambda: None

    body = {"snapshot": {"headline": "Engineer at a payments company"}}
    assert client.post("/analyze", json=body).status_code == 200
    assert client.post("/analyze", json=body).status_code == 200
    assert client.post("/analyze", json=body).status_code == 429


def test_check_accepts_photo_object():
    r = client.post("/check", json={"profilePhoto": {"url": "https://cdn.example.com/me.jpg", "resolution": "400x400"}})
    assert r.status_code == 200
    assert r.json()["results"]["profile_photo_present"] is True

    r = client.post("/check", json={"profilePhoto": {"url": ""}})
    assert r.json()["results"]["profile_photo_present"] is False
