import re
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, Literal, Optional, Tuple, Union


ScoreBand = Literal["excellent", "good", "average", "poor"]


class CamelModel(BaseModel):
    """Immutable model serialized with camelCase keys; accepts either spelling on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ---------------------------------------------------------------------------
# Entry types shared by the document, the snapshot and the merged profile
# ---------------------------------------------------------------------------

class Experience(CamelModel):
    title: str
    company: Optional[str] = None
    description: str = ""
    start_date: Optional[str] = None  # as written, e.g. "Jan 2020" or "2020-01"
    end_date: Optional[str] = None  # "Present" when still ongoing

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: Any) -> Any:
        return "" if value is None else value


class Education(CamelModel):
    school: str
    degree: str = "Unknown"
    field: str = "Unknown"
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class Certification(CamelModel):
    name: str
    issuer: str = "Unknown"
    date: str = "Unknown"


class Language(CamelModel):
    language: str
    proficiency: str = "Unknown"


class Project(CamelModel):
    name: str
    description: str = ""
    url: Optional[str] = None


class ProfileDocument(CamelModel):
    """Structured result of parsing an exported profile document. List fields are never empty."""
    headline: Optional[str] = None
    about: Optional[str] = None
    experiences: Optional[Tuple[Experience, ...]] = None
    education: Optional[Tuple[Education, ...]] = None
    skills: Optional[Tuple[str, ...]] = None
    certifications: Optional[Tuple[Certification, ...]] = None
    languages: Optional[Tuple[Language, ...]] = None
    projects: Optional[Tuple[Project, ...]] = None
    location: Optional[str] = None
    custom_url_clean: Optional[bool] = None


# ---------------------------------------------------------------------------
# Live-capture snapshot (produced elsewhere, read-only here)
# ---------------------------------------------------------------------------

class ProfilePhoto(CamelModel):
    url: Optional[str] = None
    resolution: Optional[str] = None


class FeaturedItem(CamelModel):
    type: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None


class EndorsedSkill(CamelModel):
    skill: str
    count: int = 0


class MediaItem(CamelModel):
    type: Optional[str] = None
    url: Optional[str] = None


class ScrapedSnapshot(CamelModel):
    headline: Optional[str] = None
    about: Optional[str] = None
    location: Optional[str] = None
    banner_url: Optional[str] = None
    profile_photo: Optional[ProfilePhoto] = None
    photo_resolution: Optional[str] = None
    connections: Optional[int] = None
    featured: Optional[Tuple[FeaturedItem, ...]] = None
    endorsements: Optional[Tuple[EndorsedSkill, ...]] = None
    media: Optional[Tuple[MediaItem, ...]] = None
    experiences: Optional[Tuple[Experience, ...]] = None

    @field_validator("profile_photo", mode="before")
    @classmethod
    def _resolve_photo(cls, value: Any) -> Any:
        # Capture clients send either a bare URL or {url, resolution}
        if isinstance(value, str):
            return {"url": value}
        return value

    @field_validator("connections", mode="before")
    @classmethod
    def _parse_connections(cls, value: Any) -> Any:
        # "500+" and "1,234" show up verbatim from the page
        if isinstance(value, str):
            m = re.search(r"\d[\d,]*", value)
            return int(m.group(0).replace(",", "")) if m else None
        return value


# ---------------------------------------------------------------------------
# Pipeline outputs
# ---------------------------------------------------------------------------

class MergedProfile(CamelModel):
    headline: Optional[str] = None
    about: Optional[str] = None
    location: Optional[str] = None
    skills: Optional[Tuple[str, ...]] = None
    education: Optional[Tuple[Education, ...]] = None
    certifications: Optional[Tuple[Certification, ...]] = None
    languages: Optional[Tuple[Language, ...]] = None
    experiences: Optional[Tuple[Experience, ...]] = None
    projects: Optional[Tuple[Project, ...]] = None
    banner_url: Optional[str] = None
    profile_photo: Optional[str] = None
    photo_resolution: Optional[str] = None
    connections: Optional[int] = None
    featured: Optional[Tuple[FeaturedItem, ...]] = None
    endorsed_skills: Optional[Tuple[EndorsedSkill, ...]] = None
    media: Optional[Tuple[MediaItem, ...]] = None
    has_portfolio_link: bool = False
    custom_url_clean: Optional[bool] = None

    @field_validator("profile_photo", mode="before")
    @classmethod
    def _resolve_photo(cls, value: Any) -> Any:
        # Collapse {url, resolution} to its url
        if isinstance(value, ProfilePhoto):
            return value.url
        if isinstance(value, dict):
            return value.get("url")
        return value


class RuleResultSet(CamelModel):
    results: Dict[str, bool] = Field(..., description="Rule name -> passed, in evaluation order")
    score: int = Field(..., ge=0, le=100)
    passed: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class AiInsights(CamelModel):
    strengths: Tuple[StrictStr, ...]
    improvements: Tuple[StrictStr, ...]


class AiFeedback(CamelModel):
    """Reply of the external AI scorer. Validated strictly; a reply that fails validation is discarded whole."""
    ai_score: Optional[Union[StrictInt, StrictFloat]] = None
    headline_suggestion: Optional[StrictStr] = None
    about_suggestion: Optional[StrictStr] = None
    overall_feedback: Optional[StrictStr] = None
    insights: Optional[AiInsights] = None


class ProfileReport(CamelModel):
    merged_profile: MergedProfile
    rule_results: RuleResultSet
    ai_feedback: Optional[AiFeedback] = None
    final_score: int = Field(..., ge=0, le=100)
    score_band: ScoreBand


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

class MergeRequest(CamelModel):
    document: Optional[ProfileDocument] = None
    snapshot: Optional[ScrapedSnapshot] = None


class AnalyzeRequest(CamelModel):
    document_text: Optional[str] = Field(default=None, description="Raw exported document text; parsed when no document is given")
    document: Optional[ProfileDocument] = None
    snapshot: Optional[ScrapedSnapshot] = None
    profile_url: Optional[str] = Field(default=None, description="Public profile URL, used to judge whether it was customized")
