import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from profile_audit.api.routes.parse import router as parse_router
from profile_audit.api.routes.pipeline import router as pipeline_router
from profile_audit.core.ai_scorer import HttpAiScorer
from profile_audit.core.config import settings
from profile_audit.core.rate_limit import RateLimiter

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    scorer = getattr(app.state, "ai_scorer", None)
    if isinstance(scorer, HttpAiScorer):
        await scorer.close()


app = FastAPI(
    title=settings.APP_NAME,
    description="Deterministic profile audit: parses exported profile documents, merges them with live-capture snapshots and scores completeness",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.state.rate_limiter = RateLimiter(
    max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
)
app.state.ai_scorer = (
    HttpAiScorer(
        url=settings.AI_SCORER_URL,
        api_key=settings.AI_SCORER_API_KEY,
        timeout=settings.AI_SCORER_TIMEOUT_SECONDS,
    )
    if settings.AI_SCORER_URL
    else None
)
if app.state.ai_scorer is None:
    logger.warning("AI_SCORER_URL not set. Reports will use the rule score only.")

app.include_router(parse_router)
app.include_router(pipeline_router)


@app.get("/", tags=["health"])
def root():
    return {"service": "profile-audit", "status": "running"}


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Profile Audit API",
        version="0.1.0",
        description="Profile parsing, fusion and completeness scoring API",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi
