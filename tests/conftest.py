from pathlib import Path

import pytest

from profile_audit.core.config import settings
from profile_audit.core.rate_limit import RateLimiter
from profile_audit.main import app

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def fresh_rate_limiter():
    # Fresh window per test
    app.state.rate_limiter = RateLimiter(
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    )
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def profile_export_text() -> str:
    return (FIXTURES / "profile_export.txt").read_text(encoding="utf-8")
