from typing import Optional

from fastapi import Depends, HTTPException, Request

from profile_audit.core.ai_scorer import AiScorer
from profile_audit.core.rate_limit import RateLimiter


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_ai_scorer(request: Request) -> Optional[AiScorer]:
    return getattr(request.app.state, "ai_scorer", None)


def enforce_rate_limit(request: Request, limiter: RateLimiter = Depends(get_rate_limiter)) -> None:
    identifier = request.client.host if request.client else "anonymous"
    if not limiter.allow(identifier):
        raise HTTPException(status_code=429, detail="Too many requests. Please try again later.")
