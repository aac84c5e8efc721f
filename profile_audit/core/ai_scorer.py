import logging
from typing import Any, Dict, Optional, Protocol

import httpx
from pydantic import ValidationError

from profile_audit.core.errors import ScorerError
from profile_audit.core.schemas import AiFeedback, MergedProfile, RuleResultSet

logger = logging.getLogger(__name__)


class AiScorer(Protocol):
    async def evaluate(self, merged: MergedProfile, rules: RuleResultSet) -> AiFeedback: ...


def build_scorer_payload(merged: MergedProfile, rules: RuleResultSet) -> Dict[str, Any]:
    return {
        "mergedProfile": merged.model_dump(mode="json", by_alias=True, exclude_none=True),
        "ruleResults": rules.model_dump(mode="json", by_alias=True),
    }


def parse_scorer_reply(body: Any) -> AiFeedback:
    """Validate the whole reply; any deviation from the expected shape rejects all of it."""
    if not isinstance(body, dict):
        raise ScorerError(f"Scorer reply is not a JSON object: {type(body).__name__}")
    try:
        return AiFeedback.model_validate(body)
    except ValidationError as e:
        raise ScorerError(f"Scorer reply failed validation: {e.error_count()} error(s)") from e


class HttpAiScorer:
    """
    Client for the external AI scorer.

    Sends {mergedProfile, ruleResults} and expects an AiFeedback-shaped JSON
    object back. One attempt per call; the pipeline owns the fallback.
    """

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.headers = {"Accept": "application/json"}
        if api_key:
            self.headers["x-api-key"] = api_key
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx.AsyncClient instance."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout, headers=self.headers, transport=self._transport
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def evaluate(self, merged: MergedProfile, rules: RuleResultSet) -> AiFeedback:
        client = await self.get_client()
        response = await client.post(self.url, json=build_scorer_payload(merged, rules))
        if response.is_error:
            raise ScorerError(f"Scorer returned HTTP {response.status_code}")
        try:
            body = response.json()
        except ValueError as e:
            raise ScorerError("Scorer reply is not valid JSON") from e
        return parse_scorer_reply(body)
