"""Gemini text-generation client."""

import logging
from typing import Any, Optional

import httpx

from gitscope.config import DEFAULT_GEMINI_API_URL, DEFAULT_GEMINI_MODEL
from gitscope.errors import AuthenticationFailed, ProviderError, TransportFailure

logger = logging.getLogger(__name__)


class GeminiClient:
    """Sends a single prompt to ``models/{model}:generateContent``."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_GEMINI_MODEL,
        base_url: str = DEFAULT_GEMINI_API_URL,
        timeout: float = 60.0,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def generate(self, prompt: str) -> str:
        """Return the text of the first candidate.

        Raises a :class:`~gitscope.errors.GitScopeError` when the key is
        missing, the request fails or the response carries no text.
        """
        if not self.api_key:
            raise AuthenticationFailed("Gemini API key is not configured")

        client = await self._client_instance()
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            resp = await client.post(
                self.endpoint, params={"key": self.api_key}, json=body
            )
        except httpx.TransportError as exc:
            raise TransportFailure(f"Could not reach Gemini: {exc}") from exc

        if not resp.is_success:
            raise ProviderError(_error_message(resp), status_code=resp.status_code)

        text = _first_candidate_text(resp.json())
        if not text:
            raise ProviderError("No generated text in response", status_code=resp.status_code)
        return text.strip()


def _first_candidate_text(payload: Any) -> str:
    if not isinstance(payload, dict):
        return ""
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""
    parts = ((candidates[0] or {}).get("content") or {}).get("parts") or []
    if not parts:
        return ""
    return (parts[0] or {}).get("text") or ""


def _error_message(resp: httpx.Response) -> str:
    try:
        error = resp.json().get("error") or {}
        return error.get("message") or resp.reason_phrase
    except (ValueError, AttributeError):
        return resp.reason_phrase
