"""Gemini REST client — one generateContent call per invocation.

No retry, no rate limiting, no caching: the caller decides whether to run
again. The API key travels as the ``key`` query parameter.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from imagegen.errors import APIError, ResponseError, TransportError
from imagegen.schema import GenerateContentRequest, GenerateContentResponse

API_BASE = "https://generativelanguage.googleapis.com/v1beta"

log = logging.getLogger("imagegen.clients.gemini")


class GeminiClient:
    """Thin async wrapper around httpx for the generateContent endpoint.

    Usage:
        async with GeminiClient(api_key) as client:
            response = await client.generate_content(model, request)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = API_BASE,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GeminiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _redact(self, text: str) -> str:
        return text.replace(self._api_key, "***") if self._api_key else text

    async def generate_content(
        self, model: str, request: GenerateContentRequest
    ) -> GenerateContentResponse:
        """POST the request and parse the response envelope."""
        log.debug("POST models/%s:generateContent", model)
        try:
            response = await self._client.post(
                f"/models/{model}:generateContent",
                params={"key": self._api_key},
                json=request.to_wire(),
            )
        except httpx.RequestError as e:
            raise TransportError(
                self._redact(f"Network request failed: {str(e) or type(e).__name__}")
            ) from None

        if not response.is_success:
            raise APIError(response.status_code, self._redact(response.text))

        try:
            data = response.json()
        except ValueError as e:
            raise ResponseError(f"Response was not valid JSON: {e}") from e

        try:
            return GenerateContentResponse.model_validate(data)
        except ValidationError as e:
            raise ResponseError(f"Unexpected response shape: {e}") from e
