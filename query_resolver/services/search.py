"""HTTP-backed lookup function for the resolver."""

from __future__ import annotations

from typing import Any

import httpx

from query_resolver.config import SearchApiSettings
from query_resolver.services.exceptions import SearchBackendError


class HttpSearchLookup:
    """Async callable issuing ``GET <url>?<query_param>=<query>`` and returning the JSON items.

    The endpoint may answer with a bare list or with an object carrying an
    ``items`` or ``results`` list.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: SearchApiSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or SearchApiSettings()

    async def __call__(self, query: str) -> list[Any]:
        base_url = self._settings.url
        if not base_url:
            raise SearchBackendError("Search API URL is not configured.")

        headers = {"Content-Type": "application/json"}
        if self._settings.api_token:
            headers["Authorization"] = f"Bearer {self._settings.api_token.get_secret_value()}"

        try:
            response = await self._client.get(
                str(base_url),
                params={self._settings.query_param: query},
                headers=headers,
                timeout=self._settings.request_timeout_seconds,
            )
        except httpx.RequestError as exc:
            raise SearchBackendError(f"Search request failed: {exc}") from exc

        if not response.is_success:
            raise SearchBackendError(f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise SearchBackendError("Search API returned invalid JSON.") from exc
        return _extract_items(payload)


def _extract_items(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("items", "results"):
            items = payload.get(key)
            if isinstance(items, list):
                return items
    raise SearchBackendError("Search API payload does not contain a result list.")


__all__ = ["HttpSearchLookup"]
