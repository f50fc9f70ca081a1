"""HTTP client for the hosted entries store (PostgREST-compatible endpoint)."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx

from .logging import get_logger

__all__ = ["StoreClient", "StoreNotConfiguredError", "REST_PREFIX"]

logger = get_logger(__name__)

REST_PREFIX = "/rest/v1"
# httpx requires a syntactically valid base URL even for a client that never sends.
UNCONFIGURED_BASE_URL = "http://store.invalid"


class StoreNotConfiguredError(RuntimeError):
    """Raised on every request when the endpoint URL or anon key is missing."""


class StoreClient:
    """Thin wrapper around :class:`httpx.Client` carrying the anon-key headers."""

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._configured = bool(base_url) and bool(anon_key)
        if not self._configured:
            logger.warning(
                "store_client_unconfigured",
                extra={"has_url": bool(base_url), "has_anon_key": bool(anon_key)},
            )
        headers = {"Accept": "application/json"}
        if anon_key:
            headers["apikey"] = anon_key
            headers["Authorization"] = f"Bearer {anon_key}"
        self._client = httpx.Client(
            base_url=base_url or UNCONFIGURED_BASE_URL,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return self._configured

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, str]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Send one request and raise ``httpx.HTTPStatusError`` on non-2xx."""

        if not self._configured:
            raise StoreNotConfiguredError("store endpoint not configured")
        response = self._client.request(
            method,
            f"{REST_PREFIX}{path}",
            params=params,
            json=json,
            headers=headers,
        )
        response.raise_for_status()
        return response

    def close(self) -> None:
        self._client.close()
