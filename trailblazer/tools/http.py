"""Base class for the requests-backed API clients."""

import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from trailblazer.utils.exceptions import ExternalServiceError, NotFoundError, RateLimitError

logger = logging.getLogger(__name__)


class HTTPClient:
    """
    Owns a ``requests.Session`` and runs its calls in a worker thread so the
    event loop is never blocked.
    """

    service_name = "API"

    def __init__(self, base_url: str, timeout: int = 30, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    async def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET ``url`` and decode the JSON body.

        Raises:
            NotFoundError: On HTTP 404
            RateLimitError: On HTTP 429
            ExternalServiceError: On any other transport, status or decoding failure
        """
        try:
            response = await asyncio.to_thread(
                self.session.get, url, params=params, timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            raise ExternalServiceError(f"{self.service_name} timed out") from e
        except requests.exceptions.RequestException as e:
            raise ExternalServiceError(f"{self.service_name} request failed: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(f"{self.service_name} returned no results")
        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                f"{self.service_name} rate limit exceeded",
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        if response.status_code >= 400:
            raise ExternalServiceError(
                f"{self.service_name} returned HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise ExternalServiceError(f"{self.service_name} returned invalid JSON") from e

    def close(self) -> None:
        self.session.close()
