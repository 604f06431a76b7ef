"""
Client for the remote progress insight service.

Implements:
- Request validation before any network call
- A single JSON POST per call with a fixed timeout and no retries
- Typed failures for timeouts, transport errors, non-2xx answers and
  malformed responses
"""

import asyncio
import logging
from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..config import Settings, get_settings
from ..exceptions import (
    InsightHTTPError,
    InsightNetworkError,
    InsightRequestError,
    InsightResponseError,
    InsightTimeoutError,
)
from ..models.insights import ProgressInsight, ProgressRequest

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class InsightClient:
    """
    Async client for `POST <base_url>` progress insights.

    Usage:
        async with InsightClient("https://insights.example.com/api/insights/progress") as client:
            insight = await client.fetch_progress_insight(request)

    Args:
        base_url: Full URL of the progress insight endpoint
        timeout: Request timeout in seconds
        http_client: Optional preconfigured client; it is not closed by close()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "InsightClient":
        settings = settings or get_settings()
        return cls(
            base_url=settings.insights_api_url,
            timeout=settings.insights_timeout_seconds,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client and self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "InsightClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @staticmethod
    def _validate_request(request: Union[ProgressRequest, Mapping[str, Any]]) -> ProgressRequest:
        if isinstance(request, ProgressRequest):
            request = request.model_dump(by_alias=True)
        if not isinstance(request, Mapping):
            raise InsightRequestError()
        history = request.get("history")
        if isinstance(history, list) and not history:
            raise InsightRequestError("Invalid request: history array cannot be empty")
        try:
            return ProgressRequest.model_validate(request)
        except PydanticValidationError as e:
            raise InsightRequestError(details={"errors": e.errors(include_url=False)})

    async def fetch_progress_insight(
        self,
        request: Union[ProgressRequest, Mapping[str, Any]],
    ) -> ProgressInsight:
        """
        Fetch a progress insight for one exercise history.

        Args:
            request: Exercise name, metric and ascending history

        Returns:
            The validated insight

        Raises:
            InsightRequestError: If the request is invalid (no call is made)
            InsightTimeoutError: If the service does not answer within the timeout
            InsightNetworkError: If the service cannot be reached
            InsightHTTPError: If the service answers with a non-2xx status
            InsightResponseError: If the body is not a well-formed insight
        """
        payload = self._validate_request(request)
        client = await self._get_client()

        logger.debug(
            f"Requesting insight for {payload.exercise}/{payload.metric} "
            f"({len(payload.history)} points)"
        )

        try:
            response = await asyncio.wait_for(
                client.post(
                    self.base_url,
                    json=payload.model_dump(by_alias=True, mode="json"),
                    headers={"Content-Type": "application/json"},
                    timeout=self.timeout,
                ),
                timeout=self.timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError):
            logger.warning(f"Insight request timed out after {self.timeout}s")
            raise InsightTimeoutError(timeout_seconds=self.timeout)
        except httpx.TransportError as e:
            logger.warning(f"Insight request failed: {e}")
            raise InsightNetworkError(details={"reason": str(e)})

        if not response.is_success:
            logger.warning(f"Insight service returned HTTP {response.status_code}")
            raise InsightHTTPError(response.status_code, response.reason_phrase)

        try:
            data = response.json()
        except ValueError:
            raise InsightResponseError(
                "Invalid JSON from insights API",
                raw_response=response.text,
            )

        try:
            return ProgressInsight.model_validate(data)
        except PydanticValidationError:
            raise InsightResponseError(raw_response=response.text)
