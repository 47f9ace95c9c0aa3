"""Tracker API HTTP client with explicit timeouts and structured error classification."""

import asyncio
from typing import Any, Optional
from urllib.parse import quote

import httpx
import structlog

from ..config import get_global_settings
from ..enums import Platform
from .constants import PLATFORM_CODES
from .errors import (
    TrackerAPIError,
    TrackerBadRequestError,
    TrackerForbiddenError,
    TrackerNotFoundError,
    TrackerRateLimitError,
    TrackerServiceUnavailableError,
)

logger = structlog.get_logger(__name__)


class TrackerAPIClient:
    """HTTP client for the live rank tracker.

    Makes exactly one request per call; retry policy belongs to the caller.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize tracker API client.

        Args:
            base_url: Profile endpoint prefix (uses config if None)
            timeout: Total request deadline in seconds (uses config if None)
            transport: Optional httpx transport, used to stub the network in tests
        """
        settings = get_global_settings()
        self.base_url = (base_url or settings.tracker_base_url).rstrip("/")
        self.timeout = timeout or settings.tracker_timeout_seconds
        self.headers = {
            "Accept": "application/json, text/plain, */*",
            "Accept-Language": "en",
            "User-Agent": settings.tracker_user_agent,
            "Origin": settings.tracker_origin,
            "Referer": settings.tracker_referer,
        }
        self._transport = transport

        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    self.session = httpx.AsyncClient(
                        headers=self.headers,
                        timeout=httpx.Timeout(self.timeout),
                        transport=self._transport,
                    )
                    logger.info("Tracker API client session started", base_url=self.base_url)

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("Tracker API client session closed")

    def profile_url(self, platform: Platform, account_id: str) -> str:
        """Build the profile URL for a player."""
        return f"{self.base_url}/{PLATFORM_CODES[platform]}/{quote(account_id, safe='')}"

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise the TrackerAPIError subclass matching a non-2xx status."""
        status = response.status_code
        if 200 <= status < 300:
            return
        if status == 400:
            raise TrackerBadRequestError("Invalid request parameters", status_code=status)
        if status == 403:
            raise TrackerForbiddenError("Access forbidden", status_code=status)
        if status == 404:
            raise TrackerNotFoundError("Profile not found", status_code=status)
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise TrackerRateLimitError(
                "Rate limit exceeded",
                status_code=status,
                retry_after=float(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        if status >= 500:
            raise TrackerServiceUnavailableError(f"Server error {status}", status_code=status)
        raise TrackerAPIError(f"Unexpected status {status}", status_code=status)

    async def get_profile(self, platform: Platform, account_id: str) -> Any:
        """
        Fetch the raw profile document of a player.

        Args:
            platform: Player platform
            account_id: Platform account identifier

        Returns:
            Decoded JSON document

        Raises:
            TrackerAPIError: On network failure, timeout, non-2xx status or invalid JSON
        """
        await self.start_session()
        if self.session is None:
            raise TrackerAPIError("Session not initialized")

        url = self.profile_url(platform, account_id)
        try:
            response = await self.session.get(url)
        except httpx.TimeoutException as e:
            raise TrackerAPIError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise TrackerAPIError(f"Request failed: {e}") from e

        self._raise_for_status(response)

        try:
            return response.json()
        except ValueError as e:
            raise TrackerAPIError(
                "Response body is not valid JSON", status_code=response.status_code
            ) from e
