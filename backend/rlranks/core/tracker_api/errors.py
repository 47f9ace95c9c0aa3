"""Custom error classes for the tracker API client."""

from typing import Optional


class TrackerAPIError(Exception):
    """Base exception for tracker API errors with status code tracking."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        retry_after: Optional[float] = None,
    ) -> None:
        """
        Initialize TrackerAPIError.

        Args:
            message: Error message
            status_code: HTTP status code (400, 403, 404, 429, 503, etc.)
            retry_after: Seconds to wait before retry (for 429 errors)
        """
        super().__init__(message)
        self.status_code: Optional[int] = status_code
        self.retry_after: Optional[float] = retry_after
        self.message: str = message

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code == 429 and self.retry_after:
            return f"Rate Limit Error {self.status_code}: {self.message} (Retry after: {self.retry_after}s)"
        if self.status_code:
            return f"Tracker API Error {self.status_code}: {self.message}"
        return f"Tracker API Error: {self.message}"


class TrackerRateLimitError(TrackerAPIError):
    """Rate limit error (429)."""

    pass


class TrackerForbiddenError(TrackerAPIError):
    """Forbidden error (403) - usually bot protection in front of the tracker."""

    pass


class TrackerNotFoundError(TrackerAPIError):
    """Not found error (404) - profile doesn't exist or is private."""

    pass


class TrackerServiceUnavailableError(TrackerAPIError):
    """Server error (5xx) - tracker is down."""

    pass


class TrackerBadRequestError(TrackerAPIError):
    """Bad request (400) - invalid parameters."""

    pass
