"""
Rank service exceptions.

Every failure of a resolution is either recovered by falling back to the next
provider or surfaced to the caller as one of these typed errors. None of them
is fatal to the process.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

if TYPE_CHECKING:
    from .enums import Playlist


class RankServiceError(Exception):
    """Base exception for all rank resolution errors."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        if self.operation:
            return f"[{self.operation}] {self.message}"
        return self.message


class NormalizationError(RankServiceError):
    """Raised when a provider payload cannot be mapped to a rank set.

    A response either normalizes fully or is discarded; there are no partial
    rank sets.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        context = {"field": field} if field else {}
        super().__init__(
            message=f"Normalization error: {message}",
            operation="normalize",
            context=context,
        )
        self.field = field


class RanksExhaustedError(RankServiceError):
    """Every provider was unavailable for an identity.

    Carries the ``(provider, reason)`` pair of each failed attempt in order.
    """

    def __init__(
        self,
        account_id: str,
        platform: str,
        attempts: List[Tuple[str, str]],
    ):
        super().__init__(
            message=f"Could not fetch ranks for {account_id} on {platform}",
            operation="resolve",
            context={"account_id": account_id, "platform": platform},
        )
        self.attempts = attempts


class NoRanksError(RankServiceError):
    """Raised by the classifier when no rank matches the playlist whitelist.

    Callers are expected to check ``unranked`` first.
    """

    def __init__(self, whitelist: "Optional[List[Playlist]]" = None):
        super().__init__(
            message="No ranks match the playlist whitelist",
            operation="best",
            context={"whitelist": [p.value for p in whitelist or []]},
        )


class StoreError(RankServiceError):
    """Exception raised for database failures inside the rank store."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=f"Database error: {message}",
            operation=operation,
            context=context,
            original_error=original_error,
        )
