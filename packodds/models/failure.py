"""
Failure classification.

Every failure the service can explain is raised as a KnownError carrying a
FailureKind. The API turns KnownErrors into a FailureDetail body with the
error's status code; anything else is an unknown failure.

Load-time failures (malformed booster feed) are KnownErrors as well, so the
same classification appears in logs and in job output.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    EMPTY_WISHLIST = "empty_wishlist"

    # Resource failures
    NOT_FOUND = "not_found"
    UNKNOWN_SET = "unknown_set"

    # Reference data failures
    INVALID_BOOSTER_DATA = "invalid_booster_data"
    BOOSTER_DATA_UNAVAILABLE = "booster_data_unavailable"

    # Service failures
    EXTERNAL_API_ERROR = "external_api_error"

    # Unknown
    UNKNOWN = "unknown"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


UNKNOWN_FAILURE_MESSAGE = "Something went wrong computing pack odds. Try again later."


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a response body."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class BoosterDataError(KnownError):
    """
    Raised when the booster reference feed is malformed.

    The feed is trusted but externally authored, so it is validated once at
    load time. A product that fails validation never reaches the odds engine.
    """

    def __init__(self, product_code: str, reason: str):
        self.product_code = product_code
        self.reason = reason
        super().__init__(
            kind=FailureKind.INVALID_BOOSTER_DATA,
            message=f"Booster data for '{product_code}' is invalid: {reason}",
            detail=reason,
            suggestion="Re-download the booster feed or report the product upstream.",
            status_code=500,
        )


class CardFetchError(KnownError):
    """Raised when card prints for a set cannot be fetched from Scryfall."""

    def __init__(self, set_code: str, reason: str):
        self.set_code = set_code
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=f"Could not fetch cards for set '{set_code}'",
            detail=reason,
            suggestion="Scryfall may be unavailable. Try again in a few minutes.",
            status_code=502,
        )


def unknown_failure(exception: Exception) -> FailureDetail:
    """Build the fixed response body for an unexplained exception."""
    return FailureDetail(
        kind=FailureKind.UNKNOWN,
        message=UNKNOWN_FAILURE_MESSAGE,
        detail=type(exception).__name__,
        suggestion="If this persists, please report the issue.",
    )
