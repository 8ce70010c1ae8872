"""
Failure classification for user-visible errors.

Nothing in the card engine is fatal: remote failures degrade a view to an
empty list plus a message, storage failures are logged, and invariant-violating
requests are silent no-ops. Only the HTTP surface turns a failure into an
error response, and it does so through `KnownError`.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Resource failures
    NOT_FOUND = "not_found"

    # Service failures
    EXTERNAL_API_ERROR = "external_api_error"
    STORAGE_ERROR = "storage_error"


# HTTP status used when a KnownError of a given kind reaches the API boundary
STATUS_CODES: dict[FailureKind, int] = {
    FailureKind.INVALID_INPUT: 400,
    FailureKind.NOT_FOUND: 404,
    FailureKind.EXTERNAL_API_ERROR: 502,
    FailureKind.STORAGE_ERROR: 503,
}


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
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = STATUS_CODES.get(kind, 400)
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )
