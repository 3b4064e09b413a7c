"""
Exception hierarchy for the rewards API.

Every error raised by the services layer inherits from RewardsError and
carries the HTTP status the API should answer with. Handlers registered in
rewards.main turn them into ``{"message": ...}`` JSON bodies.

    RewardsError (base)
    ├── ValidationError          400
    ├── DuplicateResourceError   400
    ├── PreconditionFailedError  400
    ├── AuthenticationError      401
    ├── ResourceNotFoundError    404
    └── InternalError            500
"""
from typing import Any


class RewardsError(Exception):
    """Base class for application errors.

    Attributes:
        message: Human-readable error message (sent to the client)
        detail: Optional structured context, e.g. per-field errors
        status_code: HTTP status for API responses
    """

    status_code: int = 500

    def __init__(self, message: str, *, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.detail:
            body["errors"] = self.detail
        return body


class ValidationError(RewardsError):
    """Malformed or missing input."""

    status_code = 400


class DuplicateResourceError(RewardsError):
    """Unique email / username collision."""

    status_code = 400


class PreconditionFailedError(RewardsError):
    """Request is well-formed but the account is not in the required state."""

    status_code = 400


class AuthenticationError(RewardsError):
    """Missing, invalid or expired session."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized", *, detail: Any = None):
        super().__init__(message, detail=detail)


class ResourceNotFoundError(RewardsError):
    status_code = 404


class InternalError(RewardsError):
    """Unexpected store failure. Details are logged, never returned."""

    status_code = 500

    def __init__(self, message: str = "Internal server error", *, detail: Any = None):
        super().__init__(message, detail=detail)
