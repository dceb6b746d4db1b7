"""Domain errors raised by services and mapped to HTTP responses in app.main."""

from typing import Optional


class MarketplaceError(Exception):
    """Base exception for the marketplace backend."""
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(MarketplaceError):
    """Missing, malformed or expired token."""
    status_code = 401
    default_detail = "Unauthorized"


class Forbidden(MarketplaceError):
    """Bad token signature, role mismatch or email-ownership mismatch."""
    status_code = 403
    default_detail = "Forbidden access"


class ValidationError(MarketplaceError):
    """Missing or out-of-range fields."""
    status_code = 400
    default_detail = "Invalid request"


class NotFound(MarketplaceError):
    status_code = 404
    default_detail = "Not found"


class Conflict(MarketplaceError):
    """State transition not allowed from the entity's current state."""
    status_code = 409
    default_detail = "Conflict"


class UpstreamError(MarketplaceError):
    """Store, payment gateway or identity provider failure."""
    status_code = 500
    default_detail = "Upstream service failure"


class StoreUnavailable(MarketplaceError):
    """Store call timed out or lost its connection. Transient."""
    status_code = 503
    default_detail = "Database temporarily unavailable"
