"""
Error taxonomy for the sweet shop API.

Every failure the core can report is a `SweetShopError`. Each subclass fixes
the HTTP status it maps to, and `to_payload()` gives the JSON body the
exception handlers in `main` send back.
"""

from typing import Any, Dict, List, Optional


class SweetShopError(Exception):
    """Base exception for all sweet shop errors."""

    status_code: int = 500

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "An unspecified error occurred."
        self.message = message
        super().__init__(message)

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(SweetShopError):
    """Malformed or out-of-range input."""

    status_code = 400

    def __init__(self, message: str = "Validation failed", errors: Optional[List[Dict[str, str]]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class AuthenticationError(SweetShopError):
    """Missing, invalid or expired credential."""

    status_code = 401


class AuthorizationError(SweetShopError):
    """Valid identity without the privilege the operation needs."""

    status_code = 403


class NotFoundError(SweetShopError):
    status_code = 404


class InsufficientQuantityError(SweetShopError):
    """
    Raised when a purchase asks for more than the item has in stock.

    Carries both numbers so callers can tell the user what is left. This is a
    final outcome, not a transient failure: retrying the same request will
    fail the same way until the item is restocked.
    """

    status_code = 400

    def __init__(self, available: int, requested: int) -> None:
        super().__init__("Insufficient quantity")
        self.available = available
        self.requested = requested

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["available"] = self.available
        payload["requested"] = self.requested
        return payload


class InternalError(SweetShopError):
    status_code = 500
