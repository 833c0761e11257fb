"""
Error Taxonomy — Terminal failures of a payment initiation.
Each error carries the HTTP status it maps to and, for gateway-originated
failures, the raw upstream body for operator diagnosis.
"""
from typing import Any, Dict, Optional


class PaymentInitiationError(Exception):
    """Base class for every error surfaced to the caller."""

    status_code: int = 500

    def __init__(self, message: str, raw: Any = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.raw = raw
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.raw is not None:
            body["raw"] = self.raw
        return body


class ValidationError(PaymentInitiationError):
    """Missing or malformed input (client fault)."""
    status_code = 400


class ConfigurationError(PaymentInitiationError):
    """Operator-provided credentials are missing or invalid. Never retried."""
    status_code = 500


class AuthError(PaymentInitiationError):
    """The gateway rejected the client-credentials exchange."""
    status_code = 500


class GatewayError(PaymentInitiationError):
    """Payment creation failed or returned no redirect URL."""
    status_code = 400


class RateLimitError(PaymentInitiationError):
    status_code = 429
