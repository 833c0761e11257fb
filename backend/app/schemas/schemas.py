"""
Pydantic Schemas — Request, result & response models for the initiation flow.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field


# ──────────────── Payment Request ────────────────

class PaymentRequest(BaseModel):
    amount: str = Field(..., description="Amount in INR as received (major units)")
    amount_paise: int = Field(..., gt=0, description="Amount in paise sent to the gateway")
    name: str = ""
    phone: str = ""
    email: str = ""
    city: str = ""
    pincode: str = ""


# ──────────────── Gateway Session ────────────────

class GatewaySessionResult(BaseModel):
    """Normalized outcome of a successful create-payment call."""
    redirect_url: str
    order_id: str
    order_id_field: str = "merchantOrderId"  # merchantOrderId | merchantTransactionId
    success: bool = True

    def to_response(self) -> dict:
        return {
            "success": self.success,
            "redirectUrl": self.redirect_url,
            self.order_id_field: self.order_id,
        }


# ──────────────── Responses ────────────────

class ErrorResponse(BaseModel):
    error: str
    raw: Optional[Any] = None
    details: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    auth_mode: str
    environment: str
    credentials: str
    uptime_seconds: float
