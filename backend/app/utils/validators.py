"""
Validators — Payment request extraction and amount conversion rules.
"""
import json
import re
from decimal import Decimal, InvalidOperation, Overflow, ROUND_HALF_UP
from typing import Any

from app.errors import ValidationError
from app.schemas.schemas import PaymentRequest

CONTACT_FIELDS = ("name", "phone", "email", "city", "pincode")


def parse_body(body: Any) -> dict:
    """Accept an already-parsed dict, raw bytes or a JSON string.
    Anything that does not decode to a JSON object becomes {}.
    """
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        try:
            body = json.loads(body) if body.strip() else {}
        except ValueError:
            body = {}
        # A JSON-encoded string holding the object
        if isinstance(body, str):
            return parse_body(body)
    return body if isinstance(body, dict) else {}


def to_minor_units(amount: Any) -> int:
    """Convert a major-unit amount (₹) to paise, rounding half up.
    199.5 -> 19950, 10 -> 1000, 10.005 -> 1001.
    """
    if isinstance(amount, bool):
        raise ValidationError("Amount must be a valid number")
    try:
        value = Decimal(str(amount).strip())
        if not value.is_finite():
            raise ValidationError("Amount must be a valid number")
        # More digits than the context precision (e.g. 1e30) cannot be quantized.
        paise = (value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except (InvalidOperation, Overflow):
        raise ValidationError("Amount must be a valid number")
    if paise <= 0:
        raise ValidationError("Amount must be greater than zero")
    return int(paise)


def validate_payment_request(body: Any) -> PaymentRequest:
    """Extract amount and contact fields from a raw request body.

    Raises:
        ValidationError: amount is absent or falsy (0, "", null), or not a
            positive number.
    """
    data = parse_body(body)
    amount = data.get("amount")
    if not amount:
        raise ValidationError("Amount is required")

    amount_paise = to_minor_units(amount)
    contact = {field: _as_text(data.get(field)) for field in CONTACT_FIELDS}
    return PaymentRequest(amount=str(amount), amount_paise=amount_paise, **contact)


def phone_digits(phone: str | None) -> str:
    """Strip everything but digits from a phone number."""
    if not phone:
        return ""
    return re.sub(r"\D", "", phone)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
