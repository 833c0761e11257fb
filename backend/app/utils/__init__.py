from app.utils.hashing import encode_payload, generate_checksum
from app.utils.validators import validate_payment_request, to_minor_units

__all__ = [
    "encode_payload", "generate_checksum",
    "validate_payment_request", "to_minor_units",
]
