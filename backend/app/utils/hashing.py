"""
Cryptographic Hashing Utilities — base64 payload encoding and salted
SHA-256 X-VERIFY signatures for checksum-authenticated gateway calls.
"""
import base64
import hashlib
import json


def encode_payload(data: dict) -> str:
    """Serialize a payload to JSON and base64-encode it.
    Serialization is deterministic so the signed and the sent payload match.
    """
    canonical = json.dumps(data, separators=(",", ":"), default=str).encode("utf-8")
    return base64.b64encode(canonical).decode("ascii")


def generate_checksum(base64_payload: str, api_path: str, salt_key: str, salt_index: str = "1") -> str:
    """Generate the X-VERIFY header value: SHA-256(payload + path + salt) + "###" + index.

    Args:
        base64_payload: The encoded request body.
        api_path: Exact API path being invoked (e.g. /pg/v1/pay).
        salt_key: Merchant salt key.
        salt_index: Index of the salt key on the merchant account.

    Returns:
        "<hexdigest>###<salt_index>"
    """
    digest = hashlib.sha256(f"{base64_payload}{api_path}{salt_key}".encode("utf-8")).hexdigest()
    return f"{digest}###{salt_index}"
