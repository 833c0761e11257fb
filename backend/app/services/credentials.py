"""
Credential Resolver — Reads merchant authentication material for the active
auth mode and fails closed when anything required is missing.
"""
from dataclasses import dataclass
from typing import Union

from app.config import Settings
from app.errors import ConfigurationError

TOKEN_MODE = "TOKEN"
CHECKSUM_MODE = "CHECKSUM"


@dataclass(frozen=True)
class TokenCredentials:
    client_id: str
    client_version: str
    client_secret: str
    production: bool = False


@dataclass(frozen=True)
class ChecksumCredentials:
    merchant_id: str
    salt_key: str
    salt_index: str = "1"
    production: bool = False


MerchantCredentials = Union[TokenCredentials, ChecksumCredentials]


def resolve_credentials(settings: Settings) -> MerchantCredentials:
    """Build the credential record for settings.auth_mode.

    Raises:
        ConfigurationError: unknown auth mode or a required value is empty.
    """
    mode = settings.auth_mode

    if mode == TOKEN_MODE:
        client_id = settings.PHONEPE_CLIENT_ID.strip()
        client_version = str(settings.PHONEPE_CLIENT_VERSION).strip()
        client_secret = settings.PHONEPE_CLIENT_SECRET.strip()
        if not client_id or not client_version or not client_secret:
            raise ConfigurationError(
                "PhonePe client credentials not set (PHONEPE_CLIENT_ID / VERSION / SECRET)"
            )
        return TokenCredentials(client_id, client_version, client_secret, settings.is_production)

    if mode == CHECKSUM_MODE:
        merchant_id = settings.PHONEPE_MERCHANT_ID.strip()
        salt_key = settings.PHONEPE_SALT_KEY.strip()
        salt_index = str(settings.PHONEPE_SALT_INDEX or "1").strip()
        if not merchant_id or not salt_key:
            raise ConfigurationError(
                "PhonePe merchant credentials not set (PHONEPE_MERCHANT_ID / SALT_KEY)"
            )
        return ChecksumCredentials(merchant_id, salt_key, salt_index, settings.is_production)

    raise ConfigurationError(f"Unknown PHONEPE_AUTH_MODE '{settings.PHONEPE_AUTH_MODE}' (expected TOKEN or CHECKSUM)")


def credentials_complete(settings: Settings) -> bool:
    """True when the active mode has everything it needs."""
    try:
        resolve_credentials(settings)
    except ConfigurationError:
        return False
    return True
