"""
PhonePe Auth Strategies — turns a payment payload into request headers.

Two variants share one interface, selected by PHONEPE_AUTH_MODE:
- ChecksumAuth: legacy PG v1. The payload is base64-wrapped and signed with
  a salted SHA-256 X-VERIFY header. No extra network call.
- TokenAuth: Standard Checkout v2. An OAuth client-credentials exchange
  yields an access token sent as "O-Bearer <token>". Every initiation
  re-authenticates; tokens are not cached.
"""
from abc import ABC, abstractmethod
from typing import Dict

import httpx

from app.errors import AuthError, ConfigurationError
from app.services.credentials import ChecksumCredentials, MerchantCredentials, TokenCredentials
from app.utils.hashing import encode_payload, generate_checksum
from app.utils.logger import alog

# ─── Endpoints ───────────────────────────────────────────────────────
SANDBOX_HOST = "https://api-preprod.phonepe.com/apis/pg-sandbox"

TOKEN_AUTH_URLS = {
    False: f"{SANDBOX_HOST}/v1/oauth/token",
    True: "https://api.phonepe.com/apis/identity-manager/v1/oauth/token",
}

CHECKSUM_PAY_PATH = "/pg/v1/pay"
CHECKSUM_HOSTS = {
    False: SANDBOX_HOST,
    True: "https://api.phonepe.com/apis/hermes",
}


class AuthStrategy(ABC):
    """Produces the headers (and body shape) for a create-payment call."""

    mode: str = ""

    def wrap_payload(self, payload: dict) -> dict:
        """Body actually sent to the gateway for this payload."""
        return payload

    @abstractmethod
    async def authenticate(self, payload: dict) -> Dict[str, str]:
        """Return auth headers bound to this payload."""


class ChecksumAuth(AuthStrategy):
    mode = "CHECKSUM"

    def __init__(self, credentials: ChecksumCredentials, api_path: str = CHECKSUM_PAY_PATH):
        self.credentials = credentials
        self.api_path = api_path

    def wrap_payload(self, payload: dict) -> dict:
        return {"request": encode_payload(payload)}

    async def authenticate(self, payload: dict) -> Dict[str, str]:
        # Signature covers exactly this payload plus the invoked path.
        x_verify = generate_checksum(
            encode_payload(payload),
            self.api_path,
            self.credentials.salt_key,
            self.credentials.salt_index,
        )
        return {"X-VERIFY": x_verify, "accept": "application/json"}


class TokenAuth(AuthStrategy):
    mode = "TOKEN"

    def __init__(self, credentials: TokenCredentials, client: httpx.AsyncClient):
        self.credentials = credentials
        self.client = client

    @property
    def auth_url(self) -> str:
        return TOKEN_AUTH_URLS[self.credentials.production]

    async def fetch_access_token(self) -> str:
        """Run the client-credentials exchange.

        Raises:
            AuthError: non-success status, unparsable body, or no access_token.
        """
        form = {
            "client_id": self.credentials.client_id,
            "client_version": self.credentials.client_version,
            "client_secret": self.credentials.client_secret,
            "grant_type": "client_credentials",
        }
        response = await self.client.post(
            self.auth_url,
            data=form,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

        try:
            auth_data = response.json()
        except ValueError:
            auth_data = response.text

        token = auth_data.get("access_token") if isinstance(auth_data, dict) else None
        if not response.is_success or not token:
            await alog("PHONEPE_AUTH", f"auth error status={response.status_code} body={auth_data}")
            raise AuthError("Failed to get PhonePe auth token", raw=auth_data)
        return token

    async def authenticate(self, payload: dict) -> Dict[str, str]:
        token = await self.fetch_access_token()
        return {"Authorization": f"O-Bearer {token}"}


def get_auth_strategy(credentials: MerchantCredentials, client: httpx.AsyncClient) -> AuthStrategy:
    """Pick the strategy matching the resolved credential variant."""
    if isinstance(credentials, TokenCredentials):
        return TokenAuth(credentials, client)
    if isinstance(credentials, ChecksumCredentials):
        return ChecksumAuth(credentials)
    raise ConfigurationError(f"Unsupported credentials type: {type(credentials).__name__}")


def checksum_pay_url(production: bool) -> str:
    """Invoked URL for the checksum variant; path matches the signed path."""
    return f"{CHECKSUM_HOSTS[production]}{CHECKSUM_PAY_PATH}"
