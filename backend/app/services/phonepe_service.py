"""
PhonePe Service — One payment initiation, end to end.
Validating -> ResolvingCredentials -> Authenticating -> RequestingSession
-> NormalizingResponse. Terminal on the first failure; nothing is kept
between invocations.
"""
from typing import Any

import httpx

from app.config import Settings
from app.schemas.schemas import GatewaySessionResult
from app.services.credentials import resolve_credentials
from app.services.phonepe_auth import get_auth_strategy
from app.services.phonepe_checkout import PaymentSessionRequester
from app.utils.validators import validate_payment_request


class PhonePeService:
    """Initiates hosted-checkout sessions with the configured auth variant."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client

    async def initiate(self, body: Any) -> GatewaySessionResult:
        """Run the initiation pipeline for a raw request body.

        Args:
            body: Parsed dict, JSON string or raw bytes from the caller.

        Returns:
            GatewaySessionResult with the redirect URL and generated order id.

        Raises:
            ValidationError: amount missing or invalid.
            ConfigurationError: credentials for the active mode incomplete.
                Raised before any network call.
            AuthError: token exchange rejected (token mode only).
            GatewayError: create-payment failed or returned no redirect URL.
        """
        request = validate_payment_request(body)
        credentials = resolve_credentials(self.settings)
        auth = get_auth_strategy(credentials, self.client)
        requester = PaymentSessionRequester(self.settings, credentials, auth, self.client)
        return await requester.request_session(request)
