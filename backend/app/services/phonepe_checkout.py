"""
PhonePe Checkout — create-payment payloads, gateway invocation and
response normalization for both protocol variants.
"""
from typing import Any, Optional

import httpx

from app.config import Settings
from app.errors import GatewayError
from app.schemas.schemas import GatewaySessionResult, PaymentRequest
from app.services.credentials import ChecksumCredentials, MerchantCredentials, TokenCredentials
from app.services.order_id_service import OrderIdService
from app.services.phonepe_auth import AuthStrategy, SANDBOX_HOST, checksum_pay_url
from app.utils.logger import alog
from app.utils.validators import phone_digits

TOKEN_PAY_URLS = {
    False: f"{SANDBOX_HOST}/checkout/v2/pay",
    True: "https://api.phonepe.com/apis/pg/checkout/v2/pay",
}

NO_REDIRECT_MESSAGE = "No redirect URL from PhonePe"


# ─── Payload builders ────────────────────────────────────────────────

def build_token_payload(order_id: str, request: PaymentRequest, redirect_url: str) -> dict:
    """Standard Checkout v2 payload."""
    return {
        "merchantOrderId": order_id,
        "amount": request.amount_paise,
        "metaInfo": {
            "udf1": request.phone,
            "udf2": request.email,
            "udf3": request.city,
            "udf4": request.pincode,
            "udf5": request.name,
        },
        "paymentFlow": {
            "type": "PG_CHECKOUT",
            "message": f"Payment for {request.name or 'customer'}",
            "merchantUrls": {"redirectUrl": redirect_url},
        },
    }


def build_checksum_payload(
    order_id: str,
    request: PaymentRequest,
    redirect_url: str,
    merchant_id: str,
) -> dict:
    """PG v1 pay-page payload."""
    user_ref = phone_digits(request.phone) or OrderIdService.timestamp_of(order_id)
    payload = {
        "merchantId": merchant_id,
        "merchantTransactionId": order_id,
        "merchantUserId": f"MUID_{user_ref}",
        "amount": request.amount_paise,
        "redirectUrl": redirect_url,
        "redirectMode": "REDIRECT",
        "paymentInstrument": {"type": "PAY_PAGE"},
    }
    if request.phone:
        payload["mobileNumber"] = phone_digits(request.phone)
    return payload


# ─── Response normalization ──────────────────────────────────────────

def extract_redirect_url(data: Any, mode: str) -> Optional[str]:
    """Read the hosted-checkout URL from a variant-shaped response body."""
    if not isinstance(data, dict):
        return None
    if mode == "CHECKSUM":
        instrument = (data.get("data") or {}).get("instrumentResponse") or {}
        url = (instrument.get("redirectInfo") or {}).get("url")
    else:
        url = data.get("redirectUrl")
    return url if isinstance(url, str) and url else None


def normalize_response(
    response: httpx.Response,
    mode: str,
    order_id: str,
    order_id_field: str,
) -> GatewaySessionResult:
    """Map a create-payment response onto the uniform result.

    A missing redirect URL is a failure even on HTTP success.

    Raises:
        GatewayError: non-success status, non-JSON body, or no redirect URL.
    """
    try:
        data = response.json()
    except ValueError:
        data = response.text

    redirect_url = extract_redirect_url(data, mode)
    if not response.is_success or not redirect_url:
        raise GatewayError(NO_REDIRECT_MESSAGE, raw=data)

    return GatewaySessionResult(
        redirect_url=redirect_url,
        order_id=order_id,
        order_id_field=order_id_field,
    )


# ─── Requester ───────────────────────────────────────────────────────

class PaymentSessionRequester:
    """Builds the variant payload and invokes the create-payment endpoint once."""

    def __init__(
        self,
        settings: Settings,
        credentials: MerchantCredentials,
        auth: AuthStrategy,
        client: httpx.AsyncClient,
    ):
        self.settings = settings
        self.credentials = credentials
        self.auth = auth
        self.client = client

    @property
    def pay_url(self) -> str:
        if isinstance(self.credentials, ChecksumCredentials):
            return checksum_pay_url(self.credentials.production)
        return TOKEN_PAY_URLS[self.credentials.production]

    @property
    def order_id_field(self) -> str:
        if isinstance(self.credentials, ChecksumCredentials):
            return "merchantTransactionId"
        return "merchantOrderId"

    def build_payload(self, order_id: str, request: PaymentRequest) -> dict:
        redirect_url = self.settings.redirect_url
        if isinstance(self.credentials, TokenCredentials):
            return build_token_payload(order_id, request, redirect_url)
        return build_checksum_payload(order_id, request, redirect_url, self.credentials.merchant_id)

    async def request_session(self, request: PaymentRequest) -> GatewaySessionResult:
        """Authenticate, create the checkout session and normalize the result."""
        order_id = OrderIdService.generate(self.settings.ORDER_ID_PREFIX)
        payload = self.build_payload(order_id, request)

        headers = {"Content-Type": "application/json"}
        headers.update(await self.auth.authenticate(payload))

        response = await self.client.post(
            self.pay_url,
            json=self.auth.wrap_payload(payload),
            headers=headers,
        )
        await alog("PHONEPE_PAY", f"{self.auth.mode} response status={response.status_code} order={order_id}")
        try:
            return normalize_response(response, self.auth.mode, order_id, self.order_id_field)
        except GatewayError as e:
            await alog("PHONEPE_PAY", f"no redirect URL for order={order_id} body={e.raw}")
            raise
