from app.services.order_id_service import OrderIdService
from app.services.phonepe_auth import AuthStrategy, ChecksumAuth, TokenAuth
from app.services.phonepe_checkout import PaymentSessionRequester
from app.services.phonepe_service import PhonePeService

__all__ = [
    "OrderIdService", "AuthStrategy", "ChecksumAuth", "TokenAuth",
    "PaymentSessionRequester", "PhonePeService",
]
