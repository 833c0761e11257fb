"""
Payment Routes — PhonePe hosted-checkout initiation.
Handles: POST initiate, OPTIONS preflight, 405 for everything else.
"""
import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.errors import PaymentInitiationError
from app.gateway_client import get_http_client
from app.schemas.schemas import ErrorResponse
from app.services.phonepe_service import PhonePeService
from app.utils.logger import alog
from app.utils.rate_limiter import rate_limit

router = APIRouter(prefix="/api", tags=["Payment"])

INITIATE_PATH = "/phonepe-initiate"


@router.options(INITIATE_PATH)
def initiate_preflight():
    """Preflight: empty 200, CORS headers are added by middleware."""
    return Response(status_code=200)


@router.post(
    INITIATE_PATH,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def initiate_payment(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
    _throttle: bool = Depends(rate_limit()),
):
    """Create a PhonePe checkout session and return its redirect URL."""
    body = await request.body()
    try:
        result = await PhonePeService(settings, client).initiate(body)
    except PaymentInitiationError:
        raise
    except Exception as e:
        await alog("PHONEPE_INITIATE", f"initiate error: {e!r}")
        return JSONResponse(status_code=500, content={"error": "Server error", "details": str(e)})

    return result.to_response()


@router.api_route(INITIATE_PATH, methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def initiate_method_not_allowed():
    return JSONResponse(status_code=405, content={"error": "Only POST allowed"})
