"""
PhonePe Checkout Bridge — FastAPI Application Entry Point

Mounts the payment router, stamps CORS headers for the whitelisted
frontend, maps initiation errors to the uniform error contract and logs
boot info on startup.
"""
import os
import time
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.errors import PaymentInitiationError
from app.routes import payment_router
from app.schemas.schemas import HealthResponse
from app.services.credentials import credentials_complete

settings = get_settings()

# ─── Application Instance ───────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Server-side bridge to PhonePe hosted checkout. Authenticates with the "
        "gateway (checksum or OAuth token), creates a checkout session and returns "
        "the redirect URL to the frontend."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

# ─── Startup ─────────────────────────────────────────────────────────
BOOT_TIME = time.time()


@app.on_event("startup")
def on_startup():
    """Log boot info to console and server.log."""
    current = get_settings()
    os.makedirs(current.LOG_DIR, exist_ok=True)

    boot_msg = (
        f"\n{'='*60}\n"
        f"  {current.APP_NAME} v{current.APP_VERSION}\n"
        f"  TIME: {datetime.now().isoformat()}\n"
        f"  AUTH MODE: {current.auth_mode}\n"
        f"  GATEWAY: {'PROD' if current.is_production else 'SANDBOX'}\n"
        f"  CREDENTIALS: {'[OK] Loaded' if credentials_complete(current) else '[!] Missing'}\n"
        f"  FRONTEND: {current.FRONTEND_ORIGIN}\n"
        f"  DEBUG: {current.DEBUG}\n"
        f"{'='*60}\n"
    )
    print(boot_msg)

    log_file = os.path.join(current.LOG_DIR, "server.log")
    with open(log_file, "a") as f:
        f.write(boot_msg)


# ─── Middleware ──────────────────────────────────────────────────────
def cors_headers() -> dict:
    return {
        "Access-Control-Allow-Origin": get_settings().FRONTEND_ORIGIN,
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }


@app.middleware("http")
async def cors_and_log_requests(request: Request, call_next):
    """Stamp CORS headers on every response and log API requests with timing."""
    start = time.time()
    response = await call_next(request)
    response.headers.update(cors_headers())
    duration = round((time.time() - start) * 1000, 1)

    if request.url.path.startswith("/api"):
        print(f"  -> {request.method} {request.url.path} -> {response.status_code} ({duration}ms)")

    return response


# ─── Error Contract ──────────────────────────────────────────────────
@app.exception_handler(PaymentInitiationError)
async def payment_error_handler(request: Request, exc: PaymentInitiationError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# ─── API Routers ─────────────────────────────────────────────────────
app.include_router(payment_router)


@app.get("/health", tags=["Health"], response_model=HealthResponse)
def health():
    """Health check including gateway configuration status."""
    current = get_settings()
    ready = credentials_complete(current)
    return HealthResponse(
        status="healthy" if ready else "degraded",
        service=current.APP_NAME,
        version=current.APP_VERSION,
        auth_mode=current.auth_mode,
        environment="PROD" if current.is_production else "TEST",
        credentials="configured" if ready else "missing",
        uptime_seconds=round(time.time() - BOOT_TIME, 1),
    )
