"""
Gateway HTTP Client — outbound httpx client with dependency injection for FastAPI.
"""
from typing import AsyncIterator

import httpx
from fastapi import Depends

from app.config import Settings, get_settings


async def get_http_client(settings: Settings = Depends(get_settings)) -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency: yields a per-request client, auto-closes on finish."""
    async with httpx.AsyncClient(timeout=settings.PHONEPE_HTTP_TIMEOUT) as client:
        yield client
