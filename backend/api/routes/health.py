"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    auth: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Reports whether Supabase and token validation are configured.
    Returns 503 when either is missing.
    """
    settings = get_settings()
    database_ok = bool(settings.supabase_url and settings.supabase_service_role_key)
    auth_ok = bool(settings.supabase_jwt_secret)

    body = ReadinessResponse(
        status="ready" if database_ok and auth_ok else "not_ready",
        database="configured" if database_ok else "missing",
        auth="configured" if auth_ok else "missing",
    )
    if body.status != "ready":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
