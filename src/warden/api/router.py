"""Root API router with health endpoints and the auth routes."""

from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from warden.core.auth.dependencies import DBSession
from warden.core.auth.routes import router as auth_router


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str


class ReadinessResponse(BaseModel):
    """Readiness check response schema."""

    status: str
    checks: dict[str, str]


api_router = APIRouter()

health_router = APIRouter(tags=["health"])


@health_router.get(
    "/health/live",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Returns 200 if the process is running.",
)
async def liveness() -> HealthResponse:
    """Liveness check endpoint."""
    return HealthResponse(status="alive")


@health_router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Checks that the identity store answers.",
)
async def readiness(db: DBSession) -> JSONResponse:
    """Readiness check endpoint."""
    checks: dict[str, str] = {}

    try:
        await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except SQLAlchemyError as e:
        checks["database"] = type(e).__name__

    all_ok = all(v == "ok" for v in checks.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK
        if all_ok
        else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if all_ok else "degraded",
            "checks": checks,
        },
    )


@health_router.get(
    "/info",
    summary="Application info",
    description="Returns application metadata.",
)
async def info(request: Request) -> dict[str, Any]:
    """Application info endpoint."""
    settings = request.app.state.settings
    return {
        "app": settings.app_name,
        "environment": settings.environment,
        "debug": settings.debug,
    }


api_router.include_router(health_router)
api_router.include_router(auth_router)
