"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import asyncio
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings
from ..dependencies import get_user_repository

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness_check():
    """
    Readiness check endpoint.

    Returns 503 if the database cannot be reached.
    """
    try:
        connected = await asyncio.to_thread(get_user_repository().ping)
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        connected = False

    if not connected:
        body = ReadinessResponse(status="unavailable", database="disconnected")
        return JSONResponse(status_code=503, content=body.model_dump())

    return ReadinessResponse(status="ready", database="connected")
