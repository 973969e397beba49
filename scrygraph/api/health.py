"""
Health check endpoint.

Liveness probe only; the service has no database or other local dependency
worth a readiness check.
"""

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Returns healthy if the service is running. Does not contact Scryfall."""
    return HealthResponse(status="healthy")
