"""Health check route for load balancers and uptime probes."""

from datetime import datetime, timezone

import schemas
from fastapi import APIRouter

router = APIRouter()


@router.get("/health", response_model=schemas.HealthStatus)
async def health():
    """Report that the process is up."""
    return schemas.HealthStatus(status="ok", timestamp=datetime.now(timezone.utc))
