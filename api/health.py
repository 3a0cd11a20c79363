"""Health check endpoint."""

from fastapi import APIRouter

from services.metrics import get_metrics_collector

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health():
    return {"status": "ok", "metrics": get_metrics_collector().snapshot()}
