"""GET /api/health -- simple health check."""

from fastapi import APIRouter

from journal.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()
