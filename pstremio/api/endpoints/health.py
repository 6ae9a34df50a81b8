"""
Health Check Endpoint
"""
from fastapi import APIRouter
from pstremio.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "version": settings.ADDON_VERSION,
        "base_url": settings.BASE_URL,
    }
