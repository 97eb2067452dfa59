"""
Health check and status endpoints
"""
from fastapi import APIRouter
from datetime import datetime
from customer_api.config import get_settings
from customer_api import __version__

settings = get_settings()

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": __version__
    }


@router.get("/status")
async def get_status():
    """Get system status"""
    return {
        "app_name": settings.app_name,
        "version": __version__,
        "environment": settings.environment,
        "search_unknown_field_policy": settings.search_unknown_field_policy,
        "newsletter_cache_ttl_seconds": settings.newsletter_cache_ttl_seconds,
        "timestamp": datetime.utcnow().isoformat()
    }
