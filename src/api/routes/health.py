"""
Health check endpoints.
"""

from typing import Any, Dict

from fastapi import APIRouter

from config.settings import get_settings


router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> Dict[str, Any]:
    """Basic health check with the bits of configuration worth seeing."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "outfit-recommender",
        "environment": settings.environment,
        "catalog_path": str(settings.catalog_path),
        "intent_planner": settings.intent_planner_enabled and bool(settings.openai_api_key),
    }


@router.get("/live")
def liveness_check() -> Dict[str, str]:
    """Kubernetes-style liveness probe."""
    return {"status": "alive"}
