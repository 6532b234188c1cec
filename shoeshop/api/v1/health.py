# shoeshop/api/v1/health.py
import logging

from fastapi import APIRouter, Depends, Request

from shoeshop.api.deps import get_settings
from shoeshop.core.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health(request: Request, settings: Settings = Depends(get_settings)):
    storage = request.app.state.storage
    try:
        with storage.session_scope() as repository:
            shoes = len(repository.list_shoes())
        db_status = "connected"
    except Exception as e:
        logger.error(f"❌ Health check failed: {e}")
        shoes = 0
        db_status = "error"

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "environment": settings.ENVIRONMENT,
        "version": settings.VERSION,
        "storage": f"{storage.backend.value} ({db_status})",
        "shoes": shoes,
    }
