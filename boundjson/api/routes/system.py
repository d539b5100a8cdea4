from __future__ import annotations

from fastapi import APIRouter, Depends

from boundjson.api.middleware import get_request_id
from boundjson.config.settings import settings
from boundjson.core.codec import success_json
from boundjson.core.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/system/health")
async def get_health(request_id: str = Depends(get_request_id)):
    logger.info("api.system.health", request_id=request_id)
    data = {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "env": settings.APP_ENV,
        "limits": {
            "max_json_body_bytes": settings.MAX_JSON_BODY_BYTES,
            "max_json_body_kb": settings.max_json_body_kb,
        },
    }
    return success_json("service is healthy", data)
