from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from boundjson.api.middleware import get_request_id
from boundjson.core.codec import read_json, success_json
from boundjson.core.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/echo")
async def echo(request: Request, request_id: str = Depends(get_request_id)):
    document = await read_json(request)
    logger.info("api.echo", request_id=request_id, kind=type(document).__name__)
    return success_json("document received", document)
