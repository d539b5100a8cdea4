from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from boundjson.api.middleware import get_request_id
from boundjson.core.codec import error_json, read_json, success_json
from boundjson.core.logger import get_logger
from boundjson.domain.greeter import GrumpyGreeterError, new_event, new_greeter, new_message
from boundjson.schemas.request_schemas import GreetingRequest

router = APIRouter()
logger = get_logger(__name__)


@router.post("/greetings")
async def create_greeting(request: Request, request_id: str = Depends(get_request_id)):
    payload = await read_json(request, GreetingRequest)
    greeter = new_greeter(new_message(payload.message))
    logger.info("api.greetings.create", request_id=request_id, grumpy=greeter.grumpy)
    try:
        event = new_event(greeter)
    except GrumpyGreeterError as exc:
        return error_json(exc, 409)

    greeting = event.start()
    data = {"greeting": str(greeting), "grumpy": greeter.grumpy}
    return success_json("greeting created", data, 201, {"Cache-Control": "no-store"})
