from fastapi import APIRouter

from boundjson.api.routes.echo import router as echo_router
from boundjson.api.routes.greetings import router as greetings_router
from boundjson.api.routes.system import router as system_router

api_router = APIRouter()
api_router.include_router(echo_router, tags=["echo"])
api_router.include_router(greetings_router, tags=["greetings"])
api_router.include_router(system_router, tags=["system"])
