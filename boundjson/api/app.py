from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from boundjson.api.middleware import register_exception_handlers, register_middleware
from boundjson.api.router import api_router
from boundjson.config.settings import settings
from boundjson.core.logger import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    logger.info(
        "app.startup",
        env=settings.APP_ENV,
        version=settings.APP_VERSION,
        max_json_body_bytes=settings.MAX_JSON_BODY_BYTES,
    )
    yield
    logger.info("app.shutdown")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Bounded JSON Service",
        version=settings.APP_VERSION,
        description="Bounded JSON request decoding and enveloped JSON responses",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_middleware(app)
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
