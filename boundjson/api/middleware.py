from __future__ import annotations

import time
import uuid

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from boundjson.core.codec import error_json
from boundjson.core.errors import CodecError
from boundjson.core.logger import get_logger

logger = get_logger(__name__)


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "") or "req_local"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request.state.request_id = f"req_{uuid.uuid4().hex[:12]}"
        start = time.time()
        logger.info(
            "http.request.start",
            request_id=request.state.request_id,
            method=request.method,
            path=request.url.path,
            query=str(request.url.query),
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "http.request.error",
                request_id=request.state.request_id,
                method=request.method,
                path=request.url.path,
            )
            raise
        duration = time.time() - start
        response.headers["X-Request-Id"] = request.state.request_id
        response.headers["X-Process-Time"] = f"{duration:.4f}"
        logger.info(
            "http.request.end",
            request_id=request.state.request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
        return response


async def codec_error_handler(request: Request, exc: CodecError):
    logger.warning(
        "codec.error",
        request_id=getattr(request.state, "request_id", None),
        path=request.url.path,
        code=exc.code,
        status_code=exc.status_code,
        message=exc.message,
    )
    return error_json(exc, exc.status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    headers = [exc.headers] if exc.headers else []
    return error_json(exc.detail, exc.status_code, *headers)


def register_middleware(app: FastAPI) -> None:
    app.add_middleware(RequestContextMiddleware)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CodecError, codec_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
