"""Bounded JSON request/response helpers.

Request bodies are read under a hard byte ceiling and must hold exactly one
JSON document. Responses are serialized up front, so a value that cannot be
encoded never produces a half-written response.
"""

from __future__ import annotations

import codecs
import json
import re
from collections.abc import Iterable, Mapping
from functools import lru_cache
from typing import Any, BinaryIO

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python
from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.responses import Response

from boundjson.config.settings import settings
from boundjson.core.errors import (
    MalformedJSONError,
    MultipleDocumentsError,
    SerializationFailedError,
    TooLargeError,
)
from boundjson.schemas.response_schemas import JSONEnvelope

MAX_JSON_BYTES = 1048576
JSON_CONTENT_TYPE = "application/json"

HeaderValue = str | Iterable[str]
HeaderSet = Mapping[str, HeaderValue]

_WHITESPACE = re.compile(r"[ \t\n\r]*")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


_decoder = json.JSONDecoder(parse_constant=_reject_constant)


def _limit(max_bytes: int | None) -> int:
    if max_bytes is None:
        return settings.MAX_JSON_BODY_BYTES
    if max_bytes <= 0:
        raise ValueError("max_bytes must be positive")
    return max_bytes


@lru_cache(maxsize=128)
def _adapter_for(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def _skip_whitespace(text: str, pos: int) -> int:
    return _WHITESPACE.match(text, pos).end()


def _decode_text(raw: bytes, truncated: bool) -> str:
    # a body cut at the ceiling may end inside a multi-byte sequence
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        return decoder.decode(raw, final=not truncated)
    except UnicodeDecodeError as exc:
        raise MalformedJSONError("request body is not valid UTF-8") from exc


def _validate(document: Any, target: Any) -> Any:
    if target is Any:
        return document
    try:
        return _adapter_for(target).validate_python(document)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(part) for part in first.get("loc", ()))
        where = f" for field {loc!r}" if loc else ""
        raise MalformedJSONError(f"request body contains an invalid value{where}: {first['msg']}") from exc


def decode_document(raw: bytes, target: Any = Any, *, truncated: bool = False) -> Any:
    """Decode exactly one JSON document from ``raw`` into ``target``.

    ``truncated`` tells whether the body was cut at the byte ceiling. Anything
    that cannot be fully parsed from a truncated body is reported as too large;
    a complete second value is always reported as multiple documents.
    """
    text = _decode_text(raw, truncated)
    start = _skip_whitespace(text, 0)
    if start == len(text):
        if truncated:
            raise TooLargeError()
        raise MalformedJSONError("request body must not be empty")

    try:
        document, end = _decoder.raw_decode(text, start)
    except json.JSONDecodeError as exc:
        if truncated:
            raise TooLargeError() from exc
        raise MalformedJSONError(
            f"request body contains badly-formed JSON (at character {exc.pos}): {exc.msg}"
        ) from exc
    except (ValueError, RecursionError) as exc:
        # nesting too deep for the scanner, or an integer past the digit limit
        if truncated:
            raise TooLargeError() from exc
        raise MalformedJSONError(f"request body contains badly-formed JSON: {exc}") from exc

    rest = _skip_whitespace(text, end)
    if rest < len(text):
        if not truncated:
            raise MultipleDocumentsError()
        try:
            _decoder.raw_decode(text, rest)
        except (ValueError, RecursionError) as exc:
            raise TooLargeError() from exc
        raise MultipleDocumentsError()
    if truncated:
        raise TooLargeError()

    return _validate(document, target)


def read_limited(stream: BinaryIO, max_bytes: int | None = None) -> tuple[bytes, bool]:
    """Read at most ``max_bytes`` from ``stream``; the flag is set when more was pending."""
    limit = _limit(max_bytes)
    chunks: list[bytes] = []
    size = 0
    # one byte past the ceiling is enough to tell the body was cut
    while size <= limit:
        chunk = stream.read(limit + 1 - size)
        if not chunk:
            break
        chunks.append(chunk)
        size += len(chunk)
    raw = b"".join(chunks)
    return raw[:limit], size > limit


def decode_json(stream: BinaryIO, target: Any = Any, *, max_bytes: int | None = None) -> Any:
    """Decode a blocking binary stream into ``target`` under the configured byte ceiling."""
    raw, truncated = read_limited(stream, max_bytes)
    return decode_document(raw, target, truncated=truncated)


async def read_request_limited(request: Request, max_bytes: int | None = None) -> tuple[bytes, bool]:
    limit = _limit(max_bytes)
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise TooLargeError()

    buffer = bytearray()
    truncated = False
    async for chunk in request.stream():
        room = limit - len(buffer)
        if len(chunk) > room:
            buffer += chunk[:room]
            truncated = True
            break
        buffer += chunk
    return bytes(buffer), truncated


async def read_json(request: Request, target: Any = Any, *, max_bytes: int | None = None) -> Any:
    """Decode the request body into ``target`` under the configured byte ceiling."""
    raw, truncated = await read_request_limited(request, max_bytes)
    return decode_document(raw, target, truncated=truncated)


def to_json_bytes(data: Any) -> bytes:
    try:
        out = json.dumps(
            data,
            default=to_jsonable_python,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationFailedError(f"response value could not be serialized to JSON: {exc}") from exc
    return out.encode("utf-8")


def _apply_header(headers: MutableHeaders, name: str, value: HeaderValue) -> None:
    if isinstance(value, str):
        headers[name] = value
        return
    if name in headers:
        del headers[name]
    for item in value:
        headers.append(name, item)


def write_json(status_code: int, data: Any, *headers: HeaderSet) -> Response:
    """Build a JSON response; header sets apply in order, Content-Type is always JSON."""
    body = to_json_bytes(data)
    response = Response(content=body, status_code=status_code)
    for header_set in headers:
        for name, value in header_set.items():
            _apply_header(response.headers, name, value)
    response.headers["content-type"] = JSON_CONTENT_TYPE
    return response


def error_json(err: BaseException | str, status_code: int | None = None, *headers: HeaderSet) -> Response:
    code = status_code if status_code is not None else settings.DEFAULT_ERROR_STATUS
    envelope = JSONEnvelope(error=True, message=str(err))
    return write_json(code, envelope.to_payload(), *headers)


def success_json(message: str, data: Any = None, status_code: int = 200, *headers: HeaderSet) -> Response:
    envelope = JSONEnvelope(error=False, message=message, data=data)
    return write_json(status_code, envelope.to_payload(), *headers)
