"""Errors raised by the bounded JSON codec.

Each error carries a machine-readable ``code`` and the HTTP status an API
handler would normally answer with. The codec only raises them; deciding the
final status and rendering the error envelope is up to the caller.
"""

from __future__ import annotations

TOO_LARGE_MESSAGE = "JSON data is too large and exceeds the maximum buffer size (1MB)"
MULTIPLE_DOCUMENTS_MESSAGE = "request body contains more than one JSON object, which is not allowed"


class CodecError(Exception):
    code = "CODEC_ERROR"
    status_code = 400
    default_message = "request body could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MalformedJSONError(CodecError):
    code = "MALFORMED_JSON"
    default_message = "request body contains badly-formed JSON"


class TooLargeError(CodecError):
    code = "TOO_LARGE"
    status_code = 413
    default_message = TOO_LARGE_MESSAGE


class MultipleDocumentsError(CodecError):
    code = "MULTIPLE_DOCUMENTS"
    default_message = MULTIPLE_DOCUMENTS_MESSAGE


class SerializationFailedError(CodecError):
    code = "SERIALIZATION_FAILED"
    status_code = 500
    default_message = "response value could not be serialized to JSON"
