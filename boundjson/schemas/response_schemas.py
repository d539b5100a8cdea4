from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class JSONEnvelope(BaseModel):
    error: bool = False
    message: str = ""
    data: Any = None

    def to_payload(self) -> dict[str, Any]:
        # data is left out entirely when unset, never sent as null
        payload: dict[str, Any] = {"error": self.error, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload
