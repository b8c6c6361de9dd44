"""Unified error envelope.

Error responses produced by AppError use this format:
{
    "code": 1006,          // non-0 error code
    "message": "...",
    "data": null,
    "timestamp": "...",
    "request_id": "..."
}

Successful /cashcards responses are NOT wrapped: they return the bare card,
the bare list, or an empty body.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")


def error_response(code: int, message: str) -> ApiResponse:
    return ApiResponse(code=code, message=message, data=None)
