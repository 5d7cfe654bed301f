from fastapi.encoders import jsonable_encoder
from typing import Any, Optional


def ok(data: Any = None) -> dict:
    """Uniform success envelope shared by every /api endpoint."""
    return {"ok": True, "data": jsonable_encoder(data)}


def fail(error: str, details: Optional[str] = None) -> dict:
    body = {"ok": False, "error": error}
    if details:
        body["details"] = details
    return body
