from __future__ import annotations
from typing import Optional, Dict, Any
from pydantic import BaseModel

class HealthResponse(BaseModel):
    ok: bool = True
    version: Optional[str] = None
    questions: Optional[int] = None
    profiles: Optional[int] = None

class ErrorResponse(BaseModel):
    error: str
    message: str
    request_id: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None
