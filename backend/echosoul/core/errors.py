"""
Engine error taxonomy.

Every public engine operation either applies its whole state transition or
raises one of these. The HTTP layer maps ``status_code``/``code`` onto JSON
error payloads.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class EngineError(Exception):
    code: str = "engine_error"
    status_code: int = 400

    def __init__(self, message: str, **meta: Any):
        super().__init__(message)
        self.message = message
        self.meta: Dict[str, Any] = meta

    def to_dict(self, request_id: Optional[str] = None) -> Dict[str, Any]:
        out: Dict[str, Any] = {"error": self.code, "message": self.message}
        if self.meta:
            out["meta"] = self.meta
        if request_id:
            out["request_id"] = request_id
        return out


class NotFoundError(EngineError):
    """Profile, question, knowledge entry or memory is absent."""
    code = "not_found"
    status_code = 404


class ExhaustedError(EngineError):
    """No unanswered questions remain."""
    code = "exhausted"
    status_code = 409


class NotEnoughTrainingError(ExhaustedError):
    """Deploy requested before enough questions were answered."""
    code = "not_enough_training"


class NotDeployedError(EngineError):
    """Chat target has not opted into being queried."""
    code = "not_deployed"
    status_code = 403


class InvalidInputError(EngineError):
    code = "invalid_input"
    status_code = 422


__all__ = [
    "EngineError",
    "NotFoundError",
    "ExhaustedError",
    "NotEnoughTrainingError",
    "NotDeployedError",
    "InvalidInputError",
]
