# backend/echosoul/interfaces/http/deps/auth.py
from __future__ import annotations

from typing import Optional, Dict, Any, Annotated

from fastapi import Header, HTTPException

from echosoul.core.config import get_settings

# Identity is verified upstream; the gateway forwards the stable user id.
# NOTE: Put *no* default inside Header(); the default lives on the parameter.
UserIdHeader = Annotated[Optional[str], Header(alias="X-User-Id")]
UsernameHeader = Annotated[Optional[str], Header(alias="X-Username")]

DEV_USER_ID = "dev-user"


def _to_user(user_id: str, username: Optional[str]) -> Dict[str, Any]:
    """
    Normalize identity headers into a compact user dict the app expects.
    """
    return {"id": user_id, "username": (username or user_id).strip()}


def get_current_user(x_user_id: UserIdHeader = None, x_username: UsernameHeader = None) -> Dict[str, Any]:
    """
    Strict identity dependency. In dev, can be bypassed with DEV_BYPASS_AUTH=1.
    """
    uid = (x_user_id or "").strip()
    if not uid:
        if get_settings().DEV_BYPASS_AUTH:
            # Minimal synthetic user for local development
            return _to_user(DEV_USER_ID, x_username)
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return _to_user(uid, x_username)


__all__ = [
    "UserIdHeader",
    "get_current_user",
]
