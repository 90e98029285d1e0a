from __future__ import annotations

import json
import logging
import sys
import time
from typing import Literal, Optional, Union

ENGINE_LOGGER = "echosoul"
# extra={"user_id": ...} on engine log calls; surfaced by both formats
PROFILE_FIELD = "user_id"


def _json_formatter(record: logging.LogRecord) -> str:
    payload = {
        "ts": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
        "level": record.levelname,
        "logger": record.name,
        "msg": record.getMessage(),
    }
    user_id = getattr(record, PROFILE_FIELD, None)
    if user_id:
        payload[PROFILE_FIELD] = user_id
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    return json.dumps(payload, ensure_ascii=False)


class JsonStreamHandler(logging.StreamHandler):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


class ConsoleFormatter(logging.Formatter):
    """Plain console lines, tagged with the profile when the call carried one."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        user_id = getattr(record, PROFILE_FIELD, None)
        return f"{line} [user={user_id}]" if user_id else line


def profile_extra(user_id: Optional[str]) -> dict:
    return {PROFILE_FIELD: user_id} if user_id else {}


def _as_level(value: Union[int, str, None], fallback: int) -> int:
    if value is None or value == "":
        return fallback
    if isinstance(value, int):
        return value
    resolved = logging.getLevelName(str(value).upper())
    return resolved if isinstance(resolved, int) else fallback


def setup_logging(
    level: int = logging.INFO,
    fmt: Literal["console", "json"] = "console",
    engine_level: Union[int, str, None] = None,
) -> None:
    """
    Configure root, uvicorn and the ``echosoul`` engine loggers. Idempotent.
    ``engine_level`` overrides the level of ``echosoul.*`` only (e.g. DEBUG
    to trace match scores without noisy uvicorn access logs).
    """
    root = logging.getLogger()
    if getattr(root, "_echosoul_logging_inited", False):
        return

    for h in list(root.handlers):
        root.removeHandler(h)

    handler: logging.Handler
    if fmt == "json":
        handler = JsonStreamHandler(stream=sys.stdout)
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ConsoleFormatter(
            "[%(levelname)s] %(asctime)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        ))

    root.setLevel(level)
    root.addHandler(handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # wipe uvicorn default handlers so we don't double log
        for h in list(logger.handlers):
            logger.removeHandler(h)
        logger.addHandler(handler)

    # engine loggers propagate to root; only their threshold differs
    logging.getLogger(ENGINE_LOGGER).setLevel(_as_level(engine_level, level))

    root._echosoul_logging_inited = True  # type: ignore[attr-defined]


__all__ = ["setup_logging", "profile_extra", "ConsoleFormatter", "JsonStreamHandler", "ENGINE_LOGGER"]
