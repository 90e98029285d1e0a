from __future__ import annotations

import logging
from typing import Literal, cast
from fastapi import FastAPI

from echosoul.core.config import get_settings
from echosoul.core.logging import setup_logging
from echosoul.domain.training.catalog import get_catalog

log = logging.getLogger("echosoul.core")


def _startup_health() -> None:
    """
    Best-effort “are the basics alive” checks.
    Never raises; logs warnings so the app still boots in dev.
    """
    size = len(get_catalog().list_questions())
    if size == 0:
        log.warning("question catalog is empty (training will report exhausted)")
    else:
        log.info("question catalog ready (%d questions)", size)


def register_lifecycle(app: FastAPI) -> None:
    """
    Registers startup/shutdown hooks on the FastAPI app.
    """
    settings = get_settings()
    fmt: Literal["console", "json"] = cast(Literal["console", "json"], settings.LOG_FORMAT)
    setup_logging(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        fmt=fmt,
        engine_level=settings.ENGINE_LOG_LEVEL or None,
    )

    @app.on_event("startup")
    async def _on_startup() -> None:  # noqa: D401
        log.info("starting %s (env=%s)", settings.APP_NAME, settings.ENV)
        _startup_health()

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:  # noqa: D401
        log.info("shutting down %s", settings.APP_NAME)
