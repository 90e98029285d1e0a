# backend/echosoul/interfaces/http/main.py
from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging
import traceback
import uuid

from echosoul.core.config import get_settings
from echosoul.core.errors import EngineError
from echosoul.core.events import register_lifecycle

logger = logging.getLogger("echosoul")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.APP_NAME, version="0.1.0")
    register_lifecycle(app)

    allowed_origins = [
        "http://localhost:3000",      # Local development
        "http://localhost:3001",      # Local development alternative
    ]
    if settings.ALLOWED_ORIGINS:
        allowed_origins.extend(o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins if settings.ENV == "production" else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # simple liveness
    @app.get("/_/ping")
    def _ping():
        return {"ok": True}

    # Every handler generates a request_id so client errors can be matched
    # with server logs.

    @app.exception_handler(EngineError)
    async def engine_error_handler(request: Request, exc: EngineError):
        req_id = str(uuid.uuid4())
        logger.warning("EngineError %s %s %s", req_id, exc.code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(request_id=req_id))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        req_id = str(uuid.uuid4())
        logger.warning("HTTPException %s %s %s", req_id, exc.status_code, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "http_error",
                "status_code": exc.status_code,
                "message": exc.detail,
                "request_id": req_id,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        req_id = str(uuid.uuid4())
        logger.warning("ValidationError %s %s", req_id, exc)
        return JSONResponse(
            status_code=422,
            content={
                "error": "validation_error",
                "message": "Invalid request payload",
                "details": exc.errors(),
                "request_id": req_id,
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        req_id = str(uuid.uuid4())
        # Log full traceback server-side for troubleshooting
        tb = traceback.format_exc()
        logger.error("Unhandled exception %s %s\n%s", req_id, exc, tb)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "type": exc.__class__.__name__,
                "message": str(exc),
                "request_id": req_id,
            },
        )

    from echosoul.interfaces.http.routers import api
    app.include_router(api)

    return app

app = create_app()
