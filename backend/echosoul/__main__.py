# backend/echosoul/__main__.py
from __future__ import annotations

import argparse
import os

from echosoul.core.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the EchoSoul API server")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    parser.add_argument("--reload", action="store_true", default=settings.DEBUG)
    args = parser.parse_args()

    import uvicorn
    uvicorn.run(
        "echosoul.interfaces.http.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    main()
