from __future__ import annotations

import os
from typing import Final

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from code_explainer.api.routes import error_response, router as api_router
from code_explainer.core.logging import setup_logging


async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response("Invalid request body", status.HTTP_400_BAD_REQUEST)


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(
        title="Code Explainer API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.add_exception_handler(RequestValidationError, _invalid_body)

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(api_router, prefix="/api")
    return app


app: Final[FastAPI] = create_app()


def run() -> None:
    """Serve the code explainer endpoint with Uvicorn.

    Installed as ``code-explainer-server``. Binds to HOST/PORT (default
    127.0.0.1:8000, matching the default CODE_EXPLAINER_URL that sessions post to).
    """
    import uvicorn

    host: str = os.environ.get("HOST", "127.0.0.1")
    port_str: str | None = os.environ.get("PORT")
    port: int = int(port_str) if port_str else 8000
    uvicorn.run("code_explainer.main:app", host=host, port=port, log_level="info")
