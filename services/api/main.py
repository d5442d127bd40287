from __future__ import annotations

from urllib.parse import urlparse

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from shadecore.logging_config import setup_logging
from shadecore.settings import Settings, get_settings
from services.api.exception_handlers import register_exception_handlers
from services.api.middleware import SecurityHeadersMiddleware
from services.api.routes import router as v1_router

API_VERSION = "0.1.0"
_LOCAL_HOSTS = ("localhost", "127.0.0.1")


def _allowed_origins(ui_origin: str) -> list[str]:
    """The configured UI origin plus its localhost/127.0.0.1 twin."""
    origins = {ui_origin.rstrip("/")}
    parsed = urlparse(ui_origin)
    if parsed.hostname in _LOCAL_HOSTS:
        twin = _LOCAL_HOSTS[1] if parsed.hostname == _LOCAL_HOSTS[0] else _LOCAL_HOSTS[0]
        origins.add(ui_origin.rstrip("/").replace(parsed.hostname, twin, 1))
    return sorted(origins)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.logging)

    app = FastAPI(
        title=settings.api.title,
        version=API_VERSION,
        description="Shade sail geometry validation, pricing and order payloads",
    )

    origins = _allowed_origins(settings.api.ui_origin)
    logger.info("CORS allowed origins: {origins}", origins=origins)

    app.add_middleware(SecurityHeadersMiddleware)
    # Added last so it wraps every other middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.get("/healthz", tags=["meta"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok", "version": API_VERSION}

    app.include_router(v1_router)
    return app


app = create_app()


def run(settings: Settings | None = None) -> None:
    """Serve the API with uvicorn on the configured host and port."""
    settings = settings or get_settings()
    logger.info("Serving API on {host}:{port}", host=settings.api.host, port=settings.api.port)
    uvicorn.run(app, host=settings.api.host, port=settings.api.port, log_level=settings.logging.level.lower())


if __name__ == "__main__":
    run()


__all__ = ["app", "create_app", "run"]
