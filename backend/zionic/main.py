"""Punto de entrada principal para la aplicación FastAPI."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zionic.api.routes.auth import router as auth_router
from zionic.api.routes.conversation import router as conversation_router
from zionic.api.routes.health import router as health_router
from zionic.core.config import settings
from zionic.core.logging import configure_logging, get_logger, resolve_log_level
from zionic.core.middleware import RequestLoggingMiddleware
from zionic.core.security import mask_secret


def create_app() -> FastAPI:
    """Crea y configura la instancia de FastAPI."""
    default_log_level = logging.DEBUG if settings.environment != "production" else logging.INFO
    configure_logging(
        level=resolve_log_level(settings.log_level, default=default_log_level),
        log_file=settings.log_file_path,
        service=settings.service_name,
    )

    app = FastAPI(title=settings.service_name, version=settings.service_version, root_path="/api")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(conversation_router)

    get_logger("zionic").info(
        "app.configured",
        extra={
            "environment": settings.environment,
            "evolution_api_url": settings.evolution_api_url,
            "evolution_api_key": mask_secret(settings.evolution_api_key),
        },
    )
    return app


app = create_app()
