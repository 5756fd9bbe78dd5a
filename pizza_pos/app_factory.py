"""
Application factory for the Pizza POS API.

Builds the FastAPI application: CORS, versioned and root-mounted routers,
and a health check.
"""

import logging

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS
from .routes import combos_router, menu_router, pizza_router, wings_router

logger = logging.getLogger(__name__)

ROUTERS = (menu_router, pizza_router, wings_router, combos_router)


def create_app(init_database: bool = True) -> FastAPI:
    """
    Create a FastAPI application.

    Args:
        init_database: Create missing tables on the configured database.
                       Tests pass False and supply their own session.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Pizza POS API",
        description="Pizza customization, pricing and kitchen tickets",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=CORS_ORIGINS != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if init_database:
        from .db import init_db
        init_db()

    # Include routers with API version prefix
    api_v1 = APIRouter(prefix="/api/v1")
    for router in ROUTERS:
        api_v1.include_router(router)
    app.include_router(api_v1)

    # Also mount at root
    for router in ROUTERS:
        app.include_router(router)

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    logger.info("Application created with %d routers", len(ROUTERS))
    return app
