"""API route registration."""

from fastapi import APIRouter, FastAPI

from relay.observability.logging import get_logger

logger = get_logger(__name__)


def create_v1_router() -> APIRouter:
    """Create the v1 router for operator-facing endpoints."""
    from relay.api.routes.sessions import router as sessions_router
    from relay.api.routes.templates import router as templates_router

    router = APIRouter(prefix="/v1")
    router.include_router(sessions_router, tags=["Sessions"])
    router.include_router(templates_router, tags=["Templates"])
    return router


def register_routes(app: FastAPI) -> None:
    """Register all routes with the FastAPI application."""
    from relay.api.routes.health import router as health_router
    from relay.api.routes.webhooks import router as webhooks_router

    app.include_router(webhooks_router, tags=["Webhooks"])
    app.include_router(create_v1_router())
    app.include_router(health_router, tags=["Health"])

    logger.debug("routes_registered", routes=["webhooks", "sessions", "templates", "health"])
