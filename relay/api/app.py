"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, route registration and the component lifespan.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from relay import __version__
from relay.api.dependencies import get_orchestrator, get_settings, reset_dependencies
from relay.api.exceptions import RelayAPIError, status_for
from relay.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from relay.api.routes import register_routes
from relay.errors import RelayError, ReplyIncomplete
from relay.observability.logging import get_logger, setup_logging
from relay.observability.metrics import ERRORS

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build every component before serving; close shared clients on exit.

    A missing required setting raises ConfigurationMissing here, so the
    process refuses to start rather than failing on the first message.
    """
    get_orchestrator()
    logger.info("relay_started", version=__version__)
    try:
        yield
    finally:
        await reset_dependencies()
        logger.info("relay_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    - Structured logging from observability settings
    - CORS middleware
    - Global exception handlers producing the error envelope
    - Optional OpenTelemetry instrumentation
    - Webhook, v1 and health routes
    """
    settings = get_settings()
    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )

    app = FastAPI(
        title="Relay API",
        description="Relays chat-channel messages to an AI completion endpoint",
        version=__version__,
        lifespan=lifespan,
    )

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=settings.api.cors_allow_credentials,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    register_routes(app)

    if settings.observability.tracing.enabled:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        FastAPIInstrumentor.instrument_app(app)
        logger.info("opentelemetry_instrumentation_enabled")

    logger.info("app_created", debug=settings.debug)
    return app


def _error_response(
    status_code: int,
    code: ErrorCode,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
        status_code, code = status_for(exc)
        ERRORS.labels(type(exc).__name__).inc()

        extra = {}
        if isinstance(exc, ReplyIncomplete):
            extra = {
                "chunks_sent": exc.chunks_sent,
                "chunks_total": exc.chunks_total,
                "persisted": exc.persist_error is None,
            }
        logger.error(
            "request_failed",
            error_code=code.value,
            error_type=type(exc).__name__,
            message=exc.message,
            path=request.url.path,
            **extra,
        )
        return _error_response(status_code, code, exc.message)

    @app.exception_handler(RelayAPIError)
    async def api_error_handler(request: Request, exc: RelayAPIError) -> JSONResponse:
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            path=request.url.path,
        )
        return _error_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("validation_error", errors=exc.errors(), path=request.url.path)
        details = [
            ErrorDetail(
                field=".".join(str(loc) for loc in error["loc"]),
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        return _error_response(
            400, ErrorCode.INVALID_REQUEST, "Request validation failed", details
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        ERRORS.labels(type(exc).__name__).inc()
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _error_response(500, ErrorCode.INTERNAL_ERROR, "An unexpected error occurred")
