from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from claudle.app.api.claude import router as claude_router
from claudle.app.api.game import router as game_router
from claudle.app.core.config import settings
from claudle.app.core.http_client import init_http_client
from claudle.app.core.logging import get_logger, setup_logging
from claudle.app.exceptions import ClaudleException, InvalidInputError
from claudle.app.middleware.rate_limit import (
    FixedWindowRateLimiter,
    RateLimitMiddleware,
    RateLimitSweeper,
    build_route_limits,
)
from claudle.app.middleware.request_id import RequestIdMiddleware
from claudle.app.middleware.security_headers import SecurityHeadersMiddleware
from claudle.app.providers.factory import create_provider
from claudle.app.services.game_master import GameMaster


def build_rate_limiter() -> FixedWindowRateLimiter:
    """Build a limiter with its own store from the configured route table."""
    return FixedWindowRateLimiter(
        limits=build_route_limits(settings.rate_limits),
        cleanup_probability=settings.rate_limit_cleanup_probability,
    )


def create_app(
    rate_limiter: Optional[FixedWindowRateLimiter] = None,
    game_master: Optional[GameMaster] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        rate_limiter: Limiter to enforce; a fresh one from settings if omitted
        game_master: Prebuilt GameMaster; otherwise one is created on startup

    Returns:
        Configured FastAPI application instance
    """
    setup_logging()
    logger = get_logger(__name__)

    limiter = rate_limiter or build_rate_limiter()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Open the shared HTTP client and start the rate limit sweeper."""
        async with init_http_client() as http_client:
            if getattr(app.state, "game_master", None) is None:
                app.state.game_master = GameMaster(create_provider(http_client))

            sweeper = RateLimitSweeper(limiter, interval=settings.rate_limit_sweep_interval_seconds)
            await sweeper.start()
            app.state.rate_limit_sweeper = sweeper

            logger.info(
                "Application startup complete",
                extra={
                    "protected_routes": sorted(limiter.limits),
                    "coaching_enabled": settings.enable_interactive_coaching,
                    "debug_mode": settings.debug,
                },
            )

            yield

            await sweeper.stop()

        logger.info("Application shutdown complete")

    app = FastAPI(
        title="ClaudLE",
        description="Word guessing game with LLM-generated words, hints and commentary",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.rate_limiter = limiter
    app.state.game_master = game_master

    # Add middleware (order matters: last added = first executed).
    # CORS goes last so preflights and 429s carry its headers.
    app.add_middleware(
        RateLimitMiddleware,
        limiter=limiter,
        path_prefix=settings.rate_limit_path_prefix,
        trust_proxy_headers=settings.trust_proxy_headers,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-RateLimit-Limit", "X-RateLimit-Remaining", "Retry-After"],
        max_age=600,
    )

    app.include_router(claude_router)
    app.include_router(game_router)

    @app.get("/health")
    async def health() -> dict[str, Any]:
        game_master = getattr(app.state, "game_master", None)
        provider = type(game_master.provider).__name__ if game_master else None
        if game_master is None:
            provider_status = "not_initialized"
        elif await game_master.provider.health_check():
            provider_status = "ok"
        else:
            # Routes still answer with fallback replies
            provider_status = "degraded"
        return {
            "status": "ok",
            "components": {
                "rate_limiter": {
                    "status": "ok",
                    "tracked_keys": len(limiter.store),
                    "routes": sorted(limiter.limits),
                },
                "provider": {
                    "status": provider_status,
                    "type": provider,
                },
            },
        }

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error_code, "message": exc.message, "field": exc.field},
        )

    @app.exception_handler(ClaudleException)
    async def claudle_exception_handler(request: Request, exc: ClaudleException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error_code, "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed bodies are a 400 with the pydantic error list."""
        return JSONResponse(
            status_code=400,
            content={"error": "invalid_request", "details": jsonable_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Log unhandled exceptions server-side; never return a traceback."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.exception(
            f"Unhandled exception [request_id={request_id}]",
            extra={
                "request_id": request_id,
                "exception_type": type(exc).__name__,
            },
        )

        content = {
            "error": "internal_error",
            "message": "Internal server error",
            "request_id": request_id,
        }
        if settings.debug:
            content["message"] = str(exc)
            content["exception_type"] = type(exc).__name__
        return JSONResponse(status_code=500, content=content)

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]


# Create the application instance
app = create_app()
