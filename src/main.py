"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from infrastructure.database.session import engine

logger = structlog.get_logger()

setup_logging()

API_DESCRIPTION = """\
## Location-based Marketplace Directory

Providers publish profiles and services; clients discover them by location,
category and text, review them and message them.

### Authentication
Write endpoints require a bearer JWT issued by the identity provider:
```
Authorization: Bearer <your_token>
```

### Rate Limits
Every endpoint is rate limited per client address. Reads allow 30-120
requests per minute, writes 5-30.
"""

OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness and database checks"},
    {"name": "profiles", "description": "Directory search and profile management"},
    {"name": "services", "description": "Services offered by providers"},
    {"name": "reviews", "description": "Client reviews of providers"},
    {"name": "messages", "description": "Direct messages and conversations"},
    {"name": "notifications", "description": "In-app notifications"},
    {"name": "admin", "description": "Statistics and moderation"},
    {"name": "visits", "description": "Site visit tracking"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(
        "application_started",
        app_name=settings.app_name,
        environment=settings.app_env,
        rate_limit_enabled=settings.rate_limit_enabled,
    )
    yield
    await engine.dispose()
    logger.info("application_stopped")


def install_middleware(app: FastAPI) -> None:
    """Register middleware. Starlette wraps in reverse, so CORS ends up outermost."""
    app.add_middleware(SlowAPIMiddleware)
    for middleware in (
        RequestLoggingMiddleware,
        SecurityHeadersMiddleware,
        RequestIDMiddleware,
    ):
        app.add_middleware(middleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description=API_DESCRIPTION,
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    install_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
