# app/main.py

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from app.core.config import Settings
from app.core.database import Database
from app.core.exceptions import register_exception_handlers
from app.core.logging_config import configure_logging

# --- Routers ---
from app.api.health     import router as health_router
from app.api.users      import router as users_router
from app.api.onboarding import router as onboarding_router
from app.api.admin      import router as admin_router

logger = logging.getLogger("reddyfit")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
}


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or Settings()
    database = database or Database(
        settings.database_url,
        pool_size=settings.db_pool_size,
        timeout_seconds=settings.db_timeout_seconds,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Starting ReddyFit API")
        logger.info(f"📋 Configuration: {settings!r}")

        # A store that is unreachable at boot aborts startup
        logger.info("🔄 Connecting to database...")
        try:
            await run_in_threadpool(database.ping)
        except Exception as e:
            logger.critical(f"💥 Failed to start server, database unreachable: {e}")
            raise
        logger.info("✅ Database connected successfully!")
        logger.info(f"🎉 Application startup complete ({settings.environment})")

        yield

        logger.info("⚠️  Shutting down, closing database connection...")
        database.dispose()

    app = FastAPI(
        title       = "ReddyFit API",
        version     = "1.0.0",
        description = "User profiles and onboarding questionnaire for ReddyFit",
        lifespan    = lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.started_at = time.monotonic()

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        logger.info(f"📥 Incoming request: {request.method} {request.url.path}")

        response = await call_next(request)

        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)

        process_time = time.time() - start_time
        logger.info(f"✅ Request completed in {process_time:.3f}s with status {response.status_code}")
        return response

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins     = settings.cors_origins,
        allow_credentials = True,
        allow_methods     = ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers     = ["Content-Type", "Authorization"],
    )

    register_exception_handlers(app, expose_errors=settings.is_development)

    # --- Include all routers ---
    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(onboarding_router)
    app.include_router(admin_router)

    return app


_settings = Settings()
configure_logging(_settings.log_level, _settings.log_file)
logger.info(f"Logging configured at {_settings.log_level} level")

app = create_app(_settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=_settings.port)
