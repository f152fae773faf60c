"""
Firebase Backend - FastAPI Application

Bootstraps the Firebase Admin SDK at startup and serves the endpoints that use
its Firestore and Auth clients.

Usage:
    uvicorn backend.api.main:app --reload --host 0.0.0.0 --port 8000

Docs:
    http://localhost:8000/docs (Swagger UI)
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import logging
import os
import time

from backend import __version__
from backend.api.routers import auth, health
from backend.core.config import load_settings
from backend.core.exceptions import (
    ConfigError,
    FirebaseNotInitializedError,
    config_error_handler,
    internal_error_handler,
    not_found_handler,
)
from backend.core.firebase import FirebaseServices, init_firebase
from backend.core.logging import setup_logger

logger = logging.getLogger(__name__)

_DEFAULT_CORS = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"


def create_app(services: Optional[FirebaseServices] = None) -> FastAPI:
    """
    Build the FastAPI application.

    ``services`` injects already-built Firebase clients; when omitted the
    lifespan initializes them from the environment. A configuration error
    aborts startup instead of serving requests without Firebase.
    """
    settings = load_settings()  # also loads .env, so CORS_ORIGINS below sees it

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logger(settings.log_level)
        logger.info("Firebase Backend API starting...")

        app.state.firebase = services if services is not None else init_firebase(settings)
        logger.info(f"Firebase ready (project={app.state.firebase.project_id})")

        yield

        logger.info("Firebase Backend API shutting down...")

    app = FastAPI(
        title="Firebase Backend API",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS – configurable via .env CORS_ORIGINS, comma-separated
    cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", _DEFAULT_CORS).split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(f"{request.method} {request.url.path} [{response.status_code}] ({process_time:.3f}s)")
        response.headers["X-Process-Time"] = str(process_time)
        return response

    app.add_exception_handler(404, not_found_handler)
    app.add_exception_handler(500, internal_error_handler)
    app.add_exception_handler(ConfigError, config_error_handler)
    app.add_exception_handler(FirebaseNotInitializedError, config_error_handler)

    app.include_router(health.router, tags=["Health"])
    app.include_router(auth.router, prefix="/auth", tags=["Auth"])

    return app


app = create_app()
