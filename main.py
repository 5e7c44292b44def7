#!/usr/bin/env python3

"""
Main application entry point for the Films API.

Architecture: FastAPI application over an async SQLAlchemy storage layer.
Key Features: Lifecycle management, database health checks, uniform error
responses, CORS configuration.
"""

import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.films import router as films_router
from app.api.http import router as http_router
from app.api.users import router as users_router
from app.config import settings
from app.db import check_db_connection, close_db, init_db
from app.middleware.error import register_error_handlers
from app.utils.logger import setup_logger

logger = setup_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup...")
    try:
        logger.info("Initializing database...")
        await init_db()

        logger.info("Checking database connectivity...")
        await check_db_connection()
        logger.info("Database connectivity confirmed.")
    except Exception as e:
        logger.critical(f"Startup error: {e}")
        raise SystemExit(f"Startup failed: {e}") from e

    logger.info("Films API startup successful.")

    yield

    logger.info("Films API shutdown...")
    await close_db()
    logger.info("Shutdown complete.")


def create_app():
    app = FastAPI(title="Films API", lifespan=lifespan)

    register_error_handlers(app)

    app.include_router(http_router)
    app.include_router(users_router)
    app.include_router(films_router)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Files handed out by the local file storage
    app.mount(
        "/storage",
        StaticFiles(directory=settings.storage_dir, check_dir=False),
        name="storage",
    )

    return app


app = create_app()


def main():
    port = int(settings.server_port)
    host = settings.server_host

    logger.info(f"Starting Films API server on {host}:{port}")

    try:
        uvicorn.run(
            "main:app", host=host, port=port, workers=settings.server_workers
        )
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
