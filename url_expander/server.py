"""
HTTP server entry point for URL expander.

Usage:
    url-expander-server
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL (in-memory store if unset)
    DATABASE_CREATE_TABLES - Set to 'true' to create the links table
    REDIS_URL - Redis connection URL (optional)
    BASE_URL - Base URL for expanded links
    PORT - Port to listen on
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .common.logging_config import setup_logging
from .components import build_components
from .config import Config, load_config
from .web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build components on startup and close them on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL expander service...")
    components = await build_components(config, logger)

    app.state.store = components.store
    app.state.cache = components.cache
    app.state.service = components.service
    app.state.resolver = components.resolver

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down URL expander service...")
    await components.close()
    logger.info("Service stopped")


def build_app(config: Config, logger) -> FastAPI:
    """Create the app with components built by the lifespan handler."""
    app = create_app(
        store_instance=None,  # Set in lifespan
        cache_instance=None,
        service_instance=None,
        resolver_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    return app


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Expander Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")

    app = build_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )
    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except (OSError, RuntimeError) as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
