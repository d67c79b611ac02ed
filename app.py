#!/usr/bin/env python3
"""
Main entry point for the Shorty redirect service.

Concurrency: requests are served by uvicorn's event loop; store operations
are offloaded to the thread pool and serialized by the store's reader/writer
lock. Snapshot writes run on the store's own background thread. Run a single
worker process: the store is an in-process map backed by one file.

Usage:
    python app.py

Environment variables:
    STORE_PATH - Snapshot file path (default urls.json)
    HOST - Host to bind to
    PORT - Port to listen on
    LOG_LEVEL - Logging level
    LOG_FILE - Optional log file
    LOG_JSON - Set to 'true' for JSON log lines
    FLUSH_TIMEOUT_SECONDS - Wait for pending snapshot writes on shutdown
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool

from config import load_config
from shorty.store import URLStore
from shorty.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger
    store = app.state.store

    logger.info(f"Serving {len(store)} short keys from {store.path}")

    yield

    logger.info("Shutting down Shorty, flushing pending snapshot...")

    flushed = await run_in_threadpool(store.flush, config.flush_timeout_seconds)
    if not flushed:
        logger.warning(
            f"Snapshot not flushed within {config.flush_timeout_seconds}s; "
            f"latest keys may be missing from {store.path}"
        )

    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Shorty URL Redirect Service")
    logger.info(f"Configuration: {config.model_dump()}")

    store = URLStore(config.store_path, logger=logger.getChild("store"))

    app = create_app(store=store, config=config)
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting Shorty API on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
