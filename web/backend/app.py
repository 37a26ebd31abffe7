#!/usr/bin/env python3
"""
Candidate Worker API - FastAPI Application

Trigger endpoints used by the application layer:
    - POST /process        process one candidate now
    - POST /notify-status  send a status-change email
    - GET  /health

Usage:
    python main.py --mode api
"""

import logging

from fastapi import FastAPI, HTTPException

from core.app_context import AppContext
from pipeline.processor import CandidateProcessor
from .exceptions import (
    ServiceException,
    service_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import worker_router
from .routers.worker import add_rate_limit_handlers, configure_trigger_rate_limit

logger = logging.getLogger(__name__)


def create_app(ctx: AppContext, session_factory=None) -> FastAPI:
    """
    Build the worker API.

    Args:
        ctx: Wired application context
        session_factory: Optional sessionmaker (tests pass an SQLite one)
    """
    app = FastAPI(
        title="Candidate Worker API",
        description="Triggers for candidate scoring and status emails",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.ctx = ctx
    app.state.session_factory = session_factory
    app.state.processor = CandidateProcessor(
        extractor=ctx.extractor,
        scoring_service=ctx.scoring_service,
        notification_service=ctx.notification_service,
        session_factory=session_factory,
    )

    # Configure rate limiting
    configure_trigger_rate_limit(ctx.config.web.trigger_rate_limit)
    add_rate_limit_handlers(app)

    # Register exception handlers
    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(worker_router)

    return app


def run_server(ctx: AppContext) -> None:
    """Run the API with uvicorn (blocking)."""
    import uvicorn

    host, port = ctx.config.web.host, ctx.config.web.port
    logger.info(f"Starting worker API on {host}:{port}")
    logger.info(f"API Docs: http://{host}:{port}/docs")

    uvicorn.run(create_app(ctx), host=host, port=port, log_level="info")
