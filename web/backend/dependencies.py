#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.

Everything the routes need is attached to ``app.state`` by ``create_app``.
"""

import hmac
from typing import Optional

from fastapi import Header, HTTPException, Request

from core.app_context import AppContext
from pipeline.processor import CandidateProcessor
from .exceptions import WorkerNotConfiguredException


def get_app_context(request: Request) -> AppContext:
    return request.app.state.ctx


def get_processor(request: Request) -> CandidateProcessor:
    return request.app.state.processor


def get_session_factory(request: Request):
    """The sessionmaker routes should use (None means the default one)."""
    return request.app.state.session_factory


def require_worker_secret(
    request: Request,
    authorization: Optional[str] = Header(default=None),
) -> None:
    """
    Check the ``Authorization: Bearer <secret>`` header.

    Raises:
        WorkerNotConfiguredException: No secret configured (500).
        HTTPException: Missing or wrong secret (401).
    """
    secret = request.app.state.ctx.config.web.worker_secret
    if not secret:
        raise WorkerNotConfiguredException("Worker secret is not configured")

    expected = f"Bearer {secret}"
    if not authorization or not hmac.compare_digest(authorization.encode(), expected.encode()):
        raise HTTPException(status_code=401, detail="Unauthorized")
