#!/usr/bin/env python3
"""
Worker endpoints - process a candidate now, send status-change emails.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.app_context import AppContext
from pipeline.processor import NOT_PENDING_ERROR, CandidateProcessor
from ..dependencies import (
    get_app_context,
    get_processor,
    get_session_factory,
    require_worker_secret,
)
from ..exceptions import CandidateNotFoundException
from ..models.requests import NotifyStatusRequest, ProcessCandidateRequest
from ..models.responses import HealthResponse, NotifyStatusResponse, ProcessCandidateResponse
from ..services import StatusEmailService
from ..utils import parse_candidate_id

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

# Overridden from config by configure_trigger_rate_limit()
_trigger_rate_limit = "120/minute"

router = APIRouter(tags=["worker"])


def configure_trigger_rate_limit(value: str) -> None:
    global _trigger_rate_limit
    _trigger_rate_limit = value


def _current_trigger_rate_limit() -> str:
    return _trigger_rate_limit


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": str(exc)}
    )


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return HealthResponse(status="ok")


@router.post(
    "/process",
    response_model=ProcessCandidateResponse,
    dependencies=[Depends(require_worker_secret)],
)
@limiter.limit(_current_trigger_rate_limit)
def process_candidate_endpoint(
    request: Request,
    body: ProcessCandidateRequest,
    processor: CandidateProcessor = Depends(get_processor),
):
    """
    Process one candidate synchronously.

    Fails with 400 when the candidate is missing, deleted or already
    processed; processing an already-scored candidate never re-scores it.
    """
    candidate_id = parse_candidate_id(body.candidate_id)
    if candidate_id is None:
        result_error = NOT_PENDING_ERROR
    else:
        result = processor.process_candidate(candidate_id, skip_emails=body.skip_emails)
        if result.ok:
            return ProcessCandidateResponse(ok=True)
        result_error = result.error

    return JSONResponse(
        status_code=400,
        content=ProcessCandidateResponse(ok=False, error=result_error).model_dump(),
    )


@router.post(
    "/notify-status",
    response_model=NotifyStatusResponse,
    dependencies=[Depends(require_worker_secret)],
)
@limiter.limit(_current_trigger_rate_limit)
def notify_status_endpoint(
    request: Request,
    body: NotifyStatusRequest,
    ctx: AppContext = Depends(get_app_context),
    session_factory=Depends(get_session_factory),
):
    """
    Send the schedule-interview or rejection email for a candidate.

    A schedule-interview email that goes out stamps
    ``schedule_interview_email_sent_at`` on the candidate.
    """
    candidate_id = parse_candidate_id(body.candidate_id)
    if candidate_id is None:
        raise CandidateNotFoundException(f"Candidate {body.candidate_id} not found")

    service = StatusEmailService(ctx.notification_service, session_factory)
    sent = service.send_status_email(candidate_id, body.status)
    return NotifyStatusResponse(ok=True, sent=sent)
