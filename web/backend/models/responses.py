#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"


class ProcessCandidateResponse(BaseModel):
    """Result of a triggered processing run."""
    ok: bool
    error: Optional[str] = None


class NotifyStatusResponse(BaseModel):
    """Result of a status email request. ``sent`` is False when the email failed or is disabled."""
    ok: bool
    sent: bool
