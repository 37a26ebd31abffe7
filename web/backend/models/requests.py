#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ProcessCandidateRequest(BaseModel):
    """Request to process one pending candidate now."""
    model_config = ConfigDict(populate_by_name=True)

    candidate_id: str = Field(..., alias="candidateId", min_length=1, description="Candidate id")
    skip_emails: bool = Field(
        default=False,
        alias="skipEmails",
        description="Recalculate the score without sending application emails",
    )


class NotifyStatusRequest(BaseModel):
    """Request to email a candidate about a status change."""
    model_config = ConfigDict(populate_by_name=True)

    candidate_id: str = Field(..., alias="candidateId", min_length=1, description="Candidate id")
    status: Literal["schedule_interview", "rejected"] = Field(..., description="New candidate status")
