"""Candidate evaluation pipeline: submission gate, processor and poll loop."""
from pipeline.processor import CandidateProcessor
from pipeline.results import BatchResult, ProcessResult
from pipeline.runner import PollingWorker, run_batch
from pipeline.submission import (
    DuplicateApplicationError,
    JobNotFoundError,
    NewApplication,
    SubmissionError,
    SubmissionResult,
    submit_application,
)

__all__ = [
    'CandidateProcessor',
    'BatchResult',
    'ProcessResult',
    'PollingWorker',
    'run_batch',
    'DuplicateApplicationError',
    'JobNotFoundError',
    'NewApplication',
    'SubmissionError',
    'SubmissionResult',
    'submit_application',
]
