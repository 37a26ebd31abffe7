"""API route handlers."""

from .worker import router as worker_router
