from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class ProcessResult:
    """Outcome of one pass of the processing algorithm over a candidate."""
    ok: bool
    candidate_id: Any = None
    error: Optional[str] = None
    fit_score: Optional[int] = None
    status: Optional[str] = None
    emails_sent: bool = False

    @classmethod
    def failure(cls, candidate_id: Any, error: str) -> "ProcessResult":
        return cls(ok=False, candidate_id=candidate_id, error=error)


@dataclass
class BatchResult:
    """Summary of one poll cycle."""
    picked: int = 0
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    execution_time: float = 0.0
    errors: List[str] = field(default_factory=list)
