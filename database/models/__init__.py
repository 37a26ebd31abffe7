from .base import Base
from .recruiter import Recruiter, EmailPersonalization
from .job import Job
from .candidate import Candidate, CandidateStatus

__all__ = [
    'Base',
    'Recruiter',
    'EmailPersonalization',
    'Job',
    'Candidate',
    'CandidateStatus',
]
