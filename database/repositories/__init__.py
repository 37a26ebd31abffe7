from database.repositories.base import BaseRepository
from database.repositories.candidate import CandidateRepository
from database.repositories.job import JobRepository

__all__ = [
    'BaseRepository',
    'CandidateRepository',
    'JobRepository',
]
