from typing import Any, Optional

from sqlalchemy import select

from database.models import Job
from database.repositories.base import BaseRepository


class JobRepository(BaseRepository):
    model = Job

    def get_open_by_id(self, job_id: Any) -> Optional[Job]:
        """Return the job if it exists, is not deleted and accepts applications."""
        stmt = select(Job).where(
            Job.id == job_id,
            Job.deleted_at.is_(None),
            Job.status == 'active',
        )
        return self.db.execute(stmt).scalar_one_or_none()
