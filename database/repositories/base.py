from datetime import datetime, timezone
from typing import Any

from sqlalchemy import update
from sqlalchemy.orm import Session


class BaseRepository:
    """Wraps a Session. Transactions are owned by the unit of work, not the repository."""

    model: Any = None

    def __init__(self, db: Session):
        self.db = db

    def _update_by_id(self, row_id: Any, *criteria, **values) -> int:
        """Single-row UPDATE that also bumps ``updated_at``. Returns the affected row count."""
        values.setdefault('updated_at', datetime.now(timezone.utc))
        stmt = (
            update(self.model)
            .where(self.model.id == row_id, *criteria)
            .values(**values)
        )
        return self.db.execute(stmt).rowcount
