import logging

from sqlalchemy.exc import OperationalError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

import database.database as db
from database.models import Base

logger = logging.getLogger(__name__)


@retry(
    retry=retry_if_exception_type(OperationalError),
    stop=stop_after_attempt(5),
    wait=wait_fixed(2),
    reraise=True,
)
def init_db(engine=None) -> None:
    """Create all tables, waiting for the database to come up."""
    engine = engine or db.engine
    logger.info("Ensuring database schema exists...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready.")
