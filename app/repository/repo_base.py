import logging
from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.db.base import get_db
from app.helpers.exception_handler import StorageError

logger = logging.getLogger(__name__)


class BaseRepository:
    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def _commit(self, action: str) -> None:
        """Commit the pending unit of work, rolling back and raising StorageError on failure."""
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {str(e)}", exc_info=True)
            raise StorageError(message=f"Failed to {action}")
