import uuid
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import PersistenceFailure


def to_uuid(value: Any) -> Optional[uuid.UUID]:
    """Coerce an id to UUID; None for values that are not valid UUIDs."""
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    def flush(self) -> None:
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Store rejected write: {e}") from e

    def commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Store rejected commit: {e}") from e

    def rollback(self) -> None:
        self.db.rollback()
