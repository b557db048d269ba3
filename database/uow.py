import contextlib
import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import PersistenceFailure
from database.repository import ReadinessRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def readiness_uow(session_factory: Optional[Callable[[], Session]] = None):
    """Per-unit-of-work transaction scope.

    Yields a ReadinessRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes. A rejected commit surfaces as
    PersistenceFailure.

    Usage:
        with readiness_uow() as repo:
            student = repo.students.get_active_by_id(student_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    if session_factory is None:
        from database.database import SessionLocal
        session_factory = SessionLocal

    session = session_factory()
    try:
        repo = ReadinessRepository(session)
        yield repo
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise PersistenceFailure(f"Transaction failed: {e}") from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
