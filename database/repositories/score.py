import logging
from datetime import datetime
from typing import Any, Dict, Optional
from sqlalchemy import select

from database.models import ScoreBreakdown
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)


class ScoreRepository(BaseRepository):
    def get_breakdown(self, student_id: Any) -> Optional[ScoreBreakdown]:
        stmt = select(ScoreBreakdown).where(ScoreBreakdown.student_id == to_uuid(student_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def upsert_breakdown(
        self,
        student_id: Any,
        components: Dict[str, int],
        total_score: float,
        profile_completion: int,
        calculated_at: datetime
    ) -> ScoreBreakdown:
        existing = self.get_breakdown(student_id)

        if existing:
            record = existing
        else:
            record = ScoreBreakdown(student_id=to_uuid(student_id))
            self.db.add(record)

        for component, value in components.items():
            setattr(record, component, value)
        record.total_score = total_score
        record.profile_completion = profile_completion
        record.last_calculated_at = calculated_at

        self.flush()
        return record
