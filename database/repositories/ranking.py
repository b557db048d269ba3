import logging
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple
from sqlalchemy import select, delete

from database.models import Ranking
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)


class RankingRepository(BaseRepository):
    def replace_global(
        self,
        entries: Sequence[Tuple[Any, int, float]],
        calculated_at: datetime
    ) -> int:
        """
        Replace the whole global partition (job_id IS NULL).

        Delete and insert run in the caller's transaction so readers never
        see a partially replaced table.
        """
        result = self.db.execute(delete(Ranking).where(Ranking.job_id.is_(None)))
        removed = result.rowcount or 0

        self.db.add_all([
            Ranking(
                student_id=to_uuid(student_id),
                job_id=None,
                rank=rank,
                score=score,
                calculated_at=calculated_at
            )
            for student_id, rank, score in entries
        ])
        self.flush()

        logger.debug(f"Global partition replaced: removed={removed}, inserted={len(entries)}")
        return len(entries)

    def upsert_job_ranking(
        self,
        student_id: Any,
        job_id: Any,
        rank: int,
        score: float,
        calculated_at: datetime
    ) -> Ranking:
        stmt = select(Ranking).where(
            Ranking.student_id == to_uuid(student_id),
            Ranking.job_id == to_uuid(job_id)
        )
        existing = self.db.execute(stmt).scalar_one_or_none()

        if existing:
            existing.rank = rank
            existing.score = score
            existing.calculated_at = calculated_at
            record = existing
        else:
            record = Ranking(
                student_id=to_uuid(student_id),
                job_id=to_uuid(job_id),
                rank=rank,
                score=score,
                calculated_at=calculated_at
            )
            self.db.add(record)

        self.flush()
        return record

    def get_global_entry(self, student_id: Any) -> Optional[Ranking]:
        sid = to_uuid(student_id)
        if sid is None:
            return None
        stmt = select(Ranking).where(Ranking.student_id == sid, Ranking.job_id.is_(None))
        return self.db.execute(stmt).scalars().first()

    def list_partition(self, job_id: Any = None, limit: Optional[int] = None) -> List[Ranking]:
        """Entries of one partition ordered by rank; job_id=None is the global slice."""
        if job_id is None:
            stmt = select(Ranking).where(Ranking.job_id.is_(None))
        else:
            stmt = select(Ranking).where(Ranking.job_id == to_uuid(job_id))

        stmt = stmt.order_by(Ranking.rank, Ranking.student_id)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).scalars().all())
