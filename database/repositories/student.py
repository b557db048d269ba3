import logging
from typing import Any, List, Optional, Sequence, Tuple
from sqlalchemy import select, func, and_, update

from database.models import Student, StudentSkill
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)

INACTIVE_STATUS = 'inactive'


def _eligible_clause():
    return and_(Student.deleted_at.is_(None), Student.status != INACTIVE_STATUS)


class StudentRepository(BaseRepository):
    def get_active_by_id(self, student_id: Any) -> Optional[Student]:
        """Non-deleted student by id, or None."""
        sid = to_uuid(student_id)
        if sid is None:
            return None
        stmt = select(Student).where(Student.id == sid, Student.deleted_at.is_(None))
        return self.db.execute(stmt).scalar_one_or_none()

    def list_active_ids(self) -> List[Any]:
        stmt = select(Student.id).where(Student.deleted_at.is_(None)).order_by(Student.id)
        return list(self.db.execute(stmt).scalars().all())

    def list_eligible_scores(self) -> List[Tuple[Any, float]]:
        """(student_id, readiness_score) for eligible students, highest score first."""
        stmt = (
            select(Student.id, Student.readiness_score)
            .where(_eligible_clause())
            .order_by(Student.readiness_score.desc(), Student.id)
        )
        return [(sid, float(score or 0)) for sid, score in self.db.execute(stmt).all()]

    def count_eligible(self) -> int:
        stmt = select(func.count(Student.id)).where(_eligible_clause())
        return int(self.db.execute(stmt).scalar_one())

    def update_readiness(self, student_id: Any, readiness_score: float, profile_completion: int) -> None:
        self.db.execute(
            update(Student)
            .where(Student.id == to_uuid(student_id))
            .values(readiness_score=readiness_score, profile_completion=profile_completion)
        )

    def list_job_candidates(
        self,
        min_score: float,
        required_skill_ids: Sequence[Any]
    ) -> List[Tuple[Any, float, int]]:
        """
        Non-deleted students at or above min_score with their count of
        matching required skills.

        Returns: [(student_id, readiness_score, matching_skill_count)]
        """
        match_count = func.count(StudentSkill.id)
        stmt = (
            select(Student.id, Student.readiness_score, match_count)
            .outerjoin(
                StudentSkill,
                and_(
                    StudentSkill.student_id == Student.id,
                    StudentSkill.skill_id.in_(list(required_skill_ids))
                )
            )
            .where(Student.deleted_at.is_(None), Student.readiness_score >= min_score)
            .group_by(Student.id, Student.readiness_score)
        )
        return [
            (sid, float(score or 0), int(matched))
            for sid, score, matched in self.db.execute(stmt).all()
        ]
