import logging
from typing import Any, List, Optional
from sqlalchemy import select

from database.models import Job, JobSkill
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)


class JobRepository(BaseRepository):
    def get_by_id(self, job_id: Any) -> Optional[Job]:
        jid = to_uuid(job_id)
        if jid is None:
            return None
        stmt = select(Job).where(Job.id == jid)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_required_skill_ids(self, job_id: Any) -> List[Any]:
        stmt = select(JobSkill.skill_id).where(JobSkill.job_id == to_uuid(job_id))
        return list(self.db.execute(stmt).scalars().all())
