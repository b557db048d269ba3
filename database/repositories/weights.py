import logging
from typing import Dict
from sqlalchemy import select

from database.models import ScoreWeight
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class WeightRepository(BaseRepository):
    def get_weight_overrides(self) -> Dict[str, float]:
        rows = self.db.execute(select(ScoreWeight.component, ScoreWeight.weight)).all()
        return {component: float(weight) for component, weight in rows}

    def set_weight(self, component: str, weight: float) -> ScoreWeight:
        stmt = select(ScoreWeight).where(ScoreWeight.component == component)
        existing = self.db.execute(stmt).scalar_one_or_none()

        if existing:
            existing.weight = weight
            record = existing
        else:
            record = ScoreWeight(component=component, weight=weight)
            self.db.add(record)

        self.flush()
        return record
