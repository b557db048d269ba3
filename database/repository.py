import logging

from sqlalchemy.orm import Session

from database.repositories import (
    BaseRepository, StudentRepository, JobRepository, SignalRepository,
    WeightRepository, ScoreRepository, RankingRepository
)

logger = logging.getLogger(__name__)


class ReadinessRepository(BaseRepository):
    """
    Facade over the per-table repositories sharing one Session.

    Every sub-repository writes through the same transaction, so a
    ScoreBreakdown upsert and the student update commit together.
    """

    def __init__(self, db: Session):
        super().__init__(db)
        self.students = StudentRepository(db)
        self.jobs = JobRepository(db)
        self.signals = SignalRepository(db)
        self.weights = WeightRepository(db)
        self.scores = ScoreRepository(db)
        self.rankings = RankingRepository(db)
