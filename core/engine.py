#!/usr/bin/env python3
"""
Readiness Engine - The operations exposed to the surrounding application.

Each operation runs in its own unit of work:
- recalculate_score(student_id) -> ScoreBreakdownResult
- recalculate_global_rankings() -> int (never raises)
- recalculate_job_rankings(job_id) -> int
- get_student_global_rank(student_id) -> GlobalRank
- get_score_label(score) / get_readiness_classification(score)
- recalculate_all_scores() -> BulkRecalculationResult (admin bulk recompute)
- get_learning_pace(student_id) -> LearningPaceReport
"""

from typing import Any, Callable, List, Optional
from dataclasses import dataclass, field
from datetime import datetime
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from core.config_loader import AppConfig, ScoringConfig, RankingConfig
from core.exceptions import ServiceException, StudentNotFoundException
from core.ranking import RankingService, GlobalRank, RankedCandidate, job_ranking_lock
from core.scorer import ScoreAggregator, ScoreBreakdownResult, WeightProvider
from core.scorer.labels import get_score_label, get_readiness_classification
from core.scorer.learning_pace import LearningPaceReport
from database.uow import readiness_uow

logger = logging.getLogger(__name__)


@dataclass
class BestEffortResult:
    """Outcome of an operation whose failure is logged, never raised."""
    succeeded: bool
    ranked_count: int = 0
    enqueued: bool = False
    job_id: Optional[str] = None
    error: Optional[str] = None


@dataclass
class BulkRecalculationResult:
    processed: int
    failed: int
    failed_student_ids: List[str] = field(default_factory=list)
    ranking: Optional[BestEffortResult] = None


class ReadinessEngine:
    """
    Stateless facade over the score aggregator and ranking service.

    All state lives in the store; the engine only holds configuration and
    the session factory used to open a unit of work per operation.
    """

    def __init__(
        self,
        session_factory: Optional[Callable[[], Session]] = None,
        scoring_config: Optional[ScoringConfig] = None,
        ranking_config: Optional[RankingConfig] = None
    ):
        self.session_factory = session_factory
        self.scoring_config = scoring_config or ScoringConfig()
        self.ranking_config = ranking_config or RankingConfig()

    @classmethod
    def from_config(cls, config: AppConfig) -> "ReadinessEngine":
        """Build an engine with its own connection pool from config."""
        db_engine = create_engine(config.database.url)
        session_factory = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
        return cls(
            session_factory=session_factory,
            scoring_config=config.scoring,
            ranking_config=config.ranking
        )

    def _uow(self):
        return readiness_uow(self.session_factory)

    def _weight_provider(self, repo) -> WeightProvider:
        return WeightProvider(store=repo.weights, overrides=self.scoring_config.weights)

    def recalculate_score(self, student_id: Any, now: Optional[datetime] = None) -> ScoreBreakdownResult:
        """Recalculate and persist one student's readiness score.

        Raises:
            StudentNotFoundException: if the student does not exist
            PersistenceFailure: if the store rejects the write
        """
        with self._uow() as repo:
            aggregator = ScoreAggregator(repo, self.scoring_config)
            return aggregator.recalculate(student_id, self._weight_provider(repo), now=now)

    def refresh_global_rankings(self, now: Optional[datetime] = None) -> BestEffortResult:
        """Recalculate the global ranking, reporting failure instead of raising."""
        try:
            with self._uow() as repo:
                count = RankingService(repo, self.ranking_config).recalculate_global(now=now)
            return BestEffortResult(succeeded=True, ranked_count=count)
        except Exception as e:
            logger.exception("Global ranking recalculation failed; rankings stay stale until the next trigger")
            return BestEffortResult(succeeded=False, error=str(e))

    def recalculate_global_rankings(self, now: Optional[datetime] = None) -> int:
        """Recalculate the global ranking. Never raises; returns 0 on failure."""
        return self.refresh_global_rankings(now=now).ranked_count

    def recalculate_job_rankings(self, job_id: Any, now: Optional[datetime] = None) -> int:
        """Recalculate one job's candidate ranking.

        Returns 0 for an unknown job or when no candidate is eligible. Runs for
        the same job are serialized through the commit.

        Raises:
            PersistenceFailure: if the store rejects the write
        """
        with job_ranking_lock(job_id):
            with self._uow() as repo:
                return RankingService(repo, self.ranking_config).recalculate_for_job(job_id, now=now)

    def get_student_global_rank(self, student_id: Any) -> GlobalRank:
        with self._uow() as repo:
            return RankingService(repo, self.ranking_config).get_student_global_rank(student_id)

    def get_job_rankings(self, job_id: Any, limit: Optional[int] = None) -> List[RankedCandidate]:
        with self._uow() as repo:
            return RankingService(repo, self.ranking_config).get_job_rankings(job_id, limit=limit)

    def get_learning_pace(self, student_id: Any, now: Optional[datetime] = None) -> LearningPaceReport:
        with self._uow() as repo:
            student = repo.students.get_active_by_id(student_id)
            if student is None:
                raise StudentNotFoundException(student_id)
            return repo.signals.get_learning_pace(student.id, now=now)

    def recalculate_all_scores(self, now: Optional[datetime] = None) -> BulkRecalculationResult:
        """Recalculate every non-deleted student, then refresh the global ranking once.

        A failure for one student is logged and counted; it does not stop the run.
        """
        with self._uow() as repo:
            student_ids = repo.students.list_active_ids()

        result = BulkRecalculationResult(processed=0, failed=0)
        for student_id in student_ids:
            try:
                self.recalculate_score(student_id, now=now)
                result.processed += 1
            except ServiceException as e:
                logger.error(f"Score recalculation failed for student {student_id}: {e}")
                result.failed += 1
                result.failed_student_ids.append(str(student_id))

        result.ranking = self.refresh_global_rankings(now=now)

        logger.info(f"Bulk recalculation complete: processed={result.processed}, failed={result.failed}")
        return result

    @staticmethod
    def get_score_label(score: float) -> str:
        return get_score_label(score)

    @staticmethod
    def get_readiness_classification(score: float) -> str:
        return get_readiness_classification(score)
