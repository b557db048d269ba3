#!/usr/bin/env python3
"""
Ranking Service - Global and per-job competition rankings.

- Global: eligible students by readiness score; the job_id IS NULL partition
  is replaced wholesale (delete then insert) in one transaction
- Per-job: relevance = readiness * 0.6 + skill match * 0.4 for students at or
  above the job's minimum score; rows upserted by (student_id, job_id)
"""

from typing import Any, List, Optional
from datetime import datetime, timezone
import logging
import threading
import weakref

from core.config_loader import RankingConfig
from core.ranking.competition import rank_entries
from core.ranking.models import GlobalRank, RankedCandidate
from core.scorer.curves import round_half_up
from database.repositories.base import to_uuid

logger = logging.getLogger(__name__)

_job_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
_job_locks_guard = threading.Lock()


def job_ranking_lock(job_id: Any) -> threading.Lock:
    """
    Process-wide lock serializing recomputes of one job's ranking rows.

    Callers hold it until their transaction has committed. An entry lives
    only while some caller holds a reference to its lock.
    """
    uid = to_uuid(job_id)
    key = str(uid) if uid is not None else str(job_id)
    with _job_locks_guard:
        lock = _job_locks.get(key)
        if lock is None:
            lock = threading.Lock()
            _job_locks[key] = lock
        return lock


def calculate_relevance(
    readiness_score: float,
    skill_match_ratio: float,
    config: Optional[RankingConfig] = None
) -> float:
    """
    Per-job relevance score.

    Formula: readiness * 0.6 + min(ratio * 100, 100) * 0.4, rounded to 2 decimals.
    """
    config = config or RankingConfig()
    skill_score = min(skill_match_ratio * 100.0, 100.0)
    return round(readiness_score * config.readiness_weight + skill_score * config.skill_match_weight, 2)


def calculate_percentile(rank: int, total: int) -> int:
    """Share of the eligible population ranked below: round(100 * (total - rank) / total)."""
    return max(0, round_half_up(100 * (total - rank) / total))


class RankingService:
    """
    Service for recalculating and reading rankings.

    Works against a ReadinessRepository bound to the caller's unit of work.
    """

    def __init__(self, repo, config: Optional[RankingConfig] = None):
        self.repo = repo
        self.config = config or RankingConfig()

    def recalculate_global(self, now: Optional[datetime] = None) -> int:
        """Rank all eligible students and replace the global partition.

        An empty eligible set still clears the partition, so no stale entry
        survives the last eligible student leaving.

        Returns:
            Number of students ranked (0 clears the partition)
        """
        now = now or datetime.now(timezone.utc)
        students = self.repo.students.list_eligible_scores()

        ranked = rank_entries(students)
        self.repo.rankings.replace_global(ranked, calculated_at=now)

        logger.info(f"Global ranking recalculated: {len(ranked)} students ranked")
        return len(ranked)

    def recalculate_for_job(self, job_id: Any, now: Optional[datetime] = None) -> int:
        """Rank a job's eligible candidates by relevance and upsert their rows.

        Concurrent runs for the same job must be serialized by the caller
        through job_ranking_lock, held until the transaction commits.

        Returns:
            Number of candidates ranked; 0 for an unknown job or no candidates
        """
        job = self.repo.jobs.get_by_id(job_id)
        if job is None:
            logger.info(f"Job {job_id} not found, skipping ranking")
            return 0

        now = now or datetime.now(timezone.utc)
        required_skill_ids = self.repo.jobs.get_required_skill_ids(job.id)
        min_score = float(job.minimum_readiness_score or 0)
        total_required = max(1, len(required_skill_ids))

        candidates = self.repo.students.list_job_candidates(min_score, required_skill_ids)
        if not candidates:
            logger.info(f"Job {job.id}: no candidates at or above {min_score:.2f}")
            return 0

        scored = [
            (student_id, calculate_relevance(readiness, matched / total_required, self.config))
            for student_id, readiness, matched in sorted(candidates, key=lambda c: str(c[0]))
        ]
        ranked = rank_entries(scored)

        for student_id, rank, score in ranked:
            self.repo.rankings.upsert_job_ranking(student_id, job.id, rank, score, calculated_at=now)

        logger.info(f"Job {job.id} ranking recalculated: {len(ranked)} candidates ranked")
        return len(ranked)

    def get_student_global_rank(self, student_id: Any) -> GlobalRank:
        total = self.repo.students.count_eligible()
        entry = self.repo.rankings.get_global_entry(student_id)

        if entry is None or total == 0:
            return GlobalRank(rank=None, score=None, total_eligible_count=total, percentile=None)

        return GlobalRank(
            rank=entry.rank,
            score=float(entry.score),
            total_eligible_count=total,
            percentile=calculate_percentile(entry.rank, total),
        )

    def get_job_rankings(self, job_id: Any, limit: Optional[int] = None) -> List[RankedCandidate]:
        return [
            RankedCandidate(student_id=str(r.student_id), rank=r.rank, score=float(r.score))
            for r in self.repo.rankings.list_partition(job_id, limit=limit)
        ]
