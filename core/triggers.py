#!/usr/bin/env python3
"""
Trigger Policy - What runs after a score-affecting mutation.

A mutation of skills, projects, internships, certifications, events, the
profile, or an integration refresh triggers:
1. a synchronous recalculate_score for the mutated student (errors propagate)
2. a best-effort global ranking refresh, either inline or handed to an RQ
   worker; its failure is logged and reported, never raised

Usage:
    policy = TriggerPolicy.from_config(engine, config.triggers)
    breakdown, refresh = policy.on_score_affecting_change(student_id)
"""

import os
import functools
import logging
from typing import Any, Optional, Tuple

from redis import Redis
from rq import Queue

from core.config_loader import TriggerConfig, load_config
from core.engine import ReadinessEngine, BestEffortResult
from core.scorer import ScoreBreakdownResult

logger = logging.getLogger(__name__)

REFRESH_JOB_TIMEOUT_SECONDS = 120


@functools.lru_cache(maxsize=None)
def _engine_for_config(config_path: str) -> ReadinessEngine:
    """One engine (and connection pool) per config file per worker process."""
    return ReadinessEngine.from_config(load_config(config_path))


def _engine_from_env() -> ReadinessEngine:
    return _engine_for_config(os.environ.get("READINESS_CONFIG", "config.yaml"))


def run_global_ranking_refresh() -> int:
    """RQ job entry point: recalculate the global ranking."""
    return _engine_from_env().recalculate_global_rankings()


def run_job_ranking_refresh(job_id: str) -> int:
    """RQ job entry point: recalculate one job's ranking."""
    return _engine_from_env().recalculate_job_rankings(job_id)


class TriggerPolicy:
    """
    Runs the recompute operations that follow a data mutation.

    With a queue, ranking refreshes are enqueued and not awaited; without
    one they run inline after the score recalculation.
    """

    def __init__(self, engine: ReadinessEngine, queue: Optional[Queue] = None):
        self.engine = engine
        self.queue = queue

    @classmethod
    def from_config(cls, engine: ReadinessEngine, config: Optional[TriggerConfig] = None) -> "TriggerPolicy":
        config = config or TriggerConfig()
        queue = None
        if config.use_async_queue:
            redis_url = config.redis_url or 'redis://localhost:6379/0'
            queue = Queue(config.queue_name, connection=Redis.from_url(redis_url))
            logger.info(f"Ranking refreshes will be queued on '{config.queue_name}'")
        return cls(engine, queue=queue)

    def _enqueue(self, func, *args) -> BestEffortResult:
        try:
            job = self.queue.enqueue(func, *args, job_timeout=REFRESH_JOB_TIMEOUT_SECONDS)
        except Exception as e:
            logger.exception(f"Failed to enqueue {func.__name__}")
            return BestEffortResult(succeeded=False, error=str(e))
        logger.debug(f"Enqueued {func.__name__} as job {job.id}")
        return BestEffortResult(succeeded=True, enqueued=True, job_id=job.id)

    def refresh_global_rankings(self) -> BestEffortResult:
        if self.queue is not None:
            return self._enqueue(run_global_ranking_refresh)
        return self.engine.refresh_global_rankings()

    def on_score_affecting_change(self, student_id: Any) -> Tuple[ScoreBreakdownResult, BestEffortResult]:
        """Recalculate the student's score, then refresh the global ranking best-effort."""
        breakdown = self.engine.recalculate_score(student_id)
        refresh = self.refresh_global_rankings()
        if not refresh.succeeded:
            logger.warning(f"Ranking refresh after change to student {student_id} failed: {refresh.error}")
        return breakdown, refresh

    def on_job_change(self, job_id: Any) -> BestEffortResult:
        """Best-effort refresh of one job's candidate ranking."""
        if self.queue is not None:
            return self._enqueue(run_job_ranking_refresh, str(job_id))
        try:
            count = self.engine.recalculate_job_rankings(job_id)
        except Exception as e:
            logger.exception(f"Ranking refresh for job {job_id} failed")
            return BestEffortResult(succeeded=False, error=str(e))
        return BestEffortResult(succeeded=True, ranked_count=count)
