#!/usr/bin/env python3
"""
Persistence Operations - Database writes for readiness results.

Upserts the ScoreBreakdown row and updates the student's denormalized
readiness fields inside the caller's transaction, so both writes commit
or roll back together.
"""

import logging

from database.models import ScoreBreakdown
from core.scorer.models import ScoreBreakdownResult

logger = logging.getLogger(__name__)


def save_breakdown_to_db(result: ScoreBreakdownResult, repo) -> ScoreBreakdown:
    """
    Save a computed breakdown.

    Args:
        result: ScoreBreakdownResult from the aggregator
        repo: ReadinessRepository bound to the active unit of work

    Returns:
        ScoreBreakdown record that was created or updated

    Raises:
        PersistenceFailure: if the store rejects either write
    """
    record = repo.scores.upsert_breakdown(
        student_id=result.student_id,
        components=result.components,
        total_score=result.total_score,
        profile_completion=result.profile_completion,
        calculated_at=result.last_calculated_at
    )
    repo.students.update_readiness(
        result.student_id,
        readiness_score=result.total_score,
        profile_completion=result.profile_completion
    )
    repo.flush()

    logger.info(
        f"Saved readiness for student {result.student_id}: "
        f"total={result.total_score:.2f}, completion={result.profile_completion}%"
    )

    return record
