#!/usr/bin/env python3
"""
Score Aggregator - Combines the 11 component sub-scores into the readiness score.

Steps for one student:
1. Load the signal snapshot (one fetch per signal type) and the weights
2. Evaluate the component calculators (pure; optionally in a thread pool)
3. total = round(sum(sub_i * weight_i) / 100, 2), clamped to 0-100
4. Compute profile completion (never weighted into the total)
5. Upsert ScoreBreakdown and the student's readiness fields in one transaction
"""

from typing import Any, Callable, Dict, Mapping, Optional, TypeVar
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
import logging

from core.config_loader import ScoringConfig
from core.exceptions import ComputationSkipped, StudentNotFoundException
from core.scorer.components import COMPONENT_CALCULATORS
from core.scorer.curves import clamp
from core.scorer.labels import get_score_label, get_readiness_classification
from core.scorer.models import COMPONENT_KEYS, StudentSignals, ScoreBreakdownResult
from core.scorer.persistence import save_breakdown_to_db
from core.scorer.profile import calculate_profile_completion
from core.scorer.weights import WeightProvider

logger = logging.getLogger(__name__)

T = TypeVar('T')


def calculate_total(components: Mapping[str, int], weights: Mapping[str, float]) -> float:
    """
    Weighted sum of sub-scores.

    Formula: sum(sub_i * weight_i) / 100, rounded to 2 decimals and clamped to 0-100.
    """
    total = sum(components.get(key, 0) * weights.get(key, 0.0) for key in COMPONENT_KEYS) / 100.0
    return round(clamp(total), 2)


def _fetch(component: str, loader: Callable[[], T], default: T) -> T:
    """Run one signal fetch; a skipped computation contributes the default."""
    try:
        return loader()
    except ComputationSkipped as e:
        logger.warning(f"Component {component} skipped: {e.reason}")
        return default


class ScoreAggregator:
    """
    Service for recalculating a student's readiness score.

    Works against a ReadinessRepository bound to the caller's unit of work.
    The WeightProvider is passed per call.
    """

    def __init__(self, repo, config: Optional[ScoringConfig] = None):
        self.repo = repo
        self.config = config or ScoringConfig()

    def load_signals(self, student_id: Any, now: Optional[datetime] = None) -> StudentSignals:
        signals = self.repo.signals
        return StudentSignals(
            skills=_fetch('technical_skills', lambda: signals.get_skills(student_id), []),
            projects=_fetch('projects', lambda: signals.get_projects(student_id), []),
            internships=_fetch('internships', lambda: signals.get_internships(student_id), []),
            certification_count=_fetch('certifications', lambda: signals.count_certifications(student_id), 0),
            events=_fetch('events', lambda: signals.get_events(student_id), []),
            assessments=_fetch(
                'assessments',
                lambda: signals.get_recent_assessments(student_id, limit=self.config.assessment_window),
                []
            ),
            mock_interviews=_fetch('interview_readiness', lambda: signals.get_mock_interviews(student_id), []),
            coding_profile=_fetch('coding_practice', lambda: signals.get_coding_profile(student_id), None),
            github_profile=_fetch('github_activity', lambda: signals.get_github_profile(student_id), None),
            learning_pace_score=_fetch('learning_pace', lambda: signals.get_learning_pace_score(student_id, now=now), None),
            roadmap_progress=_fetch('roadmap_progress', lambda: signals.get_roadmap_progress(student_id), None),
        )

    def calculate_components(self, signals: StudentSignals) -> Dict[str, int]:
        """Evaluate every component calculator against the snapshot."""
        if self.config.parallel_components:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                futures = {
                    key: executor.submit(COMPONENT_CALCULATORS[key], signals)
                    for key in COMPONENT_KEYS
                }
                return {key: futures[key].result() for key in COMPONENT_KEYS}

        return {key: COMPONENT_CALCULATORS[key](signals) for key in COMPONENT_KEYS}

    def recalculate(
        self,
        student_id: Any,
        weight_provider: WeightProvider,
        now: Optional[datetime] = None
    ) -> ScoreBreakdownResult:
        """Recalculate and persist the readiness breakdown for one student.

        Args:
            student_id: Student to score
            weight_provider: Source of component weights for this call
            now: Reference time for time-windowed signals (defaults to UTC now)

        Returns:
            ScoreBreakdownResult with sub-scores, weights used, total and completion

        Raises:
            StudentNotFoundException: if the student does not exist or is deleted
            PersistenceFailure: if the store rejects the write
        """
        student = self.repo.students.get_active_by_id(student_id)
        if student is None:
            raise StudentNotFoundException(student_id)

        now = now or datetime.now(timezone.utc)

        weights = weight_provider.get_weights()
        signals = self.load_signals(student.id, now=now)
        components = self.calculate_components(signals)
        total = calculate_total(components, weights)
        completion = calculate_profile_completion(student)

        logger.debug(f"Student {student.id} components={components}")

        result = ScoreBreakdownResult(
            student_id=str(student.id),
            components=components,
            weights=weights,
            total_score=total,
            profile_completion=completion,
            last_calculated_at=now,
            label=get_score_label(total),
            classification=get_readiness_classification(total),
        )

        save_breakdown_to_db(result, self.repo)
        return result
