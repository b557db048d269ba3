#!/usr/bin/env python3
"""
Scoring Module - Readiness score computation.

Public API:
- ScoreAggregator: Recalculates and persists a student's readiness breakdown
- WeightProvider: Resolves component weights (defaults + overrides)
- ScoreBreakdownResult: Dataclass returned to callers

The module is split into focused, single-responsibility files:

- curves.py: Diminishing-return curve, recency-weighted average, slope
- components.py: The 11 component calculators
- learning_pace.py: Learning pace composite from the activity log
- weights.py: Default weights and the WeightProvider
- profile.py: Profile completion percentage
- labels.py: Score label and readiness classification bands
- persistence.py: Database writes (save_breakdown_to_db)
- service.py: ScoreAggregator orchestrator
"""

from core.scorer.models import ScoreBreakdownResult, StudentSignals, COMPONENT_KEYS
from core.scorer.weights import WeightProvider, DEFAULT_WEIGHTS
from core.scorer.labels import get_score_label, get_readiness_classification
from core.scorer.service import ScoreAggregator, calculate_total

__all__ = [
    'ScoreAggregator',
    'ScoreBreakdownResult',
    'StudentSignals',
    'COMPONENT_KEYS',
    'WeightProvider',
    'DEFAULT_WEIGHTS',
    'get_score_label',
    'get_readiness_classification',
    'calculate_total',
]
