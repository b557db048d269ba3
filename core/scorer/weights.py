#!/usr/bin/env python3
"""
Weight Provider - Component weights for the readiness total.

Weights are percentages. Resolution order, later wins:
built-in defaults -> config overrides -> store overrides (score_weights table).
The sum is not re-validated; a sum other than 100 simply scales the total.
"""

from typing import Dict, Mapping, Optional, Protocol
import logging

from core.scorer.models import COMPONENT_KEYS

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS: Dict[str, float] = {
    'coding_practice': 18.0,
    'projects': 15.0,
    'internships': 15.0,
    'technical_skills': 12.0,
    'assessments': 10.0,
    'interview_readiness': 8.0,
    'github_activity': 6.0,
    'certifications': 5.0,
    'events': 4.0,
    'learning_pace': 4.0,
    'roadmap_progress': 3.0,
}


class WeightStore(Protocol):
    def get_weight_overrides(self) -> Dict[str, float]:
        ...


def _apply_overrides(weights: Dict[str, float], overrides: Mapping[str, float], source: str) -> None:
    for component, value in overrides.items():
        if component not in COMPONENT_KEYS:
            logger.warning(f"Ignoring weight for unknown component '{component}' from {source}")
            continue
        if value is None:
            continue
        weight = float(value)
        if weight < 0:
            logger.warning(f"Negative weight {weight} for '{component}' from {source}, using 0")
            weight = 0.0
        weights[component] = weight


class WeightProvider:
    """
    Resolves the 11-key weight map.

    Passed explicitly into the aggregator on each call; holds no cached
    state between calls so store edits are picked up immediately.
    """

    def __init__(
        self,
        store: Optional[WeightStore] = None,
        overrides: Optional[Mapping[str, float]] = None
    ):
        self.store = store
        self.overrides = dict(overrides or {})

    def get_weights(self) -> Dict[str, float]:
        weights = dict(DEFAULT_WEIGHTS)
        if self.overrides:
            _apply_overrides(weights, self.overrides, 'config')
        if self.store is not None:
            _apply_overrides(weights, self.store.get_weight_overrides(), 'store')
        return weights
