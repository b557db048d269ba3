#!/usr/bin/env python3
"""
Score Labels - Human-readable bands for a readiness score.
"""

SCORE_LABELS = [
    (85, 'Excellent'),
    (70, 'Strong'),
    (55, 'Good'),
    (40, 'Developing'),
    (25, 'Needs Work'),
]
DEFAULT_SCORE_LABEL = 'Getting Started'

READINESS_CLASSIFICATIONS = [
    (80, 'Placement Ready'),
    (60, 'High Potential'),
    (40, 'Developing'),
    (20, 'Building Foundation'),
]
DEFAULT_CLASSIFICATION = 'Just Starting'


def get_score_label(score: float) -> str:
    for threshold, label in SCORE_LABELS:
        if score >= threshold:
            return label
    return DEFAULT_SCORE_LABEL


def get_readiness_classification(score: float) -> str:
    for threshold, label in READINESS_CLASSIFICATIONS:
        if score >= threshold:
            return label
    return DEFAULT_CLASSIFICATION
