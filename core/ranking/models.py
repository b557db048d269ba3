#!/usr/bin/env python3
"""
Ranking Models - Result structures for ranking lookups.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class GlobalRank:
    """A student's position in the global ranking."""
    rank: Optional[int]
    score: Optional[float]
    total_eligible_count: int
    percentile: Optional[int]


@dataclass
class RankedCandidate:
    """One row of a per-job or global ranking partition."""
    student_id: str
    rank: int
    score: float
