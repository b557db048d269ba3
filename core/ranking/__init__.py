#!/usr/bin/env python3
"""
Ranking Module - Global and per-job competition rankings.

Public API:
- RankingService: Recalculates and reads ranking partitions
- GlobalRank / RankedCandidate: Result dataclasses
- assign_competition_ranks: Tie-aware rank assignment
"""

from core.ranking.competition import assign_competition_ranks, rank_entries
from core.ranking.models import GlobalRank, RankedCandidate
from core.ranking.service import RankingService, calculate_relevance, calculate_percentile, job_ranking_lock

__all__ = [
    'RankingService',
    'GlobalRank',
    'RankedCandidate',
    'assign_competition_ranks',
    'rank_entries',
    'calculate_relevance',
    'calculate_percentile',
    'job_ranking_lock',
]
