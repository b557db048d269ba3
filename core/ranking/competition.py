#!/usr/bin/env python3
"""
Competition Ranking - Standard "1224" rank assignment.

Tied scores share a rank; the next lower score takes its absolute 1-based
position, so [90, 90, 80] ranks as [1, 1, 3].
"""

from typing import Any, List, Sequence, Tuple


def assign_competition_ranks(scores: Sequence[float]) -> List[int]:
    """
    Ranks for scores already sorted highest first.

    rank[0] = 1; rank[i] = i + 1 when score[i] < score[i-1], else rank[i-1].
    """
    ranks: List[int] = []
    for i, score in enumerate(scores):
        if i == 0 or score < scores[i - 1]:
            ranks.append(i + 1)
        else:
            ranks.append(ranks[i - 1])
    return ranks


def rank_entries(entries: Sequence[Tuple[Any, float]]) -> List[Tuple[Any, int, float]]:
    """
    Sort (key, score) pairs by score descending and attach competition ranks.

    The sort is stable, so keys with equal scores keep their input order.

    Returns: [(key, rank, score)]
    """
    ordered = sorted(entries, key=lambda e: e[1], reverse=True)
    ranks = assign_competition_ranks([score for _, score in ordered])
    return [(key, rank, score) for (key, score), rank in zip(ordered, ranks)]
