#!/usr/bin/env python3
"""
Profile Completion - Share of optional profile fields that are filled in.

A separate signal from readiness; it is never weighted into the total.
"""

from typing import Any
import logging

from core.scorer.curves import round_half_up

logger = logging.getLogger(__name__)

PROFILE_FIELDS = [
    'full_name',
    'phone',
    'linkedin',
    'website',
    'location',
    'expected_grad',
    'bio',
    'gpa',
    'avatar_url',
    'resume_url',
    'github_username',
    'leetcode_username',
]


def _is_filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ''
    return True


def calculate_profile_completion(student: Any) -> int:
    """Percentage (0-100, integer) of PROFILE_FIELDS with a non-empty value."""
    if student is None:
        return 0
    filled = sum(1 for name in PROFILE_FIELDS if _is_filled(getattr(student, name, None)))
    return round_half_up(100 * filled / len(PROFILE_FIELDS))
