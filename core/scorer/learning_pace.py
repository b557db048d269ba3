#!/usr/bin/env python3
"""
Learning Pace - Composite measure of recent, self-directed learning activity.

The pace score is the rounded mean of six 0-100 components computed from a
student's learning-activity log and most recent assessments:

- skill_acquisition: skills added in the last 90 days (5+ -> 100)
- assessment_improvement: trend over the last 5 assessments (50 = flat)
- project_completion: projects completed in the last 90 days (3+ -> 100)
- certification_velocity: certifications earned in the last quarter (3+ -> 100)
- consistency: distinct active days in the last 30 days
- coding_activity: problems solved in the last 30 days (20+ -> 100)
"""

from typing import List, Dict, Optional, Sequence
from dataclasses import dataclass, field
from datetime import datetime, date, timedelta, timezone
import logging

from core.exceptions import ComputationSkipped
from core.scorer.curves import clamp, linear_slope_normalized, round_half_up
from core.scorer.models import AssessmentRecord

logger = logging.getLogger(__name__)

SKILL_WINDOW = timedelta(days=90)
PROJECT_WINDOW = timedelta(days=90)
CERT_WINDOW = timedelta(days=91)
RECENT_WINDOW = timedelta(days=30)

SKILL_POINTS = 20
PROJECT_POINTS = 35
CERT_POINTS = 34
CODING_POINTS = 5
CONSISTENCY_DAYS = 30
IMPROVEMENT_WINDOW = 5
TREND_WEEKS = 12

PACE_LABELS = [
    (75, 'Fast Learner'),
    (50, 'Steady'),
    (25, 'Needs Push'),
]
DEFAULT_PACE_LABEL = 'Getting Started'


@dataclass(frozen=True)
class ActivityRecord:
    type: str
    completed_at: datetime


@dataclass
class LearningPaceReport:
    pace_score: int
    label: str
    components: Dict[str, int]
    active_days_last_30: int
    streak: int
    total_activities: int
    weekly_trend: List[Dict[str, object]] = field(default_factory=list)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _count_in_window(activities: Sequence[ActivityRecord], activity_type: str,
                     window: timedelta, now: datetime) -> int:
    cutoff = now - window
    return sum(
        1 for a in activities
        if a.type == activity_type and _as_utc(a.completed_at) >= cutoff
    )


def _active_days(activities: Sequence[ActivityRecord], window: timedelta, now: datetime) -> int:
    cutoff = now - window
    return len({
        _as_utc(a.completed_at).date()
        for a in activities
        if _as_utc(a.completed_at) >= cutoff
    })


def calculate_improvement_rate(assessments: Sequence[AssessmentRecord]) -> int:
    """Trend of the last assessments; fewer than two data points is neutral (50)."""
    percentages = [
        (a.completed_at, a.percentage)
        for a in assessments[:IMPROVEMENT_WINDOW]
        if a.percentage is not None and a.completed_at is not None
    ]
    if len(percentages) < 2:
        return 50
    percentages.sort(key=lambda pair: _as_utc(pair[0]))
    return linear_slope_normalized([p for _, p in percentages])


def calculate_streak(activities: Sequence[ActivityRecord], today: date) -> int:
    """Number of consecutive days with activity, ending today."""
    days = {_as_utc(a.completed_at).date() for a in activities}
    streak = 0
    expected = today
    while expected in days:
        streak += 1
        expected -= timedelta(days=1)
    return streak


def build_weekly_trend(activities: Sequence[ActivityRecord], now: datetime) -> List[Dict[str, object]]:
    """Activity counts for the last 12 weeks, oldest first; weeks start on Sunday."""
    def week_start(d: date) -> date:
        return d - timedelta(days=(d.weekday() + 1) % 7)

    current = week_start(now.date())
    weeks = [current - timedelta(weeks=i) for i in range(TREND_WEEKS - 1, -1, -1)]
    counts = {w: 0 for w in weeks}
    for a in activities:
        key = week_start(_as_utc(a.completed_at).date())
        if key in counts:
            counts[key] += 1
    return [{'week': w.isoformat(), 'count': counts[w]} for w in weeks]


def get_pace_label(score: float) -> str:
    for threshold, label in PACE_LABELS:
        if score >= threshold:
            return label
    return DEFAULT_PACE_LABEL


def calculate_learning_pace(
    activities: Sequence[ActivityRecord],
    assessments: Sequence[AssessmentRecord],
    now: Optional[datetime] = None
) -> LearningPaceReport:
    """
    Compute the learning pace report.

    Args:
        activities: Learning activity log (any order)
        assessments: Assessments, newest first
        now: Reference time (defaults to current UTC time)

    Raises:
        ComputationSkipped: if the records cannot be interpreted
    """
    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)

    try:
        active_days = _active_days(activities, RECENT_WINDOW, now)
        components = {
            'skill_acquisition': min(_count_in_window(activities, 'skill_added', SKILL_WINDOW, now) * SKILL_POINTS, 100),
            'assessment_improvement': calculate_improvement_rate(assessments),
            'project_completion': min(_count_in_window(activities, 'project_completed', PROJECT_WINDOW, now) * PROJECT_POINTS, 100),
            'certification_velocity': min(_count_in_window(activities, 'cert_earned', CERT_WINDOW, now) * CERT_POINTS, 100),
            'consistency': min(round_half_up(active_days / CONSISTENCY_DAYS * 100), 100),
            'coding_activity': min(_count_in_window(activities, 'leetcode_solved', RECENT_WINDOW, now) * CODING_POINTS, 100),
        }
        streak = calculate_streak(activities, now.date())
        weekly_trend = build_weekly_trend(activities, now)
    except (TypeError, ValueError, AttributeError) as e:
        raise ComputationSkipped('learning_pace', str(e)) from e

    pace_score = int(clamp(round_half_up(sum(components.values()) / len(components))))

    logger.debug(f"Learning pace: {pace_score} components={components}")

    return LearningPaceReport(
        pace_score=pace_score,
        label=get_pace_label(pace_score),
        components=components,
        active_days_last_30=active_days,
        streak=streak,
        total_activities=len(activities),
        weekly_trend=weekly_trend,
    )
