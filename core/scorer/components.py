#!/usr/bin/env python3
"""
Component Calculators - The 11 normalized readiness signals.

Every calculator is a total function returning an integer 0-100. A student
with no relevant records scores 0 for that component; missing or malformed
records never raise.

The targets and caps below are business tuning, kept as named constants.
"""

from typing import Callable, Dict, List, Optional
import logging

from core.scorer.curves import clamp, diminishing_curve, recency_weighted_average, round_half_up
from core.scorer.models import (
    StudentSignals, SkillRecord, ProjectRecord, InternshipRecord, EventRecord,
    AssessmentRecord, MockInterviewRecord, CodingProfile, GitHubActivity, RoadmapProgress
)

logger = logging.getLogger(__name__)

# Coding practice: hard problems are the strongest interview signal
EASY_CAP, EASY_POINTS = 50, 0.3
MEDIUM_CAP, MEDIUM_POINTS = 80, 0.6
HARD_CAP, HARD_POINTS = 30, 1.2
CONTEST_RATING_TIERS = [(1800, 10), (1500, 5)]

PROJECT_COUNT_TARGET, PROJECT_COUNT_CAP = 5, 40
PROJECT_QUALITY_POINTS = 3
PROJECT_QUALITY_PER_PROJECT_CAP = 12
PROJECT_QUALITY_TOTAL_CAP = 60
PROJECT_MIN_DESCRIPTION_LENGTH = 50
PROJECT_MIN_TECH_COUNT = 2

INTERNSHIP_POSITION_POINTS = [40, 25]
INTERNSHIP_LATER_POINTS = 10
INTERNSHIP_DURATION_BONUSES = [(3, 5), (6, 5)]  # (months, bonus), cumulative
DAYS_PER_MONTH = 30

SKILL_DEPTH_BONUS = 0.05
SKILL_DEPTH_MAX_COUNT = 8

ASSESSMENT_WINDOW = 20

INTERVIEW_SCORE_SCALE = 10
INTERVIEW_VARIETY_POINTS = 5
INTERVIEW_VARIETY_CAP = 10

GITHUB_CONTRIBUTION_TARGET, GITHUB_CONTRIBUTION_CAP = 200, 70
GITHUB_REPO_POINTS, GITHUB_REPO_CAP = 6, 30

CERTIFICATION_TARGET, CERTIFICATION_CAP = 4, 100

EVENT_COUNT_TARGET, EVENT_COUNT_CAP = 5, 50
EVENT_ACHIEVEMENT_BONUS = {
    'winner': 15,
    'finalist': 15,
    'runner_up': 12,
    'speaker': 8,
    'organizer': 8,
}
EVENT_PARTICIPATION_BONUS = 2

ROADMAP_MODULE_POINTS, ROADMAP_MODULE_CAP = 10, 60
ROADMAP_TEST_FACTOR, ROADMAP_TEST_CAP = 0.4, 40


def _score(value: float) -> int:
    return int(clamp(round_half_up(value)))


def _non_negative(value: Optional[float]) -> float:
    if value is None:
        return 0.0
    return max(0.0, float(value))


def calculate_coding_practice_score(profile: Optional[CodingProfile]) -> int:
    """Weighted solved-problem counts plus a contest rating bonus."""
    if profile is None:
        return 0

    base = (
        min(_non_negative(profile.easy_solved), EASY_CAP) * EASY_POINTS +
        min(_non_negative(profile.medium_solved), MEDIUM_CAP) * MEDIUM_POINTS +
        min(_non_negative(profile.hard_solved), HARD_CAP) * HARD_POINTS
    )

    bonus = 0
    if profile.contest_rating is not None:
        for threshold, points in CONTEST_RATING_TIERS:
            if profile.contest_rating >= threshold:
                bonus = points
                break

    return _score(base + bonus)


def _project_quality(project: ProjectRecord) -> int:
    points = 0
    if project.description is not None and len(project.description.strip()) >= PROJECT_MIN_DESCRIPTION_LENGTH:
        points += PROJECT_QUALITY_POINTS
    if len([t for t in project.tech_stack if t]) >= PROJECT_MIN_TECH_COUNT:
        points += PROJECT_QUALITY_POINTS
    if project.github_url:
        points += PROJECT_QUALITY_POINTS
    if project.live_url:
        points += PROJECT_QUALITY_POINTS
    return min(points, PROJECT_QUALITY_PER_PROJECT_CAP)


def calculate_projects_score(projects: List[ProjectRecord]) -> int:
    """
    Count curve plus per-project quality.

    Quality awards 3 points each for a substantive description, a multi-tech
    stack, a repository link and a live link.
    """
    if not projects:
        return 0

    base = diminishing_curve(len(projects), PROJECT_COUNT_TARGET, PROJECT_COUNT_CAP)
    quality = min(sum(_project_quality(p) for p in projects), PROJECT_QUALITY_TOTAL_CAP)
    return _score(base + quality)


def _internship_months(internship: InternshipRecord) -> Optional[float]:
    if internship.end_date is None or internship.start_date is None:
        return None
    days = (internship.end_date - internship.start_date).days
    if days < 0:
        return None
    return days / DAYS_PER_MONTH


def calculate_internships_score(internships: List[InternshipRecord]) -> int:
    """First internship 40, second 25, later ones 10; duration bonuses apply to each."""
    if not internships:
        return 0

    ordered = sorted(internships, key=lambda i: i.start_date)
    score = 0
    for position, internship in enumerate(ordered):
        if position < len(INTERNSHIP_POSITION_POINTS):
            score += INTERNSHIP_POSITION_POINTS[position]
        else:
            score += INTERNSHIP_LATER_POINTS

        months = _internship_months(internship)
        if months is not None:
            for min_months, bonus in INTERNSHIP_DURATION_BONUSES:
                if months >= min_months:
                    score += bonus

    return _score(score)


def calculate_technical_skills_score(skills: List[SkillRecord]) -> int:
    """
    Average proficiency scaled by breadth.

    Breadth bonus stops at 8 skills so keyword stuffing is not rewarded.
    """
    if not skills:
        return 0

    proficiencies = [clamp(_non_negative(s.proficiency)) for s in skills]
    avg = sum(proficiencies) / len(proficiencies)
    multiplier = 1 + SKILL_DEPTH_BONUS * min(len(skills), SKILL_DEPTH_MAX_COUNT)
    return _score(avg * multiplier)


def calculate_assessments_score(assessments: List[AssessmentRecord], window: int = ASSESSMENT_WINDOW) -> int:
    """Recency-weighted average over the most recent assessments (newest first)."""
    percentages = [
        clamp(a.percentage)
        for a in assessments
        if a.percentage is not None
    ][:window]
    if not percentages:
        return 0
    return _score(recency_weighted_average(percentages))


def calculate_interview_readiness_score(interviews: List[MockInterviewRecord]) -> int:
    """Average completed mock-interview score (0-10 scaled to 100) plus variety bonus."""
    completed = [
        i for i in interviews
        if i.status == 'completed' and i.overall_score is not None
    ]
    if not completed:
        return 0

    avg = sum(clamp(float(i.overall_score), 0, INTERVIEW_SCORE_SCALE) for i in completed) / len(completed)
    distinct_types = len({i.interview_type for i in completed})
    variety = min((distinct_types - 1) * INTERVIEW_VARIETY_POINTS, INTERVIEW_VARIETY_CAP)
    return _score(avg * INTERVIEW_SCORE_SCALE + variety)


def calculate_github_activity_score(profile: Optional[GitHubActivity]) -> int:
    if profile is None:
        return 0

    contributions = diminishing_curve(
        _non_negative(profile.contribution_count),
        GITHUB_CONTRIBUTION_TARGET,
        GITHUB_CONTRIBUTION_CAP
    )
    repos = min(_non_negative(profile.public_repos) * GITHUB_REPO_POINTS, GITHUB_REPO_CAP)
    return _score(contributions + repos)


def calculate_certifications_score(count: int) -> int:
    return diminishing_curve(count, CERTIFICATION_TARGET, CERTIFICATION_CAP)


def _normalize_achievement(achievement: Optional[str]) -> str:
    if achievement is None:
        return ''
    return achievement.strip().lower().replace('-', '_').replace(' ', '_')


def calculate_events_score(events: List[EventRecord]) -> int:
    """Participation curve plus a bonus per event by achievement tier."""
    if not events:
        return 0

    base = diminishing_curve(len(events), EVENT_COUNT_TARGET, EVENT_COUNT_CAP)
    bonus = sum(
        EVENT_ACHIEVEMENT_BONUS.get(_normalize_achievement(e.achievement), EVENT_PARTICIPATION_BONUS)
        for e in events
    )
    return _score(base + bonus)


def calculate_learning_pace_score(pace_score: Optional[float]) -> int:
    """Pass-through of the externally computed pace composite; None scores 0."""
    if pace_score is None:
        return 0
    return _score(pace_score)


def calculate_roadmap_progress_score(progress: Optional[RoadmapProgress]) -> int:
    if progress is None:
        return 0

    modules = min(_non_negative(progress.completed_module_count) * ROADMAP_MODULE_POINTS, ROADMAP_MODULE_CAP)
    scores = [clamp(float(s)) for s in progress.module_test_scores if s is not None]
    avg_test = sum(scores) / len(scores) if scores else 0.0
    tests = min(avg_test * ROADMAP_TEST_FACTOR, ROADMAP_TEST_CAP)
    return _score(modules + tests)


COMPONENT_CALCULATORS: Dict[str, Callable[[StudentSignals], int]] = {
    'coding_practice': lambda s: calculate_coding_practice_score(s.coding_profile),
    'projects': lambda s: calculate_projects_score(s.projects),
    'internships': lambda s: calculate_internships_score(s.internships),
    'technical_skills': lambda s: calculate_technical_skills_score(s.skills),
    'assessments': lambda s: calculate_assessments_score(s.assessments),
    'interview_readiness': lambda s: calculate_interview_readiness_score(s.mock_interviews),
    'github_activity': lambda s: calculate_github_activity_score(s.github_profile),
    'certifications': lambda s: calculate_certifications_score(s.certification_count),
    'events': lambda s: calculate_events_score(s.events),
    'learning_pace': lambda s: calculate_learning_pace_score(s.learning_pace_score),
    'roadmap_progress': lambda s: calculate_roadmap_progress_score(s.roadmap_progress),
}
