#!/usr/bin/env python3
"""
Scoring Models - Input snapshots and result structures.

StudentSignals is the read-only bundle every component calculator works
on. Fields that may be absent are typed Optional so calculators branch on
presence instead of truthiness.
"""

from typing import List, Dict, Optional
from dataclasses import dataclass, field
from datetime import date, datetime

COMPONENT_KEYS = [
    "coding_practice",
    "projects",
    "internships",
    "technical_skills",
    "assessments",
    "interview_readiness",
    "github_activity",
    "certifications",
    "events",
    "learning_pace",
    "roadmap_progress",
]


@dataclass(frozen=True)
class SkillRecord:
    name: str
    proficiency: int
    category: Optional[str] = None
    level: Optional[str] = None


@dataclass(frozen=True)
class ProjectRecord:
    description: Optional[str] = None
    tech_stack: List[str] = field(default_factory=list)
    github_url: Optional[str] = None
    live_url: Optional[str] = None


@dataclass(frozen=True)
class InternshipRecord:
    start_date: date
    end_date: Optional[date] = None


@dataclass(frozen=True)
class EventRecord:
    achievement: Optional[str] = None


@dataclass(frozen=True)
class AssessmentRecord:
    total_score: float
    max_score: float
    completed_at: Optional[datetime] = None

    @property
    def percentage(self) -> Optional[float]:
        """Score as a percentage, or None when max_score is not positive."""
        if self.max_score <= 0:
            return None
        return self.total_score / self.max_score * 100.0


@dataclass(frozen=True)
class MockInterviewRecord:
    interview_type: str
    status: str
    overall_score: Optional[float] = None


@dataclass(frozen=True)
class CodingProfile:
    easy_solved: int = 0
    medium_solved: int = 0
    hard_solved: int = 0
    contest_rating: Optional[float] = None


@dataclass(frozen=True)
class GitHubActivity:
    public_repos: int = 0
    contribution_count: int = 0


@dataclass(frozen=True)
class RoadmapProgress:
    completed_module_count: int = 0
    module_test_scores: List[float] = field(default_factory=list)


@dataclass
class StudentSignals:
    """Snapshot of every raw signal the readiness score is built from."""
    skills: List[SkillRecord] = field(default_factory=list)
    projects: List[ProjectRecord] = field(default_factory=list)
    internships: List[InternshipRecord] = field(default_factory=list)
    certification_count: int = 0
    events: List[EventRecord] = field(default_factory=list)
    assessments: List[AssessmentRecord] = field(default_factory=list)  # newest first
    mock_interviews: List[MockInterviewRecord] = field(default_factory=list)
    coding_profile: Optional[CodingProfile] = None
    github_profile: Optional[GitHubActivity] = None
    learning_pace_score: Optional[int] = None
    roadmap_progress: Optional[RoadmapProgress] = None


@dataclass
class ScoreBreakdownResult:
    """Complete readiness result returned to callers for explanation."""
    student_id: str
    components: Dict[str, int]
    weights: Dict[str, float]
    total_score: float
    profile_completion: int
    last_calculated_at: datetime
    label: str = ""
    classification: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            'student_id': self.student_id,
            'components': dict(self.components),
            'weights': dict(self.weights),
            'total_score': self.total_score,
            'profile_completion': self.profile_completion,
            'last_calculated_at': self.last_calculated_at.isoformat(),
            'label': self.label,
            'classification': self.classification,
        }
