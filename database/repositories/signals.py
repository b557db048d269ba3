"""
Signal fetchers - one read per signal type.

Converts ORM rows into the immutable records the component calculators
consume. Rows are read-only here; nothing in this module writes.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional
from sqlalchemy import select, func

from core.scorer.learning_pace import ActivityRecord, calculate_learning_pace, LearningPaceReport
from core.scorer.models import (
    SkillRecord, ProjectRecord, InternshipRecord, EventRecord, AssessmentRecord,
    MockInterviewRecord, CodingProfile, GitHubActivity, RoadmapProgress
)
from database.models import (
    StudentSkill, Skill, Project, Internship, Certification, Event, Assessment,
    MockInterview, LeetCodeProfile, GitHubProfile, LearningActivity, RoadmapModuleProgress
)
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)

PACE_ASSESSMENT_WINDOW = 5


def _opt_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


class SignalRepository(BaseRepository):
    def get_skills(self, student_id: Any) -> List[SkillRecord]:
        stmt = (
            select(Skill.name, Skill.category, StudentSkill.proficiency, StudentSkill.level)
            .join(Skill, Skill.id == StudentSkill.skill_id)
            .where(StudentSkill.student_id == to_uuid(student_id))
        )
        return [
            SkillRecord(name=name, category=category, proficiency=int(proficiency or 0), level=level)
            for name, category, proficiency, level in self.db.execute(stmt).all()
        ]

    def get_projects(self, student_id: Any) -> List[ProjectRecord]:
        stmt = select(Project).where(Project.student_id == to_uuid(student_id)).order_by(Project.created_at)
        return [
            ProjectRecord(
                description=p.description,
                tech_stack=[str(t) for t in (p.tech_stack or [])],
                github_url=p.github_url,
                live_url=p.live_url,
            )
            for p in self.db.execute(stmt).scalars().all()
        ]

    def get_internships(self, student_id: Any) -> List[InternshipRecord]:
        stmt = (
            select(Internship.start_date, Internship.end_date)
            .where(Internship.student_id == to_uuid(student_id))
            .order_by(Internship.start_date)
        )
        return [
            InternshipRecord(start_date=start, end_date=end)
            for start, end in self.db.execute(stmt).all()
        ]

    def count_certifications(self, student_id: Any) -> int:
        stmt = select(func.count(Certification.id)).where(Certification.student_id == to_uuid(student_id))
        return int(self.db.execute(stmt).scalar_one())

    def get_events(self, student_id: Any) -> List[EventRecord]:
        stmt = select(Event.achievement).where(Event.student_id == to_uuid(student_id))
        return [EventRecord(achievement=a) for a in self.db.execute(stmt).scalars().all()]

    def get_recent_assessments(self, student_id: Any, limit: int = 20) -> List[AssessmentRecord]:
        """Most recent assessments, newest first."""
        stmt = (
            select(Assessment.total_score, Assessment.max_score, Assessment.completed_at)
            .where(Assessment.student_id == to_uuid(student_id))
            .order_by(Assessment.completed_at.desc())
            .limit(limit)
        )
        return [
            AssessmentRecord(total_score=float(total), max_score=float(maximum), completed_at=completed_at)
            for total, maximum, completed_at in self.db.execute(stmt).all()
        ]

    def get_mock_interviews(self, student_id: Any) -> List[MockInterviewRecord]:
        stmt = (
            select(MockInterview.interview_type, MockInterview.status, MockInterview.overall_score)
            .where(MockInterview.student_id == to_uuid(student_id))
        )
        return [
            MockInterviewRecord(interview_type=kind, status=status, overall_score=_opt_float(score))
            for kind, status, score in self.db.execute(stmt).all()
        ]

    def get_coding_profile(self, student_id: Any) -> Optional[CodingProfile]:
        stmt = select(LeetCodeProfile).where(LeetCodeProfile.student_id == to_uuid(student_id))
        profile = self.db.execute(stmt).scalar_one_or_none()
        if profile is None:
            return None
        return CodingProfile(
            easy_solved=profile.easy_solved or 0,
            medium_solved=profile.medium_solved or 0,
            hard_solved=profile.hard_solved or 0,
            contest_rating=_opt_float(profile.contest_rating),
        )

    def get_github_profile(self, student_id: Any) -> Optional[GitHubActivity]:
        stmt = select(GitHubProfile).where(GitHubProfile.student_id == to_uuid(student_id))
        profile = self.db.execute(stmt).scalar_one_or_none()
        if profile is None:
            return None
        return GitHubActivity(
            public_repos=profile.public_repos or 0,
            contribution_count=profile.contribution_count or 0,
        )

    def get_activities(self, student_id: Any) -> List[ActivityRecord]:
        stmt = (
            select(LearningActivity.type, LearningActivity.completed_at)
            .where(LearningActivity.student_id == to_uuid(student_id))
            .order_by(LearningActivity.completed_at.desc())
        )
        return [ActivityRecord(type=kind, completed_at=at) for kind, at in self.db.execute(stmt).all()]

    def get_learning_pace(self, student_id: Any, now: Optional[datetime] = None) -> LearningPaceReport:
        activities = self.get_activities(student_id)
        assessments = self.get_recent_assessments(student_id, limit=PACE_ASSESSMENT_WINDOW)
        return calculate_learning_pace(activities, assessments, now=now)

    def get_learning_pace_score(self, student_id: Any, now: Optional[datetime] = None) -> Optional[int]:
        """
        Pace composite for the readiness total.

        A student with no logged activity has no pace signal (None).

        Raises:
            ComputationSkipped: if the pace cannot be computed
        """
        activities = self.get_activities(student_id)
        if not activities:
            return None
        assessments = self.get_recent_assessments(student_id, limit=PACE_ASSESSMENT_WINDOW)
        report = calculate_learning_pace(activities, assessments, now=now)
        return report.pace_score

    def get_roadmap_progress(self, student_id: Any) -> Optional[RoadmapProgress]:
        stmt = (
            select(RoadmapModuleProgress.test_score)
            .where(
                RoadmapModuleProgress.student_id == to_uuid(student_id),
                RoadmapModuleProgress.status == 'completed'
            )
        )
        rows = self.db.execute(stmt).scalars().all()
        if not rows:
            return None
        return RoadmapProgress(
            completed_module_count=len(rows),
            module_test_scores=[float(s) for s in rows if s is not None],
        )
