"""
Signal source records.

Each table holds one kind of raw student activity read by the score
aggregator. The engine never writes to these tables.
"""

import uuid

from sqlalchemy import Column, Text, Integer, Numeric, Date, TIMESTAMP, ForeignKey, Uuid, JSON, Index, func

from .base import Base


class Project(Base):
    __tablename__ = 'projects'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text)
    tech_stack = Column(JSON, nullable=False, default=list)
    github_url = Column(Text)
    live_url = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())


class Internship(Base):
    __tablename__ = 'internships'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True)
    company = Column(Text, nullable=False)
    role = Column(Text)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)  # NULL while ongoing


class Certification(Base):
    __tablename__ = 'certifications'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(Text, nullable=False)
    issuer = Column(Text)
    issued_on = Column(Date)


class Event(Base):
    __tablename__ = 'events'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(Text, nullable=False)
    achievement = Column(Text)  # winner|finalist|runner_up|speaker|organizer|participant
    event_date = Column(Date)


class Assessment(Base):
    __tablename__ = 'assessments'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey('students.id', ondelete='CASCADE'), nullable=False)
    title = Column(Text)
    total_score = Column(Numeric(8, 2), nullable=False)
    max_score = Column(Numeric(8, 2), nullable=False)
    completed_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('idx_assessments_student_completed', 'student_id', 'completed_at'),
    )


class MockInterview(Base):
    __tablename__ = 'mock_interviews'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True)
    interview_type = Column(Text, nullable=False)  # technical|behavioral|hr|system_design
    status = Column(Text, nullable=False, default='in_progress')  # in_progress|completed|abandoned
    overall_score = Column(Numeric(4, 2))  # 0-10, set on completion
    completed_at = Column(TIMESTAMP(timezone=True))


class LeetCodeProfile(Base):
    """Cached coding-practice profile, refreshed by the integrations layer."""
    __tablename__ = 'leetcode_profiles'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey('students.id', ondelete='CASCADE'), nullable=False, unique=True)
    easy_solved = Column(Integer, nullable=False, default=0)
    medium_solved = Column(Integer, nullable=False, default=0)
    hard_solved = Column(Integer, nullable=False, default=0)
    contest_rating = Column(Numeric(7, 2))
    fetched_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())


class GitHubProfile(Base):
    """Cached GitHub profile, refreshed by the integrations layer."""
    __tablename__ = 'github_profiles'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey('students.id', ondelete='CASCADE'), nullable=False, unique=True)
    public_repos = Column(Integer, nullable=False, default=0)
    total_stars = Column(Integer, nullable=False, default=0)
    contribution_count = Column(Integer, nullable=False, default=0)
    fetched_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())


class LearningActivity(Base):
    """
    Append-only learning activity log.

    type is one of skill_added, project_completed, cert_earned,
    leetcode_solved, assessment_taken, roadmap_module_completed.
    """
    __tablename__ = 'learning_activities'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey('students.id', ondelete='CASCADE'), nullable=False)
    type = Column(Text, nullable=False)
    entity_id = Column(Text)
    score = Column(Numeric(6, 2))
    completed_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('idx_learning_activity_student_time', 'student_id', 'completed_at'),
    )


class RoadmapModuleProgress(Base):
    __tablename__ = 'roadmap_module_progress'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True)
    roadmap_id = Column(Text, nullable=False)
    module_key = Column(Text, nullable=False)
    status = Column(Text, nullable=False, default='not_started')  # not_started|in_progress|completed
    test_score = Column(Numeric(5, 2))  # 0-100, NULL when no module test was taken
    completed_at = Column(TIMESTAMP(timezone=True))
