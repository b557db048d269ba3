import uuid

from sqlalchemy import Column, Text, Integer, Numeric, TIMESTAMP, ForeignKey, Uuid, UniqueConstraint, Index, func
from sqlalchemy.orm import relationship

from .base import Base


class ScoreWeight(Base):
    """Per-component weight override (percentage). Missing rows use defaults."""
    __tablename__ = 'score_weights'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    component = Column(Text, nullable=False, unique=True)
    weight = Column(Numeric(5, 2), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class ScoreBreakdown(Base):
    """
    Last computed readiness breakdown for a student.

    One row per student, upserted on every recalculation.
    """
    __tablename__ = 'score_breakdowns'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey('students.id', ondelete='CASCADE'), nullable=False, unique=True)

    coding_practice = Column(Integer, nullable=False, default=0)
    projects = Column(Integer, nullable=False, default=0)
    internships = Column(Integer, nullable=False, default=0)
    technical_skills = Column(Integer, nullable=False, default=0)
    assessments = Column(Integer, nullable=False, default=0)
    interview_readiness = Column(Integer, nullable=False, default=0)
    github_activity = Column(Integer, nullable=False, default=0)
    certifications = Column(Integer, nullable=False, default=0)
    events = Column(Integer, nullable=False, default=0)
    learning_pace = Column(Integer, nullable=False, default=0)
    roadmap_progress = Column(Integer, nullable=False, default=0)

    total_score = Column(Numeric(5, 2), nullable=False, default=0)
    profile_completion = Column(Integer, nullable=False, default=0)
    last_calculated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    student = relationship("Student", back_populates="score_breakdown")


class Ranking(Base):
    """
    Rank of a student within a partition.

    job_id IS NULL is the global partition; otherwise the row ranks the
    student for one job by relevance score.
    """
    __tablename__ = 'rankings'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey('students.id', ondelete='CASCADE'), nullable=False)
    job_id = Column(Uuid, ForeignKey('jobs.id', ondelete='CASCADE'), nullable=True)
    rank = Column(Integer, nullable=False)
    score = Column(Numeric(5, 2), nullable=False)
    calculated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    student = relationship("Student", back_populates="rankings")
    job = relationship("Job", back_populates="rankings")

    __table_args__ = (
        UniqueConstraint('student_id', 'job_id', name='uq_ranking_student_job'),
        Index('idx_rankings_job_rank', 'job_id', 'rank'),
    )
