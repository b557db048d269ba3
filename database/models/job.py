import uuid

from sqlalchemy import Column, Text, Numeric, TIMESTAMP, ForeignKey, Uuid, UniqueConstraint, func
from sqlalchemy.orm import relationship

from .base import Base


class Job(Base):
    """Job posting; only the fields the per-job ranking reads."""
    __tablename__ = 'jobs'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    company = Column(Text)
    status = Column(Text, nullable=False, default='open')  # open|closed|draft
    minimum_readiness_score = Column(Numeric(5, 2))
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    skills = relationship("JobSkill", back_populates="job", cascade="all, delete-orphan")
    rankings = relationship("Ranking", back_populates="job", cascade="all, delete-orphan")


class JobSkill(Base):
    __tablename__ = 'job_skills'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    job_id = Column(Uuid, ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False)
    skill_id = Column(Uuid, ForeignKey('skills.id', ondelete='CASCADE'), nullable=False)

    job = relationship("Job", back_populates="skills")
    skill = relationship("Skill")

    __table_args__ = (
        UniqueConstraint('job_id', 'skill_id', name='uq_job_skill'),
    )
