import uuid

from sqlalchemy import Column, Text, Integer, Numeric, TIMESTAMP, ForeignKey, Uuid, UniqueConstraint, Index, func
from sqlalchemy.orm import relationship

from .base import Base


class Student(Base):
    """
    Student profile with the denormalized readiness fields.

    readiness_score and profile_completion are written by the score
    aggregator in the same transaction as the ScoreBreakdown upsert.
    """
    __tablename__ = 'students'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(Text, nullable=False, unique=True)

    # Optional profile fields (feed profile completion)
    full_name = Column(Text)
    phone = Column(Text)
    linkedin = Column(Text)
    website = Column(Text)
    location = Column(Text)
    expected_grad = Column(Text)
    bio = Column(Text)
    gpa = Column(Numeric(4, 2))
    avatar_url = Column(Text)
    resume_url = Column(Text)
    github_username = Column(Text)
    leetcode_username = Column(Text)

    department = Column(Text)
    status = Column(Text, nullable=False, default='active')  # active|inactive|placed

    readiness_score = Column(Numeric(5, 2), nullable=False, default=0)
    profile_completion = Column(Integer, nullable=False, default=0)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
    deleted_at = Column(TIMESTAMP(timezone=True))

    skills = relationship("StudentSkill", back_populates="student", cascade="all, delete-orphan")
    score_breakdown = relationship("ScoreBreakdown", back_populates="student", uselist=False, cascade="all, delete-orphan")
    rankings = relationship("Ranking", back_populates="student", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_students_readiness', 'readiness_score'),
        Index('idx_students_status', 'status'),
    )


class Skill(Base):
    """Skill catalogue shared by students and job postings."""
    __tablename__ = 'skills'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, unique=True)
    category = Column(Text)  # language|framework|tool|soft|...


class StudentSkill(Base):
    __tablename__ = 'student_skills'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey('students.id', ondelete='CASCADE'), nullable=False)
    skill_id = Column(Uuid, ForeignKey('skills.id', ondelete='CASCADE'), nullable=False)
    proficiency = Column(Integer, nullable=False, default=0)  # 0-100
    level = Column(Text)  # beginner|intermediate|advanced|expert

    student = relationship("Student", back_populates="skills")
    skill = relationship("Skill")

    __table_args__ = (
        UniqueConstraint('student_id', 'skill_id', name='uq_student_skill'),
    )
