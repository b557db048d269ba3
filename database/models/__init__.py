from .base import Base
from .student import Student, Skill, StudentSkill
from .activity import (
    Project, Internship, Certification, Event, Assessment, MockInterview,
    LeetCodeProfile, GitHubProfile, LearningActivity, RoadmapModuleProgress
)
from .job import Job, JobSkill
from .score import ScoreWeight, ScoreBreakdown, Ranking

__all__ = [
    'Base',
    'Student',
    'Skill',
    'StudentSkill',
    'Project',
    'Internship',
    'Certification',
    'Event',
    'Assessment',
    'MockInterview',
    'LeetCodeProfile',
    'GitHubProfile',
    'LearningActivity',
    'RoadmapModuleProgress',
    'Job',
    'JobSkill',
    'ScoreWeight',
    'ScoreBreakdown',
    'Ranking',
]
