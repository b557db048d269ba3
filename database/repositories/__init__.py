from database.repositories.base import BaseRepository, to_uuid
from database.repositories.student import StudentRepository
from database.repositories.job import JobRepository
from database.repositories.signals import SignalRepository
from database.repositories.weights import WeightRepository
from database.repositories.score import ScoreRepository
from database.repositories.ranking import RankingRepository

__all__ = [
    'BaseRepository',
    'to_uuid',
    'StudentRepository',
    'JobRepository',
    'SignalRepository',
    'WeightRepository',
    'ScoreRepository',
    'RankingRepository',
]
