#!/usr/bin/env python3
"""
Test suite for RankingService with a mocked repository.
"""

import gc
import unittest
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import Mock, call

from core.config_loader import RankingConfig
from core.ranking import RankingService, calculate_relevance, calculate_percentile, job_ranking_lock
from core.ranking.service import _job_locks

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


class TestRelevance(unittest.TestCase):

    def test_blend(self):
        self.assertEqual(calculate_relevance(80, 0.5), 68.0)

    def test_full_match(self):
        self.assertEqual(calculate_relevance(60, 1.0), 76.0)

    def test_ratio_capped(self):
        self.assertEqual(calculate_relevance(50, 2.0), 70.0)

    def test_custom_blend(self):
        config = RankingConfig(readiness_weight=0.5, skill_match_weight=0.5)
        self.assertEqual(calculate_relevance(80, 0.5, config), 65.0)


class TestPercentile(unittest.TestCase):

    def test_top_of_six(self):
        self.assertEqual(calculate_percentile(1, 6), 83)

    def test_middle(self):
        self.assertEqual(calculate_percentile(3, 6), 50)

    def test_last_is_zero(self):
        self.assertEqual(calculate_percentile(6, 6), 0)

    def test_never_negative(self):
        self.assertEqual(calculate_percentile(8, 6), 0)


class TestJobRankingLock(unittest.TestCase):

    def test_same_lock_for_uuid_and_string(self):
        job_id = uuid.uuid4()
        lock = job_ranking_lock(job_id)
        self.assertIs(job_ranking_lock(str(job_id)), lock)
        self.assertIsNot(job_ranking_lock(uuid.uuid4()), lock)

    def test_unreferenced_lock_is_dropped(self):
        job_id = uuid.uuid4()
        lock = job_ranking_lock(job_id)
        self.assertIn(str(job_id), _job_locks)

        del lock
        gc.collect()

        self.assertNotIn(str(job_id), _job_locks)


class TestRankingService(unittest.TestCase):

    def setUp(self):
        self.repo = Mock()
        self.service = RankingService(repo=self.repo, config=RankingConfig())

    def test_recalculate_global_replaces_partition(self):
        a, b, c = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
        self.repo.students.list_eligible_scores.return_value = [(a, 90.0), (b, 90.0), (c, 80.0)]

        count = self.service.recalculate_global(now=NOW)

        self.assertEqual(count, 3)
        self.repo.rankings.replace_global.assert_called_once_with(
            [(a, 1, 90.0), (b, 1, 90.0), (c, 3, 80.0)],
            calculated_at=NOW
        )

    def test_recalculate_global_empty_population_clears(self):
        self.repo.students.list_eligible_scores.return_value = []

        self.assertEqual(self.service.recalculate_global(now=NOW), 0)
        self.repo.rankings.replace_global.assert_called_once_with([], calculated_at=NOW)

    def test_job_not_found_returns_zero(self):
        self.repo.jobs.get_by_id.return_value = None

        self.assertEqual(self.service.recalculate_for_job(uuid.uuid4(), now=NOW), 0)
        self.repo.rankings.upsert_job_ranking.assert_not_called()

    def test_job_without_candidates_returns_zero(self):
        job = SimpleNamespace(id=uuid.uuid4(), minimum_readiness_score=90)
        self.repo.jobs.get_by_id.return_value = job
        self.repo.jobs.get_required_skill_ids.return_value = []
        self.repo.students.list_job_candidates.return_value = []

        self.assertEqual(self.service.recalculate_for_job(job.id, now=NOW), 0)
        self.repo.students.list_job_candidates.assert_called_once_with(90.0, [])
        self.repo.rankings.upsert_job_ranking.assert_not_called()

    def test_job_ranking_by_relevance(self):
        job = SimpleNamespace(id=uuid.uuid4(), minimum_readiness_score=50)
        x, z = uuid.uuid4(), uuid.uuid4()
        self.repo.jobs.get_by_id.return_value = job
        self.repo.jobs.get_required_skill_ids.return_value = [uuid.uuid4(), uuid.uuid4()]
        self.repo.students.list_job_candidates.return_value = [(x, 80.0, 1), (z, 60.0, 2)]

        count = self.service.recalculate_for_job(job.id, now=NOW)

        self.assertEqual(count, 2)
        self.repo.rankings.upsert_job_ranking.assert_has_calls([
            call(z, job.id, 1, 76.0, calculated_at=NOW),
            call(x, job.id, 2, 68.0, calculated_at=NOW),
        ])

    def test_job_without_required_skills_uses_readiness_only(self):
        job = SimpleNamespace(id=uuid.uuid4(), minimum_readiness_score=None)
        sid = uuid.uuid4()
        self.repo.jobs.get_by_id.return_value = job
        self.repo.jobs.get_required_skill_ids.return_value = []
        self.repo.students.list_job_candidates.return_value = [(sid, 50.0, 0)]

        self.service.recalculate_for_job(job.id, now=NOW)

        self.repo.students.list_job_candidates.assert_called_once_with(0.0, [])
        self.repo.rankings.upsert_job_ranking.assert_called_once_with(sid, job.id, 1, 30.0, calculated_at=NOW)

    def test_student_global_rank(self):
        self.repo.students.count_eligible.return_value = 6
        self.repo.rankings.get_global_entry.return_value = SimpleNamespace(rank=3, score=80)

        rank = self.service.get_student_global_rank(uuid.uuid4())

        self.assertEqual(rank.rank, 3)
        self.assertEqual(rank.score, 80.0)
        self.assertEqual(rank.total_eligible_count, 6)
        self.assertEqual(rank.percentile, 50)

    def test_unranked_student(self):
        self.repo.students.count_eligible.return_value = 4
        self.repo.rankings.get_global_entry.return_value = None

        rank = self.service.get_student_global_rank(uuid.uuid4())

        self.assertIsNone(rank.rank)
        self.assertIsNone(rank.percentile)
        self.assertEqual(rank.total_eligible_count, 4)

    def test_empty_population_has_no_percentile(self):
        self.repo.students.count_eligible.return_value = 0
        self.repo.rankings.get_global_entry.return_value = SimpleNamespace(rank=1, score=10)

        rank = self.service.get_student_global_rank(uuid.uuid4())

        self.assertIsNone(rank.percentile)


if __name__ == "__main__":
    unittest.main()
