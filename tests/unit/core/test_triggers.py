#!/usr/bin/env python3
"""
Test suite for the post-mutation trigger policy.
"""

import unittest
from unittest.mock import Mock, patch

from core.config_loader import TriggerConfig
from core.engine import BestEffortResult
from core.exceptions import PersistenceFailure, StudentNotFoundException
from core.triggers import TriggerPolicy, _engine_for_config, run_global_ranking_refresh, run_job_ranking_refresh


class TestInlineTriggers(unittest.TestCase):

    def setUp(self):
        self.engine = Mock()
        self.engine.recalculate_score.return_value = "breakdown"
        self.engine.refresh_global_rankings.return_value = BestEffortResult(succeeded=True, ranked_count=12)
        self.policy = TriggerPolicy(self.engine)

    def test_score_change_recalculates_then_refreshes(self):
        breakdown, refresh = self.policy.on_score_affecting_change("student-1")

        self.assertEqual(breakdown, "breakdown")
        self.assertTrue(refresh.succeeded)
        self.assertEqual(refresh.ranked_count, 12)
        self.engine.recalculate_score.assert_called_once_with("student-1")
        self.engine.refresh_global_rankings.assert_called_once_with()

    def test_score_failure_propagates_and_skips_refresh(self):
        self.engine.recalculate_score.side_effect = StudentNotFoundException("student-1")

        with self.assertRaises(StudentNotFoundException):
            self.policy.on_score_affecting_change("student-1")

        self.engine.refresh_global_rankings.assert_not_called()

    def test_refresh_failure_reported_not_raised(self):
        self.engine.refresh_global_rankings.return_value = BestEffortResult(succeeded=False, error="db down")

        with self.assertLogs('core.triggers', level='WARNING'):
            breakdown, refresh = self.policy.on_score_affecting_change("student-1")

        self.assertEqual(breakdown, "breakdown")
        self.assertFalse(refresh.succeeded)

    def test_job_change_runs_inline(self):
        self.engine.recalculate_job_rankings.return_value = 3

        result = self.policy.on_job_change("job-9")

        self.assertTrue(result.succeeded)
        self.assertEqual(result.ranked_count, 3)

    def test_job_change_failure_swallowed(self):
        self.engine.recalculate_job_rankings.side_effect = PersistenceFailure("rejected")

        with self.assertLogs('core.triggers', level='ERROR'):
            result = self.policy.on_job_change("job-9")

        self.assertFalse(result.succeeded)
        self.assertIn("rejected", result.error)


class TestQueuedTriggers(unittest.TestCase):

    def setUp(self):
        self.engine = Mock()
        self.engine.recalculate_score.return_value = "breakdown"
        self.queue = Mock()
        self.queue.enqueue.return_value = Mock(id="rq-job-1")
        self.policy = TriggerPolicy(self.engine, queue=self.queue)

    def test_global_refresh_enqueued(self):
        _, refresh = self.policy.on_score_affecting_change("student-1")

        self.assertTrue(refresh.enqueued)
        self.assertEqual(refresh.job_id, "rq-job-1")
        self.engine.refresh_global_rankings.assert_not_called()
        args, kwargs = self.queue.enqueue.call_args
        self.assertIs(args[0], run_global_ranking_refresh)
        self.assertIn('job_timeout', kwargs)

    def test_job_refresh_enqueued_with_id(self):
        result = self.policy.on_job_change("job-9")

        self.assertTrue(result.enqueued)
        args, _ = self.queue.enqueue.call_args
        self.assertEqual(args[:2], (run_job_ranking_refresh, "job-9"))

    def test_enqueue_failure_swallowed(self):
        self.queue.enqueue.side_effect = ConnectionError("redis unreachable")

        with self.assertLogs('core.triggers', level='ERROR'):
            breakdown, refresh = self.policy.on_score_affecting_change("student-1")

        self.assertEqual(breakdown, "breakdown")
        self.assertFalse(refresh.succeeded)
        self.assertFalse(refresh.enqueued)


class TestTriggerPolicyFromConfig(unittest.TestCase):

    def test_inline_by_default(self):
        policy = TriggerPolicy.from_config(Mock(), TriggerConfig())
        self.assertIsNone(policy.queue)

    @patch("core.triggers.Queue")
    @patch("core.triggers.Redis")
    def test_async_queue_built_from_redis_url(self, mock_redis, mock_queue):
        config = TriggerConfig(use_async_queue=True, redis_url="redis://cache:6379/2", queue_name="scores")

        policy = TriggerPolicy.from_config(Mock(), config)

        mock_redis.from_url.assert_called_once_with("redis://cache:6379/2")
        mock_queue.assert_called_once_with("scores", connection=mock_redis.from_url.return_value)
        self.assertIs(policy.queue, mock_queue.return_value)


class TestWorkerEntryPoints(unittest.TestCase):

    @patch("core.triggers._engine_from_env")
    def test_global_entry_point(self, mock_engine_from_env):
        mock_engine_from_env.return_value.recalculate_global_rankings.return_value = 5
        self.assertEqual(run_global_ranking_refresh(), 5)

    @patch("core.triggers._engine_from_env")
    def test_job_entry_point(self, mock_engine_from_env):
        mock_engine_from_env.return_value.recalculate_job_rankings.return_value = 2
        self.assertEqual(run_job_ranking_refresh("job-9"), 2)
        mock_engine_from_env.return_value.recalculate_job_rankings.assert_called_once_with("job-9")

    @patch.dict("os.environ", {"READINESS_CONFIG": "worker.yaml"})
    @patch("core.triggers.ReadinessEngine")
    @patch("core.triggers.load_config")
    def test_engine_reused_across_jobs(self, mock_load_config, mock_engine_cls):
        _engine_for_config.cache_clear()
        self.addCleanup(_engine_for_config.cache_clear)
        engine = mock_engine_cls.from_config.return_value

        run_global_ranking_refresh()
        run_job_ranking_refresh("job-1")
        run_job_ranking_refresh("job-2")

        mock_load_config.assert_called_once_with("worker.yaml")
        mock_engine_cls.from_config.assert_called_once_with(mock_load_config.return_value)
        self.assertEqual(engine.recalculate_job_rankings.call_count, 2)


if __name__ == "__main__":
    unittest.main()
