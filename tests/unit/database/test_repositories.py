#!/usr/bin/env python3
"""
Repository tests against an in-memory SQLite database.
"""

import uuid
from datetime import date, datetime, timedelta, timezone

import pytest

from database.models import Ranking, ScoreBreakdown, RoadmapModuleProgress, GitHubProfile
from database.repositories import (
    StudentRepository, JobRepository, SignalRepository, WeightRepository,
    ScoreRepository, RankingRepository
)
from database.repositories.base import to_uuid
from tests import REFERENCE_NOW
from tests.fixtures.readiness_fixtures import (
    make_student, make_skill, give_skill, make_job, add_certifications, add_leetcode,
    add_activity, add_assessment, add_internship, add_event
)

pytestmark = pytest.mark.db


class TestToUuid:

    def test_string_coerced(self):
        value = uuid.uuid4()
        assert to_uuid(str(value)) == value

    def test_uuid_passthrough(self):
        value = uuid.uuid4()
        assert to_uuid(value) is value

    def test_invalid_is_none(self):
        assert to_uuid("not-a-uuid") is None
        assert to_uuid(None) is None


class TestStudentRepository:

    def test_get_active_by_id_excludes_deleted(self, db_session):
        active = make_student(db_session)
        deleted = make_student(db_session, deleted=True)
        repo = StudentRepository(db_session)

        assert repo.get_active_by_id(active.id).id == active.id
        assert repo.get_active_by_id(str(active.id)).id == active.id
        assert repo.get_active_by_id(deleted.id) is None
        assert repo.get_active_by_id("garbage") is None

    def test_eligible_scores_exclude_inactive_and_deleted(self, db_session):
        top = make_student(db_session, readiness_score=90)
        low = make_student(db_session, readiness_score=40)
        make_student(db_session, readiness_score=95, status='inactive')
        make_student(db_session, readiness_score=99, deleted=True)
        placed = make_student(db_session, readiness_score=60, status='placed')
        repo = StudentRepository(db_session)

        scores = repo.list_eligible_scores()

        assert [sid for sid, _ in scores] == [top.id, placed.id, low.id]
        assert [score for _, score in scores] == [90.0, 60.0, 40.0]
        assert repo.count_eligible() == 3

    def test_update_readiness(self, db_session):
        student = make_student(db_session)
        repo = StudentRepository(db_session)

        repo.update_readiness(student.id, readiness_score=42.5, profile_completion=33)
        db_session.expire_all()

        refreshed = repo.get_active_by_id(student.id)
        assert float(refreshed.readiness_score) == 42.5
        assert refreshed.profile_completion == 33

    def test_job_candidates_count_matching_skills(self, db_session):
        python, sql, go = make_skill(db_session, "Python"), make_skill(db_session, "SQL"), make_skill(db_session, "Go")
        both = make_student(db_session, readiness_score=70)
        give_skill(db_session, both, python)
        give_skill(db_session, both, sql)
        unrelated = make_student(db_session, readiness_score=55)
        give_skill(db_session, unrelated, go)
        inactive = make_student(db_session, readiness_score=80, status='inactive')
        make_student(db_session, readiness_score=45)
        make_student(db_session, readiness_score=90, deleted=True)
        repo = StudentRepository(db_session)

        candidates = {sid: (score, matched) for sid, score, matched in repo.list_job_candidates(50, [python.id, sql.id])}

        assert candidates == {
            both.id: (70.0, 2),
            unrelated.id: (55.0, 0),
            inactive.id: (80.0, 0),
        }

    def test_list_active_ids(self, db_session):
        a = make_student(db_session)
        make_student(db_session, deleted=True)
        b = make_student(db_session, status='inactive')

        ids = StudentRepository(db_session).list_active_ids()

        assert set(ids) == {a.id, b.id}


class TestJobRepository:

    def test_required_skills(self, db_session):
        python, sql = make_skill(db_session, "Python"), make_skill(db_session, "SQL")
        job = make_job(db_session, skills=[python, sql], minimum_readiness_score=50)
        repo = JobRepository(db_session)

        assert repo.get_by_id(str(job.id)).id == job.id
        assert set(repo.get_required_skill_ids(job.id)) == {python.id, sql.id}
        assert repo.get_by_id(uuid.uuid4()) is None
        assert repo.get_by_id("garbage") is None


class TestRankingRepository:

    def test_replace_global_swaps_partition(self, db_session):
        a, b, c = make_student(db_session), make_student(db_session), make_student(db_session)
        repo = RankingRepository(db_session)

        repo.replace_global([(a.id, 1, 90.0), (b.id, 2, 80.0)], calculated_at=REFERENCE_NOW)
        repo.replace_global([(c.id, 1, 70.0)], calculated_at=REFERENCE_NOW)

        rows = repo.list_partition(None)
        assert [(r.student_id, r.rank) for r in rows] == [(c.id, 1)]
        assert repo.get_global_entry(a.id) is None

    def test_replace_global_leaves_job_partitions(self, db_session):
        student = make_student(db_session)
        job = make_job(db_session)
        repo = RankingRepository(db_session)

        repo.upsert_job_ranking(student.id, job.id, 1, 55.0, calculated_at=REFERENCE_NOW)
        repo.replace_global([], calculated_at=REFERENCE_NOW)

        assert len(repo.list_partition(job.id)) == 1

    def test_upsert_job_ranking_updates_in_place(self, db_session):
        student = make_student(db_session)
        job = make_job(db_session)
        repo = RankingRepository(db_session)

        repo.upsert_job_ranking(student.id, job.id, 3, 40.0, calculated_at=REFERENCE_NOW)
        repo.upsert_job_ranking(student.id, job.id, 1, 65.5, calculated_at=REFERENCE_NOW)

        rows = db_session.query(Ranking).filter(Ranking.job_id == job.id).all()
        assert len(rows) == 1
        assert rows[0].rank == 1
        assert float(rows[0].score) == 65.5

    def test_list_partition_limit_and_order(self, db_session):
        students = [make_student(db_session) for _ in range(3)]
        repo = RankingRepository(db_session)
        repo.replace_global(
            [(students[0].id, 2, 50.0), (students[1].id, 1, 60.0), (students[2].id, 3, 40.0)],
            calculated_at=REFERENCE_NOW
        )

        top = repo.list_partition(None, limit=2)

        assert [r.rank for r in top] == [1, 2]


class TestScoreRepository:

    def test_upsert_breakdown_single_row(self, db_session):
        student = make_student(db_session)
        repo = ScoreRepository(db_session)

        repo.upsert_breakdown(student.id, {'projects': 24, 'events': 30}, 8.1, 25, REFERENCE_NOW)
        repo.upsert_breakdown(student.id, {'projects': 12, 'events': 30}, 6.3, 25, REFERENCE_NOW)

        rows = db_session.query(ScoreBreakdown).all()
        assert len(rows) == 1
        assert rows[0].projects == 12
        assert float(rows[0].total_score) == 6.3


class TestWeightRepository:

    def test_set_and_read_overrides(self, db_session):
        repo = WeightRepository(db_session)

        repo.set_weight('projects', 20)
        repo.set_weight('projects', 22.5)
        repo.set_weight('events', 2)

        assert repo.get_weight_overrides() == {'projects': 22.5, 'events': 2.0}


class TestSignalRepository:

    def test_empty_student(self, db_session):
        student = make_student(db_session)
        repo = SignalRepository(db_session)

        assert repo.get_skills(student.id) == []
        assert repo.get_projects(student.id) == []
        assert repo.count_certifications(student.id) == 0
        assert repo.get_coding_profile(student.id) is None
        assert repo.get_github_profile(student.id) is None
        assert repo.get_roadmap_progress(student.id) is None
        assert repo.get_learning_pace_score(student.id, now=REFERENCE_NOW) is None

    def test_skills_and_counts(self, db_session):
        student = make_student(db_session)
        give_skill(db_session, student, make_skill(db_session, "Python", "language"), proficiency=80)
        add_certifications(db_session, student, 3)
        add_event(db_session, student, "winner")
        add_internship(db_session, student, date(2024, 1, 1), date(2024, 6, 29))
        repo = SignalRepository(db_session)

        skills = repo.get_skills(student.id)
        assert [(s.name, s.proficiency, s.category) for s in skills] == [("Python", 80, "language")]
        assert repo.count_certifications(student.id) == 3
        assert [e.achievement for e in repo.get_events(student.id)] == ["winner"]
        assert repo.get_internships(student.id)[0].end_date == date(2024, 6, 29)

    def test_assessments_newest_first_and_limited(self, db_session):
        student = make_student(db_session)
        for days_ago, total in [(10, 60), (1, 90), (5, 75)]:
            add_assessment(db_session, student, total, 100, REFERENCE_NOW - timedelta(days=days_ago))
        repo = SignalRepository(db_session)

        recent = repo.get_recent_assessments(student.id, limit=2)

        assert [a.total_score for a in recent] == [90.0, 75.0]

    def test_coding_and_github_profiles(self, db_session):
        student = make_student(db_session)
        add_leetcode(db_session, student, easy=10, medium=10, hard=5, contest_rating=1650)
        db_session.add(GitHubProfile(student_id=student.id, public_repos=4, contribution_count=120))
        db_session.flush()
        repo = SignalRepository(db_session)

        coding = repo.get_coding_profile(student.id)
        github = repo.get_github_profile(student.id)

        assert (coding.easy_solved, coding.medium_solved, coding.hard_solved) == (10, 10, 5)
        assert coding.contest_rating == 1650.0
        assert (github.public_repos, github.contribution_count) == (4, 120)

    def test_roadmap_counts_completed_modules_only(self, db_session):
        student = make_student(db_session)
        for key, status, score in [("m1", "completed", 80), ("m2", "completed", None), ("m3", "in_progress", 95)]:
            db_session.add(RoadmapModuleProgress(
                student_id=student.id, roadmap_id="backend", module_key=key, status=status, test_score=score
            ))
        db_session.flush()

        progress = SignalRepository(db_session).get_roadmap_progress(student.id)

        assert progress.completed_module_count == 2
        assert progress.module_test_scores == [80.0]

    def test_learning_pace_from_activity_log(self, db_session):
        student = make_student(db_session)
        add_activity(db_session, student, 'skill_added', REFERENCE_NOW - timedelta(days=1))
        add_activity(db_session, student, 'skill_added', REFERENCE_NOW - timedelta(days=40))
        add_activity(db_session, student, 'project_completed', REFERENCE_NOW - timedelta(days=2))
        for days_ago in (0, 0, 1, 2):
            add_activity(db_session, student, 'leetcode_solved', REFERENCE_NOW - timedelta(days=days_ago))
        repo = SignalRepository(db_session)

        report = repo.get_learning_pace(student.id, now=REFERENCE_NOW)

        assert report.pace_score == 26
        assert report.streak == 3
        assert repo.get_learning_pace_score(student.id, now=REFERENCE_NOW) == 26
