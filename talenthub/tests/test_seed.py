"""test_seed.py: Unit tests for demo data seeding and start-up restore."""

import random

from talenthub.core.config import Settings
from talenthub.main import init_application
from talenthub.services.seed import restore_application_state, seed_database
from talenthub.services.store import LocalStore


def test_seed_fills_empty_store(store: LocalStore, settings: Settings) -> None:
    """Test the shape of the seeded demo data."""
    counts = seed_database(store, rng=random.Random(7), settings=settings)

    assert counts == {"jobs": 25, "candidates": 20, "assessments": 3, "assessmentScores": 50}
    assert store.counts() == counts
    assert [j.order for j in store.jobs.list_all()] == list(range(25))

    assessment = store.assessments.get("assessment-1")
    assert [s.title for s in assessment.ordered_sections()] == [
        "Technical Knowledge", "Problem Solving", "System Design",
    ]
    assert assessment.total_questions == 10
    assert assessment.shareable_link == "https://hire.company.com/assessment/assessment-1"
    assert all(60 <= s.percentage < 100 for s in store.assessment_scores.list_all())


def test_seed_is_skipped_when_jobs_exist(store: LocalStore, settings: Settings) -> None:
    seed_database(store, rng=random.Random(1), settings=settings)

    counts = seed_database(store, rng=random.Random(2), settings=settings)

    assert counts == {"jobs": 0, "candidates": 0, "assessments": 0, "assessmentScores": 0}
    assert store.jobs.count() == 25


def test_restore_seeds_only_when_empty(store: LocalStore, settings: Settings) -> None:
    assert restore_application_state(store, seed=False)["jobs"] == 0

    counts = restore_application_state(store, settings=settings, rng=random.Random(3))
    assert counts["candidates"] == 20

    assert restore_application_state(store, settings=settings) == counts


def test_init_application(settings: Settings) -> None:
    """Test the start-up wiring against an in-memory database."""
    app = init_application(settings.model_copy(update={"SEED_ON_EMPTY": True}), rng=random.Random(5))
    try:
        assert app.counts["jobs"] == 25
        assert app.retry_policy.max_attempts == settings.RETRY_MAX_ATTEMPTS
        assert len(app.service.list_assessments()) == 3
    finally:
        app.close()
