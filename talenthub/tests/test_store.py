"""test_store.py: Unit tests for the SQLite-backed LocalStore collections."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from talenthub.core.exceptions import StoreError
from talenthub.db.session import session_scope
from talenthub.schemas.candidate import Candidate
from talenthub.schemas.job import Job
from talenthub.schemas.score import AssessmentScore
from talenthub.services.store import LocalStore


def _job(i: int, **fields) -> Job:
    return Job(id=f"job-{i}", title=f"Role {i}", order=i, **fields)


def test_insert_and_get(store: LocalStore, candidate: Candidate) -> None:
    """Test that a stored document reads back unchanged."""
    store.candidates.insert(candidate)

    loaded = store.candidates.get(candidate.id)

    assert loaded == candidate
    assert store.candidates.get("missing") is None


def test_insert_assigns_missing_id(store: LocalStore, now) -> None:
    score = store.assessment_scores.insert(AssessmentScore(assessment_id="assessment-1", completed_at=now))
    assert score.id.startswith("score-")
    assert store.assessment_scores.count() == 1


def test_list_all_uses_index_ordering(store: LocalStore, now) -> None:
    """Test default and explicit ordering on indexed fields."""
    store.jobs.bulk_insert([_job(2), _job(0), _job(1)])
    assert [j.id for j in store.jobs.list_all()] == ["job-0", "job-1", "job-2"]
    assert [j.id for j in store.jobs.list_all("order", descending=True)] == ["job-2", "job-1", "job-0"]

    with pytest.raises(ValueError):
        store.jobs.list_all("description")


def test_where_filters_on_index(store: LocalStore, now) -> None:
    store.assessment_scores.bulk_insert([
        AssessmentScore(id="s1", assessment_id="a1", completed_at=now),
        AssessmentScore(id="s2", assessment_id="a2", completed_at=now),
        AssessmentScore(id="s3", assessment_id="a1", completed_at=now + timedelta(minutes=1)),
    ])
    assert [s.id for s in store.assessment_scores.where("assessment_id", "a1")] == ["s1", "s3"]


def test_update_merges_top_level_fields(store: LocalStore, candidate: Candidate) -> None:
    """Test that update changes the named fields and keeps the index in sync."""
    store.candidates.insert(candidate)

    updated = store.candidates.update(candidate.id, {"current_stage": "interview"})

    assert updated.current_stage == "interview"
    assert updated.email == candidate.email
    assert [c.id for c in store.candidates.where("current_stage", "interview")] == [candidate.id]
    assert store.candidates.update("missing", {"current_stage": "offer"}) is None


def test_update_cannot_change_id(store: LocalStore) -> None:
    store.jobs.insert(_job(1))
    with pytest.raises(ValueError):
        store.jobs.update("job-1", {"id": "job-2"})


def test_put_overwrites_whole_document(store: LocalStore) -> None:
    store.jobs.put(_job(1, description="old"))
    store.jobs.put(_job(1, description="new"))

    assert store.jobs.count() == 1
    assert store.jobs.get("job-1").description == "new"


def test_delete_and_clear(store: LocalStore) -> None:
    store.jobs.bulk_insert([_job(1), _job(2)])

    assert store.jobs.delete("job-1") is True
    assert store.jobs.delete("job-1") is False
    assert store.jobs.clear() == 1
    assert store.jobs.count() == 0


def test_replace_all_is_atomic(store: LocalStore) -> None:
    """Test that a bad item leaves every collection as it was."""
    store.jobs.insert(_job(1))
    data = {
        "jobs": [_job(9).to_document()],
        "candidates": [{"id": "broken"}],
        "assessments": [],
        "assessmentScores": [],
    }

    with pytest.raises(ValueError):
        store.replace_all(data)

    assert [j.id for j in store.jobs.list_all()] == ["job-1"]


def test_replace_all_requires_every_collection(store: LocalStore) -> None:
    with pytest.raises(KeyError):
        store.replace_all({"jobs": []})


def test_counts(store: LocalStore, candidate: Candidate) -> None:
    store.candidates.insert(candidate)
    assert store.counts() == {"jobs": 0, "candidates": 1, "assessments": 0, "assessmentScores": 0}


def test_operational_error_becomes_store_error(store: LocalStore) -> None:
    """Test that driver-level failures surface as retryable StoreError."""
    with pytest.raises(StoreError):
        with session_scope(store.session_factory) as db:
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))
