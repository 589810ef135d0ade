"""test_transfer.py: Unit tests for snapshot export and import."""

import pytest

from talenthub.schemas.assessment import Assessment
from talenthub.schemas.candidate import Candidate
from talenthub.schemas.job import Job
from talenthub.services.store import LocalStore
from talenthub.services.transfer import dump_snapshot, export_snapshot, import_snapshot, load_snapshot


@pytest.fixture
def filled_store(store: LocalStore, candidate: Candidate, gated_assessment: Assessment) -> LocalStore:
    store.jobs.insert(Job(id="job-1", title="Backend Engineer", slug="backend-engineer"))
    store.candidates.insert(candidate)
    store.assessments.insert(gated_assessment)
    return store


def test_export_shape(filled_store: LocalStore, now) -> None:
    """Test the versioned snapshot layout with camelCase documents."""
    snapshot = export_snapshot(filled_store, now=now)

    assert snapshot["version"] == "1.0"
    assert snapshot["timestamp"] == now.isoformat()
    assert set(snapshot["data"]) == {"jobs", "candidates", "assessments", "assessmentScores"}
    assert snapshot["data"]["assessmentScores"] == []
    candidate = snapshot["data"]["candidates"][0]
    assert candidate["currentStage"] == "applied"
    assert candidate["jobId"] == "job-1"
    question = snapshot["data"]["assessments"][0]["sections"][0]["questions"][1]
    assert question["conditionalLogic"] == {"dependsOn": "q1", "condition": "equals", "value": "A"}


def test_import_replaces_everything(filled_store: LocalStore, settings, now) -> None:
    """Test full-replace semantics into a store that already holds other data."""
    # Setup
    snapshot = export_snapshot(filled_store, now=now)
    target = LocalStore(settings=settings)
    target.create_all()
    target.jobs.insert(Job(id="job-old", title="Old role"))

    # Action
    counts = import_snapshot(target, snapshot)

    # Assertions
    assert counts == {"jobs": 1, "candidates": 1, "assessments": 1, "assessmentScores": 0}
    assert target.jobs.get("job-old") is None
    assert export_snapshot(target, now=now) == snapshot
    target.dispose()


def test_incompatible_snapshot_rolls_back(filled_store: LocalStore, now) -> None:
    """Test that a structurally wrong snapshot raises and changes nothing."""
    snapshot = export_snapshot(filled_store, now=now)
    snapshot["data"]["jobs"] = [{"name": "no id or title"}]

    with pytest.raises(ValueError):
        import_snapshot(filled_store, snapshot)

    assert filled_store.counts() == {"jobs": 1, "candidates": 1, "assessments": 1, "assessmentScores": 0}


def test_missing_collection_raises(filled_store: LocalStore) -> None:
    with pytest.raises(KeyError):
        import_snapshot(filled_store, {"version": "1.0", "data": {"jobs": []}})


def test_snapshot_file_roundtrip(filled_store: LocalStore, tmp_path, now) -> None:
    snapshot = export_snapshot(filled_store, now=now)

    path = dump_snapshot(snapshot, tmp_path / "talenthub.json")

    assert load_snapshot(path) == snapshot
