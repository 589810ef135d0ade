"""conftest.py: Shared fixtures for the talenthub test suite."""

from datetime import datetime, timezone
from typing import Callable, Iterator, List

import pytest

from talenthub.core.config import Settings
from talenthub.core.exceptions import StoreError
from talenthub.schemas.assessment import (
    Assessment,
    AssessmentSection,
    ConditionalRule,
    ShortTextQuestion,
    SingleChoiceQuestion,
)
from talenthub.schemas.candidate import Candidate
from talenthub.services.data_service import DataService
from talenthub.services.retry import RetryPolicy
from talenthub.services.store import LocalStore

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite://",
        SHAREABLE_LINK_BASE="https://hire.company.com/",
        RETRY_MAX_ATTEMPTS=3,
        RETRY_BASE_DELAY=1.0,
        RETRY_BACKOFF_MULTIPLIER=2.0,
        SEED_ON_EMPTY=False,
        SEED_CANDIDATE_COUNT=20,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def store(settings: Settings) -> Iterator[LocalStore]:
    """Fresh in-memory store with every table created."""
    local_store = LocalStore(settings=settings)
    local_store.create_all()
    yield local_store
    local_store.dispose()


@pytest.fixture
def sleeps() -> List[float]:
    """Delays requested by the retry policy, recorded instead of slept."""
    return []


@pytest.fixture
def retry_policy(sleeps: List[float]) -> RetryPolicy:
    return RetryPolicy(max_attempts=3, base_delay=1.0, multiplier=2.0, sleep=sleeps.append)


@pytest.fixture
def service(store: LocalStore, retry_policy: RetryPolicy) -> DataService:
    return DataService(store, retry_policy)


@pytest.fixture
def flaky() -> Callable[..., Callable]:
    """
    Wrap a callable so its first `failures` calls raise StoreError.
    The wrapper exposes `.calls` for assertions.
    """

    def make(operation: Callable, failures: int) -> Callable:
        def wrapper(*args, **kwargs):
            wrapper.calls += 1
            if wrapper.calls <= failures:
                raise StoreError(f"Simulated failure {wrapper.calls}")
            return operation(*args, **kwargs)

        wrapper.calls = 0
        wrapper.__qualname__ = getattr(operation, "__qualname__", "operation")
        return wrapper

    return make


@pytest.fixture
def gated_assessment() -> Assessment:
    """
    One required single-choice question (A/B, correct "A") and a short-text
    follow-up shown only when the first answer is "A".
    """
    return Assessment(
        id="assessment-gated",
        title="Screening",
        job_id="job-1",
        sections=[
            AssessmentSection(
                id="section-1",
                title="Basics",
                order=0,
                questions=[
                    SingleChoiceQuestion(
                        id="q1",
                        question="Pick one",
                        required=True,
                        options=["A", "B"],
                        correct_answers="A",
                        order=0,
                    ),
                    ShortTextQuestion(
                        id="q2",
                        question="Why A?",
                        required=True,
                        conditional_logic=ConditionalRule(depends_on="q1", condition="equals", value="A"),
                        order=1,
                    ),
                ],
            ),
        ],
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def candidate() -> Candidate:
    return Candidate(
        id="candidate-1",
        name="Riya Pandey",
        email="riya.pandey@company.com",
        job_id="job-1",
        created_at=NOW,
        updated_at=NOW,
    )
