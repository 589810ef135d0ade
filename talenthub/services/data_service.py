# talenthub/services/data_service.py

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from talenthub.schemas.assessment import Assessment, new_id, utcnow
from talenthub.schemas.candidate import Candidate, CandidateStage, Note, TimelineEvent
from talenthub.schemas.job import Job, slugify
from talenthub.schemas.score import AssessmentScore
from talenthub.services.ordering import OrderedCollectionView
from talenthub.services.retry import RetryPolicy
from talenthub.services.store import LocalStore

logger = logging.getLogger(__name__)

JOBS_PER_PAGE = 10

# Filter value that means "no filter" in the list views
ALL = "all"


@dataclass
class JobPage:
    """One page of the filtered job board."""
    items: List[Job] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0
    total: int = 0


def _matches(term: str, *values: str) -> bool:
    term = term.lower()
    return any(term in value.lower() for value in values)


class DataService:
    """
    Store-facing collaborator used by the UI shell and the engine.

    Every store call goes through the injected RetryPolicy, so a transient
    StoreError only reaches the caller once retries are exhausted. There is
    no locking: concurrent writes to one document are last-write-wins.
    """

    def __init__(self, store: LocalStore, retry_policy: Optional[RetryPolicy] = None):
        self.store = store
        self.retry = retry_policy or RetryPolicy()

    # ------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------

    def list_jobs(self) -> List[Job]:
        return self.retry.call(self.store.jobs.list_all, "order")

    def get_job(self, job_id: str) -> Optional[Job]:
        return self.retry.call(self.store.jobs.get, job_id)

    def create_job(self, title: str, **fields: Any) -> Job:
        """New jobs go to the end of the board."""
        now = utcnow()
        data: Dict[str, Any] = {
            "id": new_id("job"),
            "title": title,
            "slug": slugify(title),
            "status": "active",
            "created_at": now,
            "updated_at": now,
            "order": self.retry.call(self.store.jobs.count),
        }
        data.update(fields)
        job = Job(**data)
        self.retry.call(self.store.jobs.insert, job)
        logger.info(f"Created job {job.id}: {job.title}")
        return job

    def update_job(self, job_id: str, changes: Mapping[str, Any]) -> Optional[Job]:
        return self.retry.call(self.store.jobs.update, job_id, dict(changes))

    def delete_job(self, job_id: str) -> bool:
        return self.retry.call(self.store.jobs.delete, job_id)

    def job_board(self) -> OrderedCollectionView[Job]:
        """Drag-to-reorder view over every job, loaded from the store."""
        board = OrderedCollectionView(
            load=self.list_jobs,
            persist_order=lambda job_id, order: self.update_job(job_id, {"order": order}),
            name="jobs",
        )
        board.load()
        return board

    def search_jobs(
        self,
        term: Optional[str] = None,
        status: Optional[str] = None,
        page: int = 1,
        page_size: int = JOBS_PER_PAGE,
    ) -> JobPage:
        """
        Jobs whose title or a tag contains `term` (case-insensitive), optionally
        limited to one status, in board order and cut into pages.
        A page past the end is empty.
        """
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be at least 1")

        if status and status != ALL:
            jobs = self.retry.call(self.store.jobs.where, "status", status)
        else:
            jobs = self.list_jobs()
        if term:
            jobs = [j for j in jobs if _matches(term, j.title, *j.tags)]
        jobs = sorted(jobs, key=lambda j: j.order)

        start = (page - 1) * page_size
        return JobPage(
            items=jobs[start:start + page_size],
            page=page,
            total_pages=math.ceil(len(jobs) / page_size),
            total=len(jobs),
        )

    # ------------------------------------------------------------
    # Candidates
    # ------------------------------------------------------------

    def list_candidates(self) -> List[Candidate]:
        return self.retry.call(self.store.candidates.list_all, "created_at", True)

    def get_candidate(self, candidate_id: str) -> Optional[Candidate]:
        return self.retry.call(self.store.candidates.get, candidate_id)

    def create_candidate(self, candidate: Candidate) -> Candidate:
        return self.retry.call(self.store.candidates.insert, candidate)

    def update_candidate(self, candidate_id: str, changes: Mapping[str, Any]) -> Optional[Candidate]:
        return self.retry.call(self.store.candidates.update, candidate_id, dict(changes))

    def delete_candidate(self, candidate_id: str) -> bool:
        return self.retry.call(self.store.candidates.delete, candidate_id)

    def search_candidates(
        self,
        term: Optional[str] = None,
        stage: Optional[str] = None,
    ) -> List[Candidate]:
        """Candidates whose name or email contains `term`, optionally in one stage. Newest first."""
        if stage and stage != ALL:
            candidates = self.retry.call(self.store.candidates.where, "current_stage", stage)
        else:
            candidates = self.list_candidates()
        if term:
            candidates = [c for c in candidates if _matches(term, c.name, c.email)]
        return sorted(candidates, key=lambda c: c.created_at, reverse=True)

    def change_candidate_stage(
        self,
        candidate_id: str,
        stage: CandidateStage,
        now: Optional[datetime] = None,
    ) -> Optional[Candidate]:
        candidate = self.get_candidate(candidate_id)
        if candidate is None:
            return None

        now = now or utcnow()
        event = TimelineEvent(
            id=new_id("timeline"),
            type="stage_change",
            description=f"Stage changed from {candidate.current_stage} to {stage}",
            created_at=now,
        )
        return self.update_candidate(candidate_id, {
            "current_stage": stage,
            "updated_at": now,
            "timeline": candidate.timeline + [event],
        })

    def add_note(
        self,
        candidate_id: str,
        content: str,
        author_id: str,
        mentions: Optional[List[str]] = None,
        now: Optional[datetime] = None,
    ) -> Optional[Candidate]:
        candidate = self.get_candidate(candidate_id)
        if candidate is None:
            return None

        now = now or utcnow()
        note = Note(
            id=new_id("note"),
            content=content,
            mentions=mentions or [],
            author_id=author_id,
            created_at=now,
        )
        event = TimelineEvent(
            id=new_id("timeline"),
            type="note_added",
            description="Note added",
            created_at=now,
            metadata={"noteId": note.id},
        )
        return self.update_candidate(candidate_id, {
            "notes": candidate.notes + [note],
            "timeline": candidate.timeline + [event],
            "updated_at": now,
        })

    def record_timeline_event(self, candidate_id: str, event: TimelineEvent) -> Optional[Candidate]:
        candidate = self.get_candidate(candidate_id)
        if candidate is None:
            return None
        return self.update_candidate(candidate_id, {
            "timeline": candidate.timeline + [event],
            "updated_at": event.created_at,
        })

    # ------------------------------------------------------------
    # Assessments
    # ------------------------------------------------------------

    def list_assessments(self) -> List[Assessment]:
        return self.retry.call(self.store.assessments.list_all, "created_at", True)

    def get_assessment(self, assessment_id: str) -> Optional[Assessment]:
        return self.retry.call(self.store.assessments.get, assessment_id)

    def save_assessment(self, assessment: Assessment) -> Assessment:
        """Insert a new document or overwrite the stored one whole."""
        saved = self.retry.call(self.store.assessments.put, assessment)
        logger.info(f"Saved assessment {saved.id}: {saved.title}")
        return saved

    def delete_assessment(self, assessment_id: str) -> bool:
        return self.retry.call(self.store.assessments.delete, assessment_id)

    # ------------------------------------------------------------
    # Scores
    # ------------------------------------------------------------

    def list_scores(self, assessment_id: str) -> List[AssessmentScore]:
        return self.retry.call(self.store.assessment_scores.where, "assessment_id", assessment_id)

    def record_score(self, score: AssessmentScore) -> AssessmentScore:
        return self.retry.call(self.store.assessment_scores.insert, score)
