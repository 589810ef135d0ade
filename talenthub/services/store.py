# talenthub/services/store.py

import logging
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy.orm import Session, sessionmaker

from talenthub.core.config import Settings, settings as default_settings
from talenthub.db.base import Base
from talenthub.db.session import create_db_engine, create_session_factory, session_scope
from talenthub.models.assessment import AssessmentRecord
from talenthub.models.assessment_score import AssessmentScoreRecord
from talenthub.models.candidate import CandidateRecord
from talenthub.models.job import JobRecord
from talenthub.schemas.assessment import Assessment, CamelModel, new_id
from talenthub.schemas.candidate import Candidate
from talenthub.schemas.job import Job
from talenthub.schemas.score import AssessmentScore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=CamelModel)


class Collection(Generic[T]):
    """
    One keyed table of documents.

    Each row keeps the full document as JSON next to a few indexed columns
    used for lookups and ordering. Reads return validated schema objects;
    a missing id is None, never an error.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        record_class: Type[Base],
        schema: Type[T],
        index_fields: Sequence[str],
        default_order: Optional[Tuple[str, bool]] = None,
        id_prefix: str = "item",
    ):
        self.session_factory = session_factory
        self.record_class = record_class
        self.schema = schema
        self.index_fields = tuple(index_fields)
        self.default_order = default_order
        self.id_prefix = id_prefix

    @property
    def name(self) -> str:
        return self.record_class.__tablename__

    # ------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------

    def list_all(self, order_by: Optional[str] = None, descending: bool = False) -> List[T]:
        if order_by is None and self.default_order is not None:
            order_by, descending = self.default_order

        with session_scope(self.session_factory) as db:
            query = db.query(self.record_class)
            if order_by is not None:
                column = self._column(order_by)
                query = query.order_by(column.desc() if descending else column.asc())
            return [self._to_schema(r) for r in query.all()]

    def get(self, item_id: str) -> Optional[T]:
        with session_scope(self.session_factory) as db:
            record = db.get(self.record_class, item_id)
            return self._to_schema(record) if record is not None else None

    def where(self, field: str, value: Any) -> List[T]:
        column = self._column(field)
        with session_scope(self.session_factory) as db:
            records = db.query(self.record_class).filter(column == value).all()
            return [self._to_schema(r) for r in records]

    def count(self) -> int:
        with session_scope(self.session_factory) as db:
            return db.query(self.record_class).count()

    # ------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------

    def insert(self, item: T) -> T:
        with session_scope(self.session_factory) as db:
            return self._insert(db, item)

    def bulk_insert(self, items: Iterable[T]) -> int:
        with session_scope(self.session_factory) as db:
            return self._bulk_insert(db, items)

    def update(self, item_id: str, changes: Mapping[str, Any]) -> Optional[T]:
        """
        Shallow merge of top-level fields (python field names) into the
        stored document. Returns None when the id does not exist.
        """
        if "id" in changes and changes["id"] != item_id:
            raise ValueError(f"Cannot change the id of {self.name} item {item_id}")

        with session_scope(self.session_factory) as db:
            record = db.get(self.record_class, item_id)
            if record is None:
                return None

            current = self._to_schema(record).model_dump()
            current.update(changes)
            item = self.schema.model_validate(current)
            self._write(record, item)
            return item

    def put(self, item: T) -> T:
        """Insert, or overwrite the whole document when the id exists."""
        with session_scope(self.session_factory) as db:
            record = db.get(self.record_class, item.id)
            if record is None:
                return self._insert(db, item)
            self._write(record, item)
            return item

    def delete(self, item_id: str) -> bool:
        with session_scope(self.session_factory) as db:
            record = db.get(self.record_class, item_id)
            if record is None:
                return False
            db.delete(record)
            return True

    def clear(self) -> int:
        with session_scope(self.session_factory) as db:
            return self._clear(db)

    # ------------------------------------------------------------
    # Internals (shared with LocalStore transactions)
    # ------------------------------------------------------------

    def _insert(self, db: Session, item: T) -> T:
        if getattr(item, "id", None) is None:
            item = item.model_copy(update={"id": new_id(self.id_prefix)})
        record = self.record_class(id=item.id)
        self._write(record, item)
        db.add(record)
        db.flush()
        return item

    def _bulk_insert(self, db: Session, items: Iterable[Any]) -> int:
        count = 0
        for item in items:
            if not isinstance(item, self.schema):
                item = self.schema.model_validate(item)
            self._insert(db, item)
            count += 1
        return count

    def _clear(self, db: Session) -> int:
        return db.query(self.record_class).delete()

    def _write(self, record: Base, item: T) -> None:
        for field in self.index_fields:
            setattr(record, field, getattr(item, field))
        record.document = item.to_document()

    def _to_schema(self, record: Base) -> T:
        return self.schema.model_validate(record.document)

    def _column(self, field: str) -> Any:
        if field != "id" and field not in self.index_fields:
            raise ValueError(
                f"{self.name} can only be ordered or filtered by "
                f"{', '.join(('id',) + self.index_fields)}, not {field!r}"
            )
        return getattr(self.record_class, field)


class LocalStore:
    """
    The four collections of the applicant-tracking store on one database.
    """

    def __init__(self, database_url: Optional[str] = None, settings: Optional[Settings] = None):
        settings = settings or default_settings
        self.database_url = database_url or settings.DATABASE_URL
        self.engine = create_db_engine(self.database_url)
        self.session_factory = create_session_factory(self.engine)

        self.jobs: Collection[Job] = Collection(
            self.session_factory, JobRecord, Job,
            index_fields=("title", "slug", "status", "order", "created_at"),
            default_order=("order", False),
            id_prefix="job",
        )
        self.candidates: Collection[Candidate] = Collection(
            self.session_factory, CandidateRecord, Candidate,
            index_fields=("name", "email", "current_stage", "job_id", "created_at"),
            default_order=("created_at", True),
            id_prefix="candidate",
        )
        self.assessments: Collection[Assessment] = Collection(
            self.session_factory, AssessmentRecord, Assessment,
            index_fields=("title", "job_id", "is_active", "created_at"),
            default_order=("created_at", True),
            id_prefix="assessment",
        )
        self.assessment_scores: Collection[AssessmentScore] = Collection(
            self.session_factory, AssessmentScoreRecord, AssessmentScore,
            index_fields=("assessment_id", "candidate_id", "completed_at"),
            default_order=("completed_at", False),
            id_prefix="score",
        )

    def create_all(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Local store ready at {self.database_url}")

    def collections(self) -> Dict[str, Collection]:
        """Collections keyed by their snapshot name."""
        return {
            "jobs": self.jobs,
            "candidates": self.candidates,
            "assessments": self.assessments,
            "assessmentScores": self.assessment_scores,
        }

    def counts(self) -> Dict[str, int]:
        return {name: collection.count() for name, collection in self.collections().items()}

    def replace_all(self, data: Mapping[str, Iterable[Any]]) -> Dict[str, int]:
        """
        Clear every collection and bulk insert `data` in one transaction.
        A missing collection key or an unparseable item raises and leaves
        the store untouched.
        """
        counts: Dict[str, int] = {}
        with session_scope(self.session_factory) as db:
            for collection in self.collections().values():
                collection._clear(db)
            for name, collection in self.collections().items():
                counts[name] = collection._bulk_insert(db, data[name])
        return counts

    def dispose(self) -> None:
        self.engine.dispose()
