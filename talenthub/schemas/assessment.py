# talenthub/schemas/assessment.py

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Dict, Iterator, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class CamelModel(BaseModel):
    """Base for documents persisted and exported with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =========================
# Question building blocks
# =========================
class QuestionType(str, Enum):
    """Supported question types."""
    SINGLE_CHOICE = "single-choice"
    MULTI_CHOICE = "multi-choice"
    SHORT_TEXT = "short-text"
    LONG_TEXT = "long-text"
    NUMERIC = "numeric"
    FILE_UPLOAD = "file-upload"


CHOICE_TYPES = frozenset({QuestionType.SINGLE_CHOICE.value, QuestionType.MULTI_CHOICE.value})
TEXT_TYPES = frozenset({QuestionType.SHORT_TEXT.value, QuestionType.LONG_TEXT.value})


class ValidationRule(CamelModel):
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None
    pattern: Optional[str] = None


class Condition(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"


class ConditionalRule(CamelModel):
    """Show the owning question only when `depends_on`'s answer matches."""
    depends_on: str
    # Kept as a plain string: unknown kinds must load and fail open.
    condition: str = Condition.EQUALS.value
    value: str = ""


# =========================
# Questions (tagged by type)
# =========================
class QuestionBase(CamelModel):
    id: str
    question: str
    required: bool = False
    validation: Optional[ValidationRule] = None
    conditional_logic: Optional[ConditionalRule] = None
    points: float = Field(default=1, ge=0)
    order: int = 0

    @property
    def is_choice(self) -> bool:
        return self.type in CHOICE_TYPES

    @property
    def is_manual_review(self) -> bool:
        """No declared correct answer, so a reviewer has to grade it."""
        return getattr(self, "correct_answers", None) is None


class _ChoiceQuestion(QuestionBase):
    options: List[str] = Field(default_factory=list)


class SingleChoiceQuestion(_ChoiceQuestion):
    type: Literal["single-choice"] = "single-choice"
    # Index of the correct option, as a string ("0", "1", ...)
    correct_answers: Optional[str] = None


class MultiChoiceQuestion(_ChoiceQuestion):
    type: Literal["multi-choice"] = "multi-choice"
    correct_answers: Optional[List[str]] = None


class _TextQuestion(QuestionBase):
    correct_answers: Optional[str] = None


class ShortTextQuestion(_TextQuestion):
    type: Literal["short-text"] = "short-text"


class LongTextQuestion(_TextQuestion):
    type: Literal["long-text"] = "long-text"


class NumericQuestion(QuestionBase):
    type: Literal["numeric"] = "numeric"
    correct_answers: Optional[float] = None


class FileUploadQuestion(QuestionBase):
    type: Literal["file-upload"] = "file-upload"


Question = Annotated[
    Union[
        SingleChoiceQuestion,
        MultiChoiceQuestion,
        ShortTextQuestion,
        LongTextQuestion,
        NumericQuestion,
        FileUploadQuestion,
    ],
    Field(discriminator="type"),
]

QUESTION_CLASSES = {
    QuestionType.SINGLE_CHOICE.value: SingleChoiceQuestion,
    QuestionType.MULTI_CHOICE.value: MultiChoiceQuestion,
    QuestionType.SHORT_TEXT.value: ShortTextQuestion,
    QuestionType.LONG_TEXT.value: LongTextQuestion,
    QuestionType.NUMERIC.value: NumericQuestion,
    QuestionType.FILE_UPLOAD.value: FileUploadQuestion,
}


# =========================
# Answers
# =========================
class FileReference(CamelModel):
    """Opaque handle to an uploaded file. The engine never opens it."""
    name: str
    size: int = 0
    content_type: Optional[str] = None


AnswerValue = Union[str, int, float, List[Union[str, int]], FileReference]
Answers = Dict[str, AnswerValue]


def is_answered(value: Any) -> bool:
    """
    An answer is absent when it is missing, an empty string or an empty
    selection. Zero is a real numeric answer.
    """
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, set, frozenset)):
        return len(value) > 0
    return True


# =========================
# Sections & documents
# =========================
class AssessmentSection(CamelModel):
    id: str
    title: str
    questions: List[Question] = Field(default_factory=list)
    order: int = 0

    def ordered_questions(self) -> List[Question]:
        return sorted(self.questions, key=lambda q: q.order)


class Assessment(CamelModel):
    id: str
    title: str
    job_id: str
    sections: List[AssessmentSection] = Field(default_factory=list)
    shareable_link: str = ""
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def ordered_sections(self) -> List[AssessmentSection]:
        return sorted(self.sections, key=lambda s: s.order)

    def iter_questions(self) -> Iterator[Tuple[AssessmentSection, Question]]:
        """Yield (section, question) pairs in display order."""
        for section in self.ordered_sections():
            for question in section.ordered_questions():
                yield section, question

    @property
    def total_questions(self) -> int:
        return sum(len(section.questions) for section in self.sections)
