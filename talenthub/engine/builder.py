# talenthub/engine/builder.py

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

from talenthub.core.config import Settings, settings as default_settings
from talenthub.core.exceptions import (
    ConditionalCycleError,
    InvalidQuestionError,
    QuestionNotFoundError,
    SectionNotFoundError,
    UnknownDependencyError,
)
from talenthub.schemas.assessment import (
    QUESTION_CLASSES,
    Assessment,
    AssessmentSection,
    Question,
    QuestionType,
    new_id,
    utcnow,
)

logger = logging.getLogger(__name__)

PREVIEW_ID = "preview"


class BuilderTab(str, Enum):
    BUILDER = "builder"
    PREVIEW = "preview"


class AssessmentBuilder:
    """
    Authoring surface for one assessment draft.

    The draft lives in memory until `save()` hands back a complete document.
    Sections and questions are replaced by id, never patched in place.
    """

    def __init__(
        self,
        assessment: Optional[Assessment] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.active_tab = BuilderTab.BUILDER
        self._original = assessment

        if assessment is not None:
            self.title = assessment.title
            self.job_id: Optional[str] = assessment.job_id
            self.sections: List[AssessmentSection] = [
                s.model_copy(deep=True) for s in assessment.ordered_sections()
            ]
        else:
            self.title = ""
            self.job_id = None
            self.sections = []

    @classmethod
    def from_assessment(cls, assessment: Assessment, settings: Optional[Settings] = None) -> "AssessmentBuilder":
        """Load a stored document for editing."""
        return cls(assessment=assessment, settings=settings)

    # ------------------------------------------------------------
    # Document fields & tabs
    # ------------------------------------------------------------

    def set_title(self, title: str) -> None:
        self.title = title

    def set_job(self, job_id: Optional[str]) -> None:
        self.job_id = job_id

    def switch_tab(self, tab: Union[BuilderTab, str]) -> BuilderTab:
        self.active_tab = BuilderTab(tab)
        return self.active_tab

    @property
    def total_questions(self) -> int:
        return sum(len(s.questions) for s in self.sections)

    # ------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------

    def get_section(self, section_id: str) -> AssessmentSection:
        for section in self.sections:
            if section.id == section_id:
                return section
        raise SectionNotFoundError(f"Section {section_id} is not part of this assessment")

    def add_section(self, title: Optional[str] = None) -> AssessmentSection:
        section = AssessmentSection(
            id=new_id("section"),
            title=title or f"Section {len(self.sections) + 1}",
            questions=[],
            order=len(self.sections),
        )
        self.sections.append(section)
        return section

    def rename_section(self, section_id: str, title: str) -> AssessmentSection:
        return self._replace_section(
            self.get_section(section_id).model_copy(update={"title": title})
        )

    def delete_section(self, section_id: str) -> None:
        """Remove a section and every question in it. Remaining orders keep their gaps."""
        self.get_section(section_id)
        self.sections = [s for s in self.sections if s.id != section_id]

    def move_section(self, from_index: int, to_index: int) -> List[AssessmentSection]:
        ordered = sorted(self.sections, key=lambda s: s.order)
        moved = _move(ordered, from_index, to_index)
        self.sections = [s.model_copy(update={"order": i}) for i, s in enumerate(moved)]
        return self.sections

    def _replace_section(self, section: AssessmentSection) -> AssessmentSection:
        self.sections = [section if s.id == section.id else s for s in self.sections]
        return section

    # ------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------

    def new_question(
        self,
        section_id: str,
        question_type: Union[QuestionType, str],
        prompt: str,
        **fields: Any,
    ) -> Question:
        """
        Build (without adding) a question with a fresh id, ordered last in
        its section and worth one point unless told otherwise.
        """
        section = self.get_section(section_id)
        question_class = QUESTION_CLASSES[QuestionType(question_type).value]
        data: Dict[str, Any] = {
            "id": new_id("question"),
            "question": prompt,
            "order": len(section.questions),
            "points": 1,
        }
        data.update(fields)
        return question_class(**data)

    def add_question(self, section_id: str, question: Question) -> Question:
        section = self.get_section(section_id)
        _check_question(question)
        if any(q.id == question.id for q in section.questions):
            raise InvalidQuestionError(f"Question {question.id} already exists in section {section_id}")

        question = question.model_copy(update={"order": len(section.questions)})
        self._replace_section(
            section.model_copy(update={"questions": section.questions + [question]})
        )
        return question

    def update_question(self, section_id: str, question: Question) -> Question:
        section = self.get_section(section_id)
        if not any(q.id == question.id for q in section.questions):
            raise QuestionNotFoundError(f"Question {question.id} is not in section {section_id}")
        _check_question(question)

        self._replace_section(section.model_copy(update={
            "questions": [question if q.id == question.id else q for q in section.questions],
        }))
        return question

    def delete_question(self, section_id: str, question_id: str) -> None:
        section = self.get_section(section_id)
        if not any(q.id == question_id for q in section.questions):
            raise QuestionNotFoundError(f"Question {question_id} is not in section {section_id}")

        self._replace_section(section.model_copy(update={
            "questions": [q for q in section.questions if q.id != question_id],
        }))

    def move_question(self, section_id: str, from_index: int, to_index: int) -> List[Question]:
        section = self.get_section(section_id)
        moved = _move(section.ordered_questions(), from_index, to_index)
        questions = [q.model_copy(update={"order": i}) for i, q in enumerate(moved)]
        self._replace_section(section.model_copy(update={"questions": questions}))
        return questions

    # ------------------------------------------------------------
    # Preview & save
    # ------------------------------------------------------------

    def preview(self) -> Assessment:
        """Unsaved snapshot of the draft for the preview tab."""
        return Assessment(
            id=self._original.id if self._original else PREVIEW_ID,
            title=self.title,
            job_id=self.job_id or "",
            sections=[s.model_copy(deep=True) for s in self.sections],
        )

    @property
    def can_save(self) -> bool:
        return bool(self.title and self.title.strip()) and bool(self.job_id)

    def save(self, now: Optional[datetime] = None) -> Optional[Assessment]:
        """
        Produce the full document for the draft.

        Returns None while the title or job is missing. Raises
        UnknownDependencyError / ConditionalCycleError when conditional
        rules do not form a valid dependency graph.
        """
        if not self.can_save:
            logger.info("Assessment save blocked: title and job are required")
            return None

        check_conditional_dependencies(q for s in self.sections for q in s.questions)

        now = now or utcnow()
        sections = [s.model_copy(deep=True) for s in self.sections]

        if self._original is not None:
            assessment = self._original.model_copy(update={
                "title": self.title,
                "job_id": self.job_id,
                "sections": sections,
                "updated_at": now,
            })
        else:
            assessment_id = new_id("assessment")
            assessment = Assessment(
                id=assessment_id,
                title=self.title,
                job_id=self.job_id,
                sections=sections,
                shareable_link=self.settings.shareable_link(assessment_id),
                is_active=True,
                created_at=now,
                updated_at=now,
            )

        # Later saves overwrite the same document
        self._original = assessment
        logger.info(
            f"Assessment {assessment.id} saved with {len(sections)} sections, "
            f"{assessment.total_questions} questions"
        )
        return assessment


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------

def _move(items: List[Any], from_index: int, to_index: int) -> List[Any]:
    if not (0 <= from_index < len(items)) or not (0 <= to_index < len(items)):
        raise IndexError(f"Cannot move item {from_index} to {to_index} in a list of {len(items)}")
    items = list(items)
    moved = items.pop(from_index)
    items.insert(to_index, moved)
    return items


def _check_question(question: Question) -> None:
    if not question.question or not question.question.strip():
        raise InvalidQuestionError("Question text is required")

    if question.is_choice and not any(o.strip() for o in question.options):
        raise InvalidQuestionError(f"Choice question {question.id} needs at least one option")

    if question.points < 0:
        raise InvalidQuestionError(f"Question {question.id} cannot be worth negative points")


def check_conditional_dependencies(questions: Iterable[Question]) -> None:
    """
    Reject conditional rules that point outside the document or that form
    a cycle. Each question depends on at most one other, so following the
    `dependsOn` chain from every question is a complete topological check.
    """
    depends_on: Dict[str, Optional[str]] = {}
    for question in questions:
        rule = question.conditional_logic
        depends_on[question.id] = rule.depends_on if rule else None

    for question_id, target in depends_on.items():
        if target is not None and target not in depends_on:
            raise UnknownDependencyError(
                f"Question {question_id} depends on unknown question {target}"
            )

    finished = set()
    for start in depends_on:
        path: List[str] = []
        on_path = set()
        node: Optional[str] = start
        while node is not None and node not in finished:
            if node in on_path:
                cycle = path[path.index(node):] + [node]
                raise ConditionalCycleError(cycle)
            path.append(node)
            on_path.add(node)
            node = depends_on[node]
        finished.update(path)
