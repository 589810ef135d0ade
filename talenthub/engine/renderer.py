# talenthub/engine/renderer.py

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from talenthub.core.exceptions import (
    AssessmentAlreadySubmittedError,
    NoAnswersError,
    UnknownQuestionError,
)
from talenthub.engine.scorer import AssessmentScorer
from talenthub.engine.validator import Violation, validate
from talenthub.engine.visibility import is_visible
from talenthub.schemas.assessment import (
    AnswerValue,
    Assessment,
    Question,
    QuestionType,
    is_answered,
    new_id,
    utcnow,
)
from talenthub.schemas.score import AssessmentScore

logger = logging.getLogger(__name__)

# Input control the UI shell draws for each question type
CONTROLS = {
    QuestionType.SINGLE_CHOICE.value: "radio",
    QuestionType.MULTI_CHOICE.value: "checkbox",
    QuestionType.SHORT_TEXT.value: "text",
    QuestionType.LONG_TEXT.value: "textarea",
    QuestionType.NUMERIC.value: "number",
    QuestionType.FILE_UPLOAD.value: "file",
}


@dataclass
class RenderedQuestion:
    question: Question
    control: str
    value: Optional[AnswerValue] = None
    violation: Optional[Violation] = None


@dataclass
class RenderedSection:
    section_id: str
    title: str
    total_questions: int
    questions: List[RenderedQuestion] = field(default_factory=list)


class AssessmentSession:
    """
    One candidate working through one assessment.

    Answers stay editable until `submit()`, which scores them once and
    freezes the session. Validation only flags answers, it never blocks them.
    """

    def __init__(self, document: Assessment, scorer: Optional[AssessmentScorer] = None):
        self.document = document
        self.scorer = scorer or AssessmentScorer()
        self._questions: Dict[str, Question] = {q.id: q for _, q in document.iter_questions()}
        self._answers: Dict[str, AnswerValue] = {}
        self._result: Optional[AssessmentScore] = None

    # ------------------------------------------------------------
    # Answering
    # ------------------------------------------------------------

    def set_answer(self, question_id: str, value: AnswerValue) -> Optional[Violation]:
        """
        Record an answer and return its inline validation feedback.
        """
        question = self._question(question_id)
        self._ensure_open()

        if is_answered(value):
            self._answers[question_id] = value
        else:
            self._answers.pop(question_id, None)
        return validate(question, value)

    def clear_answer(self, question_id: str) -> None:
        self._question(question_id)
        self._ensure_open()
        self._answers.pop(question_id, None)

    @property
    def answers(self) -> Dict[str, AnswerValue]:
        return dict(self._answers)

    def violation_for(self, question_id: str) -> Optional[Violation]:
        return validate(self._question(question_id), self._answers.get(question_id))

    def is_visible(self, question_id: str) -> bool:
        return is_visible(self._question(question_id), self._answers)

    # ------------------------------------------------------------
    # Rendering & progress
    # ------------------------------------------------------------

    def render(self) -> List[RenderedSection]:
        """
        Sections and their visible questions in display order, each with the
        control to draw, its current value and any validation message.
        """
        rendered: List[RenderedSection] = []
        for section in self.document.ordered_sections():
            block = RenderedSection(
                section_id=section.id,
                title=section.title,
                total_questions=len(section.questions),
            )
            for question in section.ordered_questions():
                if not is_visible(question, self._answers):
                    continue
                value = self._answers.get(question.id)
                block.questions.append(RenderedQuestion(
                    question=question,
                    control=CONTROLS[question.type],
                    value=value,
                    violation=validate(question, value),
                ))
            rendered.append(block)
        return rendered

    @property
    def answered_count(self) -> int:
        return len(self._answers)

    @property
    def total_questions(self) -> int:
        return len(self._questions)

    @property
    def progress(self) -> float:
        """Answered share of every question in the document, hidden ones included."""
        if not self.total_questions:
            return 0.0
        return self.answered_count / self.total_questions * 100

    # ------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------

    @property
    def is_submitted(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> Optional[AssessmentScore]:
        return self._result

    @property
    def can_submit(self) -> bool:
        return not self.is_submitted and self.answered_count > 0

    def submit(self, candidate_id: Optional[str] = None, now: Optional[datetime] = None) -> AssessmentScore:
        """
        Score the answers and close the session. There is no way back.
        """
        self._ensure_open()
        if not self._answers:
            raise NoAnswersError("Answer at least one question before submitting")

        score = self.scorer.score(self.document, self._answers)
        self._result = score.model_copy(update={
            "id": new_id("score"),
            "candidate_id": candidate_id,
            "completed_at": now or utcnow(),
        })

        logger.info(
            f"Assessment {self.document.id} submitted: "
            f"{self.answered_count}/{self.total_questions} answered, "
            f"{self._result.percentage}%"
        )
        return self._result

    def completion_summary(self) -> Dict[str, Any]:
        return {
            "completion_rate": round(self.progress),
            "answered": self.answered_count,
            "total": self.total_questions,
            "percentage": self._result.percentage if self._result else None,
        }

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------

    def _question(self, question_id: str) -> Question:
        try:
            return self._questions[question_id]
        except KeyError:
            raise UnknownQuestionError(
                f"Question {question_id} is not part of assessment {self.document.id}"
            ) from None

    def _ensure_open(self) -> None:
        if self.is_submitted:
            raise AssessmentAlreadySubmittedError(
                f"Assessment {self.document.id} has already been submitted"
            )
