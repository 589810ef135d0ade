"""Custom exceptions for the talenthub package."""

from typing import List


class TalentHubError(Exception):
    """Base exception for the talenthub package."""


class StoreError(TalentHubError):
    """Raised when a store operation fails. Callers may retry it."""


class ReorderError(TalentHubError):
    """Raised when a reorder could not be persisted and the view was reloaded."""


# =========================
# Builder
# =========================
class AssessmentBuilderError(TalentHubError):
    """Base exception for assessment authoring errors."""


class InvalidQuestionError(AssessmentBuilderError):
    """Raised when a question cannot be added to a draft as-is."""


class SectionNotFoundError(AssessmentBuilderError):
    """Raised when a section id is not part of the draft."""


class QuestionNotFoundError(AssessmentBuilderError):
    """Raised when a question id is not part of the given section."""


class UnknownDependencyError(AssessmentBuilderError):
    """Raised when a conditional rule points at a question outside the document."""


class ConditionalCycleError(AssessmentBuilderError):
    """Raised when conditional rules depend on each other in a loop."""

    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__(
            "Conditional questions depend on each other in a cycle: "
            + " -> ".join(cycle)
        )


# =========================
# Renderer
# =========================
class AssessmentRendererError(TalentHubError):
    """Base exception for candidate-facing assessment sessions."""


class AssessmentAlreadySubmittedError(AssessmentRendererError):
    """Raised when a submitted session is answered or submitted again."""


class NoAnswersError(AssessmentRendererError):
    """Raised when a session is submitted without a single answer."""


class UnknownQuestionError(AssessmentRendererError):
    """Raised when an answer targets a question that is not in the document."""
