"""
Error taxonomy for quiz building and rendering.

Validation errors carry enough context (question name, question type and,
once a quiz has checked it, the question index) for the caller to locate
the broken part of the model. I/O failures are not wrapped: the built-in
OSError from the write reaches the caller unchanged.
"""

from __future__ import annotations


class QuizError(Exception):
    """Base class for all errors raised by moodle_xml."""
    pass


class ValidationError(QuizError, ValueError):
    """The model is structurally invalid for the import format."""

    def __init__(
        self,
        message: str,
        *,
        question_name: str | None = None,
        question_type: str | None = None,
        index: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.question_name = question_name
        self.question_type = question_type
        self.index = index

    def __str__(self) -> str:
        where = []
        if self.index is not None:
            where.append(f"question #{self.index}")
        if self.question_type:
            where.append(self.question_type)
        if self.question_name:
            where.append(f"'{self.question_name}'")
        if not where:
            return self.message
        return f"{' '.join(where)}: {self.message}"


class WrongQuestionTypeError(ValidationError):
    """Answers were attached to a variant that does not hold answers."""
    pass


class TooManyAnswersError(ValidationError):
    """Attaching answers would exceed the configured answer cap."""
    pass


class NoAnswersError(ValidationError):
    """A question that needs answers has none."""
    pass


class NoCorrectAnswerError(ValidationError):
    """A single-choice question does not have exactly one fully correct answer."""
    pass


class InvalidFractionError(ValidationError):
    """An answer fraction lies outside the permitted range."""
    pass


class EmptyTextError(ValidationError):
    """An answer was constructed with empty text."""
    pass


class InvalidCategoryError(ValidationError):
    """A category path is empty or has an empty segment."""
    pass


class EmptyQuizError(ValidationError):
    """A quiz was rendered without any questions."""
    pass
