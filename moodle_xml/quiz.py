"""
Quiz container and document rendering.

A Quiz holds questions in document order plus an optional category path.
The category is stored as raw path segments and only turned into a
leading <question type="category"> while rendering, so rendering never
changes the quiz and repeated renders produce identical bytes.
"""

from __future__ import annotations

import os
from typing import Iterable

from loguru import logger

from .config import Settings, get_settings
from .exceptions import EmptyQuizError, ValidationError
from .question import CategoryQuestion, Question, write_question
from .xml_writer import XmlWriter

CATEGORY_SEPARATOR = "/"


def _as_question_list(questions: Question | Iterable[Question] | None) -> list[Question]:
    if questions is None:
        return []
    if hasattr(questions, "question_type"):
        return [questions]
    return list(questions)


class Quiz:
    """Ordered collection of questions rendered as one Moodle XML document."""

    def __init__(
        self,
        questions: Question | Iterable[Question] | None = None,
        categories: Iterable[str] | str | None = None,
        settings: Settings | None = None,
    ):
        self.questions: list[Question] = _as_question_list(questions)
        self.categories: list[str] | None = None
        self.settings = settings or get_settings()
        if categories is not None:
            self.set_categories(categories)

    def __len__(self) -> int:
        return len(self.questions)

    def __repr__(self) -> str:
        return f"Quiz(questions={len(self.questions)}, categories={self.categories!r})"

    def add_question(self, question: Question) -> None:
        self.questions.append(question)

    def add_questions(self, questions: Iterable[Question]) -> None:
        self.questions.extend(_as_question_list(questions))

    def set_categories(self, path_segments: Iterable[str] | str) -> None:
        """
        Store (or replace) the category path questions are imported into.

        Accepts a list of segments, or a single string which is split on
        "/" (so "capitals" and "geo/capitals" both work).
        """
        if isinstance(path_segments, str):
            segments = [s for s in path_segments.split(CATEGORY_SEPARATOR) if s]
        else:
            segments = [str(s) for s in path_segments]
        self.categories = segments

    def category_question(self) -> CategoryQuestion | None:
        """The synthetic category marker, or None if no category is set."""
        if self.categories is None:
            return None
        return CategoryQuestion(list(self.categories))

    def _document_questions(self) -> list[Question]:
        category = self.category_question()
        if category is None:
            return list(self.questions)
        return [category, *self.questions]

    def validate(self) -> None:
        """
        Validate every question in document order.

        Stops at the first invalid question. The raised ValidationError has
        its `index` set to the question's position in `questions` (the
        synthetic category question, if invalid, is reported as index None).

        Raises:
            EmptyQuizError: the quiz has no questions
            ValidationError: a question is invalid
        """
        if not self.questions:
            raise EmptyQuizError("Quiz has no questions")

        category = self.category_question()
        if category is not None:
            try:
                category.validate(self.settings)
            except ValidationError as e:
                logger.warning(f"Quiz validation failed: {e}")
                raise

        for index, question in enumerate(self.questions):
            try:
                question.validate(self.settings)
            except ValidationError as e:
                e.index = index
                logger.warning(f"Quiz validation failed: {e}")
                raise

    def render(self) -> str:
        """Validate and render the full document as text."""
        self.validate()
        writer = XmlWriter(indent=self.settings.indent)
        writer.declaration()
        with writer.element("quiz"):
            for question in self._document_questions():
                write_question(question, writer)
        return writer.getvalue()

    def to_xml(self, path: str | os.PathLike) -> None:
        """
        Validate, render and write the document to `path`.

        Any existing file is overwritten. Nothing is written when validation
        fails; OSError from the write reaches the caller unchanged.
        """
        data = self.render().encode("utf-8")
        with open(path, "wb") as f:
            f.write(data)
        logger.info(f"Wrote {len(self.questions)} question(s) ({len(data)} bytes) to {path}")
