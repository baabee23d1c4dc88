"""
Question variants and their per-type rendering.

The four variants form a closed set:

- ShortAnswerQuestion: free text answers, optionally case-sensitive
- TrueFalseQuestion: a statement; the true/false answers are synthesized
- MultiChoiceQuestion: single- or multi-select option lists
- CategoryQuestion: not a question, a marker that files the following
  questions under a course category path

Only ShortAnswer and MultiChoice own an answer list. Each variant has a
writer registered for its QuestionType, and the registry is checked for
completeness at import time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, Iterable

from loguru import logger

from .answer import Answer, TextFormat
from .config import Settings, get_settings
from .exceptions import (
    InvalidCategoryError,
    InvalidFractionError,
    NoAnswersError,
    NoCorrectAnswerError,
    TooManyAnswersError,
    WrongQuestionTypeError,
)
from .xml_writer import XmlWriter


class QuestionType(str, Enum):
    """Supported question types. Values are the XML type attribute."""
    CATEGORY = "category"
    SHORT_ANSWER = "shortanswer"
    TRUE_FALSE = "truefalse"
    MULTICHOICE = "multichoice"


class AnswerNumbering(str, Enum):
    """How Moodle labels multi-choice options."""
    NONE = "none"
    ABC = "abc"
    ABCD = "ABCD"
    NUMBERS = "123"


COURSE_CATEGORY_ROOT = "$course$/"


# =============================================================================
# Shared behaviour
# =============================================================================


class _QuestionBase:
    """Behaviour shared by every variant. Variants are dataclasses."""

    question_type: ClassVar[QuestionType]

    def _context(self) -> dict:
        return {
            "question_name": getattr(self, "name", None),
            "question_type": self.question_type.value,
        }

    def add_answers(self, answers: Answer | Iterable[Answer], settings: Settings | None = None) -> None:
        """Attach answers. Variants without an answer list reject this."""
        raise WrongQuestionTypeError(
            "This question type does not accept answers",
            **self._context(),
        )

    def add_answer(self, answer: Answer, settings: Settings | None = None) -> None:
        self.add_answers([answer], settings)

    def validate(self, settings: Settings | None = None) -> None:
        """Raise a ValidationError if the question cannot be rendered."""
        return None

    def write_xml(self, writer: XmlWriter) -> None:
        write_question(self, writer)


class _TextQuestion(_QuestionBase):
    """A real question: has a name, a body and a body text format."""

    def set_text_format(self, text_format: TextFormat | str) -> None:
        self.text_format = TextFormat(text_format)


def _as_answer_list(answers: Answer | Iterable[Answer]) -> list[Answer]:
    if isinstance(answers, Answer):
        return [answers]
    result = list(answers)
    for answer in result:
        if not isinstance(answer, Answer):
            raise TypeError(f"Expected Answer, got {type(answer).__name__}")
    return result


def _attach(question, answers: Answer | Iterable[Answer], settings: Settings | None) -> None:
    """Append answers in order, refusing the whole batch if it breaks the cap."""
    settings = settings or get_settings()
    new_answers = _as_answer_list(answers)
    cap = settings.max_answers
    if cap is not None and len(question.answers) + len(new_answers) > cap:
        raise TooManyAnswersError(
            f"At most {cap} answers allowed, "
            f"got {len(question.answers) + len(new_answers)}",
            **question._context(),
        )
    question.answers.extend(new_answers)
    logger.debug(
        f"Attached {len(new_answers)} answer(s) to {question.question_type.value} "
        f"'{question.name}' ({len(question.answers)} total)"
    )


def _check_answers(question, settings: Settings | None) -> None:
    settings = settings or get_settings()
    if not question.answers:
        raise NoAnswersError("Question has no answers", **question._context())
    for position, answer in enumerate(question.answers):
        fraction = answer.fraction
        if isinstance(fraction, bool) or not isinstance(fraction, int):
            raise InvalidFractionError(
                f"Answer {position} fraction must be an integer, got {fraction!r}",
                **question._context(),
            )
        if not settings.allows_fraction(fraction):
            raise InvalidFractionError(
                f"Answer {position} fraction {fraction} outside "
                f"[{settings.min_fraction}, {settings.max_fraction}]",
                **question._context(),
            )
    if settings.max_answers is not None and len(question.answers) > settings.max_answers:
        raise TooManyAnswersError(
            f"At most {settings.max_answers} answers allowed, got {len(question.answers)}",
            **question._context(),
        )


def _check_reaches_full_marks(question, summed: bool) -> None:
    """Moodle rejects questions where no combination of answers earns full marks."""
    if not summed:
        if not any(a.fraction == 100 for a in question.answers):
            raise NoCorrectAnswerError(
                "Question needs an answer with fraction 100",
                **question._context(),
            )
        return
    total = sum(a.fraction for a in question.answers if a.fraction > 0)
    if total < 100:
        raise NoCorrectAnswerError(
            f"Positive answer fractions must add up to at least 100, got {total}",
            **question._context(),
        )


# =============================================================================
# Variants
# =============================================================================


@dataclass
class ShortAnswerQuestion(_TextQuestion):
    """Learner types the answer; each Answer is an accepted response."""
    question_type: ClassVar[QuestionType] = QuestionType.SHORT_ANSWER

    name: str
    text: str
    case_sensitive: bool = False
    answers: list[Answer] = field(default_factory=list)
    text_format: TextFormat = TextFormat.HTML

    def __post_init__(self):
        self.text_format = TextFormat(self.text_format)
        initial, self.answers = self.answers, []
        if initial:
            self.add_answers(initial)

    def add_answers(self, answers: Answer | Iterable[Answer], settings: Settings | None = None) -> None:
        _attach(self, answers, settings)

    def validate(self, settings: Settings | None = None) -> None:
        _check_answers(self, settings)
        _check_reaches_full_marks(self, summed=False)


@dataclass
class TrueFalseQuestion(_TextQuestion):
    """A statement judged true or false. Answers are synthesized on render."""
    question_type: ClassVar[QuestionType] = QuestionType.TRUE_FALSE

    name: str
    text: str
    correct_answer: bool
    true_feedback: str | None = None
    false_feedback: str | None = None
    text_format: TextFormat = TextFormat.HTML

    def __post_init__(self):
        self.text_format = TextFormat(self.text_format)

    def implied_answers(self) -> list[Answer]:
        """The two fixed answers: 'true' then 'false'."""
        fmt = self.text_format
        return [
            Answer(100 if self.correct_answer else 0, "true", self.true_feedback, fmt),
            Answer(0 if self.correct_answer else 100, "false", self.false_feedback, fmt),
        ]


@dataclass
class MultiChoiceQuestion(_TextQuestion):
    """
    Multiple choice question.

    With single=True exactly one answer must be worth 100; with
    single=False fractions of the correct options are summed by Moodle.
    Feedback fields left as None are omitted from the output.
    """
    question_type: ClassVar[QuestionType] = QuestionType.MULTICHOICE

    name: str
    text: str
    single: bool = True
    shuffle: bool = True
    correct_feedback: str | None = None
    partial_feedback: str | None = None
    incorrect_feedback: str | None = None
    numbering: AnswerNumbering = AnswerNumbering.ABC
    answers: list[Answer] = field(default_factory=list)
    text_format: TextFormat = TextFormat.HTML

    def __post_init__(self):
        self.numbering = AnswerNumbering(self.numbering)
        self.text_format = TextFormat(self.text_format)
        initial, self.answers = self.answers, []
        if initial:
            self.add_answers(initial)

    def add_answers(self, answers: Answer | Iterable[Answer], settings: Settings | None = None) -> None:
        _attach(self, answers, settings)

    def validate(self, settings: Settings | None = None) -> None:
        _check_answers(self, settings)
        if self.single:
            full_marks = sum(1 for a in self.answers if a.fraction == 100)
            if full_marks != 1:
                raise NoCorrectAnswerError(
                    f"Single-choice question needs exactly one answer with fraction 100, "
                    f"found {full_marks}",
                    **self._context(),
                )
        else:
            _check_reaches_full_marks(self, summed=True)


@dataclass
class CategoryQuestion(_QuestionBase):
    """Marker that places following questions under $course$/<path>/."""
    question_type: ClassVar[QuestionType] = QuestionType.CATEGORY

    path: list[str]

    def __post_init__(self):
        segments = [self.path] if isinstance(self.path, str) else self.path
        self.path = [str(segment) for segment in segments]

    @property
    def category_path(self) -> str:
        return COURSE_CATEGORY_ROOT + "".join(f"{segment}/" for segment in self.path)

    def validate(self, settings: Settings | None = None) -> None:
        if not self.path:
            raise InvalidCategoryError("Category path is empty", **self._context())
        if any(not segment.strip() for segment in self.path):
            raise InvalidCategoryError(
                f"Category path {self.path!r} has an empty segment",
                **self._context(),
            )


Question = ShortAnswerQuestion | TrueFalseQuestion | MultiChoiceQuestion | CategoryQuestion


# =============================================================================
# Rendering
# =============================================================================

# Writer registry - populated by @renders decorator
WRITERS: dict[QuestionType, Callable[[Question, XmlWriter], None]] = {}


def renders(question_type: QuestionType):
    """Decorator to register the XML writer for a question type."""
    def decorator(func):
        WRITERS[question_type] = func
        return func
    return decorator


def _write_header(question: _TextQuestion, writer: XmlWriter) -> None:
    # Names are plain text; bodies may carry markup and go into CDATA.
    with writer.element("name"):
        writer.text(question.name)
    writer.formatted_text("questiontext", question.text, question.text_format.value, as_cdata=True)


def _flag(value: bool) -> str:
    return "1" if value else "0"


@renders(QuestionType.CATEGORY)
def _write_category(question: CategoryQuestion, writer: XmlWriter) -> None:
    with writer.element("category"):
        writer.text(question.category_path)


@renders(QuestionType.SHORT_ANSWER)
def _write_short_answer(question: ShortAnswerQuestion, writer: XmlWriter) -> None:
    _write_header(question, writer)
    for answer in question.answers:
        answer.write_xml(writer)
    writer.leaf("usecase", _flag(question.case_sensitive))


@renders(QuestionType.TRUE_FALSE)
def _write_true_false(question: TrueFalseQuestion, writer: XmlWriter) -> None:
    _write_header(question, writer)
    for answer in question.implied_answers():
        answer.write_xml(writer)


@renders(QuestionType.MULTICHOICE)
def _write_multichoice(question: MultiChoiceQuestion, writer: XmlWriter) -> None:
    _write_header(question, writer)
    for answer in question.answers:
        answer.write_xml(writer)
    writer.leaf("single", "true" if question.single else "false")
    writer.leaf("shuffleanswers", _flag(question.shuffle))
    fmt = question.text_format.value
    for tag, feedback in (
        ("correctfeedback", question.correct_feedback),
        ("partiallycorrectfeedback", question.partial_feedback),
        ("incorrectfeedback", question.incorrect_feedback),
    ):
        if feedback is not None:
            writer.formatted_text(tag, feedback, fmt)
    writer.leaf("answernumbering", question.numbering.value)


_missing = set(QuestionType) - set(WRITERS)
if _missing:
    raise RuntimeError(f"No XML writer registered for: {sorted(t.value for t in _missing)}")


def write_question(question: Question, writer: XmlWriter) -> None:
    """Write one <question type="..."> element."""
    question_type = question.question_type
    logger.debug(f"Rendering {question_type.value} question {getattr(question, 'name', '')!r}")
    with writer.element("question", {"type": question_type.value}):
        WRITERS[question_type](question, writer)
