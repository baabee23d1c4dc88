"""
moodle-xml: build quiz questions in Python and export them as Moodle XML.

Typical use:

    quiz = Quiz(question)
    quiz.set_categories(["capitals"])
    quiz.to_xml("capitals.xml")
"""

from .answer import Answer, TextFormat
from .config import Settings, get_settings
from .exceptions import (
    EmptyQuizError,
    EmptyTextError,
    InvalidCategoryError,
    InvalidFractionError,
    NoAnswersError,
    NoCorrectAnswerError,
    QuizError,
    TooManyAnswersError,
    ValidationError,
    WrongQuestionTypeError,
)
from .question import (
    AnswerNumbering,
    CategoryQuestion,
    MultiChoiceQuestion,
    Question,
    QuestionType,
    ShortAnswerQuestion,
    TrueFalseQuestion,
)
from .quiz import Quiz

__all__ = [
    "Answer",
    "AnswerNumbering",
    "CategoryQuestion",
    "EmptyQuizError",
    "EmptyTextError",
    "InvalidCategoryError",
    "InvalidFractionError",
    "MultiChoiceQuestion",
    "NoAnswersError",
    "NoCorrectAnswerError",
    "Question",
    "QuestionType",
    "Quiz",
    "QuizError",
    "Settings",
    "ShortAnswerQuestion",
    "TextFormat",
    "TooManyAnswersError",
    "TrueFalseQuestion",
    "ValidationError",
    "WrongQuestionTypeError",
    "get_settings",
]
