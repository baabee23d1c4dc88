"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from pathlib import Path

from loguru import logger

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from moodle_xml import (  # noqa: E402
    Answer,
    MultiChoiceQuestion,
    Settings,
    ShortAnswerQuestion,
    TrueFalseQuestion,
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def settings():
    """Default settings, independent of any MOODLE_XML_* environment."""
    return Settings(_env_file=None, min_fraction=-100, max_fraction=100, max_answers=None, indent=2)


@pytest.fixture
def capitals_question():
    """Short answer question used in the README example."""
    question = ShortAnswerQuestion("Knowing capitals part 1", "What is the capital of France?")
    question.add_answers(Answer(100, "Paris", "Yes, correct!"))
    return question


@pytest.fixture
def multichoice_question():
    """Single-choice question with one correct option and two distractors."""
    question = MultiChoiceQuestion(
        "Name of question",
        "What is the answer to this question?",
        correct_feedback="Correct!",
        partial_feedback="Partially correct!",
        incorrect_feedback="Incorrect!",
    )
    question.add_answers([
        Answer(100, "The correct answer", "Correct!"),
        Answer(0, "A distractor", "Ooops!"),
        Answer(0, "Another distractor", "Ooops!"),
    ])
    return question


@pytest.fixture
def true_false_question():
    return TrueFalseQuestion(
        "Sky colour",
        "The sky is <b>blue</b>.",
        correct_answer=True,
        true_feedback="Right.",
        false_feedback="Look up.",
    )


@pytest.fixture
def log_messages():
    """Collect loguru WARNING+ messages emitted during the test."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)
