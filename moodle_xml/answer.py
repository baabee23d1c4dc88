"""
Answer value object.

An answer is a scored text/feedback pair. Its fraction range is checked
by the question that owns it, since the permitted range depends on the
question type.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .exceptions import EmptyTextError
from .xml_writer import XmlWriter


class TextFormat(str, Enum):
    """Text formats Moodle can render question, answer and feedback text in."""
    HTML = "html"
    MOODLE = "moodle_auto_format"
    MARKDOWN = "markdown"
    PLAIN_TEXT = "plain_text"


@dataclass(frozen=True)
class Answer:
    """A single answer option with its score weight."""
    fraction: int  # percent of the question's grade, e.g. 100, 50, -25
    text: str
    feedback: str | None = None  # None omits the <feedback> element
    text_format: TextFormat = TextFormat.HTML

    def __post_init__(self):
        if not self.text:
            raise EmptyTextError("Answer text must not be empty")
        if not isinstance(self.text_format, TextFormat):
            object.__setattr__(self, "text_format", TextFormat(self.text_format))

    def with_text_format(self, text_format: TextFormat | str) -> "Answer":
        """Return a copy rendered in another text format."""
        return replace(self, text_format=TextFormat(text_format))

    def write_xml(self, writer: XmlWriter) -> None:
        fmt = self.text_format.value
        with writer.element("answer", {"fraction": str(self.fraction), "format": fmt}):
            writer.text(self.text)
            if self.feedback is not None:
                writer.formatted_text("feedback", self.feedback, fmt)
