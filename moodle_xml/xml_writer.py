"""
Minimal indenting XML writer for Moodle question documents.

ElementTree cannot emit CDATA sections, and the importer wants question
bodies as raw markup inside CDATA, so documents are assembled line by
line here. Every element opened through `element()` is closed when its
block exits, so the output is always balanced.
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Iterator
from xml.sax.saxutils import escape, quoteattr

from loguru import logger

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'

_CDATA_END = "]]>"
_CDATA_END_SPLIT = "]]]]><![CDATA[>"

# Characters XML 1.0 does not allow anywhere in a document.
_ILLEGAL_XML_CHARS = re.compile(
    "[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]"
)

_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def strip_illegal(value: str) -> str:
    """Remove characters that cannot appear in an XML 1.0 document."""
    cleaned, removed = _ILLEGAL_XML_CHARS.subn("", value)
    if removed:
        logger.warning(f"Removed {removed} character(s) not allowed in XML from {cleaned[:40]!r}")
    return cleaned


def escape_text(value: str) -> str:
    """Entity-escape &, <, >, \" and ' for plain element content."""
    return escape(strip_illegal(value), _ENTITIES)


def cdata(value: str) -> str:
    """Wrap value in a CDATA section, splitting any embedded ]]> terminator."""
    body = strip_illegal(value).replace(_CDATA_END, _CDATA_END_SPLIT)
    return f"<![CDATA[{body}]]>"


def _open_tag(name: str, attrs: dict[str, str] | None) -> str:
    if not attrs:
        return f"<{name}>"
    rendered = " ".join(
        f"{key}={quoteattr(strip_illegal(str(value)), _ENTITIES)}"
        for key, value in attrs.items()
    )
    return f"<{name} {rendered}>"


class XmlWriter:
    """Accumulates an indented XML document in memory."""

    def __init__(self, indent: int = 2):
        self._pad = " " * indent
        self._depth = 0
        self._lines: list[str] = []

    def _emit(self, line: str) -> None:
        self._lines.append(f"{self._pad * self._depth}{line}")

    def declaration(self) -> None:
        self._emit(XML_DECLARATION)

    @contextmanager
    def element(self, name: str, attrs: dict[str, str] | None = None) -> Iterator["XmlWriter"]:
        """Open `name`, let the caller write children, then close it."""
        self._emit(_open_tag(name, attrs))
        self._depth += 1
        try:
            yield self
        finally:
            self._depth -= 1
            self._emit(f"</{name}>")

    def leaf(self, name: str, value: str, attrs: dict[str, str] | None = None) -> None:
        """Write a single-line element holding escaped text."""
        self._emit(f"{_open_tag(name, attrs)}{escape_text(value)}</{name}>")

    def text(self, value: str, *, as_cdata: bool = False) -> None:
        """Write a <text> element, entity-escaped or wrapped in CDATA."""
        if as_cdata:
            self._emit(f"<text>{cdata(value)}</text>")
        else:
            self.leaf("text", value)

    def formatted_text(self, name: str, value: str, text_format: str, *, as_cdata: bool = False) -> None:
        """Write <name format="..."><text>value</text></name>."""
        with self.element(name, {"format": text_format}):
            self.text(value, as_cdata=as_cdata)

    def getvalue(self) -> str:
        return "\n".join(self._lines) + "\n"
