"""XmlParser Protocol and the default lxml-backed implementation.

The Tree Builder never reaches for a global parser: it receives an object
satisfying ``XmlParser`` and asks it for the document element.  Any class
with a conformant ``parse`` method passes ``isinstance`` checks, which lets
tests inject a fake parser without inheriting from anything.

Example::

    import lxml.etree as ET
    from xml_tree_diff.tree.parser import MarkupSyntaxError, XmlParser

    class CannedParser:
        def parse(self, xml_text: str) -> ET._Element:
            raise MarkupSyntaxError("mismatched tag")

    assert isinstance(CannedParser(), XmlParser)  # structural conformance
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

import lxml.etree as ET

__all__ = [
    "MAX_DIAGNOSTIC_LENGTH",
    "LxmlParser",
    "MarkupSyntaxError",
    "XmlParser",
    "clean_diagnostic",
]

MAX_DIAGNOSTIC_LENGTH = 200

_WHITESPACE = re.compile(r"\s+")


class MarkupSyntaxError(Exception):
    """Raised by an ``XmlParser`` when the markup is not well-formed.

    The message is the parser's raw diagnostic; the builder cleans it up and
    re-raises it as ``ParseError``.
    """


@runtime_checkable
class XmlParser(Protocol):
    """Structural protocol for XML parsers.

    The ``parse`` method must:
    - Accept the XML document as a ``str``.
    - Return the document element as an lxml element.
    - Raise ``MarkupSyntaxError`` with a diagnostic when the markup is malformed.
    """

    def parse(self, xml_text: str) -> ET._Element: ...


class LxmlParser:
    """Well-formedness checking parser built on ``lxml.etree``.

    Entities are not resolved, DTDs are not loaded and the network is never
    touched.  A fresh ``lxml.etree.XMLParser`` is created for every call, so
    one ``LxmlParser`` can be shared between threads.

    Args:
        huge_tree: Lift libxml2's limits on nesting depth and text node size.
            Defaults to False (documents nested deeper than 256 levels are
            rejected as malformed).
    """

    def __init__(self, huge_tree: bool = False) -> None:
        self._huge_tree = huge_tree

    def parse(self, xml_text: str) -> ET._Element:
        parser = ET.XMLParser(
            encoding="utf-8",
            resolve_entities=False,
            load_dtd=False,
            no_network=True,
            huge_tree=self._huge_tree,
        )
        # The text is already decoded; re-encode and force the parser to UTF-8
        # so an encoding declaration in the prolog cannot contradict it.
        try:
            data = xml_text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise MarkupSyntaxError(
                f"Text cannot be encoded as UTF-8: {exc.reason} "
                f"(character {exc.start})"
            ) from exc
        try:
            return ET.fromstring(data, parser)
        except ET.XMLSyntaxError as exc:
            raise MarkupSyntaxError(_describe_syntax_error(parser, exc)) from exc


def _describe_syntax_error(parser: ET.XMLParser, exc: ET.XMLSyntaxError) -> str:
    """Join the entries logged by ``parser`` into one diagnostic.

    ``exc.error_log`` is the thread-wide log and still holds entries from
    earlier documents; the parser's own log covers this parse only.
    """
    messages = [
        f"{entry.message} (line {entry.line}, column {entry.column})"
        for entry in parser.error_log
        if entry.message
    ]
    if messages:
        return "; ".join(messages)
    return str(exc) or "Unknown parsing error"


def clean_diagnostic(message: str, limit: int = MAX_DIAGNOSTIC_LENGTH) -> str:
    """Collapse whitespace in ``message`` and truncate it to ``limit`` characters.

    Args:
        message: Raw parser diagnostic, possibly multi-line.
        limit:   Maximum length kept before the ``...`` suffix is added.

    Returns:
        A single-line message.  Empty input yields ``"Unknown parsing error"``.
    """
    cleaned = _WHITESPACE.sub(" ", message).strip()
    if not cleaned:
        return "Unknown parsing error"
    if len(cleaned) > limit:
        return cleaned[:limit] + "..."
    return cleaned
