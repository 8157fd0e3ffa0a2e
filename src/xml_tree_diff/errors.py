"""Exception types raised by the Tree Builder.

Two error kinds exist at the builder boundary:

- ``ValidationError``: the input is not a string, or is empty/whitespace-only.
  Raised before any parsing is attempted.
- ``ParseError``: the XML parser rejected the markup.  The message carries the
  parser's own diagnostic, whitespace-collapsed and truncated.

Both derive from ``XmlTreeError`` (and ``ValueError``) so callers can catch
either kind individually or the whole family at once.
"""

from __future__ import annotations

__all__ = ["ParseError", "ValidationError", "XmlTreeError"]


class XmlTreeError(Exception):
    """Base class for all errors raised while building an XML tree."""


class ValidationError(XmlTreeError, ValueError):
    """The XML input has the wrong shape (not a string, or empty)."""


class ParseError(XmlTreeError, ValueError):
    """The XML input is not well-formed.

    Attributes:
        diagnostic: The parser's diagnostic text after cleaning (single line,
            at most 200 characters plus an ellipsis).
    """

    def __init__(self, diagnostic: str) -> None:
        super().__init__(f"Invalid XML: {diagnostic}")
        self.diagnostic = diagnostic
