"""Tests for the XmlParser protocol, LxmlParser and diagnostic cleaning."""

from __future__ import annotations

import lxml.etree as ET
import pytest

from xml_tree_diff.tree.parser import (
    MAX_DIAGNOSTIC_LENGTH,
    LxmlParser,
    MarkupSyntaxError,
    XmlParser,
    clean_diagnostic,
)


class TestProtocolConformance:
    def test_lxml_parser_satisfies_protocol(self) -> None:
        assert isinstance(LxmlParser(), XmlParser)

    def test_structural_conformance_without_inheritance(self) -> None:
        class Fake:
            def parse(self, xml_text: str) -> ET._Element:
                return ET.fromstring("<fake/>")

        assert isinstance(Fake(), XmlParser)

    def test_object_without_parse_is_rejected(self) -> None:
        class NotAParser:
            def load(self, xml_text: str) -> None: ...

        assert not isinstance(NotAParser(), XmlParser)


class TestLxmlParser:
    def test_returns_document_element(self) -> None:
        root = LxmlParser().parse("<!-- lead --><root><a/></root>")
        assert root.tag == "root"
        assert [child.tag for child in root] == ["a"]

    def test_malformed_markup_raises_markup_syntax_error(self) -> None:
        with pytest.raises(MarkupSyntaxError) as exc_info:
            LxmlParser().parse("<root><unclosed>")
        message = str(exc_info.value)
        assert "line 1" in message
        assert isinstance(exc_info.value.__cause__, ET.XMLSyntaxError)

    def test_external_entities_are_not_loaded(self) -> None:
        xml = (
            '<?xml version="1.0"?>'
            '<!DOCTYPE r [<!ENTITY ext SYSTEM "file:///etc/hostname">]>'
            "<r>&ext;</r>"
        )
        root = LxmlParser().parse(xml)
        assert not (root.text or "").strip()

    def test_diagnostic_covers_only_the_current_document(self) -> None:
        parser = LxmlParser()
        with pytest.raises(MarkupSyntaxError):
            parser.parse("<first><unclosed>")
        with pytest.raises(MarkupSyntaxError) as exc_info:
            parser.parse("<a></b>")
        message = str(exc_info.value)
        assert "mismatch" in message
        assert "unclosed" not in message

    def test_unencodable_text_raises_markup_syntax_error(self) -> None:
        with pytest.raises(MarkupSyntaxError, match="UTF-8") as exc_info:
            LxmlParser().parse("<a>\ud800</a>")
        assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)

    def test_huge_tree_accepts_deep_documents(self) -> None:
        depth = 1000
        xml = "<n>" * depth + "</n>" * depth
        with pytest.raises(MarkupSyntaxError):
            LxmlParser().parse(xml)
        root = LxmlParser(huge_tree=True).parse(xml)
        assert sum(1 for _ in root.iter()) == depth

    def test_unicode_text_survives(self) -> None:
        root = LxmlParser().parse("<r>naïve – ✓</r>")
        assert root.text == "naïve – ✓"


class TestCleanDiagnostic:
    def test_whitespace_is_collapsed(self) -> None:
        assert clean_diagnostic("  line one\n\n\tline   two  ") == "line one line two"

    def test_short_message_is_unchanged(self) -> None:
        assert clean_diagnostic("mismatched tag") == "mismatched tag"

    def test_message_at_limit_is_not_truncated(self) -> None:
        message = "x" * MAX_DIAGNOSTIC_LENGTH
        assert clean_diagnostic(message) == message

    def test_long_message_is_truncated_with_ellipsis(self) -> None:
        cleaned = clean_diagnostic("y" * (MAX_DIAGNOSTIC_LENGTH + 1))
        assert cleaned == "y" * MAX_DIAGNOSTIC_LENGTH + "..."

    def test_custom_limit(self) -> None:
        assert clean_diagnostic("abcdef", limit=3) == "abc..."

    def test_empty_message(self) -> None:
        assert clean_diagnostic(" \n ") == "Unknown parsing error"
