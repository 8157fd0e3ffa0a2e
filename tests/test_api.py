"""Tests for the public API functions."""

from __future__ import annotations

from collections.abc import Callable

import pytest

import xml_tree_diff
from xml_tree_diff import (
    BuildResult,
    ComparisonOutcome,
    DiffStatus,
    ParseError,
    PathSettings,
    Side,
    ValidationError,
    are_trees_identical,
    build_tree,
    compare_trees,
    compare_xml,
    diff_summary,
    resolve_status,
    safe_build_tree,
)


class TestBuildTree:
    def test_default_settings(self) -> None:
        tree = build_tree("<r><a/><a/></r>")
        assert [child.path for child in tree.children] == ["/r/a[1]", "/r/a[2]"]

    def test_settings_object(self) -> None:
        settings = PathSettings(elements_array=["a"])
        tree = build_tree("<r><a/><a/></r>", settings=settings)
        assert [child.path for child in tree.children] == ["/r/a", "/r/a[2]"]

    def test_settings_mapping(self) -> None:
        tree = build_tree("<r><a/><a/></r>", settings={"elementsArray": ["a"]})
        assert [child.path for child in tree.children] == ["/r/a", "/r/a[2]"]

    def test_invalid_input_raises(self) -> None:
        with pytest.raises(ValidationError):
            build_tree("")
        with pytest.raises(ParseError):
            build_tree("<r>")

    def test_invalid_settings_raise_value_error(self) -> None:
        with pytest.raises(ValueError, match="unknown path setting"):
            build_tree("<r/>", settings={"bogus": True})


class TestSafeBuildTree:
    def test_success(self) -> None:
        result = safe_build_tree("<r>hi</r>")
        assert isinstance(result, BuildResult)
        assert result.success
        assert result.error is None
        assert result.tree is not None
        assert result.tree.text_content == "hi"

    def test_parse_failure(self) -> None:
        result = safe_build_tree("<r><a></r>")
        assert not result.success
        assert result.tree is None
        assert result.error is not None
        assert result.error.startswith("Invalid XML: ")

    def test_unencodable_text_is_reported(self) -> None:
        result = safe_build_tree("<a>\ud800</a>")
        assert not result.success
        assert result.error is not None
        assert result.error.startswith("Invalid XML: Text cannot be encoded as UTF-8")

    @pytest.mark.parametrize("value", [None, 42, "", "   "])
    def test_validation_failure(self, value: object) -> None:
        result = safe_build_tree(value)
        assert not result.success
        assert result.error in {
            "XML input must be a string",
            "XML input cannot be empty",
        }


class TestCompare:
    def test_compare_trees(self) -> None:
        left = build_tree("<r><a>1</a></r>")
        report = compare_trees(left, build_tree("<r><a>2</a></r>"))
        assert report.different == frozenset({"/r/a"})
        assert not are_trees_identical(report)

    def test_compare_xml_success(self, xml_fixture: Callable[[str], str]) -> None:
        outcome = compare_xml(
            xml_fixture("sample-left.xml"), xml_fixture("sample-right.xml")
        )
        assert isinstance(outcome, ComparisonOutcome)
        assert outcome.ok
        assert outcome.report is not None
        assert outcome.report.stats.left_only == 1
        assert outcome.report.stats.right_only == 2

    def test_compare_xml_reports_both_errors(self) -> None:
        outcome = compare_xml("<r>", "")
        assert not outcome.ok
        assert outcome.report is None
        assert outcome.left_tree is None
        assert outcome.right_tree is None
        assert outcome.left_error is not None
        assert outcome.left_error.startswith("Invalid XML: ")
        assert outcome.right_error == "XML input cannot be empty"

    def test_compare_xml_keeps_good_side(self) -> None:
        outcome = compare_xml("<r/>", "<r>")
        assert outcome.report is None
        assert outcome.left_tree is not None
        assert outcome.left_error is None
        assert outcome.right_error is not None

    def test_compare_xml_reports_unencodable_side(self) -> None:
        outcome = compare_xml("<r/>", "<r>\udcff</r>")
        assert outcome.report is None
        assert outcome.left_error is None
        assert outcome.right_error is not None
        assert outcome.right_error.startswith("Invalid XML: ")

    def test_compare_xml_applies_settings_to_both_sides(self) -> None:
        outcome = compare_xml(
            '<r><i n="2">b</i><i n="1">a</i></r>',
            '<r><i n="1">a</i><i n="2">b</i></r>',
            settings={"indexAttribute": "n"},
        )
        assert outcome.report is not None
        assert outcome.report.is_identical

    def test_status_lookup_after_compare(self) -> None:
        outcome = compare_xml("<r><a/></r>", "<r><b/></r>")
        report = outcome.report
        assert resolve_status("/r/a", report, Side.LEFT) is DiffStatus.EXTRA
        assert resolve_status("/r/b", report, Side.RIGHT) is DiffStatus.EXTRA
        assert resolve_status("/r", report, Side.LEFT) is DiffStatus.MATCHED


class TestSummaries:
    def test_diff_summary(self) -> None:
        report = compare_trees(build_tree("<r><a/></r>"), build_tree("<r/>"))
        assert diff_summary(report).splitlines() == [
            "Left elements: 2",
            "Right elements: 1",
            "Matched: 1",
            "Left only: 1",
            "Right only: 0",
            "Different: 0",
        ]

    def test_are_trees_identical(self) -> None:
        tree = build_tree("<r><a>1</a></r>")
        assert are_trees_identical(compare_trees(tree, tree))


class TestExports:
    def test_all_names_resolve(self) -> None:
        for name in xml_tree_diff.__all__:
            assert hasattr(xml_tree_diff, name), name
