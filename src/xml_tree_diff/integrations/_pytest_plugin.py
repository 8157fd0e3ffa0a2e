"""pytest plugin for xml-tree-diff.

Registered through the ``pytest11`` entry point in pyproject.toml, so any
project with xml-tree-diff installed gets the ``assert_xml_equivalent``
fixture without touching its conftest.py.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from xml_tree_diff import PathSettings, compare_xml


def _format_paths(paths: frozenset[str]) -> str:
    return ", ".join(sorted(paths)) or "-"


@pytest.fixture(scope="session")
def assert_xml_equivalent() -> Any:
    """Fixture that returns a callable XML equivalence asserter.

    Session-scoped: the returned callable keeps no state between calls.

    Usage in tests::

        def test_render(assert_xml_equivalent):
            assert_xml_equivalent('<a x="1"/>', '<a  x="1" ></a>')

        def test_changed(assert_xml_equivalent):
            with pytest.raises(AssertionError, match=r"different:"):
                assert_xml_equivalent("<a>1</a>", "<a>2</a>")

    Returns:
        A callable ``_assert(actual, expected, settings=None) -> None`` that
        raises ``AssertionError`` when either document fails to build or the
        two trees are not identical by path alignment.
    """

    def _assert(
        actual: str,
        expected: str,
        settings: PathSettings | Mapping[str, Any] | None = None,
    ) -> None:
        """Assert that two XML documents align path by path with equal content.

        Args:
            actual:   The XML produced by the code under test.
            expected: The expected/reference XML.
            settings: Optional path settings used to build both documents.

        Raises:
            AssertionError: When a document is malformed, or with a message
                listing the left-only, right-only and different paths.
        """
        outcome = compare_xml(actual, expected, settings=settings)
        if outcome.report is None:
            raise AssertionError(
                f"XML documents could not be compared\n"
                f"  actual error:   {outcome.left_error}\n"
                f"  expected error: {outcome.right_error}"
            )
        report = outcome.report
        if not report.is_identical:
            raise AssertionError(
                f"XML documents not equivalent\n"
                f"  left only:  {_format_paths(report.left_only)}\n"
                f"  right only: {_format_paths(report.right_only)}\n"
                f"  different:  {_format_paths(report.different)}"
            )

    return _assert
