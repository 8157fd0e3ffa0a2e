"""Public API functions for xml-tree-diff.

This module provides the user-facing functions: build_tree, safe_build_tree,
compare_trees, compare_xml, resolve_status and the summary helpers.  Each
call creates fresh builder/comparator objects, so no state is carried from
one call to the next.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from xml_tree_diff.comparator import TreeComparator
from xml_tree_diff.config import PathSettings
from xml_tree_diff.errors import XmlTreeError
from xml_tree_diff.result import DiffReport
from xml_tree_diff.session import ComparisonOutcome, parse_and_compare
from xml_tree_diff.tree.builder import TreeBuilder
from xml_tree_diff.tree.nodes import TreeNode
from xml_tree_diff.tree.parser import XmlParser

__all__ = [
    "BuildResult",
    "are_trees_identical",
    "build_tree",
    "compare_trees",
    "compare_xml",
    "diff_summary",
    "safe_build_tree",
]

SettingsLike = PathSettings | Mapping[str, Any] | None


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Outcome of ``safe_build_tree()``.

    Attributes:
        success: True when a tree was built.
        tree:    The root node, or None on failure.
        error:   The error message, or None on success.
    """

    success: bool
    tree: TreeNode | None
    error: str | None


def _builder(settings: SettingsLike, parser: XmlParser | None = None) -> TreeBuilder:
    if settings is None:
        resolved = PathSettings()
    elif isinstance(settings, PathSettings):
        resolved = settings
    else:
        resolved = PathSettings.from_mapping(settings)
    if parser is None:
        return TreeBuilder(settings=resolved)
    return TreeBuilder(settings=resolved, parser=parser)


def build_tree(
    xml_text: object,
    settings: SettingsLike = None,
    parser: XmlParser | None = None,
) -> TreeNode:
    """Parse an XML string into a normalized tree.

    Args:
        xml_text: The XML document.
        settings: Path settings, or their persisted mapping form.  Defaults to
                  ``PathSettings()``.
        parser:   XML parser to use.  Defaults to ``LxmlParser()``.

    Returns:
        The root ``TreeNode``.

    Raises:
        ValidationError: If ``xml_text`` is not a string or is empty.
        ParseError: If the markup is not well-formed.
    """
    return _builder(settings, parser).build(xml_text)


def safe_build_tree(xml_text: object, settings: SettingsLike = None) -> BuildResult:
    """Parse an XML string, reporting failure in the result instead of raising.

    Only validation and parse errors are caught; invalid ``settings`` still
    raise ``ValueError``.
    """
    builder = _builder(settings)
    try:
        tree = builder.build(xml_text)
    except XmlTreeError as exc:
        return BuildResult(success=False, tree=None, error=str(exc))
    return BuildResult(success=True, tree=tree, error=None)


def compare_trees(left: TreeNode, right: TreeNode) -> DiffReport:
    """Compare two already-built trees by path.

    Both trees should have been built with the same settings; otherwise their
    paths need not line up and structurally equal documents can show up as
    left-only/right-only.
    """
    return TreeComparator().compare(left, right)


def compare_xml(
    left_xml: object,
    right_xml: object,
    settings: SettingsLike = None,
) -> ComparisonOutcome:
    """Build both documents with the same settings and compare them.

    Returns:
        A ``ComparisonOutcome``.  When either document fails to build, its
        error message is set, the other tree is still returned, and
        ``report`` is None.
    """
    return parse_and_compare(left_xml, right_xml, builder=_builder(settings))


def diff_summary(report: DiffReport) -> str:
    """Return a human-readable summary of ``report``, one count per line."""
    return report.summary()


def are_trees_identical(report: DiffReport) -> bool:
    """True when ``report`` has no left-only, right-only or different paths."""
    return report.is_identical
