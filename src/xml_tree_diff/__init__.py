"""xml-tree-diff - path-aligned structural diffing of XML documents."""

from __future__ import annotations

from xml_tree_diff.api import (
    BuildResult,
    are_trees_identical,
    build_tree,
    compare_trees,
    compare_xml,
    diff_summary,
    safe_build_tree,
)
from xml_tree_diff.comparator import TreeComparator
from xml_tree_diff.config import PathSettings
from xml_tree_diff.errors import ParseError, ValidationError, XmlTreeError
from xml_tree_diff.result import DiffReport, DiffStats, DiffStatus, Side, resolve_status
from xml_tree_diff.session import ComparisonOutcome, ComparisonSession
from xml_tree_diff.tree import (
    TreeBuilder,
    TreeNode,
    all_paths,
    count_nodes,
    find_node,
    flatten_tree,
)

__version__: str = "0.1.0"
__all__: list[str] = [
    "BuildResult",
    "ComparisonOutcome",
    "ComparisonSession",
    "DiffReport",
    "DiffStats",
    "DiffStatus",
    "ParseError",
    "PathSettings",
    "Side",
    "TreeBuilder",
    "TreeComparator",
    "TreeNode",
    "ValidationError",
    "XmlTreeError",
    "all_paths",
    "are_trees_identical",
    "build_tree",
    "compare_trees",
    "compare_xml",
    "count_nodes",
    "diff_summary",
    "find_node",
    "flatten_tree",
    "resolve_status",
    "safe_build_tree",
]
