"""TreeComparator: aligns two TreeNode trees by path and classifies every node.

Architecture:
- compare() flattens each tree into a ``path -> node`` map, derives the two
  path sets, and splits them with plain set arithmetic:
  ``left_only = L - R``, ``right_only = R - L``, common = ``L & R``.
- Every common path is classified as matched or different by looking at the
  two nodes' *own* text and attributes.  Children are never considered: a
  divergence below a node shows up on the descendant's own path.
- The comparator never re-parses XML and has no error conditions for valid
  trees.  Trees built with different ``PathSettings`` are compared as given.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from xml_tree_diff.result import DiffReport, DiffStats
from xml_tree_diff.tree.nodes import TreeNode
from xml_tree_diff.tree.traversal import flatten_tree

__all__ = ["TreeComparator", "attributes_equal", "nodes_equivalent"]

LOGGER = logging.getLogger(__name__)


class TreeComparator:
    """Path-identity comparator for two XML trees.

    The comparator is a pure function of its inputs: it holds no state, never
    mutates the trees, and returns a fresh ``DiffReport`` per call.  A single
    instance may be used concurrently from several threads.

    Example::

        from xml_tree_diff.comparator import TreeComparator
        from xml_tree_diff.tree import TreeBuilder

        builder = TreeBuilder()
        left = builder.build("<root><a>1</a><b/></root>")
        right = builder.build("<root><a>2</a><c/></root>")
        report = TreeComparator().compare(left, right)
        report.left_only   # frozenset({"/root/b"})
        report.right_only  # frozenset({"/root/c"})
        report.different   # frozenset({"/root/a"})
        report.matched     # frozenset({"/root"})
    """

    def compare(self, left: TreeNode, right: TreeNode) -> DiffReport:
        """Compare two trees and return a ``DiffReport``.

        Args:
            left:  Root of the left tree.
            right: Root of the right tree.

        Returns:
            A ``DiffReport`` whose ``matched``/``different`` sets partition the
            common paths and whose ``left_only``/``right_only`` sets hold the
            paths unique to each side.
        """
        left_map = flatten_tree(left)
        right_map = flatten_tree(right)

        left_paths = left_map.keys()
        right_paths = right_map.keys()

        left_only = frozenset(left_paths - right_paths)
        right_only = frozenset(right_paths - left_paths)

        matched: set[str] = set()
        different: set[str] = set()
        for path in left_paths & right_paths:
            if nodes_equivalent(left_map[path], right_map[path]):
                matched.add(path)
            else:
                different.add(path)

        stats = DiffStats(
            total_left=len(left_map),
            total_right=len(right_map),
            matched=len(matched),
            left_only=len(left_only),
            right_only=len(right_only),
            different=len(different),
        )
        LOGGER.debug(
            "compared %d left / %d right nodes: %d matched, %d different, "
            "%d left only, %d right only",
            stats.total_left,
            stats.total_right,
            stats.matched,
            stats.different,
            stats.left_only,
            stats.right_only,
        )

        return DiffReport(
            matched=frozenset(matched),
            left_only=left_only,
            right_only=right_only,
            different=frozenset(different),
            stats=stats,
        )


def nodes_equivalent(left: TreeNode, right: TreeNode) -> bool:
    """True if both nodes have the same direct text and the same attributes."""
    if left.text_content != right.text_content:
        return False
    return attributes_equal(left.attributes, right.attributes)


def attributes_equal(left: Mapping[str, str], right: Mapping[str, str]) -> bool:
    """True if both mappings hold the same keys with identical values.

    A differing attribute count decides the question without looking at
    any value.
    """
    if len(left) != len(right):
        return False
    for name, value in left.items():
        if name not in right or right[name] != value:
            return False
    return True
