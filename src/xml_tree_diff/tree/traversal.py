"""Read-only lookups over an already-built TreeNode tree.

All helpers walk the tree depth-first, parent before children, in document
order.  The walk uses an explicit stack so very deep trees do not hit the
interpreter's recursion limit.
"""

from __future__ import annotations

from collections.abc import Iterator

from xml_tree_diff.tree.nodes import TreeNode

__all__ = ["all_paths", "count_nodes", "find_node", "flatten_tree", "iter_nodes"]


def iter_nodes(tree: TreeNode) -> Iterator[TreeNode]:
    """Yield every node of ``tree``, parent before children, in document order."""
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def flatten_tree(tree: TreeNode) -> dict[str, TreeNode]:
    """Return a mapping from path to node.

    Should two nodes share a path (only possible when ``index_attribute`` pins
    duplicate indexes), the node visited last wins.
    """
    return {node.path: node for node in iter_nodes(tree)}


def all_paths(tree: TreeNode) -> set[str]:
    """Return the set of all paths in ``tree``."""
    return {node.path for node in iter_nodes(tree)}


def count_nodes(tree: TreeNode) -> int:
    """Return the total number of nodes in ``tree``."""
    return sum(1 for _ in iter_nodes(tree))


def find_node(tree: TreeNode, path: str) -> TreeNode | None:
    """Return the node at ``path``, or None when no node has that path."""
    return flatten_tree(tree).get(path)
