"""Tree subpackage for XML-to-tree conversion primitives.

Re-exports the public API for the tree module:
- TreeNode: frozen dataclass representing one XML element
- TreeBuilder: converts an XML string into a TreeNode tree
- XmlParser / LxmlParser: the injectable parser protocol and its default
- iter_nodes, flatten_tree, all_paths, count_nodes, find_node: read-only lookups
"""

from xml_tree_diff.tree.builder import TreeBuilder
from xml_tree_diff.tree.nodes import TreeNode
from xml_tree_diff.tree.parser import LxmlParser, MarkupSyntaxError, XmlParser
from xml_tree_diff.tree.traversal import (
    all_paths,
    count_nodes,
    find_node,
    flatten_tree,
    iter_nodes,
)

__all__ = [
    "LxmlParser",
    "MarkupSyntaxError",
    "TreeBuilder",
    "TreeNode",
    "XmlParser",
    "all_paths",
    "count_nodes",
    "find_node",
    "flatten_tree",
    "iter_nodes",
]
