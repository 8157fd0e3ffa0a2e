"""TreeNode: the immutable, path-addressed representation of one XML element.

Provides the foundational data type produced by TreeBuilder and consumed by
TreeComparator.  Text-only content is never a node of its own; it is folded
into the ``text_content`` of the element that directly contains it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

__all__ = ["TreeNode"]


def _empty_attributes() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class TreeNode:
    """A node in the normalized XML tree.

    Attributes:
        tag_name:       Qualified tag name as written in the markup
                        (``prefix:local`` when a prefix is used).
        path:           Root-anchored path, e.g. ``"/root/item[2]"``.  The sole
                        join key between two trees.
        attributes:     Read-only mapping of attribute name to value.
        text_content:   Direct text of this element only, trimmed.
        children:       Child element nodes in document order.
        comparison_key: Display label, ``tag`` or ``tag[@id="..."]``.  Never
                        used to align trees.
        sibling_index:  1-based position among same-tag siblings (display only).
        sibling_total:  Number of same-tag siblings, this node included.
    """

    tag_name: str
    path: str
    attributes: Mapping[str, str] = field(default_factory=_empty_attributes)
    text_content: str = ""
    children: tuple[TreeNode, ...] = field(default_factory=tuple)
    comparison_key: str = ""
    sibling_index: int = 1
    sibling_total: int = 1

    @property
    def is_leaf(self) -> bool:
        """True when this element has no child elements (it may still have text)."""
        return not self.children
