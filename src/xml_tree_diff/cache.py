"""TreeCache: LRU-backed memo of built trees around a TreeBuilder.

In interactive use one side of a comparison usually stays unchanged while the
other is edited.  Wrapping the builder in a ``TreeCache`` means the unchanged
document is not parsed again.  Trees are immutable, so handing out the same
cached instance twice is safe.

The cache is keyed by the XML text only; the wrapped builder fixes the
settings.  Failed builds are never cached; the error is raised again on the
next call.

Each ``TreeCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state.

Example::

    from xml_tree_diff.cache import TreeCache
    from xml_tree_diff.tree import TreeBuilder

    cache = TreeCache(TreeBuilder(), max_size=16)

    tree = cache.build("<root/>")         # parses
    tree_again = cache.build("<root/>")   # served from memory
    assert tree is tree_again
"""

from __future__ import annotations

import logging
import threading

from cachetools import LRUCache

from xml_tree_diff.tree.builder import TreeBuilder
from xml_tree_diff.tree.nodes import TreeNode

__all__ = ["TreeCache"]

LOGGER = logging.getLogger(__name__)


class TreeCache:
    """LRU-backed caching proxy around a ``TreeBuilder``.

    LRU eviction is silent: the least-recently-used tree is dropped when
    ``max_size`` is exceeded.  Lookups and inserts are guarded by a lock so a
    cache can be used from executor threads.

    Args:
        builder:  The builder producing trees on a cache miss.
        max_size: Maximum number of trees to hold in memory.  Defaults to 16.
    """

    def __init__(self, builder: TreeBuilder, max_size: int = 16) -> None:
        self._builder = builder
        self._cache: LRUCache[str, TreeNode] = LRUCache(maxsize=max_size)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def builder(self) -> TreeBuilder:
        """The wrapped builder."""
        return self._builder

    @property
    def max_size(self) -> int:
        """The maximum number of trees this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of trees stored in the cache."""
        with self._lock:
            return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Builder surface
    # ------------------------------------------------------------------

    def build(self, xml_text: object) -> TreeNode:
        """Return the tree for ``xml_text``; only uncached documents hit the builder.

        Raises:
            ValidationError: If ``xml_text`` is not a string or is empty.
            ParseError: If the markup is not well-formed.
        """
        if not isinstance(xml_text, str):
            # Not hashable in general; let the builder reject it.
            return self._builder.build(xml_text)

        with self._lock:
            tree = self._cache.get(xml_text)
        if tree is not None:
            LOGGER.debug("tree cache hit for %s", tree.path)
            return tree

        tree = self._builder.build(xml_text)
        with self._lock:
            self._cache[xml_text] = tree
        LOGGER.debug("tree cache miss, stored %s", tree.path)
        return tree

    def clear(self) -> None:
        """Drop every cached tree."""
        with self._lock:
            self._cache.clear()
