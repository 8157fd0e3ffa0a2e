"""ComparisonSession: runs parse-and-compare requests off the calling thread.

A session is the execution shim between an interactive front end and the
engine.  A request carries two XML documents; the response is a
``ComparisonOutcome`` holding both trees, the diff report, or the error of
whichever side failed to build.

Architecture:
- Both documents are built concurrently on the session's thread pool.  The
  comparison runs once both builds are done; it is skipped when either side
  failed, and both sides' errors are reported together.
- Each side has its own ``TreeCache``, so re-submitting an unchanged document
  does not parse it again and the two sides never share node objects.
- ``update_settings()`` swaps in new builders and drops both caches.  Requests
  already submitted finish with the settings they started with.
- The engine has no cancellation points: cancelling the returned future only
  means the result is discarded.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from xml_tree_diff.cache import TreeCache
from xml_tree_diff.comparator import TreeComparator
from xml_tree_diff.config import PathSettings
from xml_tree_diff.errors import XmlTreeError
from xml_tree_diff.result import DiffReport, Side
from xml_tree_diff.tree.builder import TreeBuilder
from xml_tree_diff.tree.nodes import TreeNode
from xml_tree_diff.tree.parser import LxmlParser, XmlParser

__all__ = ["ComparisonOutcome", "ComparisonSession", "parse_and_compare"]

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ComparisonOutcome:
    """Response to one parse-and-compare request.

    Attributes:
        left_tree:   The left tree, or None if it failed to build.
        right_tree:  The right tree, or None if it failed to build.
        report:      The diff report, or None when either side failed.
        left_error:  Error message for the left document, if any.
        right_error: Error message for the right document, if any.
    """

    left_tree: TreeNode | None
    right_tree: TreeNode | None
    report: DiffReport | None
    left_error: str | None = None
    right_error: str | None = None

    @property
    def ok(self) -> bool:
        """True when both documents were built and compared."""
        return self.report is not None


def _attempt(
    build: Callable[[object], TreeNode], xml_text: object, side: Side
) -> tuple[TreeNode | None, str | None]:
    try:
        return build(xml_text), None
    except XmlTreeError as exc:
        LOGGER.debug("%s document failed to build: %s", side, exc)
        return None, str(exc)


def _outcome(
    left: tuple[TreeNode | None, str | None],
    right: tuple[TreeNode | None, str | None],
    comparator: TreeComparator,
) -> ComparisonOutcome:
    left_tree, left_error = left
    right_tree, right_error = right
    if left_tree is None or right_tree is None:
        return ComparisonOutcome(
            left_tree=left_tree,
            right_tree=right_tree,
            report=None,
            left_error=left_error,
            right_error=right_error,
        )
    return ComparisonOutcome(
        left_tree=left_tree,
        right_tree=right_tree,
        report=comparator.compare(left_tree, right_tree),
    )


def parse_and_compare(
    left_xml: object,
    right_xml: object,
    builder: TreeBuilder | None = None,
    comparator: TreeComparator | None = None,
) -> ComparisonOutcome:
    """Build both documents one after the other and compare them.

    Validation and parse errors are reported per side in the outcome rather
    than raised, so a caller can show both sides' problems at once.

    Args:
        left_xml:   The left XML document.
        right_xml:  The right XML document.
        builder:    Builder used for both sides.  Defaults to ``TreeBuilder()``.
        comparator: Comparator to use.  Defaults to ``TreeComparator()``.
    """
    builder = builder if builder is not None else TreeBuilder()
    comparator = comparator if comparator is not None else TreeComparator()
    return _outcome(
        _attempt(builder.build, left_xml, Side.LEFT),
        _attempt(builder.build, right_xml, Side.RIGHT),
        comparator,
    )


class ComparisonSession:
    """Thread-pool backed parse-and-compare service with per-side tree caches.

    Example::

        with ComparisonSession() as session:
            future = session.submit(left_xml, right_xml)
            outcome = future.result()
            if outcome.ok:
                print(outcome.report.summary())

    Args:
        settings:       Path settings, or their persisted mapping form.
            Defaults to ``PathSettings()``.
        parser:         Parser shared by both sides.  Defaults to ``LxmlParser()``.
        max_workers:    Size of the thread pool.  Defaults to 2 (one per side).
        max_cache_size: Trees kept per side.  Defaults to 16.
    """

    def __init__(
        self,
        settings: PathSettings | Mapping[str, Any] | None = None,
        parser: XmlParser | None = None,
        max_workers: int = 2,
        max_cache_size: int = 16,
    ) -> None:
        self._parser: XmlParser = parser if parser is not None else LxmlParser()
        self._max_cache_size = max_cache_size
        self._comparator = TreeComparator()
        self._lock = threading.Lock()
        self._caches = self._make_caches(_coerce_settings(settings))
        # Settings are validated before any worker thread exists.
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="xml-tree-diff"
        )

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def settings(self) -> PathSettings:
        """The settings both sides are currently built with."""
        with self._lock:
            return self._caches[Side.LEFT].builder.settings

    def update_settings(
        self, settings: PathSettings | Mapping[str, Any] | None
    ) -> None:
        """Replace the path settings and drop both sides' cached trees."""
        caches = self._make_caches(_coerce_settings(settings))
        with self._lock:
            self._caches = caches
        LOGGER.debug(
            "session settings replaced: %s", caches[Side.LEFT].builder.settings
        )

    def _make_caches(self, settings: PathSettings) -> dict[Side, TreeCache]:
        builder = TreeBuilder(settings=settings, parser=self._parser)
        return {
            Side.LEFT: TreeCache(builder, max_size=self._max_cache_size),
            Side.RIGHT: TreeCache(builder, max_size=self._max_cache_size),
        }

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def submit(self, left_xml: object, right_xml: object) -> Future[ComparisonOutcome]:
        """Start building and comparing two documents; return a future outcome.

        Raises:
            RuntimeError: If the session has been closed.
        """
        with self._lock:
            caches = self._caches

        LOGGER.debug("parse-and-compare request submitted")
        outcome: Future[ComparisonOutcome] = Future()
        builds = {
            side: self._executor.submit(_attempt, caches[side].build, xml_text, side)
            for side, xml_text in ((Side.LEFT, left_xml), (Side.RIGHT, right_xml))
        }

        remaining = len(builds)
        remaining_lock = threading.Lock()

        def _on_build_done(_: Future[tuple[TreeNode | None, str | None]]) -> None:
            nonlocal remaining
            with remaining_lock:
                remaining -= 1
                if remaining:
                    return
            if outcome.cancelled():
                return
            try:
                result = _outcome(
                    builds[Side.LEFT].result(),
                    builds[Side.RIGHT].result(),
                    self._comparator,
                )
            except Exception as exc:
                outcome.set_exception(exc)
            else:
                outcome.set_result(result)

        for build in builds.values():
            build.add_done_callback(_on_build_done)
        return outcome

    def compare(self, left_xml: object, right_xml: object) -> ComparisonOutcome:
        """Build and compare two documents, waiting for the outcome."""
        return self.submit(left_xml, right_xml).result()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Wait for running requests, then release the thread pool."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> ComparisonSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _coerce_settings(settings: PathSettings | Mapping[str, Any] | None) -> PathSettings:
    if settings is None:
        return PathSettings()
    if isinstance(settings, PathSettings):
        return settings
    return PathSettings.from_mapping(settings)
