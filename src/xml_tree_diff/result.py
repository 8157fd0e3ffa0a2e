"""DiffReport, DiffStats and status resolution for comparison output.

This module provides the result types returned by ``TreeComparator.compare()``
and the lookup that turns a path plus a report into a display status for
one side of the comparison.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["DiffReport", "DiffStats", "DiffStatus", "Side", "resolve_status"]


class DiffStatus(StrEnum):
    """How an element should be displayed after a comparison.

    - MATCHED:   present on both sides with equal text and attributes.
    - EXTRA:     present only on the side being displayed.
    - DIFFERENT: present on both sides with different text or attributes.
    - NEUTRAL:   no comparison yet, or the path is unknown to this side.
    """

    MATCHED = auto()
    EXTRA = auto()
    DIFFERENT = auto()
    NEUTRAL = auto()


class Side(StrEnum):
    """Which of the two compared documents a path is looked up for."""

    LEFT = auto()
    RIGHT = auto()


@dataclass(frozen=True, slots=True)
class DiffStats:
    """Aggregate counts of one comparison.

    Attributes:
        total_left:  Number of nodes in the left tree.
        total_right: Number of nodes in the right tree.
        matched:     Paths present on both sides with equal content.
        left_only:   Paths present only in the left tree.
        right_only:  Paths present only in the right tree.
        different:   Paths present on both sides with different content.
    """

    total_left: int
    total_right: int
    matched: int
    left_only: int
    right_only: int
    different: int


@dataclass(frozen=True, slots=True)
class DiffReport:
    """Result of a ``compare()`` call.

    ``matched`` and ``different`` partition the paths common to both trees;
    ``left_only`` and ``right_only`` hold the paths unique to each side.

    Attributes:
        matched:    Common paths whose own text and attributes are equal.
        left_only:  Paths found only in the left tree.
        right_only: Paths found only in the right tree.
        different:  Common paths whose text or attributes differ.
        stats:      Counts derived from the four sets and both trees.
    """

    matched: frozenset[str]
    left_only: frozenset[str]
    right_only: frozenset[str]
    different: frozenset[str]
    stats: DiffStats

    @property
    def is_identical(self) -> bool:
        """True when nothing is left-only, right-only or different."""
        return not (self.left_only or self.right_only or self.different)

    def status_of(self, path: str, side: Side | str) -> DiffStatus:
        """Return the display status of ``path`` on ``side``."""
        return resolve_status(path, self, side)

    def summary(self) -> str:
        """Return a human-readable, one-count-per-line overview."""
        stats = self.stats
        return "\n".join(
            [
                f"Left elements: {stats.total_left}",
                f"Right elements: {stats.total_right}",
                f"Matched: {stats.matched}",
                f"Left only: {stats.left_only}",
                f"Right only: {stats.right_only}",
                f"Different: {stats.different}",
            ]
        )


def resolve_status(
    path: str, report: DiffReport | None, side: Side | str
) -> DiffStatus:
    """Resolve ``path`` to a display status for one side of a comparison.

    The categories are checked in a fixed order, so a path that somehow sits
    in several sets still resolves deterministically:
    matched, then different, then the side's own only-set, then neutral.

    Args:
        path:   The path to look up.
        report: The comparison result, or None when no comparison has run.
        side:   ``Side.LEFT`` / ``Side.RIGHT`` or the strings ``"left"`` / ``"right"``.

    Returns:
        A ``DiffStatus``.  Paths belonging to the *other* side's only-set are
        ``NEUTRAL``.

    Raises:
        ValueError: If ``side`` is not a known side.
    """
    side = Side(side)
    if report is None:
        return DiffStatus.NEUTRAL
    if path in report.matched:
        return DiffStatus.MATCHED
    if path in report.different:
        return DiffStatus.DIFFERENT
    only = report.left_only if side is Side.LEFT else report.right_only
    if path in only:
        return DiffStatus.EXTRA
    return DiffStatus.NEUTRAL
