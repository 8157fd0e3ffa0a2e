"""Shared fixtures: XML sample documents and a default builder."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from xml_tree_diff.tree.builder import TreeBuilder

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(filename: str) -> str:
    """Return the text of an XML fixture file by name."""
    return (FIXTURES_DIR / filename).read_text(encoding="utf-8")


@pytest.fixture
def xml_fixture() -> Callable[[str], str]:
    """Loader for XML fixture files, e.g. ``xml_fixture("sample-left.xml")``."""
    return load_fixture


@pytest.fixture
def builder() -> TreeBuilder:
    """A fresh TreeBuilder with default settings for each test."""
    return TreeBuilder()
