"""Tests for the TreeNode frozen dataclass.

Verifies:
- TreeNode constructs correctly with all fields
- Default values for optional fields are correct
- Instances are immutable (frozen) and slotted
- is_leaf reflects the presence of child elements
"""

from dataclasses import MISSING, FrozenInstanceError, fields
from types import MappingProxyType

import pytest

from xml_tree_diff.tree.nodes import TreeNode


class TestTreeNode:
    """Tests for the TreeNode dataclass."""

    def test_construction_with_required_fields(self) -> None:
        """TreeNode can be constructed with only tag_name and path."""
        node = TreeNode(tag_name="root", path="/root")
        assert node.tag_name == "root"
        assert node.path == "/root"

    def test_defaults(self) -> None:
        """Optional fields default to an empty, single-occurrence leaf."""
        node = TreeNode(tag_name="root", path="/root")
        assert dict(node.attributes) == {}
        assert node.text_content == ""
        assert node.children == ()
        assert node.comparison_key == ""
        assert node.sibling_index == 1
        assert node.sibling_total == 1

    def test_construction_with_all_fields(self) -> None:
        """TreeNode accepts all eight fields and stores them correctly."""
        child = TreeNode(tag_name="b", path="/a/b[2]", sibling_index=2, sibling_total=2)
        node = TreeNode(
            tag_name="a",
            path="/a",
            attributes=MappingProxyType({"id": "1"}),
            text_content="hello",
            children=(child,),
            comparison_key='a[@id="1"]',
            sibling_index=1,
            sibling_total=1,
        )
        assert node.attributes["id"] == "1"
        assert node.text_content == "hello"
        assert node.children == (child,)
        assert node.comparison_key == 'a[@id="1"]'
        assert node.children[0].sibling_index == 2

    def test_is_frozen(self) -> None:
        node = TreeNode(tag_name="root", path="/root")
        with pytest.raises(FrozenInstanceError):
            node.text_content = "changed"  # type: ignore[misc]

    def test_has_no_instance_dict(self) -> None:
        """slots=True means no per-instance __dict__."""
        node = TreeNode(tag_name="root", path="/root")
        assert not hasattr(node, "__dict__")

    def test_is_leaf(self) -> None:
        leaf = TreeNode(tag_name="b", path="/a/b", text_content="text")
        parent = TreeNode(tag_name="a", path="/a", children=(leaf,))
        assert leaf.is_leaf
        assert not parent.is_leaf

    def test_default_attributes_are_read_only(self) -> None:
        node = TreeNode(tag_name="root", path="/root")
        with pytest.raises(TypeError):
            node.attributes["x"] = "1"  # type: ignore[index]

    def test_defaults_are_hashable_or_factories(self) -> None:
        """Mapping defaults must come from a factory; mappingproxy is unhashable."""
        by_name = {f.name: f for f in fields(TreeNode)}
        assert by_name["attributes"].default is MISSING
        assert by_name["attributes"].default_factory is not MISSING
        for f in by_name.values():
            if f.default is not MISSING:
                assert f.default.__class__.__hash__ is not None, f.name

    def test_default_attributes_are_fresh_read_only_mappings(self) -> None:
        first = TreeNode(tag_name="a", path="/a")
        second = TreeNode(tag_name="b", path="/b")
        assert isinstance(first.attributes, MappingProxyType)
        assert dict(first.attributes) == dict(second.attributes) == {}
