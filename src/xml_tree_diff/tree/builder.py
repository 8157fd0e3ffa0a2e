"""TreeBuilder: converts an XML document into an immutable TreeNode tree.

The builder validates the raw input, hands it to an injected ``XmlParser``
and then walks the resulting element tree, assigning every element a
deterministic path.

Path policy:
- Root is ``"/" + tag``.
- Each level appends ``"/" + tag + suffix`` to the parent path.
- The suffix is ``[n]`` where ``n`` is the element's 1-based index among
  same-tag siblings (or the value of ``index_attribute`` when it pins one).
- ``[1]`` is dropped when the element is the only one with its tag, when the
  tag is on the ``elements_array`` allow-list, or when ``leaf_omit`` is set
  and a childless element had its index pinned to 1.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import lxml.etree as ET

from xml_tree_diff.config import PathSettings
from xml_tree_diff.errors import ParseError, ValidationError
from xml_tree_diff.tree.nodes import TreeNode
from xml_tree_diff.tree.parser import (
    LxmlParser,
    MarkupSyntaxError,
    XmlParser,
    clean_diagnostic,
)

__all__ = ["TreeBuilder"]

LOGGER = logging.getLogger(__name__)

# Attributes that identify "logically same" elements, in priority order
IDENTIFYING_ATTRIBUTES: tuple[str, ...] = ("id", "name", "key")

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

_POSITIVE_INT = re.compile(r"\s*\+?0*([1-9]\d*)\s*")


@dataclass(frozen=True, slots=True)
class _Position:
    """Where an element sits among its same-tag siblings."""

    index: int
    total: int
    pinned: bool = False


@dataclass(slots=True)
class _Frame:
    """An element whose children are still being built."""

    element: ET._Element
    tag_name: str
    path: str
    position: _Position
    pending: Iterator[tuple[ET._Element, _Position]]
    children: list[TreeNode] = field(default_factory=list)


def _close(frame: _Frame) -> TreeNode:
    attributes = _extract_attributes(frame.element)
    return TreeNode(
        tag_name=frame.tag_name,
        path=frame.path,
        attributes=MappingProxyType(attributes),
        text_content=_direct_text(frame.element),
        children=tuple(frame.children),
        comparison_key=_comparison_key(frame.tag_name, attributes),
        sibling_index=frame.position.index,
        sibling_total=frame.position.total,
    )


@dataclass
class TreeBuilder:
    """Converts an XML string into a TreeNode tree.

    The builder is stateless between calls: the same input and settings always
    produce an equal tree, and one instance may be shared between threads.

    Attributes:
        settings: Path generation settings.  Defaults to ``PathSettings()``
            (no allow-list, no index attribute, ``leaf_omit=True``).
        parser:   The XML parser to delegate well-formedness checking to.
            Defaults to ``LxmlParser()``.

    Example::

        builder = TreeBuilder()
        tree = builder.build('<root><item id="1">Hello</item></root>')
        tree.path                       # "/root"
        tree.children[0].path           # "/root/item"
        tree.children[0].comparison_key # 'item[@id="1"]'
    """

    settings: PathSettings = field(default_factory=PathSettings)
    parser: XmlParser = field(default_factory=LxmlParser)

    def build(self, xml_text: object) -> TreeNode:
        """Parse ``xml_text`` and return the root of its normalized tree.

        Args:
            xml_text: The XML document as a string.

        Returns:
            The root TreeNode.

        Raises:
            ValidationError: If ``xml_text`` is not a string or is empty.
            ParseError: If the markup is not well-formed.
        """
        text = _validate_input(xml_text)

        try:
            root = self.parser.parse(text)
        except MarkupSyntaxError as exc:
            diagnostic = clean_diagnostic(str(exc))
            LOGGER.debug("XML rejected by parser: %s", diagnostic)
            raise ParseError(diagnostic) from exc

        index, pinned = self._resolve_index(root, 1)
        tree = self._build_tree(root, _Position(index=index, total=1, pinned=pinned))
        LOGGER.debug("built tree rooted at %s", tree.path)
        return tree

    # ------------------------------------------------------------------
    # Tree walk
    # ------------------------------------------------------------------

    def _build_tree(self, root: ET._Element, position: _Position) -> TreeNode:
        """Assemble the tree bottom-up with an explicit stack.

        A node is created once all of its children are built, so nesting depth
        is bounded by the parser only, never by the interpreter's call stack.
        """
        stack = [self._open(root, "", position)]
        while True:
            frame = stack[-1]
            pending = next(frame.pending, None)
            if pending is not None:
                child, child_position = pending
                stack.append(self._open(child, frame.path, child_position))
                continue

            stack.pop()
            node = _close(frame)
            if not stack:
                return node
            stack[-1].children.append(node)

    def _open(
        self, element: ET._Element, parent_path: str, position: _Position
    ) -> _Frame:
        tag_name = _qualified_tag(element)
        child_elements = [child for child in element if _is_element(child)]
        return _Frame(
            element=element,
            tag_name=tag_name,
            path=self._path_for(tag_name, parent_path, position, not child_elements),
            position=position,
            pending=self._sibling_positions(child_elements),
        )

    def _sibling_positions(
        self, elements: list[ET._Element]
    ) -> Iterator[tuple[ET._Element, _Position]]:
        """Yield each element with its resolved position among same-tag siblings."""
        tags = [_qualified_tag(element) for element in elements]
        totals = Counter(tags)
        seen: Counter[str] = Counter()
        for element, tag in zip(elements, tags, strict=True):
            seen[tag] += 1
            index, pinned = self._resolve_index(element, seen[tag])
            yield element, _Position(index=index, total=totals[tag], pinned=pinned)

    def _resolve_index(self, element: ET._Element, positional: int) -> tuple[int, bool]:
        """Return ``(index, pinned)`` for ``element``.

        A positive-integer value of the configured index attribute overrides the
        positional index; anything else (missing, zero, negative, non-numeric)
        falls back to the position.
        """
        name = self.settings.index_attribute
        if name is not None:
            value = element.get(name)
            if value is not None:
                match = _POSITIVE_INT.fullmatch(value)
                if match is not None:
                    return int(match.group(1)), True
        return positional, False

    def _path_for(
        self, tag_name: str, parent_path: str, position: _Position, is_leaf: bool
    ) -> str:
        if not parent_path:
            return f"/{tag_name}"

        if position.index > 1:
            return f"{parent_path}/{tag_name}[{position.index}]"

        omit = (
            position.total == 1
            or self.settings.omits_first_index(tag_name)
            or (self.settings.leaf_omit and is_leaf and position.pinned)
        )
        if omit:
            return f"{parent_path}/{tag_name}"
        return f"{parent_path}/{tag_name}[1]"


# ----------------------------------------------------------------------
# Element helpers
# ----------------------------------------------------------------------


def _validate_input(xml_text: object) -> str:
    if not isinstance(xml_text, str):
        raise ValidationError("XML input must be a string")
    if not xml_text.strip():
        raise ValidationError("XML input cannot be empty")
    return xml_text


def _is_element(node: ET._Element) -> bool:
    """True for elements; False for comments, processing instructions and entities."""
    return isinstance(node.tag, str)


def _qualified_tag(element: ET._Element) -> str:
    """Return the tag as written in the markup, ``prefix:local`` or ``local``."""
    qname = ET.QName(element)
    if element.prefix:
        return f"{element.prefix}:{qname.localname}"
    return qname.localname


def _qualified_attribute(name: str, nsmap: Mapping[str | None, str]) -> str:
    if not name.startswith("{"):
        return name
    qname = ET.QName(name)
    if qname.namespace == XML_NAMESPACE:
        return f"xml:{qname.localname}"
    for prefix, uri in nsmap.items():
        if prefix is not None and uri == qname.namespace:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def _extract_attributes(element: ET._Element) -> dict[str, str]:
    """Copy the element's attributes, namespace declarations included.

    Declarations made on the element itself (not inherited) are reported as
    ``xmlns`` / ``xmlns:prefix`` attributes, which is how a DOM exposes them.
    """
    attributes: dict[str, str] = {}

    parent = element.getparent()
    inherited = parent.nsmap if parent is not None else {}
    for prefix, uri in element.nsmap.items():
        if inherited.get(prefix) != uri:
            attributes["xmlns" if prefix is None else f"xmlns:{prefix}"] = uri

    for name, value in element.attrib.items():
        attributes[_qualified_attribute(name, element.nsmap)] = value
    return attributes


def _direct_text(element: ET._Element) -> str:
    """Concatenate the text nodes directly under ``element``, each trimmed.

    In lxml the leading text lives on ``element.text`` and every text node that
    follows a child (element, comment or processing instruction) lives on that
    child's ``tail``.
    """
    fragments = [element.text] + [child.tail for child in element]
    return "".join(text.strip() for text in fragments if text and text.strip())


def _comparison_key(tag_name: str, attributes: Mapping[str, str]) -> str:
    """Return ``tag`` or ``tag[@attr="value"]`` for the first identifying attribute."""
    for name in IDENTIFYING_ATTRIBUTES:
        value = attributes.get(name)
        if value:
            return f'{tag_name}[@{name}="{value}"]'
    return tag_name
