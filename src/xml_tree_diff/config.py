"""PathSettings: immutable configuration for path generation.

PathSettings is a frozen (hashable) dataclass holding the three knobs that
shape how the Tree Builder writes element paths:

- ``elements_array``:  tag names whose first occurrence never gets ``[1]``.
- ``index_attribute``: attribute whose positive-integer value replaces the
  positional sibling index.
- ``leaf_omit``:       drop ``[1]`` on leaves whose index was pinned by
  ``index_attribute``.

Both trees of one comparison must be built with equal settings, otherwise
their path spaces need not line up.  The engine does not reconcile them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

__all__ = ["PathSettings"]

# Persisted (camelCase) key -> dataclass field name
_MAPPING_KEYS: dict[str, str] = {
    "elementsArray": "elements_array",
    "indexAttribute": "index_attribute",
    "leafOmit": "leaf_omit",
    "elements_array": "elements_array",
    "index_attribute": "index_attribute",
    "leaf_omit": "leaf_omit",
}


@dataclass(frozen=True, slots=True)
class PathSettings:
    """Immutable settings for path generation.

    Attributes:
        elements_array: Lowercase tag names exempted from ``[1]`` suffixing.
            Any iterable of strings is accepted; entries are lowercased and
            stored as a ``frozenset``.
        index_attribute: Name of the attribute whose positive-integer value
            overrides the computed sibling index, or None.
        leaf_omit: When True, a childless element whose index was pinned to 1
            by ``index_attribute`` is written without ``[1]``.  Default True.
    """

    elements_array: frozenset[str] = field(default_factory=frozenset)
    index_attribute: str | None = None
    leaf_omit: bool = True

    def __post_init__(self) -> None:
        elements = self.elements_array
        if isinstance(elements, str) or not isinstance(elements, Iterable):
            msg = f"elements_array must be an iterable of tag names, got {elements!r}"
            raise ValueError(msg)
        normalized: set[str] = set()
        for tag in elements:
            if not isinstance(tag, str) or not tag.strip():
                msg = f"elements_array entries must be non-empty strings, got {tag!r}"
                raise ValueError(msg)
            normalized.add(tag.strip().lower())
        object.__setattr__(self, "elements_array", frozenset(normalized))

        if self.index_attribute is not None and (
            not isinstance(self.index_attribute, str)
            or not self.index_attribute.strip()
        ):
            msg = (
                "index_attribute must be a non-empty string or None, "
                f"got {self.index_attribute!r}"
            )
            raise ValueError(msg)
        if not isinstance(self.leaf_omit, bool):
            msg = f"leaf_omit must be a bool, got {self.leaf_omit!r}"
            raise ValueError(msg)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> PathSettings:
        """Build settings from their persisted mapping form.

        Accepts the camelCase keys written by the UI layer (``elementsArray``,
        ``indexAttribute``, ``leafOmit``) as well as the snake_case field
        names.  Missing keys take their defaults; a None or empty mapping
        yields the default settings.

        Raises:
            ValueError: If an unknown key is present or a value is invalid.
        """
        if not data:
            return cls()

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _MAPPING_KEYS.get(key)
            if name is None:
                msg = f"unknown path setting: {key!r}"
                raise ValueError(msg)
            kwargs[name] = value

        elements = kwargs.get("elements_array")
        if elements is None:
            kwargs.pop("elements_array", None)
        elif isinstance(elements, Iterable) and not isinstance(elements, str):
            kwargs["elements_array"] = frozenset(elements)
        return cls(**kwargs)

    def to_mapping(self) -> dict[str, Any]:
        """Return the persisted (camelCase) form of these settings."""
        return {
            "elementsArray": sorted(self.elements_array),
            "indexAttribute": self.index_attribute,
            "leafOmit": self.leaf_omit,
        }

    def omits_first_index(self, tag_name: str) -> bool:
        """Return True if ``tag_name`` is on the ``elements_array`` allow-list."""
        return tag_name.lower() in self.elements_array
