"""Serialized snapshot nodes used by the replay-side DOM builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from stylesplit.errors import SnapshotFormatError


class NodeType(Enum):
    """Kinds of serialized node a style element can hold."""

    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


@dataclass
class TextNode:
    """A text child; for a ``<style>`` element each one is a css slot."""

    text_content: str = ""
    type: NodeType = NodeType.TEXT

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "textContent": self.text_content}


@dataclass
class ElementNode:
    """A serialized element, e.g. the ``<style>`` being rebuilt."""

    tag_name: str
    attributes: dict[str, str] = field(default_factory=dict)
    child_nodes: list[Node] = field(default_factory=list)
    type: NodeType = NodeType.ELEMENT

    def __post_init__(self) -> None:
        if not self.tag_name:
            raise ValueError("ElementNode tag_name must be a non-empty string")

    @property
    def text_slots(self) -> list[TextNode]:
        """Text children in document order; comments and elements are skipped."""
        return [
            child
            for child in self.child_nodes
            if isinstance(child, TextNode) and child.type is NodeType.TEXT
        ]

    @property
    def is_style(self) -> bool:
        return self.tag_name.lower() == "style"

    @classmethod
    def style(cls, slot_count: int, attributes: dict[str, str] | None = None) -> ElementNode:
        """Build a ``<style>`` element with *slot_count* empty text slots."""
        return cls(
            tag_name="style",
            attributes=attributes or {},
            child_nodes=[TextNode() for _ in range(slot_count)],
        )

    # --- serialization --------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "tagName": self.tag_name,
            "attributes": dict(self.attributes),
            "childNodes": [child.to_dict() for child in self.child_nodes],
        }

    @classmethod
    def from_dict(cls, data: Any, path: str = "$") -> ElementNode:
        """Read an element from its JSON snapshot shape.

        Raises SnapshotFormatError when *data* is not an element or one of its
        children has an unknown type.
        """
        node = _node_from_dict(data, path)
        if not isinstance(node, ElementNode):
            raise SnapshotFormatError("expected an element node", path)
        return node


Node = Union[ElementNode, TextNode]


def _node_from_dict(data: Any, path: str) -> Node:
    if not isinstance(data, dict):
        raise SnapshotFormatError(f"expected an object, got {type(data).__name__}", path)
    raw_type = data.get("type")
    try:
        node_type = NodeType(raw_type)
    except ValueError:
        raise SnapshotFormatError(f"unknown node type {raw_type!r}", path) from None

    if node_type is not NodeType.ELEMENT:
        text = data.get("textContent", "")
        if not isinstance(text, str):
            raise SnapshotFormatError("textContent must be a string", path)
        return TextNode(text_content=text, type=node_type)

    tag_name = data.get("tagName")
    if not isinstance(tag_name, str) or not tag_name:
        raise SnapshotFormatError("element is missing tagName", path)
    attributes = data.get("attributes", {})
    if not isinstance(attributes, dict):
        raise SnapshotFormatError("attributes must be an object", path)
    children = data.get("childNodes", [])
    if not isinstance(children, list):
        raise SnapshotFormatError("childNodes must be a list", path)
    return ElementNode(
        tag_name=tag_name,
        attributes={str(k): str(v) for k, v in attributes.items()},
        child_nodes=[
            _node_from_dict(child, f"{path}.childNodes[{i}]")
            for i, child in enumerate(children)
        ],
    )
