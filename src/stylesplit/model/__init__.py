"""Replay snapshot model -- public type re-exports."""

from stylesplit.model.node import ElementNode, Node, NodeType, TextNode

__all__ = [
    "NodeType",
    "TextNode",
    "ElementNode",
    "Node",
]
