"""
document.py — Hierarchical document parsed from an XBRL US XML response.

Purpose:
- Represent a response as an ordered sequence of (name, value) nodes where a
  name may repeat (one node per list item, e.g. many "fact" entries).
- Convert XML text into that structure.

Leaf values are strings, or None when the element is empty. An element with
attributes becomes a document of its child elements (or a "text" node holding
its text), followed by one node per attribute. Namespace URIs are stripped
from tag names; names are otherwise kept case-sensitive.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Iterator, List, Optional, Tuple, Union

from xbrlus.core.errors import XbrlUsParseError


NodeValue = Union[str, None, "Document"]

# Node holding the text of an element that also carries attributes
TEXT_NODE = "text"


class Document:
    """Ordered multi-map of named nodes."""

    def __init__(self, nodes: Optional[List[Tuple[str, NodeValue]]] = None):
        self._nodes: List[Tuple[str, NodeValue]] = list(nodes or [])

    def __iter__(self) -> Iterator[Tuple[str, NodeValue]]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: object) -> bool:
        return any(node_name == name for node_name, _ in self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._nodes == other._nodes

    def __repr__(self) -> str:
        return f"Document({self._nodes!r})"

    def names(self) -> List[str]:
        return [name for name, _ in self._nodes]

    def get(self, name: str, default: NodeValue = None) -> NodeValue:
        """Value of the first node called `name`."""
        for node_name, value in self._nodes:
            if node_name == name:
                return value
        return default

    def getall(self, name: str) -> List[NodeValue]:
        """Values of every node called `name`, in document order."""
        return [value for node_name, value in self._nodes if node_name == name]

    def first(self) -> Optional[Tuple[str, NodeValue]]:
        return self._nodes[0] if self._nodes else None


def _local_name(tag: str) -> str:
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _element_value(elem: ET.Element) -> NodeValue:
    children = list(elem)
    text = (elem.text or "").strip() or None

    if not children and not elem.attrib:
        return text

    nodes: List[Tuple[str, NodeValue]] = [
        (_local_name(child.tag), _element_value(child)) for child in children
    ]
    if not children and text is not None:
        nodes.append((TEXT_NODE, text))
    nodes.extend((_local_name(key), value) for key, value in elem.attrib.items())
    return Document(nodes)


def parse_document(content: Union[str, bytes]) -> Document:
    """
    Parse an XML response body into a Document.

    The root element itself is not a node; its attributes and children are.

    Raises:
        XbrlUsParseError: if the body is not well-formed XML.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise XbrlUsParseError(f"Response is not well-formed XML: {e}") from e

    value = _element_value(root)
    if isinstance(value, Document):
        return value
    # A bare <root>text</root> has no nodes of its own
    return Document([(_local_name(root.tag), value)] if value is not None else [])


def xml_text_summary(content: Union[str, bytes]) -> Optional[str]:
    """
    Newline-joined text leaves of an XML body, or None if it is not XML.

    Used to turn an XML error body into a readable message.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError:
        return None
    pieces = [piece.strip() for piece in root.itertext()]
    return "\n".join(piece for piece in pieces if piece)
