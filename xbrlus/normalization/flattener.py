"""
flattener.py — Document → flat records.

Each node matching the target name becomes one record; its child nodes become
the record's keys. Absent children are kept as explicit None so records from
different responses stay column-comparable.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from xbrlus.normalization.document import TEXT_NODE, Document, NodeValue

FlatRecord = Dict[str, Optional[str]]

DEFAULT_ELEMENT_NAME = "fact"


def _scalar(value: NodeValue) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    # Attributed leaf: only its text counts, never an attribute value
    text = value.get(TEXT_NODE)
    return text if isinstance(text, str) else None


def node_to_record(name: str, value: NodeValue) -> FlatRecord:
    if not isinstance(value, Document):
        return {name: value}
    record: FlatRecord = {}
    for key, child in value:
        # Repeated child names keep the first value
        if key not in record:
            record[key] = _scalar(child)
    return record


def _first_record_node(document: Document):
    for name, value in document:
        if isinstance(value, Document):
            return name, value
    return document.first()


def flatten_document(document: Document, element_name: Optional[str] = DEFAULT_ELEMENT_NAME) -> List[FlatRecord]:
    """
    Extract every `element_name` node of `document` as a flat record.

    With element_name=None the first structured node of the document is the
    only record (the CIK lookup response carries one unnamed record).

    Returns [] when nothing matches; that is "no data", not an error.
    """
    if element_name is None:
        first = _first_record_node(document)
        if first is None:
            return []
        return [node_to_record(*first)]

    return [node_to_record(element_name, value) for value in document.getall(element_name)]
