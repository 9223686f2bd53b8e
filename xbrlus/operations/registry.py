"""
registry.py — Declarations of the XBRL US API tasks.

Each operation binds a remote task name to its parameters (in query order)
with a per-parameter multi-value policy, the node name its records are
flattened from, and whether the API key is attached.

Policies follow the API documentation: parameters documented as accepting a
comma-separated list are JOIN, those documented as single identifiers and
commonly called with several values (Element, Ticker, Accession) are FANOUT.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from xbrlus.normalization.expander import ParamPolicy

S = ParamPolicy.SCALAR
J = ParamPolicy.JOIN
F = ParamPolicy.FANOUT


@dataclass(frozen=True)
class OperationSpec:
    name: str
    task: str
    params: Mapping[str, ParamPolicy]
    element_name: Optional[str] = "fact"
    requires_credential: bool = True
    coerce_types: bool = False
    # Facts query: a top-level count of 0 means no data
    empty_on_zero_count: bool = False


BASE_ELEMENT = OperationSpec(
    name="base_element",
    task="xbrlBaseElement",
    params={"Element": F, "Namespace": S},
    element_name="baseElement",
)

CIK_LOOKUP = OperationSpec(
    name="cik_lookup",
    task="xbrlCIKLookup",
    params={"Ticker": F},
    element_name=None,
    requires_credential=False,
)

CHILDREN = OperationSpec(
    name="children",
    task="xbrlChildren",
    params={
        "Element": F,
        "AccessionID": J,
        "GroupURI": S,
        "Linkbase": S,
        "Accession": F,
        "NetworkLink": S,
    },
)

TAX_CHILDREN = OperationSpec(
    name="tax_children",
    task="xbrlTaxChildren",
    params={
        "Element": F,
        "Taxonomy": S,
        "GroupURI": S,
        "Linkbase": S,
        "ResetCache": S,
    },
)

EXTENSION_ELEMENT = OperationSpec(
    name="extension_element",
    task="xbrlExtensionElement",
    params={
        "Element": F,
        "AccessionID": S,
        "Accession": S,
        "Namespace": S,
    },
    element_name="baseElement",
)

NETWORK = OperationSpec(
    name="network",
    task="xbrlNetwork",
    params={
        "Element": F,
        "Linkbase": S,
        "AccessionID": S,
        "Accession": F,
        "CIK": J,
    },
)

VALUES = OperationSpec(
    name="values",
    task="xbrlValues",
    params={
        "AccessionID": S,
        "Accession": S,
        "CIK": J,
        "Restated": S,
        "Element": J,
        "Axis": J,
        "Member": J,
        "Dimension": J,
        "DimReqd": S,
        "ExtensionElement": S,
        "ExtensionAxis": S,
        "ExtensionMember": S,
        "Period": J,
        "StartYear": S,
        "NoYears": S,
        "Year": S,
        "Ultimus": S,
        "Small": S,
    },
    coerce_types=True,
    empty_on_zero_count=True,
)

OPERATIONS: Dict[str, OperationSpec] = {
    spec.name: spec
    for spec in (
        BASE_ELEMENT,
        CIK_LOOKUP,
        CHILDREN,
        TAX_CHILDREN,
        EXTENSION_ELEMENT,
        NETWORK,
        VALUES,
    )
}


def get_operation(name: str) -> OperationSpec:
    try:
        return OPERATIONS[name]
    except KeyError:
        raise KeyError(f"Unknown XBRL US operation '{name}'") from None
