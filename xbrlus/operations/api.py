"""
api.py — Public XBRL US operations.

One function per API task. Each maps its keyword arguments onto the task's
query parameters and hands them to `run_operation`, which expands
multi-value parameters, calls the API (sequentially, in input order),
flattens each response and merges the records into one DataFrame.

Any parameter documented as a list may be given as a list/tuple. Pass
`return_tabular=False` to get the parsed Document instead (a list of
Documents, in call order, when the call fanned out).

References: https://github.com/xbrlus/data_analysis_toolkit/tree/master/api
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union

import pandas as pd

from xbrlus.clients.xbrlus_client import XbrlUsClient
from xbrlus.core.logging import get_logger
from xbrlus.normalization.coercion import coerce_fact_types
from xbrlus.normalization.document import Document
from xbrlus.normalization.expander import OperationRequest, expand_requests
from xbrlus.normalization.flattener import FlatRecord, flatten_document
from xbrlus.normalization.harmonizer import harmonize
from xbrlus.operations import registry
from xbrlus.operations.registry import OperationSpec

logger = get_logger(__name__)

Result = Union[pd.DataFrame, Document, List[Document]]


def _reports_no_data(document: Document) -> bool:
    # The API answers count == 0 when nothing matches
    return document.get("count") == "0"


def _execute_all(client: XbrlUsClient, planned: List[OperationRequest]) -> List[Document]:
    return [
        client.execute(request.task, request.params_dict(), request.requires_credential)
        for request in planned
    ]


def run_operation(
    spec: Union[OperationSpec, str],
    params: Mapping[str, Any],
    return_tabular: bool = True,
    client: Optional[XbrlUsClient] = None,
) -> Result:
    """
    Execute a declared operation, given as an OperationSpec or by name
    ("values", "base_element", ...).

    The first failing call aborts the whole operation; nothing from earlier
    calls is returned. A client created here is closed before returning.
    """
    if isinstance(spec, str):
        spec = registry.get_operation(spec)

    planned = expand_requests(spec.task, spec.params, params, spec.requires_credential)
    if len(planned) > 1:
        logger.debug("%s fans out into %d calls", spec.task, len(planned))

    if client is None:
        with XbrlUsClient() as own_client:
            documents = _execute_all(own_client, planned)
    else:
        documents = _execute_all(client, planned)

    if not return_tabular:
        return documents[0] if len(documents) == 1 else documents

    record_sets: List[List[FlatRecord]] = [
        [] if spec.empty_on_zero_count and _reports_no_data(document)
        else flatten_document(document, spec.element_name)
        for document in documents
    ]
    frame = harmonize(*record_sets)
    if spec.coerce_types:
        frame = coerce_fact_types(frame)

    logger.debug("%s returned %d rows x %d columns", spec.task, len(frame), len(frame.columns))
    return frame


def base_element(
    element: Any,
    namespace: Optional[str] = None,
    return_tabular: bool = True,
    client: Optional[XbrlUsClient] = None,
) -> Result:
    """
    Details of a US GAAP taxonomy element.

    Args:
        element: Element name(s) in the base taxonomy, e.g. "Assets".
            Several names are fetched one call each.
        namespace: Taxonomy namespace, e.g. "http://fasb.org/us-gaap/2015-01-31".
    """
    return run_operation(
        registry.BASE_ELEMENT,
        {"Element": element, "Namespace": namespace},
        return_tabular=return_tabular,
        client=client,
    )


def cik_lookup(
    ticker: Any,
    return_tabular: bool = True,
    client: Optional[XbrlUsClient] = None,
) -> Result:
    """
    Central Index Key and company details for ticker symbol(s).

    The only operation that needs no API key.
    """
    return run_operation(
        registry.CIK_LOOKUP,
        {"Ticker": ticker},
        return_tabular=return_tabular,
        client=client,
    )


def children(
    element: Any,
    group_uri: str,
    accession_id: Any = None,
    linkbase: Optional[str] = None,
    accession: Any = None,
    network_link: Optional[str] = None,
    return_tabular: bool = True,
    client: Optional[XbrlUsClient] = None,
) -> Result:
    """
    Children of an element in a filing's network.

    Needs the element, the extended link role (group_uri) and at least an
    accession_id or accession.

    Args:
        element: Element name(s); one call per name.
        group_uri: Extended link role defined by the company.
        accession_id: XBRL US internal filing id(s); a list is sent comma-separated.
        linkbase: "Presentation", "Calculation" or "Definition"; all when omitted.
        accession: SEC accession number(s); one call per number.
        network_link: Relationship type, e.g. "summation-item".
    """
    return run_operation(
        registry.CHILDREN,
        {
            "Element": element,
            "AccessionID": accession_id,
            "GroupURI": group_uri,
            "Linkbase": linkbase,
            "Accession": accession,
            "NetworkLink": network_link,
        },
        return_tabular=return_tabular,
        client=client,
    )


def tax_children(
    element: Any,
    taxonomy: str,
    group_uri: str,
    linkbase: Optional[str] = None,
    reset_cache: bool = False,
    return_tabular: bool = True,
    client: Optional[XbrlUsClient] = None,
) -> Result:
    """
    Children of an element in a base taxonomy network, with weight, order
    and preferred labels.

    Args:
        element: Element name(s); one call per name.
        taxonomy: Namespace of the taxonomy the element is in.
        group_uri: Extended link role.
        linkbase: "Presentation", "Calculation" or "Definition"; all when omitted.
        reset_cache: Bypass the server-side cache.
    """
    return run_operation(
        registry.TAX_CHILDREN,
        {
            "Element": element,
            "Taxonomy": taxonomy,
            "GroupURI": group_uri,
            "Linkbase": linkbase,
            "ResetCache": reset_cache,
        },
        return_tabular=return_tabular,
        client=client,
    )


def extension_element(
    element: Any,
    accession_id: Optional[Any] = None,
    accession: Optional[str] = None,
    namespace: Optional[str] = None,
    return_tabular: bool = True,
    client: Optional[XbrlUsClient] = None,
) -> Result:
    """
    Attributes and labels of elements used in company extensions.

    With filing information the labels used by the company are returned
    alongside the US GAAP attributes.
    """
    return run_operation(
        registry.EXTENSION_ELEMENT,
        {
            "Element": element,
            "AccessionID": accession_id,
            "Accession": accession,
            "Namespace": namespace,
        },
        return_tabular=return_tabular,
        client=client,
    )


def network(
    element: Any,
    linkbase: Optional[str] = None,
    accession_id: Optional[Any] = None,
    accession: Any = None,
    cik: Any = None,
    return_tabular: bool = True,
    client: Optional[XbrlUsClient] = None,
) -> Result:
    """
    Reports (extended link roles) of a filing that an element appears in.

    Needs the element and at least an accession_id, accession or cik.
    A list of CIKs is sent comma-separated; each element and accession
    number gets its own call.
    """
    return run_operation(
        registry.NETWORK,
        {
            "Element": element,
            "Linkbase": linkbase,
            "AccessionID": accession_id,
            "Accession": accession,
            "CIK": cik,
        },
        return_tabular=return_tabular,
        client=client,
    )


def values(
    accession_id: Optional[Any] = None,
    accession: Optional[str] = None,
    cik: Any = None,
    restated: Optional[bool] = None,
    element: Any = None,
    axis: Any = None,
    member: Any = None,
    dimension: Any = None,
    dim_reqd: Optional[bool] = None,
    extension_element: Optional[str] = None,
    extension_axis: Optional[str] = None,
    extension_member: Optional[str] = None,
    period: Any = None,
    start_year: Optional[int] = None,
    no_years: Optional[int] = None,
    year: Optional[int] = None,
    ultimus: Optional[bool] = None,
    small: Optional[bool] = None,
    return_tabular: bool = True,
    client: Optional[XbrlUsClient] = None,
) -> Result:
    """
    XBRL facts matching the given filters.

    Needs at least a cik or an accession. cik, element, axis, member,
    dimension and period accept lists, sent comma-separated in one call.

    The tabular result has numeric amount/decimals/fact columns and
    datetime periodStart/periodEnd/periodInstant columns.

    Example:
        values(cik="0000732717", element="Assets", period="Y",
               year=2014, no_years=3, dim_reqd=False, small=True, ultimus=True)
    """
    return run_operation(
        registry.VALUES,
        {
            "AccessionID": accession_id,
            "Accession": accession,
            "CIK": cik,
            "Restated": restated,
            "Element": element,
            "Axis": axis,
            "Member": member,
            "Dimension": dimension,
            "DimReqd": dim_reqd,
            "ExtensionElement": extension_element,
            "ExtensionAxis": extension_axis,
            "ExtensionMember": extension_member,
            "Period": period,
            "StartYear": start_year,
            "NoYears": no_years,
            "Year": year,
            "Ultimus": ultimus,
            "Small": small,
        },
        return_tabular=return_tabular,
        client=client,
    )
