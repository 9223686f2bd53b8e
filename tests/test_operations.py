"""
End-to-end tests for the public operations over a fake session.

Tests verify that:
1. Single-identifier parameters fan out into one call per value, in order
2. List parameters are joined into a single call
3. Records from calls with different attribute sets are merged on the union of columns
4. Facts query columns are typed
5. Errors abort the operation
"""

from __future__ import annotations

import pandas as pd
import pytest

import xbrlus
from xbrlus.core.errors import XbrlUsTransportError
from xbrlus.normalization.document import Document
from xbrlus.operations import registry
from xbrlus.clients import xbrlus_client
from tests.conftest import FakeSession, xml_response


def base_element_xml(name: str, **extra: str) -> str:
    fields = "".join(f"<{k}>{v}</{k}>" for k, v in extra.items())
    return f"<dataRequest><baseElement><elementName>{name}</elementName>{fields}</baseElement></dataRequest>"


# ============================================================================
# Fan-out
# ============================================================================

def test_base_element_fans_out_and_merges_columns(make_client):
    client, session = make_client(
        xml_response(base_element_xml("Assets", balance="debit")),
        xml_response(base_element_xml("Revenues", periodType="duration")),
    )

    frame = xbrlus.base_element(["Assets", "Revenues"], client=client)

    assert len(session.calls) == 2
    assert [session.query(i)["Element"] for i in range(2)] == ["Assets", "Revenues"]
    assert list(frame.columns) == ["elementName", "balance", "periodType"]
    assert frame.to_dict("records") == [
        {"elementName": "Assets", "balance": "debit", "periodType": None},
        {"elementName": "Revenues", "balance": None, "periodType": "duration"},
    ]


def test_fanout_row_count_is_sum_of_calls(make_client):
    client, session = make_client(
        xml_response("<r><fact><id>1</id></fact><fact><id>2</id></fact></r>"),
        xml_response("<r><count>0</count></r>"),
        xml_response("<r><fact><id>3</id></fact></r>"),
    )

    frame = xbrlus.network(["Assets", "Liabilities", "Equity"], accession_id=120617, client=client)

    assert len(session.calls) == 3
    assert frame["id"].tolist() == ["1", "2", "3"]


def test_cik_lookup_needs_no_key_and_uses_first_node(make_client):
    client, session = make_client(
        xml_response("<r><company><cik>0000320193</cik><ticker>aapl</ticker></company></r>"),
        xml_response("<r><company><cik>0000789019</cik><ticker>msft</ticker><sic>7372</sic></company></r>"),
        api_key="",
    )

    frame = xbrlus.cik_lookup(["aapl", "msft"], client=client)

    assert all("API_Key" not in session.query(i) for i in range(2))
    assert frame.to_dict("records") == [
        {"cik": "0000320193", "ticker": "aapl", "sic": None},
        {"cik": "0000789019", "ticker": "msft", "sic": "7372"},
    ]


def test_first_failure_aborts_fanout(make_client):
    client, session = make_client(
        xml_response(base_element_xml("Assets")),
        xml_response("<error>bad element</error>", status_code=400),
        xml_response(base_element_xml("Equity")),
    )

    with pytest.raises(XbrlUsTransportError, match="bad element"):
        xbrlus.base_element(["Assets", "Nope", "Equity"], client=client)
    assert len(session.calls) == 2


# ============================================================================
# Join
# ============================================================================

def test_values_joins_list_parameters_into_one_call(make_client):
    client, session = make_client(xml_response("<r><count>0</count></r>"))

    xbrlus.values(
        cik=["0000732717", "0000320193"],
        element=["Assets", "Liabilities"],
        period="Y",
        year=2014,
        no_years=3,
        dim_reqd=False,
        client=client,
    )

    assert len(session.calls) == 1
    assert session.calls[0]["params"] == [
        ("Task", "xbrlValues"),
        ("CIK", "0000732717, 0000320193"),
        ("Element", "Assets, Liabilities"),
        ("DimReqd", "false"),
        ("Period", "Y"),
        ("NoYears", "3"),
        ("Year", "2014"),
        ("API_Key", "test-key"),
    ]


def test_list_for_single_value_parameter_is_rejected_before_calling(make_client):
    client, session = make_client()

    with pytest.raises(ValueError):
        xbrlus.values(cik="1", year=[2013, 2014], client=client)
    assert session.calls == []


# ============================================================================
# Facts query
# ============================================================================

def test_values_merges_instant_and_duration_facts(make_client):
    client, _ = make_client(xml_response(
        "<dataRequest><count>2</count>"
        "<fact><amount>1234.5</amount><periodInstant>2014-12-31</periodInstant></fact>"
        "<fact><amount>99</amount><periodStart>2014-01-01</periodStart><periodEnd>2014-12-31</periodEnd></fact>"
        "</dataRequest>"
    ))

    frame = xbrlus.values(cik="0000732717", element="Assets", client=client)

    assert frame.shape == (2, 4)
    assert set(frame.columns) == {"amount", "periodInstant", "periodStart", "periodEnd"}
    assert frame["amount"].tolist() == [1234.5, 99.0]
    assert frame.loc[0, "periodInstant"] == pd.Timestamp("2014-12-31")
    assert frame.loc[1, "periodStart"] == pd.Timestamp("2014-01-01")
    assert pd.isna(frame.loc[0, "periodStart"])
    assert pd.isna(frame.loc[0, "periodEnd"])
    assert pd.isna(frame.loc[1, "periodInstant"])


def test_values_zero_count_is_empty_frame(make_client):
    client, _ = make_client(xml_response("<dataRequest><count>0</count></dataRequest>"))

    frame = xbrlus.values(cik="0000732717", client=client)

    assert frame.empty
    assert len(frame.columns) == 0


def test_other_operations_keep_string_columns(make_client):
    client, _ = make_client(xml_response(
        "<r><fact><elementName>Cash</elementName><weight>1</weight><order>2.0</order></fact></r>"
    ))

    frame = xbrlus.tax_children(
        "Assets",
        taxonomy="http://fasb.org/us-gaap/2015-01-31",
        group_uri="http://fasb.org/us-gaap/role/statement/StatementOfFinancialPositionClassified",
        client=client,
    )

    assert frame.loc[0, "weight"] == "1"
    assert frame.loc[0, "order"] == "2.0"


# ============================================================================
# Raw documents
# ============================================================================

def test_return_tabular_false_returns_document(make_client):
    body = "<r><fact><amount>1</amount></fact></r>"
    client, _ = make_client(xml_response(body))

    doc = xbrlus.children(
        "Assets",
        group_uri="http://www.thecocacolacompany.com/role/ConsolidatedBalanceSheets",
        accession_id=120617,
        linkbase="Calculation",
        network_link="summation-item",
        return_tabular=False,
        client=client,
    )

    assert isinstance(doc, Document)
    assert doc.get("fact").get("amount") == "1"


def test_return_tabular_false_with_fanout_returns_documents_in_order(make_client):
    client, _ = make_client(
        xml_response(base_element_xml("A")),
        xml_response(base_element_xml("B")),
    )

    docs = xbrlus.extension_element(["A", "B"], accession_id=103575, return_tabular=False, client=client)

    assert [d.get("baseElement").get("elementName") for d in docs] == ["A", "B"]


# ============================================================================
# Registry
# ============================================================================

def test_registry_declarations():
    assert registry.get_operation("cik_lookup").requires_credential is False
    assert registry.get_operation("values").coerce_types is True
    assert all(not spec.coerce_types for name, spec in registry.OPERATIONS.items() if name != "values")

    with pytest.raises(KeyError):
        registry.get_operation("xbrlFoo")


def test_run_operation_with_declaration(make_client):
    client, session = make_client(xml_response("<r><fact><id>7</id></fact></r>"))

    frame = xbrlus.run_operation(registry.NETWORK, {"Element": "Assets", "CIK": ["1", "2"]}, client=client)

    assert session.query(0)["CIK"] == "1, 2"
    assert frame["id"].tolist() == ["7"]


def test_run_operation_by_name(make_client):
    client, session = make_client(xml_response("<r><company><cik>0000320193</cik></company></r>"))

    frame = xbrlus.run_operation("cik_lookup", {"Ticker": "aapl"}, client=client)

    assert session.query(0)["Task"] == "xbrlCIKLookup"
    assert frame["cik"].tolist() == ["0000320193"]


def test_cik_lookup_with_attributed_root(make_client):
    client, _ = make_client(xml_response(
        '<r version="1"><company><cik>0000320193</cik><ticker>aapl</ticker></company></r>'
    ))

    frame = xbrlus.cik_lookup("aapl", client=client)

    assert frame.to_dict("records") == [{"cik": "0000320193", "ticker": "aapl"}]


def test_extension_element_label_with_language(make_client):
    client, _ = make_client(xml_response(
        "<r><baseElement><elementName>ResearchDevelopment</elementName>"
        '<label xml:lang="en-US">Research and development</label></baseElement></r>'
    ))

    frame = xbrlus.extension_element("ResearchDevelopment", accession_id=103575, client=client)

    assert frame.loc[0, "label"] == "Research and development"


# ============================================================================
# Zero-count responses
# ============================================================================

def test_zero_count_only_short_circuits_facts_query(make_client):
    body = "<r><count>0</count><fact><id>1</id></fact></r>"
    client, _ = make_client(xml_response(body), xml_response(body))

    network_frame = xbrlus.network("Assets", accession_id=120617, client=client)
    values_frame = xbrlus.values(cik="1", client=client)

    assert network_frame["id"].tolist() == ["1"]
    assert values_frame.shape == (0, 0)
    assert registry.VALUES.empty_on_zero_count
    assert not registry.NETWORK.empty_on_zero_count


# ============================================================================
# Client lifecycle
# ============================================================================

def test_default_client_session_is_closed(monkeypatch):
    session = FakeSession([xml_response("<r><company><cik>0000320193</cik></company></r>")])
    monkeypatch.setattr(xbrlus_client.requests, "Session", lambda: session)

    frame = xbrlus.cik_lookup("aapl")

    assert frame["cik"].tolist() == ["0000320193"]
    assert session.closed


def test_default_client_session_is_closed_on_failure(monkeypatch):
    session = FakeSession([xml_response("<error>down</error>", status_code=500)])
    monkeypatch.setattr(xbrlus_client.requests, "Session", lambda: session)

    with pytest.raises(XbrlUsTransportError):
        xbrlus.cik_lookup("aapl")
    assert session.closed


def test_injected_session_is_left_open(make_client):
    client, session = make_client(xml_response("<r><company><cik>1</cik></company></r>"))

    xbrlus.cik_lookup("aapl", client=client)
    client.close()

    assert not session.closed
