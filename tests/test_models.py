from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from ledgerdocs.models import (
    DocumentKind,
    DocumentModel,
    DocumentStatus,
    LineItem,
    Milestone,
    PaymentDetails,
)


def test_scenario_invoice_subtotal(scenario_invoice):
    assert scenario_invoice.subtotal == Decimal("3600.00")
    assert scenario_invoice.grand_total == scenario_invoice.subtotal
    assert [it.amount for it in scenario_invoice.line_items] == [
        Decimal("1000.00"),
        Decimal("2000.00"),
        Decimal("600.00"),
    ]


def test_subtotal_is_sum_of_quantity_times_rate():
    items = [LineItem(f"row {i}", i, Decimal("19.99")) for i in range(1, 30)]
    doc = DocumentModel(kind="invoice", id="1", created_at=date(2026, 1, 1), line_items=items)
    expected = sum(i * Decimal("19.99") for i in range(1, 30))
    assert doc.subtotal == expected


def test_milestones_partition_subtotal(milestone_quote):
    assert milestone_quote.subtotal == Decimal("10000.00")
    amounts = milestone_quote.milestone_amounts()
    assert amounts == (Decimal("4000.00"), Decimal("6000.00"))
    assert sum(amounts) == milestone_quote.subtotal
    assert milestone_quote.grand_total == Decimal("10000.00")


def test_milestone_amount_rounds_to_cents():
    m = Milestone("Third", Decimal("33.33"))
    assert m.amount_of(Decimal("100.00")) == Decimal("33.33")
    assert Milestone("Half", 50).amount_of(Decimal("0.05")) == Decimal("0.03")


def test_empty_line_items_give_zero_subtotal():
    doc = DocumentModel(kind=DocumentKind.QUOTE, id="q", created_at=date(2026, 1, 1))
    assert doc.subtotal == Decimal("0.00")
    assert doc.milestone_amounts() == ()


def test_line_item_order_is_preserved():
    items = [LineItem("b", 1, 1), LineItem("a", 1, 1), LineItem("c", 1, 1)]
    doc = DocumentModel(kind="quote", id="q", created_at=date(2026, 1, 1), line_items=items)
    assert [it.description for it in doc.line_items] == ["b", "a", "c"]
    assert isinstance(doc.line_items, tuple)


@pytest.mark.parametrize("quantity,rate", [(-1, 10), (1, -10)])
def test_negative_line_values_are_rejected(quantity, rate):
    with pytest.raises(ValueError):
        LineItem("x", quantity, rate)


@pytest.mark.parametrize("pct", [-1, 100.5, 250])
def test_percentage_out_of_range_is_rejected(pct):
    with pytest.raises(ValueError):
        Milestone("x", pct)


def test_variants_are_mutually_exclusive():
    with pytest.raises(ValueError):
        DocumentModel(kind="quote", id="1", created_at=date(2026, 1, 1), due_date=date(2026, 2, 1))
    with pytest.raises(ValueError):
        DocumentModel(kind="invoice", id="1", created_at=date(2026, 1, 1), validity_days=30)
    with pytest.raises(ValueError):
        DocumentModel(kind="invoice", id="1", created_at=date(2026, 1, 1), milestones=[Milestone("x", 10)])


def test_quote_defaults():
    doc = DocumentModel(kind="quote", id=17, created_at=date(2026, 1, 1), status="accepted")
    assert doc.kind is DocumentKind.QUOTE
    assert doc.id == "17"
    assert doc.validity_days == 30
    assert doc.status is DocumentStatus.ACCEPTED


def test_unknown_status_is_rejected():
    with pytest.raises(ValueError):
        DocumentModel(kind="quote", id="1", created_at=date(2026, 1, 1), status="archived")


def test_currency_comes_from_env(monkeypatch):
    monkeypatch.setenv("LEDGERDOCS_CURRENCY", "USD")
    doc = DocumentModel(kind="invoice", id="1", created_at=date(2026, 1, 1))
    assert doc.currency == "USD"

    monkeypatch.delenv("LEDGERDOCS_CURRENCY")
    doc = DocumentModel(kind="invoice", id="1", created_at=date(2026, 1, 1))
    assert doc.currency == "KSH"


def test_payment_details_rows_skip_blank_values():
    details = PaymentDetails(bank_name="Equity Bank", account_number=" 0123 ", swift_code="")
    assert details.rows() == (("Bank", "Equity Bank"), ("Account No", "0123"))
    assert PaymentDetails().rows() == ()


@pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity", "sNaN"])
def test_non_finite_numbers_are_rejected(value):
    with pytest.raises(ValueError):
        LineItem("x", value, 1)
    with pytest.raises(ValueError):
        LineItem("x", 1, value)
    with pytest.raises(ValueError):
        Milestone("x", value)
