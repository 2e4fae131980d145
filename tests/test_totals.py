from __future__ import annotations

from decimal import Decimal

import pytest

from invoicegen.engine.errors import InvalidInvoiceValue, InvalidLineItem
from invoicegen.engine.records import LineItem
from invoicegen.engine.totals import (
    compute_totals,
    format_money,
    line_amount,
    line_amounts,
    parse_number,
)


def test_two_items_with_fractional_tax() -> None:
    items = (LineItem("1", "Consulting", quantity=2, rate="199.99"),)
    totals = compute_totals(items, "8.5")
    assert totals.subtotal == Decimal("399.98")
    # 33.9983 rounds half-up to 34.00
    assert totals.tax == Decimal("34.00")
    assert totals.total == Decimal("433.98")


def test_service_charge_is_taxed() -> None:
    items = (LineItem("1", "Catering buffet", quantity=50, rate=45),)
    totals = compute_totals(items, "8.5", shipping=0, service_charge_rate=18)
    assert totals.subtotal == Decimal("2250.00")
    assert totals.service_charge == Decimal("405.00")
    assert totals.tax == Decimal("225.68")
    assert totals.total == Decimal("2880.68")


def test_total_is_sum_of_parts() -> None:
    items = (
        LineItem("a", quantity="3", rate="19.95"),
        LineItem("b", quantity="0.5", rate="120"),
        LineItem("c", quantity=1, rate="0.01"),
    )
    totals = compute_totals(items, 7.25, shipping="12.5", service_charge_rate=10)
    assert totals.total == totals.subtotal + totals.service_charge + totals.tax + totals.shipping
    assert totals.shipping == Decimal("12.50")


def test_no_items_totals_zero_even_with_shipping() -> None:
    totals = compute_totals((), 10, shipping=25, service_charge_rate=18)
    assert totals.subtotal == totals.service_charge == totals.tax == Decimal(0)
    assert totals.shipping == Decimal(0)
    assert totals.total == Decimal(0)


def test_negative_quantity_is_rejected() -> None:
    with pytest.raises(InvalidLineItem) as excinfo:
        compute_totals((LineItem("7", quantity=-1, rate=10),), 10)
    assert excinfo.value.item_id == "7"


def test_unparseable_rate_is_rejected() -> None:
    with pytest.raises(InvalidLineItem):
        line_amount(LineItem("1", quantity=1, rate="ten"))


def test_amount_must_match_without_override() -> None:
    with pytest.raises(InvalidLineItem):
        line_amount(LineItem("1", quantity=3, rate=10, amount="25.00"))
    assert line_amount(LineItem("1", quantity=3, rate=10, amount="30")) == Decimal("30.00")


def test_override_amount_is_kept() -> None:
    item = LineItem("1", "Flat fee", quantity=3, rate=10, amount="25.00", amount_override=True)
    assert line_amount(item) == Decimal("25.00")


def test_override_amount_needs_two_places_at_most() -> None:
    with pytest.raises(InvalidLineItem):
        line_amount(LineItem("1", quantity=1, rate=1, amount="9.999", amount_override=True))
    with pytest.raises(InvalidLineItem):
        line_amount(LineItem("1", quantity=1, rate=1, amount_override=True))


def test_duplicate_item_ids_are_rejected() -> None:
    with pytest.raises(InvalidLineItem):
        line_amounts((LineItem("1", quantity=1, rate=1), LineItem("1", quantity=2, rate=1)))


def test_negative_invoice_values_are_rejected() -> None:
    items = (LineItem("1", quantity=1, rate=100),)
    with pytest.raises(InvalidInvoiceValue) as excinfo:
        compute_totals(items, -5)
    assert excinfo.value.field == "tax_rate"
    with pytest.raises(InvalidInvoiceValue):
        compute_totals(items, 5, shipping="-1")
    with pytest.raises(InvalidInvoiceValue):
        compute_totals(items, 5, service_charge_rate="abc")


def test_parse_number() -> None:
    assert parse_number("1,250.50") == Decimal("1250.50")
    assert parse_number("  ") is None
    assert parse_number(0) == Decimal(0)
    with pytest.raises(ValueError):
        parse_number(True)
    with pytest.raises(ValueError):
        parse_number("NaN")


def test_format_money() -> None:
    assert format_money(Decimal("1234.5"), "$") == "$1,234.50"
    assert format_money(Decimal("0"), "€") == "€0.00"
