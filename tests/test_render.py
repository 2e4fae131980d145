from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, List

import pytest

from invoicegen.engine.errors import InvalidLineItem
from invoicegen.engine.records import ClientInfo, CompanyInfo, InvoiceRecord, LineItem, SectionToggle, StylePreferences
from invoicegen.engine.render import render
from invoicegen.engine.templates import TEMPLATES


TODAY = date(2024, 3, 1)


def _none_paths(node: Any, path: str = "") -> List[str]:
    if node is None:
        return [path]
    if isinstance(node, dict):
        return [p for key, value in node.items() for p in _none_paths(value, f"{path}.{key}")]
    if isinstance(node, list):
        return [p for index, value in enumerate(node) for p in _none_paths(value, f"{path}[{index}]")]
    return []


@pytest.mark.parametrize("template_id", list(TEMPLATES))
def test_empty_record_resolves_every_leaf(template_id: str) -> None:
    document = render(InvoiceRecord(), template_id, today=TODAY)
    assert _none_paths(document.to_dict()) == []
    assert document.template_id == template_id
    assert document.header.company_name
    assert document.table.totals.total == Decimal(0)


@pytest.mark.parametrize("template_id", ["standard", "restaurant", "international-invoice"])
def test_render_is_idempotent(template_id: str) -> None:
    record = InvoiceRecord(items=(LineItem("1", "Work", quantity=3, rate="33.33"),), tax_rate="7.5")
    assert render(record, template_id, today=TODAY).to_json() == render(record, template_id, today=TODAY).to_json()


def test_unknown_template_renders_generic(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="invoicegen.engine.render"):
        document = render(InvoiceRecord(), "mystery-skin", today=TODAY)
    assert document.template_id == "standard"
    assert document.requested_template_id == "mystery-skin"
    assert "mystery-skin" in caplog.text


def test_template_alias_and_case() -> None:
    assert render(InvoiceRecord(), "International", today=TODAY).template_id == "international-invoice"
    assert render(InvoiceRecord(), " RESTAURANT ", today=TODAY).template_id == "restaurant"


def test_worked_example_summary_rows() -> None:
    record = InvoiceRecord(items=(LineItem("1", "Consulting", quantity=2, rate="199.99"),), tax_rate="8.5")
    document = render(record, "standard", today=TODAY)
    summary = {row.key: row for row in document.table.summary}
    assert list(summary) == ["subtotal", "tax", "total"]
    assert summary["tax"].label == "Tax (8.5%):"
    assert summary["tax"].display == "$34.00"
    assert summary["total"].display == "$433.98"
    assert document.table.rows[0].amount_display == "$399.98"


def test_restaurant_service_charge() -> None:
    record = InvoiceRecord(items=(LineItem("1", "Buffet", quantity=50, rate=45),), tax_rate="8.5")
    document = render(record, "restaurant", today=TODAY)
    summary = {row.key: row for row in document.table.summary}
    assert summary["service_charge"].label == "Service Charge (18%)"
    assert summary["service_charge"].amount == Decimal("405.00")
    assert summary["tax"].amount == Decimal("225.68")
    assert summary["total"].display == "$2,880.68"
    assert document.table.service_charge_rate == Decimal(18)


def test_generic_template_has_no_service_charge() -> None:
    record = InvoiceRecord(items=(LineItem("1", quantity=1, rate=100),), tax_rate=0, service_charge_rate=18)
    document = render(record, "standard", today=TODAY)
    assert document.table.totals.service_charge == Decimal(0)
    assert document.table.totals.total == Decimal("100.00")


def test_tax_line_off_only_hides_the_row() -> None:
    record = InvoiceRecord(
        items=(LineItem("1", quantity=1, rate=100),),
        tax_rate=20,
        sections={"tax_line": SectionToggle(visible=False)},
    )
    document = render(record, "standard", today=TODAY)
    assert [row.key for row in document.table.summary] == ["subtotal", "total"]
    assert document.table.totals.tax == Decimal("20.00")
    assert document.table.totals.total == Decimal("120.00")


def test_shipping_row_appears_when_charged() -> None:
    record = InvoiceRecord(items=(LineItem("1", quantity=1, rate=100),), tax_rate=0, shipping_cost="15")
    document = render(record, "standard", today=TODAY)
    assert "shipping" in [row.key for row in document.table.summary]
    assert document.table.totals.total == Decimal("115.00")


def test_default_sections_for_generic_template() -> None:
    document = render(InvoiceRecord(), "standard", today=TODAY)
    assert [section.kind for section in document.sections] == ["terms_and_conditions", "thank_you_message"]
    terms = document.section("terms_and_conditions")
    assert terms.lines == ("Payment is due within 30 days of invoice date.",)
    assert document.section("notes") is None


def test_section_toggles_are_independent() -> None:
    base = render(InvoiceRecord(), "standard", today=TODAY)
    record = InvoiceRecord(
        sections={
            "thank_you_message": SectionToggle(visible=False),
            "notes": SectionToggle(text="• Deliver to loading dock\n\n• Call ahead"),
        }
    )
    document = render(record, "standard", today=TODAY)
    kinds = [section.kind for section in document.sections]
    assert kinds == ["terms_and_conditions", "notes"]
    assert document.section("terms_and_conditions") == base.section("terms_and_conditions")
    assert document.section("notes").lines == ("Deliver to loading dock", "Call ahead")


def test_user_text_is_not_formatted() -> None:
    record = InvoiceRecord(
        labels={"rate": "Price {per hour}"},
        sections={"notes": SectionToggle(text="Use {braces} freely")},
    )
    document = render(record, "standard", today=TODAY)
    assert [c.label for c in document.table.columns if c.key == "rate"] == ["Price {per hour}"]
    assert document.section("notes").lines == ("Use {braces} freely",)


def test_template_copy_placeholders_follow_record() -> None:
    record = InvoiceRecord(currency_code="EUR", currency_symbol="€")
    document = render(record, "international-invoice", today=TODAY)
    labels = {column.key: column.label for column in document.table.columns}
    assert labels["rate"] == "Unit Price (EUR)"
    assert "All amounts in EUR" in document.section("terms_and_conditions").lines
    assert ("currency", "EUR") in [(row.key, row.value) for row in document.metadata]


def test_header_and_parties_follow_toggles() -> None:
    record = InvoiceRecord(
        company=CompanyInfo(name="Acme", email="billing@acme.test", phone="555-0100", address="1 Road\nTown"),
        client=ClientInfo(name="Globex"),
        sections={"company_phone": SectionToggle(visible=False)},
    )
    document = render(record, "standard", today=TODAY)
    assert document.header.tagline == ()
    assert document.header.logo.visible is False
    assert document.parties.sender.details == ("1 Road", "Town", "billing@acme.test")
    assert document.parties.recipient.name == "Globex"

    international = render(InvoiceRecord(), "international-invoice", today=TODAY)
    assert international.header.tagline


def test_extra_metadata_fields() -> None:
    document = render(InvoiceRecord(fields={"guest_count": "120 Guests"}), "restaurant", today=TODAY)
    rows = {row.key: row for row in document.metadata}
    assert rows["guest_count"].label == "Guest Count:"
    assert rows["guest_count"].value == "120 Guests"
    assert rows["invoice_number"].label == "Order #:"


def test_placeholder_rows_only_for_empty_invoices() -> None:
    empty = render(InvoiceRecord(), "receipt-paid", today=TODAY)
    assert empty.table.rows == ()
    assert empty.table.placeholder_rows
    assert all(row.placeholder for row in empty.table.placeholder_rows)
    assert empty.table.totals.total == Decimal(0)
    assert empty.section("paid_badge").lines == ("PAID",)

    filled = render(InvoiceRecord(items=(LineItem("1", quantity=1, rate=5),)), "receipt-paid", today=TODAY)
    assert filled.table.placeholder_rows == ()


def test_watermark() -> None:
    record = InvoiceRecord(
        watermark_text="DRAFT",
        watermark_position="middle",
        sections={"watermark": SectionToggle(visible=True)},
    )
    document = render(record, "standard", today=TODAY)
    assert document.watermark.visible
    assert document.watermark.position == "center"
    assert render(InvoiceRecord(watermark_text="DRAFT"), "standard", today=TODAY).watermark.visible is False


def test_bad_line_item_raises_instead_of_rendering() -> None:
    record = InvoiceRecord(items=(LineItem("x", quantity=1, rate=-3),))
    with pytest.raises(InvalidLineItem):
        render(record, "standard", today=TODAY)


@pytest.mark.parametrize("typed", ["1e5", "3.5", "(1,2,3)", "[1,2,3]", "__import__('os')", "#12", "rgb(300,0,0)"])
def test_unusable_colours_fall_back_to_template(typed: str) -> None:
    record = InvoiceRecord(
        style=StylePreferences(primary_color=typed, background_color=typed, accent_color=typed, text_color=typed)
    )
    palette = render(record, "standard", today=TODAY).style.palette
    assert palette.primary == "#7c3aed"
    assert palette.background == "#ffffff"
    assert palette.text == "#1a1a2e"


def test_non_string_colour_falls_back() -> None:
    record = InvoiceRecord(style=StylePreferences(primary_color=[1, 2, 3]))  # type: ignore[arg-type]
    assert render(record, "standard", today=TODAY).style.palette.primary == "#7c3aed"


def test_blank_parts_of_override_lines_are_dropped() -> None:
    record = InvoiceRecord(sections={"notes": SectionToggle(text=("Bring badges", None, 3, "  "))})
    assert render(record, "standard", today=TODAY).section("notes").lines == ("Bring badges", "3")


def test_hospitality_alias_keeps_service_charge() -> None:
    record = InvoiceRecord(items=(LineItem("1", quantity=50, rate=45),), tax_rate="8.5")
    document = render(record, "hospitality", today=TODAY)
    assert document.template_id == "restaurant"
    assert document.table.totals.service_charge == Decimal("405.00")
