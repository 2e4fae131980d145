from __future__ import annotations

import json
import tempfile
from decimal import Decimal
from pathlib import Path

import pytest

from invoicegen.engine.errors import InvalidInvoiceValue, InvalidLineItem
from invoicegen.engine.ingest import load_records, record_from_dict, slug_from_name


def test_flat_camel_case_form() -> None:
    record = record_from_dict(
        {
            "companyName": "Bella Vista",
            "clientEmail": "events@globex.test",
            "invoiceNumber": "CAT-7",
            "taxRate": "8.5",
            "serviceChargeRate": 18,
            "primaryColor": "#EA580C",
            "cornerRadius": "large",
            "showNotes": True,
            "notes": "Bring extra chairs",
            "showTax": "false",
            "projectSummaryLabel": "Overview",
            "billToLabel": "Event Information:",
            "menuItemLabel": "Dish",
            "guestCount": "80 Guests",
            "somethingElse": "ignored",
            "items": [
                {"id": "a", "description": "Buffet", "quantity": "50", "rate": "45.00", "amount": "2250"},
                {"description": "Hidden", "quantity": 1, "rate": 1, "visible": False},
            ],
        }
    )
    assert record.company.name == "Bella Vista"
    assert record.client.email == "events@globex.test"
    assert record.invoice_number == "CAT-7"
    assert record.tax_rate == "8.5"
    assert record.style.corner_radius == "large"
    assert record.sections["notes"].visible is True
    assert record.sections["notes"].text == "Bring extra chairs"
    assert record.sections["tax_line"].visible is False
    assert record.sections["project_summary"].title == "Overview"
    assert record.labels["bill_to"] == "Event Information:"
    assert record.labels["description"] == "Dish"
    assert record.fields["guest_count"] == "80 Guests"
    assert len(record.items) == 1
    assert record.items[0].quantity == Decimal("50")
    assert record.items[0].amount == Decimal("2250")


def test_nested_canonical_shape() -> None:
    record = record_from_dict(
        {
            "company": {"name": "Acme", "email": "billing@acme.test"},
            "client": {"name": "Globex"},
            "style": {"tableStyle": "striped"},
            "sections": {
                "notes": {"visible": True, "text": ["Line one", "Line two"]},
                "signature": False,
                "thank_you_message": "Cheers",
            },
            "labels": {"invoiceTitle": "BILL"},
            "watermark": {"text": "DRAFT", "position": "top-left", "visible": True},
            "line_items": [{"quantity": 2, "rate": "9.99"}],
        }
    )
    assert record.company.email == "billing@acme.test"
    assert record.style.table_style == "striped"
    assert record.sections["notes"].text == ("Line one", "Line two")
    assert record.sections["signature"].visible is False
    assert record.sections["thank_you_message"].text == "Cheers"
    assert record.labels["invoice_title"] == "BILL"
    assert record.watermark_text == "DRAFT"
    assert record.watermark_position == "top-left"
    assert record.sections["watermark"].visible is True
    assert record.items[0].id == "1"


def test_payment_parts_become_payment_information() -> None:
    record = record_from_dict(
        {
            "paymentMethod": "Wire",
            "accountDetails": "IBAN DE00 1234",
            "paymentInstructions": "Quote the invoice number",
        }
    )
    assert record.sections["payment_information"].text == (
        "Method: Wire",
        "IBAN DE00 1234",
        "Quote the invoice number",
    )


def test_bad_numbers_raise() -> None:
    with pytest.raises(InvalidLineItem):
        record_from_dict({"items": [{"id": "x", "quantity": "two", "rate": 1}]})
    with pytest.raises(InvalidLineItem):
        record_from_dict({"items": "not a list"})
    with pytest.raises(InvalidInvoiceValue):
        record_from_dict({"taxRate": "ten percent"})


def test_slug_from_name_is_safe() -> None:
    assert slug_from_name("ACME Invoice #42") == "acme-invoice-42"
    assert slug_from_name("../../etc/passwd") == "etc-passwd"
    fallback = slug_from_name("!!!")
    assert len(fallback) == 12


def test_load_records_reads_json_files() -> None:
    with tempfile.TemporaryDirectory() as temp_dir:
        directory = Path(temp_dir)
        (directory / "b invoice.json").write_text(json.dumps({"companyName": "B"}), encoding="utf-8")
        (directory / "a.json").write_text(json.dumps({"companyName": "A"}), encoding="utf-8")
        (directory / "skip.txt").write_text("{}", encoding="utf-8")
        records = load_records(directory)
    assert [slug for slug, _ in records] == ["a", "b-invoice"]
    assert records[1][1].company.name == "B"
