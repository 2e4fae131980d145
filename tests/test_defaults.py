from __future__ import annotations

from datetime import date

from invoicegen.engine.defaults import (
    ENGINE_DEFAULTS,
    is_empty,
    missing_required_inputs,
    resolve,
)
from invoicegen.engine.records import CompanyInfo, ClientInfo, InvoiceRecord


TODAY = date(2024, 3, 1)


def test_explicit_value_wins() -> None:
    assert resolve("company.name", "Acme Ltd", "restaurant") == "Acme Ltd"


def test_template_default_beats_engine_default() -> None:
    assert resolve("company.name", None, "restaurant") == "Bella Vista Restaurant"
    assert resolve("company.name", "   ", "restaurant") == "Bella Vista Restaurant"


def test_engine_default_when_template_is_silent() -> None:
    assert resolve("client.phone", None, "standard") == ENGINE_DEFAULTS["client.phone"]


def test_zero_is_a_value() -> None:
    assert resolve("tax_rate", 0, "standard") == 0
    assert resolve("tax_rate", None, "standard") == 10


def test_out_of_domain_enum_uses_template_default() -> None:
    assert resolve("style.logo_position", "diagonal", "standard") == "left"
    assert resolve("style.layout", "MODERN", "standard") == "modern"


def test_unknown_template_uses_generic_defaults() -> None:
    assert resolve("style.primary_color", None, "no-such-template") == resolve("style.primary_color", None, "standard")


def test_optional_field_may_be_absent() -> None:
    assert resolve("company.logo", None, "standard") is None


def test_date_defaults() -> None:
    assert resolve("invoice_date", None, "standard", today=TODAY) == "2024-03-01"
    assert resolve("due_date", None, "standard", today=TODAY) == "2024-03-31"
    assert resolve("due_date", None, "restaurant", today=TODAY) == "2024-03-16"
    assert resolve("due_date", None, "receipt-paid", today=TODAY) == "2024-03-01"


def test_is_empty() -> None:
    assert is_empty(None)
    assert is_empty(" \n")
    assert is_empty(("", "  "))
    assert not is_empty(0)
    assert not is_empty("0")


def test_missing_required_inputs() -> None:
    assert missing_required_inputs(InvoiceRecord()) == ["company.name", "client.name", "invoice_number"]
    record = InvoiceRecord(
        company=CompanyInfo(name="Acme"),
        client=ClientInfo(name="Globex"),
        invoice_number="INV-9",
    )
    assert missing_required_inputs(record) == []
