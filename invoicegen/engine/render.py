from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Tuple

from .defaults import is_empty, resolve_fields, resolve_toggles
from .document import (
    COLUMN_ALIGN,
    FooterBlock,
    HeaderBlock,
    LineItemTable,
    LogoBlock,
    MetadataRow,
    PartiesBlock,
    PartyBlock,
    ResolvedDocument,
    TableColumn,
    TableRow,
    TotalsRow,
    Watermark,
)
from .records import InvoiceRecord, LineItem
from .sections import compose_sections, copy_context, split_lines
from .styles import resolve_style
from .templates import PlaceholderItem, TemplateDescriptor, lookup_template
from .totals import (
    Totals,
    compute_totals,
    format_money,
    format_quantity,
    format_rate,
    invoice_value,
    line_amounts,
    parse_number,
    round_money,
)

logger = logging.getLogger(__name__)

METADATA_FIELDS = ("invoice_number", "invoice_date", "due_date")


class _Labels:
    """Resolved labels. Default labels may carry copy placeholders; user labels are used as typed."""

    def __init__(self, record: InvoiceRecord, values: Mapping[str, Any], context: Mapping[str, Any]) -> None:
        self.record = record
        self.values = values
        self.context = context

    def __getitem__(self, name: str) -> str:
        text = str(self.values[f"label.{name}"])
        if is_empty(self.record.labels.get(name)):
            text = text.format_map(self.context)
        return text


def _with_rate(label: str, rate: Decimal) -> str:
    base = label.strip()
    colon = base.endswith(":")
    base = base.rstrip(":").rstrip()
    return f"{base} ({format_rate(rate)}%)" + (":" if colon else "")


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _header(values: Mapping[str, Any], toggles: Mapping[str, bool], labels: _Labels, alignment: str) -> HeaderBlock:
    tagline: Tuple[str, ...] = ()
    if toggles["company_tagline"]:
        tagline = split_lines(_text(values["company.tagline"]))
    logo_source = _text(values["company.logo"])
    return HeaderBlock(
        title=labels["invoice_title"],
        company_name=_text(values["company.name"]),
        tagline=tagline,
        logo=LogoBlock(
            source=logo_source,
            visible=toggles["logo"] and bool(logo_source),
            alignment=alignment,
        ),
    )


def _parties(values: Mapping[str, Any], toggles: Mapping[str, bool], labels: _Labels) -> PartiesBlock:
    sender: List[str] = []
    if toggles["company_address"]:
        sender.extend(split_lines(_text(values["company.address"])))
    if toggles["company_email"]:
        sender.append(_text(values["company.email"]))
    if toggles["company_phone"]:
        sender.append(_text(values["company.phone"]))

    recipient: List[str] = []
    if toggles["client_address"]:
        recipient.extend(split_lines(_text(values["client.address"])))
    recipient.append(_text(values["client.email"]))
    recipient.append(_text(values["client.phone"]))

    return PartiesBlock(
        sender=PartyBlock(labels["from"], _text(values["company.name"]), tuple(sender)),
        recipient=PartyBlock(labels["bill_to"], _text(values["client.name"]), tuple(recipient)),
    )


def _metadata(
    descriptor: TemplateDescriptor,
    values: Mapping[str, Any],
    toggles: Mapping[str, bool],
    labels: _Labels,
) -> Tuple[MetadataRow, ...]:
    rows: List[MetadataRow] = []
    for key in METADATA_FIELDS:
        if toggles[key]:
            rows.append(MetadataRow(key, labels[key], _text(values[key])))
    if toggles["currency"]:
        rows.append(MetadataRow("currency", labels["currency"], _text(values["currency_code"])))
    for name in descriptor.extra_fields:
        value = _text(values[f"field.{name}"])
        if toggles.get(name, False) and value:
            rows.append(MetadataRow(name, labels[name], value))
    return tuple(rows)


def _row(
    row_id: str,
    description: str,
    details: str,
    sku: str,
    quantity: Decimal,
    rate: Decimal,
    amount: Decimal,
    symbol: str,
    placeholder: bool = False,
) -> TableRow:
    return TableRow(
        id=row_id,
        description=description,
        details=details,
        sku=sku,
        quantity=quantity,
        rate=rate,
        amount=amount,
        quantity_display=format_quantity(quantity),
        rate_display=format_money(rate, symbol),
        amount_display=format_money(amount, symbol),
        placeholder=placeholder,
    )


def _item_rows(
    items: Tuple[LineItem, ...],
    amounts: List[Decimal],
    default_description: str,
    symbol: str,
) -> Tuple[TableRow, ...]:
    rows: List[TableRow] = []
    for item, amount in zip(items, amounts):
        rows.append(
            _row(
                str(item.id),
                _text(item.description) or default_description,
                _text(item.details),
                _text(item.sku),
                parse_number(item.quantity) or Decimal(0),
                parse_number(item.rate) or Decimal(0),
                amount,
                symbol,
            )
        )
    return tuple(rows)


def _placeholder_rows(items: Tuple[PlaceholderItem, ...], symbol: str) -> Tuple[TableRow, ...]:
    return tuple(
        _row(
            f"placeholder-{index}",
            item.description,
            item.details,
            item.sku,
            item.quantity,
            item.rate,
            round_money(item.quantity * item.rate),
            symbol,
            placeholder=True,
        )
        for index, item in enumerate(items, start=1)
    )


def _summary(
    descriptor: TemplateDescriptor,
    toggles: Mapping[str, bool],
    labels: _Labels,
    totals: Totals,
    rates: Tuple[Decimal, Decimal],
    symbol: str,
) -> Tuple[TotalsRow, ...]:
    def row(key: str, label: str, amount: Decimal) -> TotalsRow:
        return TotalsRow(key, label, amount, format_money(amount, symbol))

    rows = [row("subtotal", labels["subtotal"], totals.subtotal)]
    if descriptor.service_charge:
        rows.append(row("service_charge", _with_rate(labels["service_charge"], rates[0]), totals.service_charge))
    if toggles["tax_line"]:
        rows.append(row("tax", _with_rate(labels["tax"], rates[1]), totals.tax))
    if toggles["shipping_line"] or totals.shipping != 0:
        rows.append(row("shipping", labels["shipping"], totals.shipping))
    rows.append(row("total", labels["total"], totals.total))
    return tuple(rows)


def render(record: InvoiceRecord, template_id: Any, today: Optional[date] = None) -> ResolvedDocument:
    """
    Render one invoice record with the named template.

    Unknown template ids render with the generic template and log a warning.
    Invalid line items or invoice values raise; no partial document is built.
    """
    descriptor, fell_back = lookup_template(template_id)
    if fell_back:
        logger.warning("Unknown template %r, rendering with %s", template_id, descriptor.key)
    today = today or date.today()

    values = resolve_fields(record, descriptor, today)
    toggles = resolve_toggles(record, descriptor)
    context = copy_context(values, descriptor, today)
    labels = _Labels(record, values, context)
    style = resolve_style(values)

    service_rate = Decimal(0)
    if descriptor.service_charge:
        service_rate = invoice_value(values["service_charge_rate"], "service_charge_rate")
    tax_rate = invoice_value(values["tax_rate"], "tax_rate")
    totals = compute_totals(record.items, tax_rate, values["shipping_cost"], service_rate)
    amounts = line_amounts(record.items)

    symbol = _text(values["currency_symbol"])
    table = LineItemTable(
        columns=tuple(TableColumn(key, labels[key], COLUMN_ALIGN[key]) for key in descriptor.columns),
        rows=_item_rows(record.items, amounts, _text(values["item.description"]), symbol),
        placeholder_rows=() if record.items else _placeholder_rows(descriptor.placeholder_items, symbol),
        totals=totals,
        summary=_summary(descriptor, toggles, labels, totals, (service_rate, tax_rate), symbol),
        tax_rate=tax_rate,
        service_charge_rate=service_rate,
    )

    footer_contact = tuple(
        _text(values[key])
        for key in ("company.email", "company.phone", "company.website")
        if not is_empty(values[key])
    )
    watermark_text = _text(values["watermark.text"])

    return ResolvedDocument(
        template_id=descriptor.key,
        requested_template_id=_text(template_id),
        currency_symbol=symbol,
        currency_code=_text(values["currency_code"]),
        header=_header(values, toggles, labels, style.logo.alignment),
        parties=_parties(values, toggles, labels),
        metadata=_metadata(descriptor, values, toggles, labels),
        table=table,
        sections=compose_sections(toggles, descriptor, record, context),
        footer=FooterBlock(contact=footer_contact, page_numbers=toggles["page_numbers"]),
        style=style,
        watermark=Watermark(
            text=watermark_text,
            position=_text(values["watermark.position"]),
            visible=toggles["watermark"] and bool(watermark_text),
        ),
    )
