from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Tuple

from .sections import ResolvedSection
from .styles import ResolvedStyle
from .totals import Totals


# Table columns a template may use, with their cell alignment.
COLUMN_ALIGN: Dict[str, str] = {
    "description": "start",
    "sku": "start",
    "quantity": "center",
    "rate": "end",
    "amount": "end",
}


@dataclass(frozen=True)
class LogoBlock:
    source: str
    visible: bool
    alignment: str


@dataclass(frozen=True)
class HeaderBlock:
    title: str
    company_name: str
    tagline: Tuple[str, ...]
    logo: LogoBlock


@dataclass(frozen=True)
class PartyBlock:
    label: str
    name: str
    details: Tuple[str, ...]


@dataclass(frozen=True)
class PartiesBlock:
    sender: PartyBlock
    recipient: PartyBlock


@dataclass(frozen=True)
class MetadataRow:
    key: str
    label: str
    value: str


@dataclass(frozen=True)
class TableColumn:
    key: str
    label: str
    align: str


@dataclass(frozen=True)
class TableRow:
    id: str
    description: str
    details: str
    sku: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal
    quantity_display: str
    rate_display: str
    amount_display: str
    placeholder: bool = False


@dataclass(frozen=True)
class TotalsRow:
    key: str
    label: str
    amount: Decimal
    display: str


@dataclass(frozen=True)
class LineItemTable:
    columns: Tuple[TableColumn, ...]
    rows: Tuple[TableRow, ...]
    placeholder_rows: Tuple[TableRow, ...]
    totals: Totals
    summary: Tuple[TotalsRow, ...]
    # applied percentages; service charge is 0 on templates without one
    tax_rate: Decimal
    service_charge_rate: Decimal


@dataclass(frozen=True)
class FooterBlock:
    contact: Tuple[str, ...]
    page_numbers: bool


@dataclass(frozen=True)
class Watermark:
    text: str
    position: str
    visible: bool


@dataclass(frozen=True)
class ResolvedDocument:
    template_id: str
    requested_template_id: str
    currency_symbol: str
    currency_code: str
    header: HeaderBlock
    parties: PartiesBlock
    metadata: Tuple[MetadataRow, ...]
    table: LineItemTable
    sections: Tuple[ResolvedSection, ...]
    footer: FooterBlock
    style: ResolvedStyle
    watermark: Watermark

    def to_dict(self) -> Dict[str, Any]:
        return _plain(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, indent=2, ensure_ascii=False)

    def section(self, kind: str) -> ResolvedSection | None:
        for section in self.sections:
            if section.kind == kind:
                return section
        return None


def _plain(value: Any) -> Any:
    """JSON-ready copy of a document node. Decimals become fixed-point strings."""
    if dataclasses.is_dataclass(value):
        return {field.name: _plain(getattr(value, field.name)) for field in dataclasses.fields(value)}
    if isinstance(value, (tuple, list)):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, Decimal):
        return format(value, "f")
    return value
