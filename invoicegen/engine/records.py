from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple, Union


CORNER_RADII: Tuple[str, ...] = ("none", "small", "medium", "large")
LOGO_POSITIONS: Tuple[str, ...] = ("left", "center", "right")
TABLE_STYLES: Tuple[str, ...] = ("striped", "minimal", "bordered")
LAYOUTS: Tuple[str, ...] = ("minimal", "standard", "detailed", "modern")
WATERMARK_POSITIONS: Tuple[str, ...] = (
    "top-left",
    "top-right",
    "center",
    "bottom-left",
    "bottom-right",
)


@dataclass(frozen=True)
class CompanyInfo:
    name: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    tagline: Optional[str] = None
    logo: Optional[str] = None
    website: Optional[str] = None


@dataclass(frozen=True)
class ClientInfo:
    name: Optional[str] = None
    address: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


@dataclass(frozen=True)
class LineItem:
    id: str
    description: Optional[str] = None
    quantity: Any = Decimal("0")
    rate: Any = Decimal("0")
    # Without amount_override a supplied amount must equal round(quantity * rate, 2).
    amount: Any = None
    amount_override: bool = False
    details: Optional[str] = None
    sku: Optional[str] = None


@dataclass(frozen=True)
class StylePreferences:
    corner_radius: Optional[str] = None
    logo_position: Optional[str] = None
    table_style: Optional[str] = None
    layout: Optional[str] = None
    primary_color: Optional[str] = None
    accent_color: Optional[str] = None
    text_color: Optional[str] = None
    background_color: Optional[str] = None
    font_family: Optional[str] = None
    font_size: Optional[str] = None
    font_weight: Optional[str] = None


@dataclass(frozen=True)
class SectionToggle:
    # None keeps the template default visibility
    visible: Optional[bool] = None
    text: Union[str, Tuple[str, ...], None] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class InvoiceRecord:
    company: CompanyInfo = field(default_factory=CompanyInfo)
    client: ClientInfo = field(default_factory=ClientInfo)
    invoice_number: Optional[str] = None
    invoice_date: Optional[str] = None
    due_date: Optional[str] = None
    currency_symbol: Optional[str] = None
    currency_code: Optional[str] = None
    items: Tuple[LineItem, ...] = ()
    tax_rate: Any = None
    shipping_cost: Any = None
    service_charge_rate: Any = None
    style: StylePreferences = field(default_factory=StylePreferences)
    sections: Dict[str, SectionToggle] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)
    fields: Dict[str, str] = field(default_factory=dict)
    watermark_text: Optional[str] = None
    watermark_position: Optional[str] = None

    def explicit(self, key: str) -> Any:
        """
        Explicit value for a dotted field key such as "company.name",
        "style.layout", "label.bill_to" or "field.project_code".
        Returns None when the record carries nothing for the key.
        """
        head, _, rest = key.partition(".")
        if not rest:
            return getattr(self, head, None)
        if head == "label":
            return self.labels.get(rest)
        if head == "field":
            return self.fields.get(rest)
        if head == "watermark":
            return getattr(self, f"watermark_{rest}", None)
        if head in ("company", "client", "style"):
            return getattr(getattr(self, head), rest, None)
        return None

    def toggle(self, name: str) -> Optional[SectionToggle]:
        return self.sections.get(name)
