from __future__ import annotations

import hashlib
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from slugify import slugify

from .defaults import BASE_TOGGLES, NUMERIC_FIELDS
from .errors import InvalidInvoiceValue, InvalidLineItem
from .records import ClientInfo, CompanyInfo, InvoiceRecord, LineItem, SectionToggle, StylePreferences
from .sections import SECTION_KINDS
from .templates import TEMPLATES
from .totals import parse_number

logger = logging.getLogger(__name__)


# Flat form keys (snake_cased) that map onto a dotted record field.
FLAT_FIELDS: Dict[str, str] = {
    "company_name": "company.name",
    "company_address": "company.address",
    "company_email": "company.email",
    "company_phone": "company.phone",
    "company_tagline": "company.tagline",
    "practice_tagline": "company.tagline",
    "consulting_tagline": "company.tagline",
    "legal_tagline": "company.tagline",
    "restaurant_tagline": "company.tagline",
    "company_logo": "company.logo",
    "logo_url": "company.logo",
    "company_website": "company.website",
    "website_url": "company.website",
    "client_name": "client.name",
    "client_address": "client.address",
    "client_email": "client.email",
    "client_phone": "client.phone",
    "invoice_number": "invoice_number",
    "invoice_date": "invoice_date",
    "due_date": "due_date",
    "currency_symbol": "currency_symbol",
    "currency": "currency_code",
    "currency_code": "currency_code",
    "tax_rate": "tax_rate",
    "shipping_cost": "shipping_cost",
    "service_charge_rate": "service_charge_rate",
    "corner_radius": "style.corner_radius",
    "logo_position": "style.logo_position",
    "table_style": "style.table_style",
    "layout": "style.layout",
    "primary_color": "style.primary_color",
    "accent_color": "style.accent_color",
    "text_color": "style.text_color",
    "background_color": "style.background_color",
    "font_family": "style.font_family",
    "font_size": "style.font_size",
    "font_weight": "style.font_weight",
    "watermark_text": "watermark.text",
    "watermark_position": "watermark.position",
}

TOGGLE_ALIASES: Dict[str, str] = {
    "logo_visible": "logo",
    "thank_you_note_visible": "thank_you_message",
    "terms_and_conditions_visible": "terms_and_conditions",
    "signature_visible": "signature",
    "watermark_visible": "watermark",
    "show_tax": "tax_line",
    "show_shipping": "shipping_line",
    "show_payment_info": "payment_information",
    "show_insurance_info": "insurance_information",
    "show_practice_tagline": "company_tagline",
    "show_consulting_tagline": "company_tagline",
    "show_legal_tagline": "company_tagline",
    "show_restaurant_tagline": "company_tagline",
    "show_professional_footer": "footer_message",
    "show_legal_footer": "footer_message",
    "show_restaurant_footer": "footer_message",
    "show_receipt_footer": "footer_message",
    "show_freelancer_terms": "payment_terms",
    "show_developer_info": "signature",
    "show_international_thank_you_message": "thank_you_message",
    "show_international_footer_message": "footer_message",
    "show_international_contact_info": "contact_info",
}

TEXT_ALIASES: Dict[str, str] = {
    "thank_you_note": "thank_you_message",
    "insurance_info": "insurance_information",
    "hipaa_compliance_text": "hipaa_compliance",
    "professional_footer_text": "footer_message",
    "legal_footer_text": "footer_message",
    "restaurant_footer_text": "footer_message",
    "receipt_footer_message": "footer_message",
    "international_footer_message": "footer_message",
    "international_thank_you_message": "thank_you_message",
    "international_terms_content": "terms_and_conditions",
    "international_terms": "terms_and_conditions",
    "freelancer_terms": "payment_terms",
    "creative_terms": "payment_terms",
    "payment_terms_message": "payment_terms",
    "payment_confirmation_message": "payment_confirmation",
    "paid_badge_text": "paid_badge",
    "restaurant_contact_info": "contact_info",
}

LABEL_ALIASES: Dict[str, str] = {
    "client": "bill_to",
    "client_info": "bill_to",
    "client_information": "bill_to",
    "customer_information": "bill_to",
    "patient_info": "bill_to",
    "event_info": "bill_to",
    "service_description": "description",
    "product_description": "description",
    "medical_service": "description",
    "legal_service": "description",
    "menu_item": "description",
    "creative_service": "description",
    "creative_work": "description",
    "service": "description",
    "plan_features": "description",
    "cpt_code": "sku",
    "hours": "quantity",
    "duration": "quantity",
    "billing_cycle": "quantity",
    "unit_price": "rate",
    "investment": "amount",
    "total_amount": "total",
    "project_number": "invoice_number",
    "date": "invoice_date",
    "order_date": "invoice_date",
    "project_date": "invoice_date",
    "service_date": "invoice_date",
    "service_period": "invoice_date",
    "billing_period": "invoice_date",
    "event_date": "invoice_date",
    "payment_due": "due_date",
}

FIELD_ALIASES: Dict[str, str] = {
    "sales_rep_name": "sales_rep",
    "account_manager_name": "account_manager",
    "creative_director_name": "creative_director",
    "default_hourly_rate": "hourly_rate",
}

# Flat form keys folded into the payment information section, in display order.
PAYMENT_PARTS = ("payment_method", "account_details", "payment_instructions")

TEXT_SUFFIXES = ("_description", "_content", "_text")

NESTED_KEYS = ("company", "client", "style", "sections", "labels", "fields", "watermark")


def _snake(key: str) -> str:
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", key.strip()).replace("-", "_").lower()


def _known_extra_fields() -> set:
    names = set()
    for descriptor in TEMPLATES.values():
        names.update(descriptor.extra_fields)
    return names


KNOWN_EXTRA_FIELDS = frozenset(_known_extra_fields())
KNOWN_TOGGLES = frozenset(SECTION_KINDS) | frozenset(BASE_TOGGLES) | KNOWN_EXTRA_FIELDS


def slug_from_name(name: str) -> str:
    """Output directory name for an invoice; safe for use as one path segment."""
    slug = slugify(name or "")
    slug = re.sub(r"[^a-z0-9-]+", "-", slug.lower()).strip("-")
    if not slug:
        slug = hashlib.md5((name or "").encode("utf-8")).hexdigest()[:12]
    if ".." in slug or "/" in slug or "\\" in slug:
        raise ValueError("Invalid slug generated from name")
    return slug


def _section_kind(key: str) -> Optional[str]:
    if key in SECTION_KINDS:
        return key
    if key in TEXT_ALIASES:
        return TEXT_ALIASES[key]
    for suffix in TEXT_SUFFIXES:
        if key.endswith(suffix):
            stem = key[: -len(suffix)]
            stem = TEXT_ALIASES.get(stem, stem)
            if stem in SECTION_KINDS:
                return stem
    return None


def _toggle_name(key: str) -> Optional[str]:
    if key in TOGGLE_ALIASES:
        return TOGGLE_ALIASES[key]
    if key.startswith("show_"):
        name = key[len("show_"):]
    elif key.endswith("_visible"):
        name = key[: -len("_visible")]
    else:
        return None
    name = TEXT_ALIASES.get(name, name)
    if name in KNOWN_TOGGLES:
        return name
    for suffix in TEXT_SUFFIXES:
        if name.endswith(suffix) and name[: -len(suffix)] in KNOWN_TOGGLES:
            return name[: -len(suffix)]
    return None


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class _RecordBuilder:
    def __init__(self) -> None:
        self.values: Dict[str, Any] = {}
        self.sections: Dict[str, Dict[str, Any]] = {}
        self.labels: Dict[str, str] = {}
        self.fields: Dict[str, str] = {}
        self.items: List[LineItem] = []
        self.payment_parts: Dict[str, Any] = {}

    def section(self, kind: str) -> Dict[str, Any]:
        return self.sections.setdefault(kind, {})

    def add_flat(self, raw_key: str, value: Any) -> None:
        key = _snake(raw_key)
        if key in FLAT_FIELDS:
            self.values[FLAT_FIELDS[key]] = value
            return
        if key == "invoice_title":
            self.labels["invoice_title"] = value
            return
        if key.endswith("_label"):
            name = key[: -len("_label")]
            kind = _section_kind(name)
            if kind is not None:
                self.section(kind)["title"] = value
            else:
                self.labels[LABEL_ALIASES.get(name, name)] = value
            return
        if key.endswith("_title"):
            kind = _section_kind(key[: -len("_title")])
            if kind is not None:
                self.section(kind)["title"] = value
                return
        toggle = _toggle_name(key)
        if toggle is not None:
            self.section(toggle)["visible"] = _as_bool(value)
            return
        kind = _section_kind(key)
        if kind is not None:
            self.section(kind)["text"] = value
            return
        if key in PAYMENT_PARTS:
            self.payment_parts[key] = value
            return
        name = FIELD_ALIASES.get(key, key)
        if name in KNOWN_EXTRA_FIELDS:
            self.fields[name] = value
            return
        logger.debug("Ignoring input key %r", raw_key)

    def add_nested(self, key: str, value: Dict[str, Any]) -> None:
        if key in ("company", "client", "style"):
            for name, item in value.items():
                self.values[f"{key}.{_snake(name)}"] = item
        elif key == "watermark":
            for name, item in value.items():
                name = _snake(name)
                if name == "visible":
                    self.section("watermark")["visible"] = _as_bool(item)
                else:
                    self.values[f"watermark.{name}"] = item
        elif key == "labels":
            self.labels.update({_snake(name): item for name, item in value.items()})
        elif key == "fields":
            self.fields.update({_snake(name): item for name, item in value.items()})
        elif key == "sections":
            for name, item in value.items():
                section = self.section(_snake(name))
                if isinstance(item, dict):
                    if "visible" in item and item["visible"] is not None:
                        section["visible"] = _as_bool(item["visible"])
                    if item.get("text") is not None:
                        section["text"] = item["text"]
                    if item.get("title") is not None:
                        section["title"] = item["title"]
                elif isinstance(item, (str, list, tuple)):
                    section["text"] = item
                else:
                    section["visible"] = _as_bool(item)

    def build(self) -> InvoiceRecord:
        def group(prefix: str) -> Dict[str, Any]:
            return {
                key[len(prefix) + 1:]: value
                for key, value in self.values.items()
                if key.startswith(prefix + ".")
            }

        company = {k: v for k, v in group("company").items() if k in CompanyInfo.__dataclass_fields__}
        client = {k: v for k, v in group("client").items() if k in ClientInfo.__dataclass_fields__}
        style = {k: v for k, v in group("style").items() if k in StylePreferences.__dataclass_fields__}

        payment = self.section("payment_information") if self.payment_parts else {}
        if self.payment_parts and payment.get("text") is None:
            method = self.payment_parts.get("payment_method")
            lines = [f"Method: {method}" if method else None]
            lines += [self.payment_parts.get(part) for part in PAYMENT_PARTS[1:]]
            payment["text"] = tuple(str(line) for line in lines if line)

        sections = {
            name: SectionToggle(
                visible=entry.get("visible"),
                text=tuple(entry["text"]) if isinstance(entry.get("text"), list) else entry.get("text"),
                title=entry.get("title"),
            )
            for name, entry in self.sections.items()
        }
        return InvoiceRecord(
            company=CompanyInfo(**company),
            client=ClientInfo(**client),
            invoice_number=_optional_text(self.values.get("invoice_number")),
            invoice_date=_optional_text(self.values.get("invoice_date")),
            due_date=_optional_text(self.values.get("due_date")),
            currency_symbol=_optional_text(self.values.get("currency_symbol")),
            currency_code=_optional_text(self.values.get("currency_code")),
            items=tuple(self.items),
            tax_rate=self.values.get("tax_rate"),
            shipping_cost=self.values.get("shipping_cost"),
            service_charge_rate=self.values.get("service_charge_rate"),
            style=StylePreferences(**style),
            sections=sections,
            labels={k: str(v) for k, v in self.labels.items() if v is not None},
            fields={k: str(v) for k, v in self.fields.items() if v is not None},
            watermark_text=_optional_text(self.values.get("watermark.text")),
            watermark_position=_optional_text(self.values.get("watermark.position")),
        )


def _optional_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _line_number(raw: Dict[str, Any], name: str, item_id: str) -> Any:
    try:
        return parse_number(raw.get(name))
    except ValueError as exc:
        raise InvalidLineItem(f"Line item {item_id!r}: {name} {exc}", item_id=item_id) from exc


def item_from_dict(raw: Dict[str, Any], index: int) -> LineItem:
    data = {_snake(key): value for key, value in raw.items()}
    item_id = str(data.get("id") if data.get("id") not in (None, "") else index)
    override = _as_bool(data.get("amount_override", False))
    return LineItem(
        id=item_id,
        description=_optional_text(data.get("description")),
        quantity=_line_number(data, "quantity", item_id),
        rate=_line_number(data, "rate", item_id),
        amount=_line_number(data, "amount", item_id),
        amount_override=override,
        details=_optional_text(data.get("details")),
        sku=_optional_text(data.get("sku")),
    )


def _items(raw_items: Any) -> List[LineItem]:
    if raw_items is None:
        return []
    if not isinstance(raw_items, (list, tuple)):
        raise InvalidLineItem("Line items must be a list")
    items: List[LineItem] = []
    for index, raw in enumerate(raw_items, start=1):
        if not isinstance(raw, dict):
            raise InvalidLineItem(f"Line item {index} is not an object", item_id=str(index))
        if raw.get("visible") is False:
            continue
        items.append(item_from_dict(raw, index))
    return items


def record_from_dict(data: Dict[str, Any]) -> InvoiceRecord:
    """
    Build an InvoiceRecord from either the nested canonical shape or the flat
    form/template-state shape. Keys may be camelCase or snake_case.
    """
    if not isinstance(data, dict):
        raise ValueError("Invoice input must be a JSON object")
    builder = _RecordBuilder()
    for key, value in data.items():
        snake = _snake(key)
        if snake == "items" or snake == "line_items":
            builder.items = _items(value)
        elif snake in NESTED_KEYS and isinstance(value, dict):
            builder.add_nested(snake, value)
        else:
            builder.add_flat(key, value)
    for field in NUMERIC_FIELDS:
        try:
            parse_number(builder.values.get(field))
        except ValueError as exc:
            raise InvalidInvoiceValue(f"{field}: {exc}", field=field) from exc
    return builder.build()


def load_record(path: Path) -> InvoiceRecord:
    if not path.exists():
        raise FileNotFoundError(f"Invoice file not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    return record_from_dict(data)


def load_records(directory: Path) -> List[Tuple[str, InvoiceRecord]]:
    """(slug, record) for every *.json file in a directory, sorted by name."""
    if not directory.is_dir():
        raise FileNotFoundError(f"Invoice directory not found: {directory}")
    return [(slug_from_name(path.stem), load_record(path)) for path in sorted(directory.glob("*.json"))]
