"""
Default resolution for invoice fields.

Every field is addressed by a dotted key ("company.name", "style.layout",
"label.bill_to", "title.payment_terms", "copy.notes", "field.project_code").
A value comes from the first non-empty source of: the record, the template
descriptor, ENGINE_DEFAULTS. Invoice and due dates are derived from `today`
when nothing supplies them.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .. import config
from .records import (
    CORNER_RADII,
    LAYOUTS,
    LOGO_POSITIONS,
    TABLE_STYLES,
    WATERMARK_POSITIONS,
    InvoiceRecord,
)
from .styles import normalize_color

if TYPE_CHECKING:
    from .templates import TemplateDescriptor

logger = logging.getLogger(__name__)


ENUM_FIELDS: Dict[str, tuple] = {
    "style.corner_radius": CORNER_RADII,
    "style.logo_position": LOGO_POSITIONS,
    "style.table_style": TABLE_STYLES,
    "style.layout": LAYOUTS,
    "watermark.position": WATERMARK_POSITIONS,
}

COLOR_FIELDS = (
    "style.primary_color",
    "style.accent_color",
    "style.text_color",
    "style.background_color",
)

NUMERIC_FIELDS = ("tax_rate", "shipping_cost", "service_charge_rate")

DATE_FIELDS = ("invoice_date", "due_date")

RECORD_FIELDS = (
    "company.name",
    "company.address",
    "company.email",
    "company.phone",
    "company.tagline",
    "company.logo",
    "company.website",
    "client.name",
    "client.address",
    "client.email",
    "client.phone",
    "invoice_number",
    "invoice_date",
    "due_date",
    "currency_symbol",
    "currency_code",
    "tax_rate",
    "shipping_cost",
    "service_charge_rate",
    "style.corner_radius",
    "style.logo_position",
    "style.table_style",
    "style.layout",
    "style.primary_color",
    "style.accent_color",
    "style.text_color",
    "style.background_color",
    "style.font_family",
    "style.font_size",
    "style.font_weight",
    "watermark.text",
    "watermark.position",
)

# Absent at every level is a legal outcome for these.
OPTIONAL_FIELDS = ("company.tagline", "company.logo", "company.website", "watermark.text")


ENGINE_DEFAULTS: Dict[str, Any] = {
    "company.name": "Your Company Name",
    "company.address": "123 Business Street, City, State 12345",
    "company.email": "info@yourcompany.com",
    "company.phone": "+1 (555) 123-4567",
    "client.name": "Client Name",
    "client.address": "456 Client Ave, City, State 67890",
    "client.email": "client@example.com",
    "client.phone": "+1 (555) 987-6543",
    "invoice_number": "INV-001",
    "currency_symbol": "$",
    "currency_code": "USD",
    "tax_rate": 10,
    "shipping_cost": 0,
    "service_charge_rate": 0,
    "style.corner_radius": "medium",
    "style.logo_position": "right",
    "style.table_style": "bordered",
    "style.layout": "standard",
    "style.primary_color": "#7c3aed",
    "style.accent_color": "#a78bfa",
    "style.text_color": "#1a1a2e",
    "style.background_color": "#ffffff",
    "style.font_family": "Inter",
    "style.font_size": "14px",
    "style.font_weight": "400",
    "watermark.position": "center",
    "item.description": "Item",
    # labels
    "label.invoice_title": "INVOICE",
    "label.from": "From:",
    "label.bill_to": "Bill To:",
    "label.invoice_number": "Invoice #:",
    "label.invoice_date": "Date:",
    "label.due_date": "Due Date:",
    "label.currency": "Currency:",
    "label.description": "Description",
    "label.sku": "SKU",
    "label.quantity": "Qty",
    "label.rate": "Rate",
    "label.amount": "Amount",
    "label.subtotal": "Subtotal:",
    "label.service_charge": "Service Charge:",
    "label.tax": "Tax:",
    "label.shipping": "Shipping:",
    "label.total": "Total:",
    # section titles
    "title.paid_badge": "Status",
    "title.payment_confirmation": "Payment Confirmed",
    "title.project_summary": "Project Summary:",
    "title.project_deliverables": "Project Deliverables:",
    "title.creative_process": "Creative Process:",
    "title.design_features": "Design Features:",
    "title.service_excellence": "Service Excellence",
    "title.subscription_details": "Subscription Details:",
    "title.insurance_information": "Insurance Information:",
    "title.payment_methods": "Payment Methods:",
    "title.event_details": "Event Details:",
    "title.legal_notice": "Legal Notice:",
    "title.shipping_information": "Shipping Information:",
    "title.return_policy": "Return Policy:",
    "title.bank_details": "Bank Details:",
    "title.payment_terms": "Payment Terms:",
    "title.payment_information": "Payment Information:",
    "title.terms_and_conditions": "Terms & Conditions:",
    "title.notes": "Notes:",
    "title.thank_you_message": "Thank You",
    "title.footer_message": "Footer",
    "title.hipaa_compliance": "HIPAA Compliance",
    "title.contact_info": "Contact",
    "title.signature": "Authorized Signature",
    # generic copy shared by every template unless it supplies its own
    "copy.paid_badge": ("PAID",),
    "copy.payment_terms": ("Net 30",),
    "copy.payment_information": (
        "Method: Bank Transfer",
        "Account: 1234567890, Routing: 987654321",
        "Please include invoice number in payment reference",
    ),
    "copy.terms_and_conditions": ("Payment is due within {due_days} days of invoice date.",),
    "copy.thank_you_message": ("Thank you for your business!",),
    "copy.footer_message": ("Questions? Contact us at {company_email}",),
    "copy.contact_info": ("{company_email}", "{company_phone}"),
}

# Engine-wide toggles. Templates switch sections on in their own toggle maps.
BASE_TOGGLES: Dict[str, bool] = {
    "logo": True,
    "company_tagline": False,
    "company_address": True,
    "company_email": True,
    "company_phone": True,
    "client_address": True,
    "invoice_number": True,
    "invoice_date": True,
    "due_date": True,
    "currency": False,
    "tax_line": True,
    "shipping_line": False,
    "page_numbers": True,
    "watermark": False,
    "thank_you_message": True,
    "terms_and_conditions": True,
    "notes": True,
    "payment_information": False,
    "footer_message": False,
    "signature": False,
}

REQUIRED_FIELDS: List[str] = [
    key for key in RECORD_FIELDS if key not in OPTIONAL_FIELDS and key not in DATE_FIELDS
] + ["item.description"] + [key for key in ENGINE_DEFAULTS if key.startswith("label.")]


def is_empty(value: Any) -> bool:
    """None, a blank string, or a sequence of blank strings. Zero is a value."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (tuple, list)):
        return all(is_empty(part) for part in value)
    return False


def parse_iso_date(value: Any) -> Optional[date]:
    if is_empty(value):
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def due_date_for(invoice_date: Any, due_days: int, today: Optional[date] = None) -> str:
    base = parse_iso_date(invoice_date) or today or date.today()
    return (base + timedelta(days=due_days)).isoformat()


def clean_explicit(field: str, value: Any) -> Any:
    """The explicit value as it will be used, or None when it counts as empty."""
    if is_empty(value):
        return None
    if field in ENUM_FIELDS:
        key = str(value).strip().lower()
        if key not in ENUM_FIELDS[field]:
            logger.debug("Ignoring out-of-domain value %r for %s", value, field)
            return None
        return key
    if field in COLOR_FIELDS:
        color = normalize_color(value)
        if color is None:
            logger.debug("Ignoring unparseable colour %r for %s", value, field)
        return color
    if isinstance(value, str):
        return value.strip()
    return value


def resolve_for(
    descriptor: "TemplateDescriptor",
    field: str,
    explicit: Any = None,
    today: Optional[date] = None,
    invoice_date: Any = None,
) -> Any:
    cleaned = clean_explicit(field, explicit)
    if cleaned is not None:
        return cleaned
    template_value = descriptor.defaults.get(field)
    if not is_empty(template_value):
        return template_value
    if field == "invoice_date":
        return (today or date.today()).isoformat()
    if field == "due_date":
        return due_date_for(invoice_date, descriptor.due_days, today)
    return ENGINE_DEFAULTS.get(field)


def resolve(field: str, explicit: Any, template_id: str, today: Optional[date] = None) -> Any:
    """
    Resolve one field for a template id. Unknown ids resolve against the
    generic template; this never raises for a bad id.
    """
    # templates imports this module while building the registry
    from .templates import get_template

    return resolve_for(get_template(template_id), field, explicit, today=today)


def resolve_fields(
    record: InvoiceRecord,
    descriptor: "TemplateDescriptor",
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Every scalar field, label and section title the document needs."""
    values: Dict[str, Any] = {}
    for key in RECORD_FIELDS:
        if key == "due_date":
            continue
        values[key] = resolve_for(descriptor, key, record.explicit(key), today=today)
    values["due_date"] = resolve_for(
        descriptor,
        "due_date",
        record.explicit("due_date"),
        today=today,
        invoice_date=values["invoice_date"],
    )
    label_keys = {key for key in ENGINE_DEFAULTS if key.startswith(("label.", "title."))}
    label_keys.update(key for key in descriptor.defaults if key.startswith(("label.", "title.")))
    for key in sorted(label_keys):
        values[key] = resolve_for(descriptor, key, record.explicit(key), today=today)
    for name in descriptor.extra_fields:
        values[f"field.{name}"] = resolve_for(
            descriptor, f"field.{name}", record.explicit(f"field.{name}"), today=today
        )
    values["item.description"] = resolve_for(descriptor, "item.description", today=today)
    return values


def resolve_toggles(record: InvoiceRecord, descriptor: "TemplateDescriptor") -> Dict[str, bool]:
    toggles = dict(descriptor.toggles)
    for name, toggle in record.sections.items():
        if name not in toggles:
            logger.debug("Ignoring toggle %r unknown to template %s", name, descriptor.key)
            continue
        if toggle.visible is not None:
            toggles[name] = bool(toggle.visible)
    return toggles


def missing_required_inputs(record: InvoiceRecord) -> List[str]:
    """Inputs a user is expected to fill in that the record leaves empty."""
    return [key for key in config.REQUIRED_INPUTS if is_empty(record.explicit(key))]
