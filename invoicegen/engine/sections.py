from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from string import Formatter
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .defaults import due_date_for, is_empty, resolve_fields, resolve_for
from .records import InvoiceRecord

if TYPE_CHECKING:
    from .templates import TemplateDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionKind:
    name: str
    text_bearing: bool = True
    list_style: str = "plain"  # plain | bulleted


SECTION_KINDS: Dict[str, SectionKind] = {
    kind.name: kind
    for kind in [
        SectionKind("paid_badge"),
        SectionKind("payment_confirmation"),
        SectionKind("project_summary"),
        SectionKind("project_deliverables", list_style="bulleted"),
        SectionKind("creative_process", list_style="bulleted"),
        SectionKind("design_features", list_style="bulleted"),
        SectionKind("service_excellence"),
        SectionKind("subscription_details", list_style="bulleted"),
        SectionKind("insurance_information"),
        SectionKind("payment_methods", list_style="bulleted"),
        SectionKind("event_details", list_style="bulleted"),
        SectionKind("legal_notice"),
        SectionKind("shipping_information"),
        SectionKind("return_policy", list_style="bulleted"),
        SectionKind("bank_details"),
        SectionKind("payment_terms", list_style="bulleted"),
        SectionKind("payment_information"),
        SectionKind("terms_and_conditions"),
        SectionKind("notes"),
        SectionKind("thank_you_message"),
        SectionKind("footer_message"),
        SectionKind("hipaa_compliance"),
        SectionKind("contact_info"),
        # signature always renders a signing line; copy under it is optional
        SectionKind("signature", text_bearing=False),
    ]
}

# Fields template copy and default labels may reference as {name}.
COPY_PLACEHOLDERS = (
    "company_name",
    "company_email",
    "company_phone",
    "company_website",
    "client_name",
    "invoice_number",
    "invoice_date",
    "due_date",
    "due_days",
    "next_billing_date",
    "currency_code",
    "currency_symbol",
)

BULLET = "•"
BILLING_CYCLE_DAYS = 30


@dataclass(frozen=True)
class ResolvedSection:
    kind: str
    title: str
    lines: Tuple[str, ...]
    list_style: str


def placeholders_in(text: str) -> List[str]:
    return [name for _, name, _, _ in Formatter().parse(text) if name]


def fill_placeholders(lines: Sequence[str], context: Mapping[str, Any]) -> Tuple[str, ...]:
    return tuple(line.format_map(context) for line in lines)


def copy_context(
    values: Mapping[str, Any],
    descriptor: "TemplateDescriptor",
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Placeholder values for template copy, taken from resolved fields."""
    context = {
        "company_name": values.get("company.name"),
        "company_email": values.get("company.email"),
        "company_phone": values.get("company.phone"),
        "company_website": values.get("company.website"),
        "client_name": values.get("client.name"),
        "invoice_number": values.get("invoice_number"),
        "invoice_date": values.get("invoice_date"),
        "due_date": values.get("due_date"),
        "due_days": descriptor.due_days,
        "next_billing_date": due_date_for(values.get("invoice_date"), BILLING_CYCLE_DAYS, today),
        "currency_code": values.get("currency_code"),
        "currency_symbol": values.get("currency_symbol"),
    }
    return {key: ("" if value is None else value) for key, value in context.items()}


def split_lines(text: Any) -> Tuple[str, ...]:
    """
    Override text as display lines. Strings split on newlines only; a leading
    bullet glyph is dropped because list styling belongs to the section kind.
    """
    if text is None:
        return ()
    parts = text.split("\n") if isinstance(text, str) else [str(part) for part in text if part is not None]
    lines: List[str] = []
    for part in parts:
        line = part.strip()
        if line.startswith(BULLET):
            line = line[len(BULLET):].strip()
        if line:
            lines.append(line)
    return tuple(lines)


def section_lines(
    kind: str,
    descriptor: "TemplateDescriptor",
    record: InvoiceRecord,
    context: Mapping[str, Any],
) -> Tuple[str, ...]:
    toggle = record.toggle(kind)
    override = split_lines(toggle.text) if toggle is not None else ()
    if override:
        return override
    copy = resolve_for(descriptor, f"copy.{kind}")
    if is_empty(copy):
        return ()
    return split_lines(fill_placeholders(copy, context))


def compose_sections(
    toggles: Mapping[str, bool],
    descriptor: "TemplateDescriptor",
    record: InvoiceRecord,
    context: Optional[Mapping[str, Any]] = None,
) -> Tuple[ResolvedSection, ...]:
    """
    Walk the template skeleton in order. A section is rendered when its toggle
    is on and, for text-bearing kinds, there is override text or default copy.
    Everything else is omitted from the result.
    """
    if context is None:
        context = copy_context(resolve_fields(record, descriptor), descriptor)
    sections: List[ResolvedSection] = []
    for kind_name in descriptor.skeleton:
        if not toggles.get(kind_name, False):
            continue
        kind = SECTION_KINDS[kind_name]
        lines = section_lines(kind_name, descriptor, record, context)
        if kind.text_bearing and not lines:
            logger.debug("Omitting %s on %s: no text", kind_name, descriptor.key)
            continue
        toggle = record.toggle(kind_name)
        title = toggle.title.strip() if toggle is not None and not is_empty(toggle.title) else None
        if title is None:
            title = resolve_for(descriptor, f"title.{kind_name}")
        sections.append(
            ResolvedSection(
                kind=kind_name,
                title=title,
                lines=lines,
                list_style=descriptor.list_styles.get(kind_name, kind.list_style),
            )
        )
    return tuple(sections)
