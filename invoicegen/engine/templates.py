from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from slugify import slugify

from .. import config
from .defaults import BASE_TOGGLES
from .errors import UnknownTemplate
from .qa import validate_registry

logger = logging.getLogger(__name__)


DEFAULT_COLUMNS: Tuple[str, ...] = ("description", "quantity", "rate", "amount")
SKU_COLUMNS: Tuple[str, ...] = ("description", "sku", "quantity", "rate", "amount")

# Short names the selection surface is known to send.
ALIASES: Dict[str, str] = {
    "international": "international-invoice",
    "subscription": "subscription-invoice",
    "receipt": "receipt-paid",
    "product": "product-invoice",
    "hospitality": "restaurant",
}


@dataclass(frozen=True)
class PlaceholderItem:
    description: str
    quantity: Decimal
    rate: Decimal
    details: str = ""
    sku: str = ""


@dataclass(frozen=True)
class TemplateDescriptor:
    key: str
    title: str
    industry: str
    skeleton: Tuple[str, ...]
    defaults: Mapping[str, Any]
    toggles: Mapping[str, bool]
    extra_fields: Tuple[str, ...] = ()
    columns: Tuple[str, ...] = DEFAULT_COLUMNS
    list_styles: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    service_charge: bool = False
    due_days: int = 30
    placeholder_items: Tuple[PlaceholderItem, ...] = ()


def _template(
    key: str,
    title: str,
    industry: str,
    skeleton: Iterable[str],
    values: Optional[Dict[str, Any]] = None,
    style: Optional[Dict[str, str]] = None,
    labels: Optional[Dict[str, str]] = None,
    titles: Optional[Dict[str, str]] = None,
    copy: Optional[Dict[str, Tuple[str, ...]]] = None,
    fields: Optional[Dict[str, str]] = None,
    toggles: Optional[Dict[str, bool]] = None,
    extra_fields: Iterable[str] = (),
    columns: Tuple[str, ...] = DEFAULT_COLUMNS,
    list_styles: Optional[Dict[str, str]] = None,
    service_charge: bool = False,
    due_days: int = 30,
    placeholder_items: Iterable[PlaceholderItem] = (),
) -> TemplateDescriptor:
    skeleton = tuple(skeleton)
    extra_fields = tuple(extra_fields)
    defaults: Dict[str, Any] = dict(values or {})
    defaults.update({f"style.{name}": value for name, value in (style or {}).items()})
    defaults.update({f"label.{name}": value for name, value in (labels or {}).items()})
    defaults.update({f"title.{name}": value for name, value in (titles or {}).items()})
    defaults.update({f"copy.{name}": tuple(lines) for name, lines in (copy or {}).items()})
    defaults.update({f"field.{name}": value for name, value in (fields or {}).items()})

    merged: Dict[str, bool] = dict(BASE_TOGGLES)
    for kind in skeleton:
        merged.setdefault(kind, True)
    for name in extra_fields:
        merged.setdefault(name, True)
    merged.update(toggles or {})

    return TemplateDescriptor(
        key=key,
        title=title,
        industry=industry,
        skeleton=skeleton,
        defaults=MappingProxyType(defaults),
        toggles=MappingProxyType(merged),
        extra_fields=extra_fields,
        columns=columns,
        list_styles=MappingProxyType(dict(list_styles or {})),
        service_charge=service_charge,
        due_days=due_days,
        placeholder_items=tuple(placeholder_items),
    )


def _item(description: str, quantity: str, rate: str, details: str = "", sku: str = "") -> PlaceholderItem:
    return PlaceholderItem(description, Decimal(quantity), Decimal(rate), details, sku)


CARD_PAYMENT = (
    "Method: Credit Card",
    "Visa, MasterCard, American Express accepted",
    "Payment due upon receipt",
)


_DESCRIPTORS: List[TemplateDescriptor] = [
    _template(
        "standard",
        "Standard",
        "General",
        skeleton=(
            "payment_terms",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
            "signature",
        ),
        values={"company.tagline": "Professional Services & Solutions"},
        style={"primary_color": "#7c3aed", "text_color": "#1a1a2e", "logo_position": "left"},
        copy={
            "payment_terms": (
                "Net 30 days from invoice date",
                "Bank transfer preferred",
                "Late payment: 1.5% monthly interest",
            ),
        },
        toggles={"payment_terms": False},
    ),
    _template(
        "custom",
        "Custom",
        "General",
        skeleton=(
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
            "signature",
        ),
        style={"primary_color": "#8b5cf6", "accent_color": "#a78bfa", "logo_position": "left"},
    ),
    _template(
        "tech",
        "Software Services",
        "Technology",
        skeleton=(
            "project_deliverables",
            "payment_terms",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
            "contact_info",
            "signature",
        ),
        values={
            "company.name": "TechSolutions Inc.",
            "company.email": "billing@techsolutions.com",
            "company.phone": "(555) 123-TECH",
            "company.address": "123 Innovation Drive, Tech City, TC 12345",
            "company.tagline": "Software Development • Cloud Solutions • Digital Innovation",
            "company.website": "www.techsolutions.com",
            "client.name": "StartupXYZ",
            "client.email": "finance@startupxyz.com",
            "client.address": "456 Tech Boulevard, Innovation City, IC 67890",
            "invoice_number": "TECH-2024-001",
        },
        style={"primary_color": "#9333ea", "text_color": "#1a1a2e", "logo_position": "left"},
        labels={
            "invoice_title": "SOFTWARE SERVICES INVOICE",
            "bill_to": "Client Information:",
            "project_id": "Project ID:",
            "quantity": "Hours",
        },
        fields={"project_id": "PRJ-APP-2024-001"},
        extra_fields=("project_id",),
        copy={
            "project_deliverables": (
                "Responsive web application",
                "Database design and implementation",
                "API development and integration",
                "Cloud deployment and configuration",
                "Source code and documentation provided",
            ),
            "payment_terms": (
                "Net 15 days from invoice date",
                "Bank transfer preferred",
                "Cryptocurrency accepted",
                "Late payment: 2% monthly fee",
            ),
            "thank_you_message": ("Thank you for choosing our tech solutions.",),
            "footer_message": (
                "This invoice covers professional software development services. "
                "For technical support or billing questions, contact our team.",
            ),
            "contact_info": ("GitHub: @techsolutions", "dev@techsolutions.com", "{company_website}"),
            "signature": ("Lead Developer Name", "Full-Stack Engineer"),
        },
        toggles={"company_tagline": True, "footer_message": True, "signature": True},
        placeholder_items=(
            _item(
                "Full-Stack Web Development",
                "40",
                "125",
                details="React.js • Node.js • MongoDB • AWS Deployment",
            ),
        ),
    ),
    _template(
        "modern-tech",
        "Modern Tech",
        "Technology",
        skeleton=(
            "project_summary",
            "payment_terms",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
        ),
        style={"primary_color": "#06b6d4", "accent_color": "#22d3ee", "layout": "modern", "corner_radius": "large"},
        labels={
            "project_name": "Project Name:",
            "tech_lead": "Tech Lead:",
            "project_phase": "Project Phase:",
            "quantity": "Hours",
            "rate": "Hourly Rate",
        },
        extra_fields=("project_name", "tech_lead", "project_phase"),
        copy={
            "payment_terms": ("Net 30 days from invoice date", "Bank transfer preferred"),
        },
        toggles={"project_summary": False},
        placeholder_items=(_item("Frontend Development", "40", "175"),),
    ),
    _template(
        "product-invoice",
        "Product Invoice",
        "Retail",
        skeleton=(
            "shipping_information",
            "return_policy",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
        ),
        values={"shipping_cost": Decimal("9.99")},
        style={"primary_color": "#10b981", "accent_color": "#34d399", "logo_position": "right"},
        labels={
            "order_number": "Order Number:",
            "shipping_method": "Shipping Method:",
            "description": "Product",
            "rate": "Unit Price",
        },
        fields={"shipping_method": "Standard"},
        extra_fields=("order_number", "shipping_method"),
        columns=SKU_COLUMNS,
        copy={
            "shipping_information": (
                "Standard shipping: 3-5 business days",
                "Tracking number will be provided",
            ),
            "return_policy": (
                "30-day return policy",
                "Items must be in original condition",
            ),
            "payment_information": CARD_PAYMENT,
        },
        toggles={"shipping_line": True},
        placeholder_items=(_item("Product A", "2", "29.99"),),
    ),
    _template(
        "retail",
        "Retail Sales",
        "Retail",
        skeleton=(
            "shipping_information",
            "return_policy",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
            "contact_info",
        ),
        values={
            "company.tagline": "Quality Products • Fast Shipping • Customer Satisfaction",
            "company.website": "www.premiumretail.com",
        },
        style={
            "primary_color": "#16a34a",
            "text_color": "#000000",
            "logo_position": "right",
            "table_style": "striped",
        },
        labels={
            "invoice_title": "SALES INVOICE",
            "bill_to": "Customer Information:",
            "invoice_number": "Order #:",
            "invoice_date": "Order Date:",
            "due_date": "Payment Due:",
            "sales_rep": "Sales Rep:",
            "description": "Product Description",
            "rate": "Unit Price",
            "amount": "Total",
            "total": "Total Amount:",
        },
        fields={"sales_rep": "Sarah Johnson"},
        extra_fields=("sales_rep",),
        columns=SKU_COLUMNS,
        copy={
            "shipping_information": (
                "Standard shipping: 3-5 business days",
                "Express shipping available",
                "Free shipping on orders over $100",
                "Tracking number will be provided",
            ),
            "return_policy": (
                "30-day return policy",
                "Items must be in original condition",
                "Free return shipping",
                "Refund processed within 5-7 days",
            ),
            "payment_information": CARD_PAYMENT,
            "thank_you_message": ("Thank you for your purchase!",),
            "footer_message": (
                "We appreciate your business and look forward to serving you again.",
                "For questions about this order, please contact our customer service team.",
            ),
            "contact_info": ("support@premiumretail.com", "(555) 123-SHOP", "{company_website}"),
        },
        list_styles={"shipping_information": "bulleted"},
        toggles={"company_tagline": True, "shipping_line": True, "footer_message": True},
    ),
    _template(
        "healthcare",
        "Healthcare",
        "Healthcare",
        skeleton=(
            "insurance_information",
            "payment_methods",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "hipaa_compliance",
            "signature",
        ),
        values={
            "company.name": "MedCare Clinic",
            "company.email": "info@medcare.com",
            "company.phone": "(555) 123-HEAL",
            "company.address": "123 Medical Plaza, Health City, HC 12345",
            "company.tagline": "Licensed Medical Practice • HIPAA Compliant",
            "client.name": "John Doe",
            "client.email": "patient@example.com",
            "client.address": "456 Patient St, City, State 67890",
            "invoice_number": "MED-2024-001",
        },
        style={
            "primary_color": "#dc2626",
            "accent_color": "#f87171",
            "text_color": "#1a1a2e",
            "logo_position": "left",
        },
        labels={
            "invoice_title": "MEDICAL INVOICE",
            "bill_to": "Patient Information:",
            "provider_id": "Provider ID:",
            "patient_id": "Patient ID:",
            "description": "Medical Service",
            "sku": "CPT Code",
        },
        fields={"provider_id": "MD-12345", "patient_id": "PAT-2024-001"},
        extra_fields=("provider_id", "patient_id"),
        columns=SKU_COLUMNS,
        copy={
            "insurance_information": (
                "Please submit this invoice to your insurance provider.",
                "Payment due within {due_days} days of service.",
            ),
            "payment_methods": (
                "Cash or Check",
                "Credit/Debit Card",
                "HSA/FSA Cards",
                "Online Payment Portal",
            ),
            "thank_you_message": ("Thank you for choosing our medical services.",),
            "hipaa_compliance": (
                "This invoice is HIPAA compliant and contains protected health information.",
                "For questions about this invoice, please contact our billing department.",
            ),
            "signature": ("Dr. [Provider Name], MD",),
        },
        toggles={"company_tagline": True, "signature": True},
        placeholder_items=(_item("Medical Consultation", "1", "150", sku="99213"),),
    ),
    _template(
        "consulting",
        "Consulting",
        "Professional Services",
        skeleton=(
            "project_summary",
            "payment_terms",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
            "signature",
        ),
        values={
            "company.name": "Strategic Consulting Group",
            "company.email": "consulting@strategicgroup.com",
            "company.phone": "(555) 123-STRATEGY",
            "company.address": "123 Business District, Corporate City, CC 12345",
            "company.tagline": "Professional Consulting Services • Strategic Advisory",
            "client.name": "ABC Corporation",
            "client.email": "finance@abccorp.com",
            "client.address": "456 Corporate Blvd, Business City, BC 67890",
            "invoice_number": "CON-2024-001",
        },
        style={
            "primary_color": "#2563eb",
            "accent_color": "#60a5fa",
            "text_color": "#1a1a2e",
            "logo_position": "left",
        },
        labels={
            "invoice_title": "PROFESSIONAL SERVICES INVOICE",
            "project_code": "Project Code:",
            "description": "Service Description",
            "quantity": "Hours",
        },
        fields={"project_code": "PRJ-2024-001"},
        extra_fields=("project_code",),
        copy={
            "project_summary": (
                "Strategic planning and advisory services delivered as per project scope.",
                "All deliverables completed within agreed timeline.",
                "Next milestone: Implementation phase",
            ),
            "footer_message": (
                "This invoice represents professional consulting services rendered.",
                "For questions about this invoice, please contact our accounts team.",
            ),
            "signature": ("[Senior Consultant Name], MBA",),
        },
        toggles={"company_tagline": True, "payment_terms": False, "footer_message": True, "signature": True},
        placeholder_items=(_item("Strategic Planning Consultation", "8", "200"),),
    ),
    _template(
        "legal",
        "Legal Services",
        "Legal",
        skeleton=(
            "legal_notice",
            "payment_terms",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
            "signature",
        ),
        values={
            "company.name": "Law & Associates",
            "company.email": "billing@lawassociates.com",
            "company.phone": "(555) 123-LEGAL",
            "company.address": "123 Legal Plaza, Justice City, JC 12345",
            "company.tagline": "Licensed Attorneys • Professional Legal Services • Confidential",
            "invoice_number": "LEG-2024-001",
        },
        style={
            "primary_color": "#475569",
            "accent_color": "#94a3b8",
            "text_color": "#1a1a2e",
            "logo_position": "left",
        },
        labels={
            "invoice_title": "LEGAL SERVICES INVOICE",
            "bill_to": "Client Information:",
            "matter_number": "Matter #:",
            "description": "Legal Service",
            "quantity": "Hours",
        },
        fields={"matter_number": "MAT-2024-001"},
        extra_fields=("matter_number",),
        copy={
            "legal_notice": (
                "This invoice represents professional legal services rendered. "
                "All communications are protected by attorney-client privilege. "
                "Payment is due within {due_days} days.",
            ),
            "payment_terms": (
                "Payment due within {due_days} days",
                "Late payment: 1.5% monthly interest",
                "Retainer required for new matters",
                "Wire transfer preferred for large amounts",
            ),
            "thank_you_message": ("Thank you for your trust in our legal services.",),
            "footer_message": (
                "This invoice contains confidential information protected by attorney-client privilege.",
                "For questions about this invoice, please contact our billing department.",
            ),
            "signature": ("John Smith, Esq. • Bar #12345",),
        },
        toggles={"company_tagline": True, "footer_message": True, "signature": True},
        placeholder_items=(_item("Legal Consultation", "3.5", "250"),),
    ),
    _template(
        "restaurant",
        "Restaurant & Catering",
        "Hospitality",
        skeleton=(
            "event_details",
            "payment_terms",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
            "contact_info",
        ),
        values={
            "company.name": "Bella Vista Restaurant",
            "company.email": "catering@bellavista.com",
            "company.phone": "(555) 123-DINE",
            "company.address": "123 Culinary Street, Food City, FC 12345",
            "company.tagline": "Fine Dining • Catering Services • Private Events",
            "company.website": "www.bellavista.com",
            "client.name": "Corporate Event",
            "client.email": "events@company.com",
            "client.address": "456 Event Center, City, State 67890",
            "invoice_number": "CAT-2024-001",
            "service_charge_rate": 18,
        },
        style={
            "primary_color": "#ea580c",
            "accent_color": "#fb923c",
            "text_color": "#1a1a2e",
            "logo_position": "left",
        },
        labels={
            "invoice_title": "CATERING INVOICE",
            "bill_to": "Event Information:",
            "invoice_number": "Order #:",
            "invoice_date": "Event Date:",
            "guest_count": "Guest Count:",
            "description": "Menu Item",
            "quantity": "Quantity",
            "rate": "Unit Price",
            "amount": "Total",
            "service_charge": "Service Charge",
            "total": "Total Amount Due:",
        },
        fields={"guest_count": "50 Guests"},
        extra_fields=("guest_count",),
        copy={
            "event_details": (
                "Event setup and breakdown included",
                "Professional serving staff provided",
                "Linens and tableware included",
                "Gratuity included in service charge",
            ),
            "payment_terms": (
                "50% deposit required to confirm",
                "Final payment due 7 days before event",
                "Cancellation policy: 48 hours notice",
                "All major credit cards accepted",
            ),
            "payment_information": (
                "Please remit payment to the address above. "
                "For large events, we accept wire transfers and corporate checks.",
            ),
            "terms_and_conditions": (
                "This invoice is subject to our standard terms and conditions. "
                "All catering services are provided in accordance with food safety "
                "standards and local health regulations.",
            ),
            "thank_you_message": ("Thank you for choosing Bella Vista for your event!",),
            "footer_message": (
                "We look forward to creating a memorable dining experience for you and your guests.",
                "For questions about this invoice, please contact our events team.",
            ),
            "contact_info": ("{company_email}", "{company_phone}", "{company_website}"),
        },
        toggles={"company_tagline": True, "footer_message": True},
        service_charge=True,
        due_days=15,
        placeholder_items=(
            _item(
                "Gourmet Buffet Package",
                "50",
                "45",
                details="Includes: Appetizers, Main Course, Desserts, Beverages",
            ),
        ),
    ),
    _template(
        "creative-agency",
        "Creative Agency",
        "Creative",
        skeleton=(
            "project_deliverables",
            "creative_process",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
        ),
        style={
            "primary_color": "#db2777",
            "accent_color": "#ec4899",
            "text_color": "#000000",
            "logo_position": "left",
        },
        labels={
            "invoice_title": "CREATIVE INVOICE",
            "bill_to": "Client Information:",
            "invoice_number": "Project #:",
            "invoice_date": "Project Date:",
            "creative_director": "Creative Director:",
            "description": "Creative Service",
            "quantity": "Hours",
            "total": "Total Amount Due:",
        },
        fields={"creative_director": "Alex Creative"},
        extra_fields=("creative_director",),
        copy={
            "project_deliverables": (
                "Logo design in multiple formats",
                "Brand guidelines document",
                "Color palette and typography",
                "All source files included",
            ),
            "creative_process": (
                "Initial concept presentation",
                "2 rounds of revisions included",
                "Final delivery within 2 weeks",
                "Ongoing support available",
            ),
            "payment_information": (
                "Method: Bank Transfer",
                "Account: 1234567890, Routing: 987654321",
                "Please include project number in payment reference",
            ),
            "thank_you_message": ("Thank you for choosing our creative services!",),
            "footer_message": (
                "We're excited to bring your vision to life.",
                "For questions about this project, contact our creative team.",
            ),
        },
        toggles={"footer_message": True},
    ),
    _template(
        "minimalist-dark",
        "Minimalist Dark",
        "General",
        skeleton=(
            "payment_terms",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
        ),
        style={
            "primary_color": "#ffffff",
            "accent_color": "#ffffff",
            "text_color": "#ffffff",
            "background_color": "#1a1a1a",
            "logo_position": "left",
            "table_style": "minimal",
            "layout": "minimal",
        },
        labels={
            "invoice_title": "Invoice",
            "from": "From",
            "bill_to": "Bill To",
            "invoice_number": "Invoice #",
            "invoice_date": "Date",
            "due_date": "Due",
            "subtotal": "Subtotal",
            "tax": "Tax",
            "total": "Total",
        },
        copy={
            "payment_terms": ("Payment due within {due_days} days",),
            "thank_you_message": ("Thank you for your business",),
        },
    ),
    _template(
        "elegant-luxury",
        "Elegant Luxury",
        "Premium Services",
        skeleton=(
            "service_excellence",
            "payment_terms",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
        ),
        style={
            "primary_color": "#d97706",
            "accent_color": "#f59e0b",
            "text_color": "#000000",
            "logo_position": "center",
            "layout": "detailed",
            "corner_radius": "large",
            "font_family": "Playfair Display",
        },
        labels={
            "bill_to": "Distinguished Client",
            "invoice_number": "Invoice Number",
            "invoice_date": "Service Date",
            "due_date": "Payment Due",
            "description": "Premium Service",
            "quantity": "Duration",
            "amount": "Investment",
            "subtotal": "Subtotal",
            "tax": "Tax",
            "total": "Total Investment",
        },
        titles={"payment_terms": "Payment Terms", "payment_information": "Payment Information"},
        copy={
            "service_excellence": (
                "Our premium services are delivered with the highest standards of excellence. "
                "Each service is tailored to meet your unique requirements and exceed your expectations.",
            ),
            "payment_terms": (
                "Payment is due within {due_days} days of service completion. "
                "We accept all major credit cards, wire transfers, and other premium payment methods.",
            ),
            "thank_you_message": ("Thank you for choosing our luxury services",),
            "footer_message": (
                "We are honored to serve you and look forward to exceeding your expectations",
            ),
        },
        list_styles={"payment_terms": "plain"},
        toggles={"footer_message": True},
    ),
    _template(
        "business-professional",
        "Business Professional",
        "Corporate",
        skeleton=(
            "project_summary",
            "payment_terms",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
        ),
        style={
            "primary_color": "#4f46e5",
            "accent_color": "#6366f1",
            "text_color": "#000000",
            "logo_position": "left",
        },
        labels={
            "invoice_title": "CORPORATE INVOICE",
            "bill_to": "Corporate Client:",
            "invoice_date": "Service Period:",
            "account_manager": "Account Manager:",
            "description": "Service Description",
            "quantity": "Hours",
            "total": "Total Amount Due:",
        },
        titles={"payment_terms": "Corporate Payment Terms:"},
        fields={"account_manager": "Sarah Johnson"},
        extra_fields=("account_manager",),
        copy={
            "project_summary": (
                "Strategic business process optimization services delivered as per project scope. "
                "All deliverables completed within agreed timeline and budget parameters.",
                "Next phase: Implementation and monitoring",
            ),
            "payment_terms": (
                "Net {due_days} days from invoice date",
                "Corporate purchase order required",
                "Wire transfer preferred for large amounts",
                "Late payment: 1.5% monthly interest",
            ),
            "thank_you_message": ("Thank you for your continued business partnership.",),
            "footer_message": (
                "This invoice represents professional corporate services rendered.",
                "For questions about this invoice, please contact your account manager.",
            ),
        },
        toggles={"footer_message": True},
    ),
    _template(
        "freelancer-creative",
        "Freelancer Creative",
        "Creative",
        skeleton=(
            "project_deliverables",
            "payment_terms",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
            "contact_info",
        ),
        values={
            "company.tagline": "Independent Creative • Portfolio: creativestudio.com • Available for Projects",
            "company.website": "creativestudio.com",
        },
        style={
            "primary_color": "#0d9488",
            "text_color": "#000000",
            "logo_position": "right",
            "table_style": "striped",
        },
        labels={
            "invoice_title": "CREATIVE PROJECT INVOICE",
            "bill_to": "Client Information:",
            "invoice_number": "Project #:",
            "invoice_date": "Project Date:",
            "freelancer_name": "Freelancer:",
            "hourly_rate": "Hourly Rate:",
            "description": "Creative Work",
            "quantity": "Hours",
            "total": "Total Amount Due:",
        },
        titles={"payment_terms": "Freelancer Terms:"},
        fields={"freelancer_name": "Your Name", "hourly_rate": "$75/hr"},
        extra_fields=("freelancer_name", "hourly_rate"),
        copy={
            "project_deliverables": (
                "Logo design in multiple formats",
                "Business card design",
                "Brand guidelines document",
                "All source files included",
            ),
            "payment_terms": (
                "Payment due within {due_days} days",
                "2 rounds of revisions included",
                "PayPal, Venmo, or bank transfer",
                "Portfolio: {company_website}",
            ),
            "payment_information": (
                "Method: PayPal, Venmo, or Bank Transfer",
                "Multiple payment options available",
                "Payment due within {due_days} days",
            ),
            "thank_you_message": ("Thank you for choosing my creative services!",),
            "footer_message": (
                "I'm excited to bring your vision to life. "
                "For questions about this project, feel free to reach out anytime.",
            ),
            "contact_info": ("{company_website}", "@creativefreelancer"),
        },
        toggles={"company_tagline": True, "footer_message": True},
        due_days=15,
    ),
    _template(
        "modern-gradient",
        "Modern Gradient",
        "Creative",
        skeleton=(
            "design_features",
            "payment_terms",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
        ),
        values={"company.tagline": "Trendy Design • Pastel Aesthetics • Modern Creativity"},
        style={
            "primary_color": "#9333ea",
            "accent_color": "#ec4899",
            "text_color": "#000000",
            "logo_position": "left",
            "layout": "modern",
            "corner_radius": "large",
        },
        labels={
            "bill_to": "Client Information:",
            "description": "Creative Service",
        },
        titles={"payment_terms": "Creative Terms:"},
        copy={
            "design_features": (
                "Modern gradient backgrounds",
                "Pastel color schemes",
                "Trendy typography",
                "Instagram-worthy aesthetics",
            ),
            "payment_terms": (
                "Payment due within {due_days} days",
                "3 rounds of revisions included",
                "All modern file formats",
                "Social media ready assets",
            ),
        },
        toggles={"company_tagline": True, "thank_you_message": False},
    ),
    _template(
        "international-invoice",
        "International",
        "International",
        skeleton=(
            "bank_details",
            "terms_and_conditions",
            "payment_information",
            "notes",
            "thank_you_message",
            "footer_message",
            "contact_info",
        ),
        values={
            "company.tagline": "International Services • Multi-Currency • Global Operations",
            "company.website": "www.globalsolutions.com",
        },
        style={
            "primary_color": "#2563eb",
            "text_color": "#1a1a2e",
            "logo_position": "right",
            "table_style": "striped",
        },
        labels={
            "invoice_title": "INTERNATIONAL INVOICE",
            "bill_to": "International Client:",
            "invoice_date": "Invoice Date:",
            "description": "Service Description",
            "rate": "Unit Price ({currency_code})",
            "amount": "Amount ({currency_code})",
        },
        titles={"payment_information": "International Payment:"},
        copy={
            "bank_details": (
                "Bank: International Bank Ltd.",
                "SWIFT: INTLUS33",
                "IBAN: US64SVBKUS6S3300958879",
                "Account: 1234567890",
            ),
            "terms_and_conditions": (
                "Payment due within {due_days} days",
                "All amounts in {currency_code}",
                "VAT/GST included where applicable",
                "International wire transfer preferred",
            ),
            "payment_information": (
                "International wire transfer to the bank details above",
                "Please include invoice number {invoice_number} in the transfer reference",
            ),
            "thank_you_message": ("Thank you for your international business partnership.",),
            "footer_message": (
                "This invoice represents international services rendered in accordance with global standards.",
                "For questions about this invoice, please contact our international billing team.",
            ),
            "contact_info": ("billing@globalsolutions.com", "+1 (555) 123-GLOBAL", "{company_website}"),
        },
        list_styles={"terms_and_conditions": "bulleted"},
        toggles={"company_tagline": True, "currency": True, "footer_message": True},
    ),
    _template(
        "receipt-paid",
        "Paid Receipt",
        "Receipt",
        skeleton=(
            "paid_badge",
            "payment_confirmation",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
            "contact_info",
        ),
        values={
            "company.name": "Your Business Name",
            "company.email": "receipts@yourbusiness.com",
            "company.phone": "(555) 123-BUSINESS",
            "company.website": "www.business.com",
            "client.name": "Customer Name",
            "client.email": "customer@example.com",
            "client.address": "456 Customer Avenue, City, State 67890",
            "invoice_number": "RCP-2024-001",
            "tax_rate": 0,
        },
        style={"primary_color": "#16a34a", "accent_color": "#4ade80", "text_color": "#000000", "logo_position": "left"},
        labels={
            "invoice_title": "RECEIPT",
            "invoice_number": "Receipt #:",
            "invoice_date": "Payment Date:",
            "due_date": "Paid On:",
            "transaction_id": "Transaction ID:",
        },
        fields={"transaction_id": "TXN-123456789"},
        extra_fields=("transaction_id",),
        copy={
            "payment_confirmation": (
                "Your payment has been successfully processed and received. "
                "This receipt serves as confirmation of your payment and can be used for your records.",
            ),
            "payment_information": CARD_PAYMENT,
            "terms_and_conditions": (
                "This receipt confirms payment has been received and processed. "
                "All transactions are subject to our standard terms and conditions.",
            ),
            "thank_you_message": ("Thank you for your payment!",),
            "footer_message": (
                "This receipt confirms your payment has been received and processed.",
                "Please keep this receipt for your records.",
            ),
            "contact_info": ("{company_email}", "{company_phone}", "{company_website}"),
        },
        toggles={"payment_information": True, "footer_message": True},
        due_days=0,
        placeholder_items=(_item("Service Provided", "1", "100"),),
    ),
    _template(
        "subscription-invoice",
        "Subscription",
        "Subscription",
        skeleton=(
            "subscription_details",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
            "contact_info",
        ),
        values={"company.tagline": "Monthly Subscription • Auto-Renewal • SaaS Platform"},
        style={
            "primary_color": "#7c3aed",
            "text_color": "#000000",
            "logo_position": "right",
            "table_style": "striped",
        },
        labels={
            "invoice_title": "SUBSCRIPTION INVOICE",
            "subscription_id": "Subscription ID:",
            "description": "Plan Features",
            "quantity": "Billing Cycle",
        },
        fields={"subscription_id": "SUB-2024-001"},
        extra_fields=("subscription_id",),
        copy={
            "subscription_details": (
                "Billing cycle: Monthly",
                "Next billing date: {next_billing_date}",
                "Auto-renewal: Enabled",
                "Cancel anytime from your account",
            ),
            "payment_information": (
                "Auto-pay enabled",
                "Payment method: Credit Card ending in 4242",
                "Payment due: {due_days} days from invoice date",
                "Late payment: Service may be suspended",
            ),
            "thank_you_message": ("Thank you for your subscription!",),
            "footer_message": (
                "This is a recurring invoice for your subscription services.",
                "To manage your subscription or update payment methods, visit your account portal.",
            ),
            "contact_info": ("Manage Subscription", "Update Payment", "support@subscriptionservice.com"),
        },
        list_styles={"payment_information": "bulleted"},
        toggles={"company_tagline": True, "payment_information": True, "footer_message": True},
        due_days=15,
    ),
    _template(
        "recurring-clients",
        "Recurring Clients",
        "Subscription",
        skeleton=(
            "subscription_details",
            "payment_information",
            "terms_and_conditions",
            "notes",
            "thank_you_message",
            "footer_message",
            "contact_info",
        ),
        values={"company.tagline": "Recurring Services • Subscription Management"},
        style={
            "primary_color": "#3b82f6",
            "text_color": "#000000",
            "logo_position": "right",
            "table_style": "striped",
        },
        labels={
            "invoice_title": "RECURRING INVOICE",
            "bill_to": "Subscriber Information:",
            "invoice_date": "Billing Period:",
            "subscription_id": "Subscription ID:",
            "description": "Service Description",
            "quantity": "Billing Cycle",
        },
        extra_fields=("subscription_id",),
        copy={
            "subscription_details": (
                "Billing cycle: Monthly",
                "Next billing date: {next_billing_date}",
                "Auto-renewal: Enabled",
                "Cancel anytime with 30 days notice",
            ),
            "thank_you_message": ("Thank you for your continued subscription!",),
            "footer_message": (
                "This is a recurring invoice for your subscription services.",
                "To manage your subscription or update payment methods, visit your account portal.",
            ),
            "contact_info": ("Manage Subscription", "Update Payment", "support@serviceprovider.com"),
        },
        toggles={"company_tagline": True, "footer_message": True},
    ),
]


TEMPLATES: Mapping[str, TemplateDescriptor] = MappingProxyType(validate_registry(_DESCRIPTORS))


def normalize_template_id(template_id: Any) -> str:
    if template_id is None:
        return ""
    key = slugify(str(template_id))
    return ALIASES.get(key, key)


def lookup_template(template_id: Any) -> Tuple[TemplateDescriptor, bool]:
    """Descriptor for an id, and whether the generic template stood in for it."""
    descriptor = TEMPLATES.get(normalize_template_id(template_id))
    if descriptor is None:
        return TEMPLATES[config.GENERIC_TEMPLATE_ID], True
    return descriptor, False


def get_template(template_id: Any, strict: bool = False) -> TemplateDescriptor:
    descriptor, fell_back = lookup_template(template_id)
    if fell_back:
        if strict:
            raise UnknownTemplate(str(template_id))
        logger.debug("Template %r not registered, using %s", template_id, descriptor.key)
    return descriptor


def template_ids() -> List[str]:
    return list(TEMPLATES)
