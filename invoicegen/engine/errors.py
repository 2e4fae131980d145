"""
Invoice rendering engine exceptions.

Per-request problems (bad line items, bad money values) are raised to the
caller. Registry problems are raised once, when the template registry is
built at import time, so render calls never see a malformed template.
"""

from __future__ import annotations

from typing import Optional


class InvoiceEngineError(Exception):
    """Base exception for the rendering engine."""


class InvalidLineItem(InvoiceEngineError):
    """A line item has a negative or unparseable quantity, rate or amount."""

    def __init__(self, message: str, item_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.item_id = item_id


class InvalidInvoiceValue(InvoiceEngineError):
    """An invoice-level rate or money value is negative or unparseable."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class UnknownTemplate(InvoiceEngineError):
    """Raised by strict template lookups only; render() falls back instead."""

    def __init__(self, template_id: str) -> None:
        super().__init__(f"Unknown template: {template_id!r}")
        self.template_id = template_id


class TemplateRegistryError(InvoiceEngineError):
    """A template descriptor is structurally invalid."""


class MissingRequiredField(TemplateRegistryError):
    """A required field has no template default and no engine-wide default."""

    def __init__(self, field: str, template_id: str) -> None:
        super().__init__(f"[{template_id}] required field has no default: {field}")
        self.field = field
        self.template_id = template_id
