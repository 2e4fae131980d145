from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional

from .. import config
from .errors import InvalidInvoiceValue, InvalidLineItem
from .records import LineItem


CENT = Decimal(1).scaleb(-config.MONEY_PLACES)
ZERO = Decimal(0).quantize(CENT)


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    service_charge: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal


def parse_number(value: Any) -> Optional[Decimal]:
    """
    Decimal from an int, float, Decimal or numeric string ("1,250.50").
    Empty input gives None. Anything else raises ValueError.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        number = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"Not a number: {value!r}") from None
    else:
        raise ValueError(f"Not a number: {value!r}")
    if not number.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return number


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal, symbol: str) -> str:
    return f"{symbol}{round_money(amount):,.2f}"


def format_quantity(quantity: Decimal) -> str:
    text = format(quantity.normalize(), "f")
    return text if text != "-0" else "0"


def format_rate(rate: Decimal) -> str:
    """Percentage without trailing zeros: 8.50 -> "8.5", 18 -> "18"."""
    return format_quantity(rate)


def _item_number(item: LineItem, name: str) -> Decimal:
    try:
        number = parse_number(getattr(item, name))
    except ValueError as exc:
        raise InvalidLineItem(f"Line item {item.id!r}: {name} {exc}", item_id=item.id) from exc
    if number is None:
        return Decimal(0)
    if number < 0:
        raise InvalidLineItem(
            f"Line item {item.id!r}: {name} must not be negative ({number})",
            item_id=item.id,
        )
    return number


def line_amount(item: LineItem) -> Decimal:
    quantity = _item_number(item, "quantity")
    rate = _item_number(item, "rate")
    computed = round_money(quantity * rate)
    if item.amount is None or (isinstance(item.amount, str) and not item.amount.strip()):
        if item.amount_override:
            raise InvalidLineItem(
                f"Line item {item.id!r}: amount override without an amount",
                item_id=item.id,
            )
        return computed
    amount = _item_number(item, "amount")
    if item.amount_override:
        if round_money(amount) != amount:
            raise InvalidLineItem(
                f"Line item {item.id!r}: override amount has more than "
                f"{config.MONEY_PLACES} decimal places ({amount})",
                item_id=item.id,
            )
        return round_money(amount)
    if round_money(amount) != computed:
        raise InvalidLineItem(
            f"Line item {item.id!r}: amount {amount} does not match "
            f"quantity x rate ({computed})",
            item_id=item.id,
        )
    return computed


def line_amounts(items: Iterable[LineItem]) -> List[Decimal]:
    seen = set()
    amounts: List[Decimal] = []
    for item in items:
        if item.id in seen:
            raise InvalidLineItem(f"Duplicate line item id: {item.id!r}", item_id=item.id)
        seen.add(item.id)
        amounts.append(line_amount(item))
    return amounts


def invoice_value(value: Any, field: str) -> Decimal:
    """Invoice-level rate or money value; empty counts as zero."""
    try:
        number = parse_number(value)
    except ValueError as exc:
        raise InvalidInvoiceValue(f"{field}: {exc}", field=field) from exc
    if number is None:
        return Decimal(0)
    if number < 0:
        raise InvalidInvoiceValue(f"{field} must not be negative ({number})", field=field)
    return number


def compute_totals(
    items: Iterable[LineItem],
    tax_rate: Any,
    shipping: Any = 0,
    service_charge_rate: Any = 0,
) -> Totals:
    """
    Subtotal, service charge, tax, shipping and grand total for a set of
    line items. Tax applies to subtotal plus service charge. An invoice
    with no line items totals exactly zero, shipping included.
    """
    tax_pct = invoice_value(tax_rate, "tax_rate")
    shipping_cost = round_money(invoice_value(shipping, "shipping_cost"))
    service_pct = invoice_value(service_charge_rate, "service_charge_rate")

    amounts = line_amounts(items)
    if not amounts:
        return Totals(ZERO, ZERO, ZERO, ZERO, ZERO)

    subtotal = round_money(sum(amounts, Decimal(0)))
    service_charge = round_money(subtotal * service_pct / 100)
    tax = round_money((subtotal + service_charge) * tax_pct / 100)
    total = subtotal + service_charge + tax + shipping_cost
    return Totals(
        subtotal=subtotal,
        service_charge=service_charge,
        tax=tax,
        shipping=shipping_cost,
        total=total,
    )
