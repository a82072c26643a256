"""
Order line costing.

Pure functions: given the requested items and the resolved vendor's catalog,
produce the order lines and both order totals. No database access.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence

ZERO = Decimal('0.00')
CENTS = Decimal('0.01')

# Largest amount a DecimalField(max_digits=12, decimal_places=2) column holds
MAX_AMOUNT = Decimal('9999999999.99')


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    vendor_price: Decimal


@dataclass
class CostedLine:
    item_id: str
    item_name: str
    ordered_qty: Decimal
    uom: str
    unit_price: Decimal
    vendor_price: Decimal
    line_total: Decimal
    vendor_cost_line: Decimal


@dataclass
class CostedOrder:
    lines: List[CostedLine] = field(default_factory=list)
    total_amount: Decimal = ZERO
    total_vendor_cost: Decimal = ZERO


def normalize_item_name(name: Optional[str]) -> str:
    """Catalog matching key: trimmed and lower-cased."""
    return (name or '').strip().lower()


def to_decimal(value) -> Decimal:
    """
    Coerce a quantity or price to Decimal.

    Missing values count as zero instead of failing the request.
    """
    if value is None or value == '':
        return Decimal('0')
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Not a number: {value!r}")
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def find_vendor_price(item_name: str, catalog: Sequence[CatalogEntry]) -> Decimal:
    """
    Vendor price for ``item_name``; first case/whitespace-insensitive match wins.

    An unknown item costs the vendor nothing as far as this order is
    concerned; only the vendor-cost view degrades.
    """
    key = normalize_item_name(item_name)
    for entry in catalog:
        if normalize_item_name(entry.name) == key:
            return to_decimal(entry.vendor_price)
    return Decimal('0')


def compute_lines(requested_items: Iterable[dict], catalog: Sequence[CatalogEntry]) -> CostedOrder:
    """
    Cost every requested item and total both views.

    Args:
        requested_items: dicts with item_id, item_name, quantity, uom, unit_price
        catalog: the vendor's catalog entries

    Returns:
        CostedOrder whose totals are exactly the sums of its line fields
    """
    costed = CostedOrder()

    for item in requested_items:
        quantity = to_decimal(item.get('quantity'))
        unit_price = to_decimal(item.get('unit_price'))
        vendor_price = find_vendor_price(item.get('item_name'), catalog)

        line = CostedLine(
            item_id=str(item.get('item_id') or ''),
            item_name=item.get('item_name') or '',
            ordered_qty=quantity,
            uom=item.get('uom') or '',
            unit_price=money(unit_price),
            vendor_price=money(vendor_price),
            line_total=money(quantity * unit_price),
            vendor_cost_line=money(quantity * vendor_price),
        )
        costed.lines.append(line)
        costed.total_amount += line.line_total
        costed.total_vendor_cost += line.vendor_cost_line

    return costed


def amounts_in_range(costed: CostedOrder) -> bool:
    """Whether every line amount and both totals fit the order money columns."""
    amounts = [costed.total_amount, costed.total_vendor_cost]
    for line in costed.lines:
        amounts.extend([line.line_total, line.vendor_cost_line])
    return all(abs(amount) <= MAX_AMOUNT for amount in amounts)
