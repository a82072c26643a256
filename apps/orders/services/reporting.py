"""
Received-items report.

Flattens the lines of received orders so they can be totalled per item,
franchise or period.
"""

from datetime import date
from typing import List, Optional

from apps.orders.models import Order, OrderStatus


def received_items_report(
    *,
    claims,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    franchise_id: Optional[str] = None
) -> List[dict]:
    """
    Lines of RECEIVED orders, each tagged with its order's details.

    Franchise callers only ever see their own franchise. The date range is
    inclusive and applied only when both bounds are given.

    Args:
        claims: caller identity
        start_date: first received date to include
        end_date: last received date to include
        franchise_id: restrict to one franchise (non-franchise callers)

    Returns:
        list of line dicts with order_number, franchise_name and received_at
    """
    orders = Order.objects.filter(status=OrderStatus.RECEIVED)

    if claims.is_franchise:
        orders = orders.filter(franchise_id=claims.franchise_id)
    elif franchise_id:
        orders = orders.filter(franchise_id=franchise_id)

    if start_date and end_date:
        orders = orders.filter(received_at__date__range=(start_date, end_date))

    report = []
    for order in orders.prefetch_related('lines').order_by('received_at'):
        for line in order.lines.all():
            report.append({
                'id': str(line.id),
                'order_id': str(order.id),
                'item_id': line.item_id,
                'item_name': line.item_name,
                'ordered_qty': line.ordered_qty,
                'uom': line.uom,
                'unit_price': line.unit_price,
                'vendor_price': line.vendor_price,
                'line_total': line.line_total,
                'vendor_cost_line': line.vendor_cost_line,
                'order_number': order.order_number,
                'franchise_name': order.franchise_name,
                'received_at': order.received_at,
            })

    return report
