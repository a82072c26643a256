"""
Receipt gate.

An order cannot be confirmed as received while any discrepancy raised
against it is still open.
"""

from typing import List, Tuple

from django.core.exceptions import ValidationError

from apps.discrepancies.models import Discrepancy


def has_unresolved_discrepancies(order_id) -> Tuple[bool, List[Discrepancy]]:
    """
    Look up open discrepancies for an order.

    Args:
        order_id: id of the order about to be received

    Returns:
        (blocked, unresolved discrepancies, oldest first)
    """
    try:
        unresolved = list(
            Discrepancy.objects
            .filter(order_id=order_id, resolved=False)
            .order_by('created_at')
        )
    except ValidationError:
        # Malformed id: nothing can reference it
        return False, []
    return bool(unresolved), unresolved
