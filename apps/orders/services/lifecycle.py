"""
Order lifecycle service.

Creates purchase orders and moves them through
PLACED -> ACCEPTED -> DISPATCHED -> RECEIVED.

Each transition is a conditional update keyed on the expected prior status,
so two concurrent transitions on the same order cannot both succeed.
Notifications are scheduled after commit and never affect the outcome.
"""

import logging
import secrets
import string
from typing import Iterable, List, Optional

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from apps.accounts.models import User
from apps.discrepancies.services import has_unresolved_discrepancies
from apps.notifications.models import NotificationType
from apps.notifications.services import NotificationDispatcher
from apps.orders.conf import SupplyChainConfig
from apps.orders.models import Order, OrderLine, OrderStatus, PRIOR_STATUS

from .cost_calculation import amounts_in_range, compute_lines
from .exceptions import (
    AmountOutOfRangeError,
    DiscrepancyConflictError,
    InsufficientPermissionsError,
    InvalidTransitionError,
    OrderNotFoundError,
)
from .vendor_resolution import load_vendor_catalog, resolve_vendor_for_order

logger = logging.getLogger(__name__)

ORDER_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
ORDER_SUFFIX_LENGTH = 4


def generate_order_number(prefix: str = 'PO', today=None) -> str:
    """``PO-YYYYMMDD-XXXX`` with a random upper-case alphanumeric suffix."""
    today = today or timezone.now().date()
    suffix = ''.join(
        secrets.choice(ORDER_SUFFIX_ALPHABET) for _ in range(ORDER_SUFFIX_LENGTH)
    )
    return f"{prefix}-{today:%Y%m%d}-{suffix}"


class OrderLifecycleService:
    """
    Role-gated order operations.

    Args:
        config: supply-chain settings (order number prefix, links, retries)
        dispatcher: notification writer; swap in a stub for tests
    """

    def __init__(
        self,
        config: Optional[SupplyChainConfig] = None,
        dispatcher: Optional[NotificationDispatcher] = None
    ):
        self.config = config or SupplyChainConfig.from_settings()
        self.dispatcher = dispatcher or NotificationDispatcher()

    # =========================================================================
    # Creation
    # =========================================================================

    def create(self, *, claims, vendor_id: Optional[str] = None, items: Iterable[dict] = ()) -> Order:
        """
        Place a new order for the caller's franchise.

        Args:
            claims: caller identity (franchise owner or staff)
            vendor_id: requested vendor; defaults to the franchise's primary
            items: requested items (item_id, item_name, quantity, uom, unit_price)

        Returns:
            The persisted Order in PLACED status, lines included

        Raises:
            InsufficientPermissionsError: If caller is not on the franchise side
            VendorMismatchError: If the requested vendor is not assigned
            AmountOutOfRangeError: If a line or total overflows the money columns
            VendorLookupError: If vendor data cannot be read
        """
        if not claims.is_franchise:
            raise InsufficientPermissionsError('Only franchises can create orders')

        assignment = resolve_vendor_for_order(
            franchise_id=claims.franchise_id,
            requested_vendor_id=vendor_id,
        )
        catalog = load_vendor_catalog(vendor_id=assignment.vendor_id)
        costed = compute_lines(list(items or []), catalog.items)
        if not amounts_in_range(costed):
            raise AmountOutOfRangeError('Order amounts exceed the supported range')

        franchise_name = claims.franchise_name or assignment.franchise_name

        with transaction.atomic():
            order = self._insert_order(
                franchise_id=claims.franchise_id,
                franchise_name=franchise_name,
                vendor_id=assignment.vendor_id,
                vendor_name=catalog.name,
                status=OrderStatus.PLACED,
                total_amount=costed.total_amount,
                total_vendor_cost=costed.total_vendor_cost,
                created_by=claims.user_id,
                created_by_name=claims.name,
                created_by_role=claims.role,
                created_by_employee_id=claims.employee_id or '',
            )
            OrderLine.objects.bulk_create([
                OrderLine(
                    order=order,
                    item_id=line.item_id,
                    item_name=line.item_name,
                    ordered_qty=line.ordered_qty,
                    uom=line.uom,
                    unit_price=line.unit_price,
                    vendor_price=line.vendor_price,
                    line_total=line.line_total,
                    vendor_cost_line=line.vendor_cost_line,
                    position=position,
                )
                for position, line in enumerate(costed.lines)
            ])

            if order.vendor_id:
                recipients = (
                    User.objects
                    .kitchen_recipients(order.vendor_id)
                    .values_list('id', flat=True)
                )
                self.dispatcher.notify_many_on_commit(
                    recipients,
                    NotificationType.ORDER_NEW,
                    'New Order Received',
                    f"Order {order.order_number} from {franchise_name} - "
                    f"{self.config.currency_label}{order.total_vendor_cost:.2f}",
                    self.config.kitchen_orders_link,
                    order.id,
                )

        logger.info(
            "Order %s placed by %s for vendor %s (%d lines, total %s, vendor cost %s)",
            order.order_number, claims.user_id, order.vendor_id or '-',
            len(costed.lines), order.total_amount, order.total_vendor_cost,
        )
        return self._fetch(order.id)

    def _insert_order(self, **fields) -> Order:
        """Insert with a fresh order number, retrying on collision."""
        max_retries = self.config.order_number_max_retries

        for attempt in range(max_retries):
            order_number = generate_order_number(self.config.order_number_prefix)
            try:
                with transaction.atomic():
                    return Order.objects.create(order_number=order_number, **fields)
            except IntegrityError:
                logger.warning("Order number collision on %s (attempt %d)", order_number, attempt + 1)
                if attempt == max_retries - 1:
                    raise RuntimeError(
                        f"Failed to generate unique order number after {max_retries} attempts"
                    )

        raise RuntimeError("Unexpected error in order number generation")

    # =========================================================================
    # Listing
    # =========================================================================

    def list_orders(self, *, claims):
        """Orders visible to the caller, newest first, lines prefetched."""
        queryset = Order.objects.prefetch_related('lines')

        if claims.is_franchise:
            queryset = queryset.filter(franchise_id=claims.franchise_id)
        elif claims.is_kitchen:
            # Legacy orders carry the kitchen user's id instead of a vendor id
            queryset = queryset.filter(
                Q(vendor_id=claims.kitchen_identity) | Q(vendor_id=claims.user_id)
            )

        return queryset.order_by('-created_at')

    # =========================================================================
    # Transitions
    # =========================================================================

    def accept(self, *, claims, order_id) -> Order:
        """
        PLACED -> ACCEPTED.

        Raises:
            InsufficientPermissionsError: If caller is not kitchen side
            OrderNotFoundError: If the order does not exist
            InvalidTransitionError: If the order is not PLACED
        """
        if not claims.is_kitchen:
            raise InsufficientPermissionsError('Only kitchen can accept orders')

        order = self._transition(
            order_id,
            OrderStatus.ACCEPTED,
            accepted_at=timezone.now(),
            accepted_by=claims.user_id,
            accepted_by_name=claims.name,
        )
        self.dispatcher.notify_on_commit(
            order.created_by,
            NotificationType.ORDER_STATUS,
            'Order Accepted',
            f"Your order {order.order_number} has been accepted by kitchen",
            self.config.franchise_orders_link,
            order.id,
        )
        return order

    def dispatch(
        self,
        *,
        claims,
        order_id,
        dispatch_photos: Optional[List[str]] = None,
        dispatch_notes: str = ''
    ) -> Order:
        """
        ACCEPTED -> DISPATCHED, storing photo references and notes if given.

        Raises:
            InsufficientPermissionsError: If caller is not kitchen side
            OrderNotFoundError: If the order does not exist
            InvalidTransitionError: If the order is not ACCEPTED
        """
        if not claims.is_kitchen:
            raise InsufficientPermissionsError('Only kitchen can dispatch orders')

        stamps = {
            'dispatched_at': timezone.now(),
            'dispatched_by': claims.user_id,
            'dispatched_by_name': claims.name,
        }
        if dispatch_photos:
            stamps['dispatch_photos'] = list(dispatch_photos)
        if dispatch_notes:
            stamps['dispatch_notes'] = dispatch_notes

        order = self._transition(order_id, OrderStatus.DISPATCHED, **stamps)
        self.dispatcher.notify_on_commit(
            order.created_by,
            NotificationType.ORDER_STATUS,
            'Order Dispatched',
            f"Your order {order.order_number} has been dispatched",
            self.config.franchise_orders_link,
            order.id,
        )
        return order

    def receive(
        self,
        *,
        claims,
        order_id,
        receive_photos: Optional[List[str]] = None,
        received_items=None
    ) -> Order:
        """
        DISPATCHED -> RECEIVED, unless discrepancies are still open.

        Raises:
            DiscrepancyConflictError: If any discrepancy on the order is unresolved
            OrderNotFoundError: If the order does not exist
            InvalidTransitionError: If the order is not DISPATCHED
        """
        with transaction.atomic():
            # Serialises with report_discrepancy, which locks the same row
            self._lock(order_id)
            blocked, unresolved = has_unresolved_discrepancies(order_id)
            if blocked:
                logger.warning(
                    "Receipt of order %s blocked by %d unresolved discrepancies",
                    order_id, len(unresolved),
                )
                raise DiscrepancyConflictError(unresolved)

            stamps = {
                'received_at': timezone.now(),
                'received_by': claims.user_id,
                'received_by_name': claims.name or 'Franchise',
            }
            if receive_photos:
                stamps['receive_photos'] = list(receive_photos)
            if received_items is not None:
                stamps['received_items'] = received_items

            return self._transition(order_id, OrderStatus.RECEIVED, **stamps)

    @transaction.atomic
    def _transition(self, order_id, target: str, **stamps) -> Order:
        """
        Conditionally move an order to ``target``.

        The update only matches a row still in the required prior status;
        zero rows means the order is gone or has already moved on.
        """
        expected = PRIOR_STATUS[target]

        try:
            updated = Order.objects.filter(id=order_id, status=expected).update(
                status=target,
                updated_at=timezone.now(),
                **stamps
            )
        except ValidationError:
            raise OrderNotFoundError('Order not found')

        if not updated:
            current = Order.objects.filter(id=order_id).values_list('status', flat=True).first()
            if current is None:
                raise OrderNotFoundError('Order not found')
            logger.warning(
                "Rejected %s transition for order %s: status is %s",
                target, order_id, current,
            )
            raise InvalidTransitionError(
                f"Order must be {expected} to become {target} (current status: {current})",
                current_status=current,
                expected_status=expected,
            )

        logger.info("Order %s moved %s -> %s", order_id, expected, target)
        return self._fetch(order_id)

    def _lock(self, order_id) -> None:
        """Row-lock the order for the rest of the transaction, if it exists."""
        try:
            list(Order.objects.select_for_update().filter(id=order_id).values_list('id', flat=True))
        except ValidationError:
            raise OrderNotFoundError('Order not found')

    def _fetch(self, order_id) -> Order:
        return Order.objects.prefetch_related('lines').get(id=order_id)
