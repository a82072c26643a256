"""
Discrepancy workflow service.

Franchises report discrepancies against delivered orders; administrators
resolve them. Each step notifies the other side after commit.
"""

import logging
from decimal import Decimal
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from apps.accounts.models import User
from apps.discrepancies.models import Discrepancy
from apps.notifications.models import NotificationType
from apps.notifications.services import NotificationDispatcher
from apps.orders.conf import SupplyChainConfig
from apps.orders.models import Order

from .exceptions import (
    DiscrepancyNotFoundError,
    InsufficientPermissionsError,
    OrderNotFoundError,
)

logger = logging.getLogger(__name__)


class DiscrepancyService:
    """Report, list and resolve discrepancies."""

    def __init__(
        self,
        config: Optional[SupplyChainConfig] = None,
        dispatcher: Optional[NotificationDispatcher] = None
    ):
        self.config = config or SupplyChainConfig.from_settings()
        self.dispatcher = dispatcher or NotificationDispatcher()

    @transaction.atomic
    def report_discrepancy(
        self,
        *,
        claims,
        order_id,
        item_name: str,
        ordered_qty: Decimal = Decimal('0'),
        received_qty: Decimal = Decimal('0'),
        uom: str = '',
        notes: str = ''
    ) -> Discrepancy:
        """
        Record an unresolved discrepancy and alert the supplying kitchen.

        Franchise callers may only report on their own franchise's orders.
        The order row stays locked until commit so a concurrent receipt
        sees this discrepancy.

        Raises:
            OrderNotFoundError: If the order does not exist or belongs to
                another franchise
        """
        try:
            order = Order.objects.select_for_update().get(id=order_id)
        except (Order.DoesNotExist, ValidationError):
            raise OrderNotFoundError('Order not found')

        if claims.is_franchise and order.franchise_id != claims.franchise_id:
            logger.warning(
                "Franchise %s tried to report on order %s of franchise %s",
                claims.franchise_id, order.order_number, order.franchise_id,
            )
            raise OrderNotFoundError('Order not found')

        ordered_qty = ordered_qty or Decimal('0')
        received_qty = received_qty or Decimal('0')

        discrepancy = Discrepancy.objects.create(
            order=order,
            order_number=order.order_number,
            franchise_id=order.franchise_id,
            franchise_name=order.franchise_name,
            item_name=item_name,
            ordered_qty=ordered_qty,
            received_qty=received_qty,
            difference=ordered_qty - received_qty,
            uom=uom,
            notes=notes,
            reported_by=claims.user_id,
        )
        logger.info(
            "Discrepancy %s reported on order %s for %s",
            discrepancy.id, order.order_number, item_name,
        )

        if order.vendor_id:
            recipients = User.objects.kitchen_recipients(order.vendor_id).values_list('id', flat=True)
            self.dispatcher.notify_many_on_commit(
                recipients,
                NotificationType.DISCREPANCY_NEW,
                'Discrepancy Reported',
                f"{discrepancy.franchise_name} reported discrepancy for {item_name}",
                self.config.kitchen_discrepancies_link,
                discrepancy.id,
            )

        return discrepancy

    def list_discrepancies(self, *, claims):
        """Discrepancies visible to the caller, newest first."""
        queryset = Discrepancy.objects.all()

        if claims.is_franchise:
            queryset = queryset.filter(franchise_id=claims.franchise_id)
        elif claims.is_kitchen:
            queryset = queryset.filter(
                Q(order__vendor_id=claims.kitchen_identity) |
                Q(order__vendor_id=claims.user_id)
            )

        return queryset.order_by('-created_at')

    @transaction.atomic
    def resolve_discrepancy(self, *, claims, discrepancy_id, resolution_notes: str = '') -> Discrepancy:
        """
        Close a discrepancy (admin only) and tell the reporter.

        Raises:
            InsufficientPermissionsError: If caller is not an admin
            DiscrepancyNotFoundError: If the discrepancy does not exist
        """
        if not claims.is_admin:
            raise InsufficientPermissionsError('Only admin can resolve discrepancies')

        try:
            discrepancy = Discrepancy.objects.select_for_update().get(id=discrepancy_id)
        except (Discrepancy.DoesNotExist, ValidationError):
            raise DiscrepancyNotFoundError('Discrepancy not found')

        discrepancy.resolved = True
        discrepancy.resolved_by = claims.user_id
        discrepancy.resolved_at = timezone.now()
        discrepancy.resolution_notes = resolution_notes or ''
        discrepancy.save(update_fields=[
            'resolved', 'resolved_by', 'resolved_at', 'resolution_notes'
        ])
        logger.info("Discrepancy %s resolved by %s", discrepancy.id, claims.user_id)

        self.dispatcher.notify_on_commit(
            discrepancy.reported_by,
            NotificationType.DISCREPANCY_RESOLVED,
            'Discrepancy Resolved',
            f"Your discrepancy for {discrepancy.item_name} has been resolved",
            self.config.franchise_orders_link,
            discrepancy.id,
        )

        return discrepancy
