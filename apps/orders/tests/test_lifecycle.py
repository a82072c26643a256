"""
Service layer tests for the order lifecycle.

Tests cover:
- Order creation and dual costing
- Role gates
- Conditional status transitions
- Receipt blocked by open discrepancies
- Post-commit notifications
"""

import re
import pytest
from decimal import Decimal
from unittest.mock import patch
from uuid import uuid4

from apps.accounts.claims import Claims
from apps.accounts.models import Role
from apps.discrepancies.models import Discrepancy
from apps.discrepancies.services import DiscrepancyService
from apps.notifications.models import Notification, NotificationType
from apps.orders.models import Order, OrderLine, OrderStatus
from apps.orders.services import (
    AmountOutOfRangeError,
    DiscrepancyConflictError,
    InsufficientPermissionsError,
    InvalidTransitionError,
    OrderNotFoundError,
    VendorMismatchError,
    generate_order_number,
)

from .conftest import RICE_ORDER


# =============================================================================
# Order Numbers
# =============================================================================

class TestOrderNumber:

    def test_format(self):
        assert re.fullmatch(r'PO-\d{8}-[A-Z0-9]{4}', generate_order_number())

    def test_custom_prefix(self):
        assert generate_order_number('SO').startswith('SO-')


# =============================================================================
# Creation
# =============================================================================

@pytest.mark.django_db
class TestCreateOrder:

    def test_create_computes_both_totals(self, lifecycle, franchise_claims, franchise, vendor_a):
        order = lifecycle.create(claims=franchise_claims, items=RICE_ORDER)

        assert order.status == OrderStatus.PLACED
        assert order.total_amount == Decimal('500.00')
        assert order.total_vendor_cost == Decimal('400.00')
        assert order.vendor_id == str(vendor_a.id)
        assert order.vendor_name == 'Central Kitchen'
        assert order.franchise_id == str(franchise.id)
        assert order.franchise_name == franchise.name
        assert order.created_by == franchise_claims.user_id
        assert order.created_by_role == Role.FRANCHISE
        assert re.fullmatch(r'PO-\d{8}-[A-Z0-9]{4}', order.order_number)

        lines = list(order.lines.all())
        assert len(lines) == 1
        assert lines[0].vendor_price == Decimal('40.00')
        assert lines[0].line_total == Decimal('500.00')
        assert lines[0].vendor_cost_line == Decimal('400.00')

    def test_create_with_secondary_vendor(self, lifecycle, franchise_claims, vendor_b):
        order = lifecycle.create(
            claims=franchise_claims,
            vendor_id=str(vendor_b.id),
            items=RICE_ORDER,
        )

        assert order.vendor_id == str(vendor_b.id)
        assert order.total_vendor_cost == Decimal('420.00')

    def test_franchise_staff_can_create(self, lifecycle, franchise_staff_user, make_claims):
        claims = make_claims(franchise_staff_user)

        order = lifecycle.create(claims=claims, items=RICE_ORDER)

        assert order.created_by_employee_id == 'EMP-F07'
        assert order.created_by_role == Role.FRANCHISE_STAFF

    def test_owner_order_has_blank_employee_id(self, lifecycle, franchise_claims):
        order = lifecycle.create(claims=franchise_claims, items=RICE_ORDER)

        assert order.created_by_employee_id == ''

    def test_kitchen_cannot_create(self, lifecycle, kitchen_claims):
        with pytest.raises(InsufficientPermissionsError):
            lifecycle.create(claims=kitchen_claims, items=RICE_ORDER)

        assert Order.objects.count() == 0

    def test_unassigned_vendor_creates_nothing(self, lifecycle, franchise_claims, vendor_c):
        with pytest.raises(VendorMismatchError):
            lifecycle.create(
                claims=franchise_claims,
                vendor_id=str(vendor_c.id),
                items=RICE_ORDER,
            )

        assert Order.objects.count() == 0
        assert OrderLine.objects.count() == 0

    def test_amount_overflow_creates_nothing(self, lifecycle, franchise_claims):
        items = [{'item_name': 'Rice', 'quantity': Decimal('999999.000'), 'unit_price': Decimal('9999999.00')}]

        with pytest.raises(AmountOutOfRangeError):
            lifecycle.create(claims=franchise_claims, items=items)

        assert Order.objects.count() == 0
        assert OrderLine.objects.count() == 0

    def test_empty_order(self, lifecycle, franchise_claims):
        order = lifecycle.create(claims=franchise_claims, items=[])

        assert order.lines.count() == 0
        assert order.total_amount == Decimal('0.00')
        assert order.total_vendor_cost == Decimal('0.00')

    def test_lines_keep_request_order(self, lifecycle, franchise_claims):
        items = [
            {'item_name': name, 'quantity': 1, 'unit_price': 1}
            for name in ['Toor Dal', 'Rice', 'Saffron']
        ]

        order = lifecycle.create(claims=franchise_claims, items=items)

        assert [line.item_name for line in order.lines.all()] == ['Toor Dal', 'Rice', 'Saffron']

    def test_vendor_snapshot_survives_reassignment(self, lifecycle, franchise_claims, franchise, vendor_a, vendor_c):
        order = lifecycle.create(claims=franchise_claims, items=RICE_ORDER)

        franchise.vendor_1 = vendor_c
        franchise.save()
        vendor_a.items.update(vendor_price=Decimal('1.00'))

        order.refresh_from_db()
        assert order.vendor_id == str(vendor_a.id)
        assert order.total_vendor_cost == Decimal('400.00')

    def test_lines_rolled_back_with_order(self, lifecycle, franchise_claims):
        with patch.object(OrderLine.objects, 'bulk_create', side_effect=RuntimeError('disk full')):
            with pytest.raises(RuntimeError):
                lifecycle.create(claims=franchise_claims, items=RICE_ORDER)

        assert Order.objects.count() == 0

    def test_order_number_collision_is_retried(self, lifecycle, franchise_claims, make_order):
        existing = make_order()

        with patch(
            'apps.orders.services.lifecycle.generate_order_number',
            side_effect=[existing.order_number, 'PO-20240101-NEW1'],
        ):
            order = lifecycle.create(claims=franchise_claims, items=RICE_ORDER)

        assert order.order_number == 'PO-20240101-NEW1'

    def test_order_number_retries_are_bounded(self, lifecycle, franchise_claims, make_order):
        existing = make_order()

        with patch(
            'apps.orders.services.lifecycle.generate_order_number',
            return_value=existing.order_number,
        ):
            with pytest.raises(RuntimeError):
                lifecycle.create(claims=franchise_claims, items=RICE_ORDER)

        assert Order.objects.count() == 1


# =============================================================================
# Creation Notifications
# =============================================================================

@pytest.mark.django_db
class TestCreateNotifications:

    def test_kitchen_users_notified_after_commit(
        self, lifecycle, franchise_claims, kitchen_user, kitchen_staff_user,
        other_kitchen_user, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            order = lifecycle.create(claims=franchise_claims, items=RICE_ORDER)

        recipients = set(Notification.objects.values_list('user_id', flat=True))
        assert recipients == {str(kitchen_user.id), str(kitchen_staff_user.id)}

        notification = Notification.objects.filter(user_id=str(kitchen_user.id)).get()
        assert notification.type == NotificationType.ORDER_NEW
        assert notification.title == 'New Order Received'
        assert notification.message == (
            f"Order {order.order_number} from Banjara Hills Outlet - Rs.400.00"
        )
        assert notification.link == '/kitchen/orders'
        assert notification.reference_id == str(order.id)

    def test_inactive_kitchen_user_not_notified(
        self, lifecycle, franchise_claims, kitchen_user, django_capture_on_commit_callbacks
    ):
        kitchen_user.is_active = False
        kitchen_user.save()

        with django_capture_on_commit_callbacks(execute=True):
            lifecycle.create(claims=franchise_claims, items=RICE_ORDER)

        assert Notification.objects.count() == 0

    def test_nothing_sent_before_commit(self, lifecycle, franchise_claims, kitchen_user):
        lifecycle.create(claims=franchise_claims, items=RICE_ORDER)

        assert Notification.objects.count() == 0

    def test_notification_failure_does_not_fail_order(
        self, lifecycle, franchise_claims, kitchen_user, django_capture_on_commit_callbacks
    ):
        with patch.object(Notification.objects, 'create', side_effect=RuntimeError('store down')):
            with django_capture_on_commit_callbacks(execute=True):
                order = lifecycle.create(claims=franchise_claims, items=RICE_ORDER)

        assert Order.objects.filter(id=order.id, status=OrderStatus.PLACED).exists()
        assert Notification.objects.count() == 0


# =============================================================================
# Listing
# =============================================================================

@pytest.mark.django_db
class TestListOrders:

    def test_franchise_sees_own_orders(self, lifecycle, franchise_claims, make_order):
        own = make_order()
        make_order(franchise_id=str(uuid4()))

        orders = list(lifecycle.list_orders(claims=franchise_claims))

        assert [o.id for o in orders] == [own.id]

    def test_kitchen_sees_orders_placed_to_it(self, lifecycle, kitchen_claims, vendor_c, make_order):
        own = make_order()
        make_order(vendor_id=str(vendor_c.id))

        orders = list(lifecycle.list_orders(claims=kitchen_claims))

        assert [o.id for o in orders] == [own.id]

    def test_kitchen_sees_legacy_orders_keyed_by_user_id(self, lifecycle, kitchen_user, kitchen_claims, make_order):
        legacy = make_order(vendor_id=str(kitchen_user.id))

        orders = list(lifecycle.list_orders(claims=kitchen_claims))

        assert legacy.id in [o.id for o in orders]

    def test_admin_and_auditor_see_everything(self, lifecycle, admin_claims, auditor_user, vendor_c, make_order, make_claims):
        make_order()
        make_order(vendor_id=str(vendor_c.id), franchise_id=str(uuid4()))

        assert lifecycle.list_orders(claims=admin_claims).count() == 2
        assert lifecycle.list_orders(claims=make_claims(auditor_user)).count() == 2

    def test_newest_first(self, lifecycle, admin_claims, make_order):
        first = make_order()
        second = make_order()

        orders = list(lifecycle.list_orders(claims=admin_claims))

        assert [o.id for o in orders] == [second.id, first.id]


# =============================================================================
# Transitions
# =============================================================================

@pytest.mark.django_db
class TestTransitions:

    def test_full_lifecycle(self, lifecycle, placed_order, kitchen_claims, franchise_claims):
        accepted = lifecycle.accept(claims=kitchen_claims, order_id=placed_order.id)
        assert accepted.status == OrderStatus.ACCEPTED
        assert accepted.accepted_by == kitchen_claims.user_id
        assert accepted.accepted_by_name == 'Kitchen Owner'
        assert accepted.accepted_at is not None

        dispatched = lifecycle.dispatch(
            claims=kitchen_claims,
            order_id=placed_order.id,
            dispatch_photos=['photos/d1.jpg'],
            dispatch_notes='Two sacks',
        )
        assert dispatched.status == OrderStatus.DISPATCHED
        assert dispatched.dispatch_photos == ['photos/d1.jpg']
        assert dispatched.dispatch_notes == 'Two sacks'
        assert dispatched.dispatched_at is not None

        received = lifecycle.receive(
            claims=franchise_claims,
            order_id=placed_order.id,
            receive_photos=['photos/r1.jpg'],
            received_items=[{'item_name': 'Rice', 'received_qty': 10}],
        )
        assert received.status == OrderStatus.RECEIVED
        assert received.received_by == franchise_claims.user_id
        assert received.received_by_name == 'Outlet Owner'
        assert received.receive_photos == ['photos/r1.jpg']
        assert received.received_items == [{'item_name': 'Rice', 'received_qty': 10}]

    def test_dispatch_without_photos_keeps_defaults(self, lifecycle, kitchen_claims, make_order):
        order = make_order(status=OrderStatus.ACCEPTED)

        dispatched = lifecycle.dispatch(claims=kitchen_claims, order_id=order.id)

        assert dispatched.dispatch_photos == []
        assert dispatched.dispatch_notes == ''

    def test_receiver_name_defaults(self, lifecycle, make_order, admin_user):
        order = make_order(status=OrderStatus.DISPATCHED)
        nameless = Claims(user_id=str(admin_user.id), role=Role.ADMIN)

        received = lifecycle.receive(claims=nameless, order_id=order.id)

        assert received.received_by_name == 'Franchise'

    def test_franchise_cannot_accept(self, lifecycle, placed_order, franchise_claims):
        with pytest.raises(InsufficientPermissionsError) as exc_info:
            lifecycle.accept(claims=franchise_claims, order_id=placed_order.id)

        assert str(exc_info.value) == 'Only kitchen can accept orders'
        placed_order.refresh_from_db()
        assert placed_order.status == OrderStatus.PLACED

    def test_franchise_cannot_dispatch(self, lifecycle, franchise_claims, make_order):
        order = make_order(status=OrderStatus.ACCEPTED)

        with pytest.raises(InsufficientPermissionsError):
            lifecycle.dispatch(claims=franchise_claims, order_id=order.id)

    def test_accept_twice_rejected(self, lifecycle, placed_order, kitchen_claims):
        lifecycle.accept(claims=kitchen_claims, order_id=placed_order.id)

        with pytest.raises(InvalidTransitionError) as exc_info:
            lifecycle.accept(claims=kitchen_claims, order_id=placed_order.id)

        assert exc_info.value.current_status == OrderStatus.ACCEPTED
        assert exc_info.value.expected_status == OrderStatus.PLACED

    def test_cannot_skip_acceptance(self, lifecycle, placed_order, kitchen_claims):
        with pytest.raises(InvalidTransitionError):
            lifecycle.dispatch(claims=kitchen_claims, order_id=placed_order.id)

        placed_order.refresh_from_db()
        assert placed_order.status == OrderStatus.PLACED
        assert placed_order.dispatched_at is None

    def test_cannot_receive_placed_order(self, lifecycle, placed_order, franchise_claims):
        with pytest.raises(InvalidTransitionError):
            lifecycle.receive(claims=franchise_claims, order_id=placed_order.id)

    def test_received_is_terminal(self, lifecycle, franchise_claims, kitchen_claims, make_order):
        order = make_order(status=OrderStatus.RECEIVED)

        with pytest.raises(InvalidTransitionError):
            lifecycle.receive(claims=franchise_claims, order_id=order.id)
        with pytest.raises(InvalidTransitionError):
            lifecycle.accept(claims=kitchen_claims, order_id=order.id)

    def test_stale_transition_loses(self, lifecycle, placed_order, kitchen_claims):
        """A concurrent writer moved the order first; our update matches nothing."""
        Order.objects.filter(id=placed_order.id).update(status=OrderStatus.ACCEPTED)

        with pytest.raises(InvalidTransitionError):
            lifecycle.accept(claims=kitchen_claims, order_id=placed_order.id)

    @pytest.mark.parametrize('order_id', [uuid4(), 'not-a-uuid'])
    def test_unknown_order(self, lifecycle, kitchen_claims, franchise_claims, order_id):
        with pytest.raises(OrderNotFoundError):
            lifecycle.accept(claims=kitchen_claims, order_id=order_id)
        with pytest.raises(OrderNotFoundError):
            lifecycle.receive(claims=franchise_claims, order_id=order_id)

    def test_creator_notified_on_accept_and_dispatch(
        self, lifecycle, placed_order, kitchen_claims, franchise_user, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            lifecycle.accept(claims=kitchen_claims, order_id=placed_order.id)
        with django_capture_on_commit_callbacks(execute=True):
            lifecycle.dispatch(claims=kitchen_claims, order_id=placed_order.id)

        notifications = {
            n.title: n for n in Notification.objects.filter(user_id=str(franchise_user.id))
        }
        assert set(notifications) == {'Order Accepted', 'Order Dispatched'}
        assert all(n.type == NotificationType.ORDER_STATUS for n in notifications.values())
        assert notifications['Order Accepted'].message == (
            f"Your order {placed_order.order_number} has been accepted by kitchen"
        )
        assert notifications['Order Dispatched'].message == (
            f"Your order {placed_order.order_number} has been dispatched"
        )
        assert notifications['Order Dispatched'].link == '/franchise/orders'

    def test_rejected_transition_sends_nothing(
        self, lifecycle, placed_order, kitchen_claims, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            with pytest.raises(InvalidTransitionError):
                lifecycle.dispatch(claims=kitchen_claims, order_id=placed_order.id)

        assert Notification.objects.count() == 0


# =============================================================================
# Receipt Gate
# =============================================================================

@pytest.mark.django_db
class TestReceiptGate:

    def test_open_discrepancy_blocks_receipt(self, lifecycle, franchise_claims, make_order):
        order = make_order(status=OrderStatus.DISPATCHED)
        DiscrepancyService().report_discrepancy(
            claims=franchise_claims,
            order_id=order.id,
            item_name='Rice',
            ordered_qty=Decimal('10'),
            received_qty=Decimal('8'),
        )

        with pytest.raises(DiscrepancyConflictError) as exc_info:
            lifecycle.receive(claims=franchise_claims, order_id=order.id)

        assert exc_info.value.unresolved_count == 1
        assert exc_info.value.discrepancies[0].item_name == 'Rice'
        order.refresh_from_db()
        assert order.status == OrderStatus.DISPATCHED
        assert order.received_at is None

    def test_resolved_discrepancy_unblocks(self, lifecycle, franchise_claims, admin_claims, make_order):
        order = make_order(status=OrderStatus.DISPATCHED)
        service = DiscrepancyService()
        discrepancy = service.report_discrepancy(
            claims=franchise_claims,
            order_id=order.id,
            item_name='Rice',
            ordered_qty=Decimal('10'),
            received_qty=Decimal('8'),
        )
        service.resolve_discrepancy(claims=admin_claims, discrepancy_id=discrepancy.id)

        received = lifecycle.receive(claims=franchise_claims, order_id=order.id)

        assert received.status == OrderStatus.RECEIVED

    def test_only_this_orders_discrepancies_count(self, lifecycle, franchise_claims, make_order):
        order = make_order(status=OrderStatus.DISPATCHED)
        other = make_order(status=OrderStatus.DISPATCHED)
        Discrepancy.objects.create(order=other, item_name='Rice', reported_by='someone')

        received = lifecycle.receive(claims=franchise_claims, order_id=order.id)

        assert received.status == OrderStatus.RECEIVED

    def test_order_row_locked_before_gate(self, lifecycle, franchise_claims, make_order):
        """Receipt holds the order row while it checks for open discrepancies."""
        order = make_order(status=OrderStatus.DISPATCHED)
        calls = []
        real_lock = Order.objects.select_for_update

        def lock(*args, **kwargs):
            calls.append('lock')
            return real_lock(*args, **kwargs)

        def gate(order_id):
            calls.append('gate')
            return False, []

        with patch.object(Order.objects, 'select_for_update', side_effect=lock), \
                patch('apps.orders.services.lifecycle.has_unresolved_discrepancies', side_effect=gate):
            received = lifecycle.receive(claims=franchise_claims, order_id=order.id)

        assert calls == ['lock', 'gate']
        assert received.status == OrderStatus.RECEIVED
