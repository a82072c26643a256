import pytest
from decimal import Decimal

from apps.notifications.services import NotificationDispatcher
from apps.orders.models import Order, OrderStatus
from apps.orders.services import OrderLifecycleService


RICE_ORDER = [
    {
        'item_id': 'itm-rice',
        'item_name': 'Rice',
        'quantity': Decimal('10'),
        'uom': 'kg',
        'unit_price': Decimal('50'),
    },
]


@pytest.fixture
def lifecycle(supply_config):
    return OrderLifecycleService(config=supply_config, dispatcher=NotificationDispatcher())


@pytest.fixture
def placed_order(lifecycle, franchise_claims):
    """A PLACED order for 10 kg rice from the primary kitchen."""
    return lifecycle.create(claims=franchise_claims, items=RICE_ORDER)


@pytest.fixture
def make_order(db, franchise, vendor_a, franchise_user):
    """Factory for orders in an arbitrary status, bypassing the lifecycle."""
    counter = {'n': 0}

    def _make(status=OrderStatus.PLACED, vendor_id=None, franchise_id=None, **fields):
        counter['n'] += 1
        return Order.objects.create(
            order_number=f"PO-20240101-T{counter['n']:03d}",
            franchise_id=franchise_id or str(franchise.id),
            franchise_name=franchise.name,
            vendor_id=str(vendor_a.id) if vendor_id is None else vendor_id,
            vendor_name=vendor_a.name,
            status=status,
            created_by=str(franchise_user.id),
            **fields
        )

    return _make
