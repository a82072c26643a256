import pytest
from decimal import Decimal

from rest_framework.test import APIClient

from apps.accounts.models import Role, User
from apps.accounts.tokens import issue_access_token
from apps.discrepancies.models import Discrepancy
from apps.discrepancies.services import DiscrepancyService
from apps.franchises.models import Franchise
from apps.orders.models import Order, OrderStatus


@pytest.fixture
def discrepancy_service(supply_config):
    return DiscrepancyService(config=supply_config)


@pytest.fixture
def delivered_order(db, franchise, vendor_a, franchise_user):
    """Dispatched order awaiting receipt at the franchise."""
    return Order.objects.create(
        order_number='PO-20240101-D001',
        franchise_id=str(franchise.id),
        franchise_name=franchise.name,
        vendor_id=str(vendor_a.id),
        vendor_name=vendor_a.name,
        status=OrderStatus.DISPATCHED,
        created_by=str(franchise_user.id),
    )


@pytest.fixture
def open_discrepancy(delivered_order, franchise_user):
    return Discrepancy.objects.create(
        order=delivered_order,
        order_number=delivered_order.order_number,
        franchise_id=delivered_order.franchise_id,
        franchise_name=delivered_order.franchise_name,
        item_name='Rice',
        ordered_qty=Decimal('10'),
        received_qty=Decimal('8'),
        difference=Decimal('2'),
        uom='kg',
        reported_by=str(franchise_user.id),
    )


@pytest.fixture
def other_franchise_user(db):
    """Owner of a franchise with no stake in the delivered order."""
    outlet = Franchise.objects.create(name='Other Outlet')
    return User.objects.create_user(
        email='other-outlet@example.com',
        password='TestPass123!',
        display_name='Other Owner',
        role=Role.FRANCHISE,
        franchise=outlet,
    )


@pytest.fixture
def other_franchise_claims(other_franchise_user, make_claims):
    return make_claims(other_franchise_user)


@pytest.fixture
def other_franchise_client(other_franchise_user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_access_token(other_franchise_user)}')
    return client
