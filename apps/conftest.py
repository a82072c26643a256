import pytest
from decimal import Decimal
from rest_framework.test import APIClient

from apps.accounts.claims import Claims
from apps.accounts.models import User, Role
from apps.accounts.tokens import issue_access_token
from apps.franchises.models import Franchise
from apps.orders.conf import SupplyChainConfig
from apps.vendors.models import Vendor, VendorItem


def client_for(user):
    """Fresh API client carrying ``user``'s bearer token."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_access_token(user)}')
    return client


def claims_for(user):
    """Claims exactly as the API would decode them for ``user``."""
    return Claims.from_payload(issue_access_token(user).payload)


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def supply_config():
    return SupplyChainConfig()


# =============================================================================
# Vendors and franchise
# =============================================================================

@pytest.fixture
def vendor_a(db):
    """Primary kitchen with a small catalog."""
    vendor = Vendor.objects.create(name='Central Kitchen', owner_name='Anil')
    VendorItem.objects.create(vendor=vendor, name='Rice', uom='kg', vendor_price=Decimal('40.00'))
    VendorItem.objects.create(vendor=vendor, name='Toor Dal', uom='kg', vendor_price=Decimal('95.00'))
    return vendor


@pytest.fixture
def vendor_b(db):
    """Secondary kitchen."""
    vendor = Vendor.objects.create(name='East Side Kitchen')
    VendorItem.objects.create(vendor=vendor, name='Rice', uom='kg', vendor_price=Decimal('42.00'))
    return vendor


@pytest.fixture
def vendor_c(db):
    """Kitchen not assigned to the franchise."""
    return Vendor.objects.create(name='Far Away Kitchen')


@pytest.fixture
def franchise(db, vendor_a, vendor_b):
    return Franchise.objects.create(
        name='Banjara Hills Outlet',
        vendor_1=vendor_a,
        vendor_2=vendor_b,
    )


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def franchise_user(db, franchise):
    return User.objects.create_user(
        email='outlet@example.com',
        password='TestPass123!',
        display_name='Outlet Owner',
        role=Role.FRANCHISE,
        franchise=franchise,
    )


@pytest.fixture
def franchise_staff_user(db, franchise):
    return User.objects.create_user(
        email='cashier@example.com',
        password='TestPass123!',
        display_name='Cashier',
        role=Role.FRANCHISE_STAFF,
        franchise=franchise,
        employee_id='EMP-F07',
    )


@pytest.fixture
def kitchen_user(db, vendor_a):
    return User.objects.create_user(
        email='kitchen@example.com',
        password='TestPass123!',
        display_name='Kitchen Owner',
        role=Role.KITCHEN,
        vendor=vendor_a,
    )


@pytest.fixture
def kitchen_staff_user(db, vendor_a):
    return User.objects.create_user(
        email='cook@example.com',
        password='TestPass123!',
        display_name='Cook',
        role=Role.KITCHEN_STAFF,
        vendor=vendor_a,
    )


@pytest.fixture
def other_kitchen_user(db, vendor_c):
    return User.objects.create_user(
        email='farkitchen@example.com',
        password='TestPass123!',
        display_name='Far Kitchen',
        role=Role.KITCHEN,
        vendor=vendor_c,
    )


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        display_name='Admin',
        role=Role.ADMIN,
    )


@pytest.fixture
def auditor_user(db):
    return User.objects.create_user(
        email='auditor@example.com',
        password='TestPass123!',
        display_name='Auditor',
        role=Role.AUDITOR,
    )


# =============================================================================
# Authenticated clients
# =============================================================================

@pytest.fixture
def franchise_client(franchise_user):
    """Return API client authenticated as the franchise owner."""
    return client_for(franchise_user)


@pytest.fixture
def kitchen_client(kitchen_user):
    """Return API client authenticated as the primary kitchen owner."""
    return client_for(kitchen_user)


@pytest.fixture
def other_kitchen_client(other_kitchen_user):
    return client_for(other_kitchen_user)


@pytest.fixture
def admin_client(admin_user):
    return client_for(admin_user)


@pytest.fixture
def auditor_client(auditor_user):
    return client_for(auditor_user)


# =============================================================================
# Claims
# =============================================================================

@pytest.fixture
def franchise_claims(franchise_user):
    return claims_for(franchise_user)


@pytest.fixture
def kitchen_claims(kitchen_user):
    return claims_for(kitchen_user)


@pytest.fixture
def admin_claims(admin_user):
    return claims_for(admin_user)


@pytest.fixture
def make_claims():
    """Build claims for any user, as the API would decode them."""
    return claims_for
