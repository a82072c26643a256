"""
Vendor resolution service.

Decides which vendor supplies a new order and loads that vendor's catalog
so the order can be costed from both sides.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError

from apps.franchises.models import Franchise
from apps.vendors.models import Vendor

from .cost_calculation import CatalogEntry
from .exceptions import VendorLookupError, VendorMismatchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VendorAssignment:
    vendor_id: str
    franchise_name: str = ''


@dataclass
class VendorCatalog:
    name: str = ''
    items: List[CatalogEntry] = field(default_factory=list)


def _get_franchise(franchise_id: str) -> Optional[Franchise]:
    if not franchise_id:
        return None
    try:
        return Franchise.objects.get(id=franchise_id)
    except (Franchise.DoesNotExist, ValidationError):
        return None


def resolve_vendor_for_order(
    *,
    franchise_id: str,
    requested_vendor_id: Optional[str] = None
) -> VendorAssignment:
    """
    Resolve the supplying vendor for a franchise's new order.

    Without a request the primary vendor is used, falling back to the
    secondary. A requested vendor must be one of the two assigned ones.

    Args:
        franchise_id: id of the ordering franchise
        requested_vendor_id: vendor chosen by the buyer, if any

    Returns:
        VendorAssignment (vendor_id is '' when nothing is assigned)

    Raises:
        VendorMismatchError: If the requested vendor is not assigned
        VendorLookupError: If the franchise record cannot be read
    """
    try:
        franchise = _get_franchise(franchise_id)
    except DatabaseError as e:
        logger.exception("Could not read vendor assignment for franchise %s", franchise_id)
        raise VendorLookupError('Failed to fetch vendor information') from e

    assigned = franchise.assigned_vendor_ids() if franchise else []
    franchise_name = franchise.name if franchise else ''

    requested = str(requested_vendor_id).strip() if requested_vendor_id else ''
    if not requested:
        return VendorAssignment(
            vendor_id=assigned[0] if assigned else '',
            franchise_name=franchise_name,
        )

    if requested not in assigned:
        raise VendorMismatchError('Selected vendor is not assigned to this franchise')

    return VendorAssignment(vendor_id=requested, franchise_name=franchise_name)


def load_vendor_catalog(*, vendor_id: str) -> VendorCatalog:
    """
    Load vendor display name and catalog for costing.

    A missing vendor yields an empty catalog so the order can still be placed.

    Raises:
        VendorLookupError: If the store fails while reading the vendor
    """
    if not vendor_id:
        return VendorCatalog()

    try:
        vendor = Vendor.objects.prefetch_related('items').get(id=vendor_id)
    except (Vendor.DoesNotExist, ValidationError):
        logger.warning("Vendor %s not found, costing order without catalog", vendor_id)
        return VendorCatalog()
    except DatabaseError as e:
        logger.exception("Could not read catalog for vendor %s", vendor_id)
        raise VendorLookupError('Failed to fetch vendor information') from e

    return VendorCatalog(
        name=vendor.name,
        items=[
            CatalogEntry(name=item.name, vendor_price=item.vendor_price)
            for item in vendor.items.all()
        ],
    )
