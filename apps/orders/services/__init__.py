"""
Orders app services layer.

All business logic for order creation, costing and status transitions
lives here; views only translate HTTP to service calls.
"""

from .exceptions import (
    OrdersServiceError,
    InsufficientPermissionsError,
    VendorMismatchError,
    VendorLookupError,
    AmountOutOfRangeError,
    OrderNotFoundError,
    InvalidTransitionError,
    DiscrepancyConflictError,
)

from .cost_calculation import (
    CatalogEntry,
    CostedLine,
    CostedOrder,
    amounts_in_range,
    compute_lines,
    find_vendor_price,
)

from .vendor_resolution import (
    VendorAssignment,
    VendorCatalog,
    resolve_vendor_for_order,
    load_vendor_catalog,
)

from .lifecycle import (
    OrderLifecycleService,
    generate_order_number,
)

from .reporting import received_items_report


__all__ = [
    # Exceptions
    'OrdersServiceError',
    'InsufficientPermissionsError',
    'VendorMismatchError',
    'VendorLookupError',
    'AmountOutOfRangeError',
    'OrderNotFoundError',
    'InvalidTransitionError',
    'DiscrepancyConflictError',

    # Costing
    'CatalogEntry',
    'CostedLine',
    'CostedOrder',
    'amounts_in_range',
    'compute_lines',
    'find_vendor_price',

    # Vendor resolution
    'VendorAssignment',
    'VendorCatalog',
    'resolve_vendor_for_order',
    'load_vendor_catalog',

    # Lifecycle
    'OrderLifecycleService',
    'generate_order_number',

    # Reporting
    'received_items_report',
]
