"""
Discrepancies app services layer.

The gate is consulted by the order lifecycle before receipt; the workflow
service owns reporting and resolution.
"""

from .exceptions import (
    DiscrepanciesServiceError,
    DiscrepancyNotFoundError,
    OrderNotFoundError,
    InsufficientPermissionsError,
)

from .gate import has_unresolved_discrepancies

from .workflow import DiscrepancyService


__all__ = [
    # Exceptions
    'DiscrepanciesServiceError',
    'DiscrepancyNotFoundError',
    'OrderNotFoundError',
    'InsufficientPermissionsError',

    # Gate
    'has_unresolved_discrepancies',

    # Workflow
    'DiscrepancyService',
]
