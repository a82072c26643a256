"""
Domain-specific exceptions for orders app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class OrdersServiceError(Exception):
    """Base exception for all orders service errors."""
    pass


class InsufficientPermissionsError(OrdersServiceError):
    """Raised when the caller's role may not perform an order operation."""
    pass


class VendorMismatchError(OrdersServiceError):
    """Raised when the requested vendor is not assigned to the franchise."""
    pass


class VendorLookupError(OrdersServiceError):
    """Raised when vendor assignment or catalog data cannot be read."""
    pass


class AmountOutOfRangeError(OrdersServiceError):
    """Raised when a line or order total does not fit the money columns."""
    pass


class OrderNotFoundError(OrdersServiceError):
    """Raised when an order does not exist."""
    pass


class InvalidTransitionError(OrdersServiceError):
    """Raised when an order is not in the status a transition starts from."""

    def __init__(self, message, *, current_status=None, expected_status=None):
        super().__init__(message)
        self.current_status = current_status
        self.expected_status = expected_status


class DiscrepancyConflictError(OrdersServiceError):
    """Raised when receipt is attempted while discrepancies are unresolved."""

    def __init__(self, discrepancies):
        super().__init__('Cannot accept order with unresolved discrepancies')
        self.discrepancies = list(discrepancies)

    @property
    def unresolved_count(self):
        return len(self.discrepancies)
