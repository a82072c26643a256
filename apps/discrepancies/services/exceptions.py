"""Domain-specific exceptions for discrepancies services."""


class DiscrepanciesServiceError(Exception):
    """Base exception for discrepancies services."""
    pass


class DiscrepancyNotFoundError(DiscrepanciesServiceError):
    """Raised when a discrepancy does not exist."""
    pass


class OrderNotFoundError(DiscrepanciesServiceError):
    """Raised when a discrepancy is reported against an unknown order."""
    pass


class InsufficientPermissionsError(DiscrepanciesServiceError):
    """Raised when the caller's role may not perform the action."""
    pass
