"""Domain-specific exceptions for notifications services."""


class NotificationsServiceError(Exception):
    """Base exception for notifications services."""
    pass


class NotificationNotFoundError(NotificationsServiceError):
    """Raised when a notification does not exist for the caller."""
    pass
