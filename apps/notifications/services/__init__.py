"""
Notifications app services layer.

The dispatcher writes notifications on behalf of other apps; the inbox
functions serve them back to their recipients.
"""

from .exceptions import (
    NotificationsServiceError,
    NotificationNotFoundError,
)

from .dispatcher import NotificationDispatcher

from .inbox import (
    list_notifications,
    mark_as_read,
    mark_all_as_read,
    delete_notification,
)


__all__ = [
    # Exceptions
    'NotificationsServiceError',
    'NotificationNotFoundError',

    # Dispatch
    'NotificationDispatcher',

    # Inbox
    'list_notifications',
    'mark_as_read',
    'mark_all_as_read',
    'delete_notification',
]
