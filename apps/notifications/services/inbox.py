"""
Notification inbox service.

Read-side operations for a recipient's notifications. All queries are
scoped to the caller's own user id.
"""

from django.core.exceptions import ValidationError

from apps.notifications.models import Notification

from .exceptions import NotificationNotFoundError

DEFAULT_LIMIT = 20


def list_notifications(*, claims, limit=DEFAULT_LIMIT, unread_only=False):
    """
    Newest notifications for the caller.

    Returns:
        dict with notifications, unreadCount (within the page) and total
    """
    queryset = Notification.objects.filter(user_id=claims.user_id)
    if unread_only:
        queryset = queryset.filter(is_read=False)

    notifications = list(queryset.order_by('-created_at')[:limit])
    return {
        'notifications': notifications,
        'unreadCount': sum(1 for n in notifications if not n.is_read),
        'total': len(notifications),
    }


def _get_own_notification(claims, notification_id):
    try:
        return Notification.objects.get(id=notification_id, user_id=claims.user_id)
    except (Notification.DoesNotExist, ValidationError):
        raise NotificationNotFoundError('Notification not found')


def mark_as_read(*, claims, notification_id) -> Notification:
    """
    Raises:
        NotificationNotFoundError: If the notification is missing or not the caller's
    """
    notification = _get_own_notification(claims, notification_id)
    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=['is_read'])
    return notification


def mark_all_as_read(*, claims) -> int:
    return Notification.objects.filter(
        user_id=claims.user_id,
        is_read=False
    ).update(is_read=True)


def delete_notification(*, claims, notification_id) -> None:
    notification = _get_own_notification(claims, notification_id)
    notification.delete()
