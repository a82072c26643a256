import pytest

from apps.notifications.models import Notification, NotificationType


@pytest.fixture
def make_notification(db):
    """Factory for notifications addressed to a user."""

    def _make(user, title='Order Accepted', is_read=False, **fields):
        fields.setdefault('type', NotificationType.ORDER_STATUS)
        return Notification.objects.create(
            user_id=str(user.id),
            title=title,
            is_read=is_read,
            **fields
        )

    return _make
