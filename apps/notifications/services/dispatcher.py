"""
Notification dispatch.

Notifications are a side channel of the order lifecycle: a failed write is
logged and dropped, never raised to the operation that triggered it. The
``*_on_commit`` variants defer delivery until the surrounding transaction
has committed, so a rolled-back transition never notifies anyone and a
notification failure never rolls a transition back.
"""

import logging
from functools import partial
from typing import Iterable

from django.db import transaction

from apps.notifications.models import Notification

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Best-effort writer of in-app notifications."""

    def notify(self, user_id, type, title, message, link='', reference_id=''):
        """
        Store one notification. Never raises.

        Returns:
            The created Notification, or None if delivery failed
        """
        if not user_id:
            return None
        try:
            notification = Notification.objects.create(
                user_id=str(user_id),
                type=type,
                title=title,
                message=message,
                link=link or '',
                reference_id=str(reference_id or ''),
            )
        except Exception:
            logger.exception(
                "Failed to create %s notification for user %s (ref %s)",
                type, user_id, reference_id,
            )
            return None

        logger.debug("Notification created: %s", notification.id)
        return notification

    def notify_many(self, user_ids: Iterable, type, title, message, link='', reference_id=''):
        """Fan out one message; each recipient succeeds or fails on its own."""
        return [
            self.notify(user_id, type, title, message, link, reference_id)
            for user_id in user_ids
        ]

    def notify_on_commit(self, user_id, type, title, message, link='', reference_id=''):
        transaction.on_commit(
            partial(self.notify, user_id, type, title, message, link, reference_id)
        )

    def notify_many_on_commit(self, user_ids: Iterable, type, title, message, link='', reference_id=''):
        transaction.on_commit(
            partial(self.notify_many, list(user_ids), type, title, message, link, reference_id)
        )
