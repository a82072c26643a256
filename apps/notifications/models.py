from django.db import models
import uuid


class NotificationType(models.TextChoices):
    ORDER_NEW = 'ORDER_NEW', 'New order'
    ORDER_STATUS = 'ORDER_STATUS', 'Order status'
    DISCREPANCY_NEW = 'DISCREPANCY_NEW', 'Discrepancy reported'
    DISCREPANCY_RESOLVED = 'DISCREPANCY_RESOLVED', 'Discrepancy resolved'


class Notification(models.Model):
    """In-app message for one recipient."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user_id = models.CharField(max_length=64)
    type = models.CharField(max_length=30, choices=NotificationType.choices)
    title = models.CharField(max_length=200)
    message = models.TextField(blank=True)
    link = models.CharField(max_length=300, blank=True)
    reference_id = models.CharField(max_length=64, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'supply_notifications'
        indexes = [
            models.Index(fields=['user_id', 'is_read', 'created_at'], name='notification_inbox_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.type} -> {self.user_id}: {self.title}"
