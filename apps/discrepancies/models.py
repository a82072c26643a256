from django.db import models
from decimal import Decimal
import uuid


class Discrepancy(models.Model):
    """Quantity/quality issue a franchise flagged against a delivered order."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        'orders.Order',
        on_delete=models.CASCADE,
        related_name='discrepancies'
    )
    order_number = models.CharField(max_length=32, blank=True)
    franchise_id = models.CharField(max_length=64, blank=True)
    franchise_name = models.CharField(max_length=200, blank=True)
    
    item_name = models.CharField(max_length=200)
    ordered_qty = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    received_qty = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    difference = models.DecimalField(max_digits=12, decimal_places=3, default=Decimal('0'))
    uom = models.CharField(max_length=20, blank=True)
    notes = models.TextField(blank=True)
    
    reported_by = models.CharField(max_length=64)
    created_at = models.DateTimeField(auto_now_add=True)
    
    # Resolution
    resolved = models.BooleanField(default=False)
    resolved_by = models.CharField(max_length=64, blank=True)
    resolved_at = models.DateTimeField(null=True, blank=True)
    resolution_notes = models.TextField(blank=True)
    
    class Meta:
        db_table = 'supply_discrepancies'
        indexes = [
            models.Index(fields=['order', 'resolved'], name='discrepancy_order_open_idx'),
            models.Index(fields=['franchise_id', 'created_at'], name='discrepancy_franchise_idx'),
        ]
        ordering = ['-created_at']
        verbose_name_plural = 'discrepancies'
    
    def __str__(self):
        state = 'resolved' if self.resolved else 'open'
        return f"{self.order_number} / {self.item_name} ({state})"
