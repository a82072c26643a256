from django.db import models
from decimal import Decimal
import uuid


class OrderStatus(models.TextChoices):
    PLACED = 'PLACED', 'Placed'
    ACCEPTED = 'ACCEPTED', 'Accepted'
    DISPATCHED = 'DISPATCHED', 'Dispatched'
    RECEIVED = 'RECEIVED', 'Received'


# Target status -> the only status it may be entered from
PRIOR_STATUS = {
    OrderStatus.ACCEPTED: OrderStatus.PLACED,
    OrderStatus.DISPATCHED: OrderStatus.ACCEPTED,
    OrderStatus.RECEIVED: OrderStatus.DISPATCHED,
}


class Order(models.Model):
    """
    Purchase order placed by a franchise against one supplying vendor.

    Franchise and vendor are snapshots taken at creation time; they are
    plain columns so that later reassignment of a franchise's vendors (or
    deletion of a vendor) never rewrites order history.
    """
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.CharField(max_length=32, unique=True, editable=False)
    
    # Buyer snapshot
    franchise_id = models.CharField(max_length=64, blank=True)
    franchise_name = models.CharField(max_length=200, blank=True)
    
    # Supplier snapshot
    vendor_id = models.CharField(max_length=64, blank=True)
    vendor_name = models.CharField(max_length=200, blank=True)
    
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PLACED
    )
    
    # Dual cost views
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    total_vendor_cost = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    
    # Creation
    created_at = models.DateTimeField(auto_now_add=True)
    created_by = models.CharField(max_length=64)
    created_by_name = models.CharField(max_length=200, blank=True)
    created_by_role = models.CharField(max_length=20, blank=True)
    created_by_employee_id = models.CharField(max_length=50, blank=True)
    
    # Acceptance
    accepted_at = models.DateTimeField(null=True, blank=True)
    accepted_by = models.CharField(max_length=64, blank=True)
    accepted_by_name = models.CharField(max_length=200, blank=True)
    
    # Dispatch
    dispatched_at = models.DateTimeField(null=True, blank=True)
    dispatched_by = models.CharField(max_length=64, blank=True)
    dispatched_by_name = models.CharField(max_length=200, blank=True)
    dispatch_photos = models.JSONField(default=list, blank=True)
    dispatch_notes = models.TextField(blank=True)
    
    # Receipt
    received_at = models.DateTimeField(null=True, blank=True)
    received_by = models.CharField(max_length=64, blank=True)
    received_by_name = models.CharField(max_length=200, blank=True)
    receive_photos = models.JSONField(default=list, blank=True)
    received_items = models.JSONField(null=True, blank=True)
    
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'supply_orders'
        indexes = [
            models.Index(fields=['franchise_id', 'created_at'], name='order_franchise_created_idx'),
            models.Index(fields=['vendor_id', 'created_at'], name='order_vendor_created_idx'),
            models.Index(fields=['status', 'received_at'], name='order_status_received_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.order_number} - {self.franchise_name or self.franchise_id} ({self.status})"


class OrderLine(models.Model):
    """One requested item with both the buyer price and the vendor cost."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='lines'
    )
    item_id = models.CharField(max_length=64, blank=True)
    item_name = models.CharField(max_length=200, blank=True)
    ordered_qty = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('0')
    )
    uom = models.CharField(max_length=20, blank=True)
    
    # Buyer price (caller supplied) and vendor price (catalog lookup)
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    vendor_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    line_total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    vendor_cost_line = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    
    position = models.PositiveIntegerField(default=0)
    
    class Meta:
        db_table = 'supply_order_items'
        ordering = ['position']
    
    def __str__(self):
        return f"{self.item_name} x {self.ordered_qty} {self.uom}".strip()
