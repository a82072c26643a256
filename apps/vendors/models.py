from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class VendorStatus(models.TextChoices):
    ACTIVE = 'ACTIVE', 'Active'
    INACTIVE = 'INACTIVE', 'Inactive'


class Vendor(models.Model):
    """Supplying kitchen / vendor that fulfils franchise orders."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    owner_name = models.CharField(max_length=200, blank=True)
    location = models.CharField(max_length=300, blank=True)
    phone = models.CharField(max_length=30, blank=True)
    email = models.EmailField(blank=True)
    status = models.CharField(
        max_length=10,
        choices=VendorStatus.choices,
        default=VendorStatus.ACTIVE
    )
    
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'vendors'
        ordering = ['name']
    
    def __str__(self):
        return self.name


class VendorItem(models.Model):
    """Catalog entry: what an item costs the vendor and what franchises pay."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vendor = models.ForeignKey(
        Vendor,
        on_delete=models.CASCADE,
        related_name='items'
    )
    name = models.CharField(max_length=200)
    uom = models.CharField(max_length=20, blank=True)
    category = models.CharField(max_length=50, blank=True)
    
    # Vendor cost basis (never shown to franchises)
    vendor_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    franchise_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    
    created_at = models.DateTimeField(auto_now_add=True)
    
    class Meta:
        db_table = 'vendor_items'
        indexes = [
            models.Index(fields=['vendor', 'name'], name='vendor_item_name_idx'),
        ]
        ordering = ['created_at']
    
    def __str__(self):
        return f"{self.name} ({self.vendor.name})"
