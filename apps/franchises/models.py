from django.db import models
import uuid


class Franchise(models.Model):
    """Buyer-side outlet with up to two assigned supplying vendors."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    location = models.CharField(max_length=300, blank=True)
    
    # Primary / secondary supplier
    vendor_1 = models.ForeignKey(
        'vendors.Vendor',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='primary_franchises'
    )
    vendor_2 = models.ForeignKey(
        'vendors.Vendor',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='secondary_franchises'
    )
    
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'franchises'
        ordering = ['name']
    
    def __str__(self):
        return self.name
    
    def assigned_vendor_ids(self):
        """Assigned vendor ids as strings, primary first, blanks dropped."""
        return [
            str(vendor_id)
            for vendor_id in (self.vendor_1_id, self.vendor_2_id)
            if vendor_id
        ]
