from django.contrib import admin
from apps.vendors.models import Vendor, VendorItem


class VendorItemInline(admin.TabularInline):
    """Inline admin for catalog items."""
    model = VendorItem
    extra = 0
    fields = ['name', 'uom', 'category', 'vendor_price', 'franchise_price']


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    """Admin interface for supplying kitchens."""
    
    list_display = ['name', 'owner_name', 'location', 'status', 'item_count', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['name', 'owner_name', 'location', 'email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [VendorItemInline]
    ordering = ['name']
    
    def item_count(self, obj):
        return obj.items.count()
    item_count.short_description = 'Items'


@admin.register(VendorItem)
class VendorItemAdmin(admin.ModelAdmin):
    
    list_display = ['name', 'vendor', 'uom', 'vendor_price', 'franchise_price']
    list_filter = ['vendor', 'category']
    search_fields = ['name', 'vendor__name']
    
    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('vendor')
