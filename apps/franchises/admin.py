from django.contrib import admin
from apps.franchises.models import Franchise


@admin.register(Franchise)
class FranchiseAdmin(admin.ModelAdmin):
    """Admin interface for franchise outlets and their vendor assignment."""
    
    list_display = ['name', 'location', 'vendor_1', 'vendor_2', 'created_at']
    search_fields = ['name', 'location']
    readonly_fields = ['created_at', 'updated_at']
    
    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'location')
        }),
        ('Vendor Assignment', {
            'fields': ('vendor_1', 'vendor_2'),
            'description': 'Primary vendor is used when an order names none.',
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
    
    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('vendor_1', 'vendor_2')
