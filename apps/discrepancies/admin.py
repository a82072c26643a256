from django.contrib import admin
from apps.discrepancies.models import Discrepancy


@admin.register(Discrepancy)
class DiscrepancyAdmin(admin.ModelAdmin):
    """Admin interface for delivery discrepancies."""
    
    list_display = [
        'order_number',
        'franchise_name',
        'item_name',
        'ordered_qty',
        'received_qty',
        'difference',
        'resolved',
        'created_at',
    ]
    list_filter = ['resolved', 'created_at']
    search_fields = ['order_number', 'franchise_name', 'item_name']
    readonly_fields = [
        'order', 'order_number', 'franchise_id', 'franchise_name',
        'difference', 'reported_by', 'created_at', 'resolved_by', 'resolved_at',
    ]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    
    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('order')
