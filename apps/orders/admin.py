from django.contrib import admin
from django.utils.html import format_html

from apps.orders.models import Order, OrderLine, OrderStatus


STATUS_COLOURS = {
    OrderStatus.PLACED: '#E5C49A',
    OrderStatus.ACCEPTED: '#A47449',
    OrderStatus.DISPATCHED: '#5C7AB8',
    OrderStatus.RECEIVED: '#6B8E5E',
}


class OrderLineInline(admin.TabularInline):
    """Read-only order lines; they never change after creation."""
    model = OrderLine
    extra = 0
    can_delete = False
    fields = [
        'item_name', 'ordered_qty', 'uom',
        'unit_price', 'line_total', 'vendor_price', 'vendor_cost_line'
    ]
    readonly_fields = fields
    
    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin interface for purchase orders."""
    
    list_display = [
        'order_number',
        'franchise_name',
        'vendor_name',
        'status_badge',
        'total_amount',
        'total_vendor_cost',
        'created_at',
    ]
    list_filter = ['status', 'created_at', 'received_at']
    search_fields = ['order_number', 'franchise_name', 'vendor_name', 'created_by_name']
    readonly_fields = [
        'order_number', 'franchise_id', 'franchise_name', 'vendor_id', 'vendor_name',
        'status', 'total_amount', 'total_vendor_cost',
        'created_at', 'created_by', 'created_by_name', 'created_by_role', 'created_by_employee_id',
        'accepted_at', 'accepted_by', 'accepted_by_name',
        'dispatched_at', 'dispatched_by', 'dispatched_by_name', 'dispatch_photos', 'dispatch_notes',
        'received_at', 'received_by', 'received_by_name', 'receive_photos', 'received_items',
        'updated_at',
    ]
    inlines = [OrderLineInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    
    fieldsets = (
        ('Order', {
            'fields': ('order_number', 'status', 'franchise_id', 'franchise_name', 'vendor_id', 'vendor_name')
        }),
        ('Totals', {
            'fields': ('total_amount', 'total_vendor_cost')
        }),
        ('Created', {
            'fields': ('created_at', 'created_by', 'created_by_name', 'created_by_role', 'created_by_employee_id'),
            'classes': ('collapse',)
        }),
        ('Accepted', {
            'fields': ('accepted_at', 'accepted_by', 'accepted_by_name'),
            'classes': ('collapse',)
        }),
        ('Dispatched', {
            'fields': ('dispatched_at', 'dispatched_by', 'dispatched_by_name', 'dispatch_photos', 'dispatch_notes'),
            'classes': ('collapse',)
        }),
        ('Received', {
            'fields': ('received_at', 'received_by', 'received_by_name', 'receive_photos', 'received_items'),
            'classes': ('collapse',)
        }),
    )
    
    def status_badge(self, obj):
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            STATUS_COLOURS.get(obj.status, '#999'),
            obj.get_status_display(),
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'
