from decimal import Decimal

from rest_framework import serializers

from .models import Order, OrderLine


# =============================================================================
# INPUT
# =============================================================================

class OrderItemInputSerializer(serializers.Serializer):
    """One requested item; missing quantity or price counts as zero."""
    
    item_id = serializers.CharField(required=False, allow_blank=True, default='')
    item_name = serializers.CharField(required=False, allow_blank=True, default='')
    quantity = serializers.DecimalField(
        max_digits=12,
        decimal_places=3,
        min_value=Decimal('0'),
        required=False,
        allow_null=True
    )
    uom = serializers.CharField(required=False, allow_blank=True, default='')
    unit_price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0'),
        required=False,
        allow_null=True
    )


class OrderCreateSerializer(serializers.Serializer):
    """Serializer for placing an order."""
    
    vendor_id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    items = OrderItemInputSerializer(many=True, required=False)


class OrderDispatchSerializer(serializers.Serializer):
    
    dispatch_photos = serializers.ListField(
        child=serializers.CharField(),
        required=False,
        default=list
    )
    dispatch_notes = serializers.CharField(required=False, allow_blank=True, default='')


class OrderReceiveSerializer(serializers.Serializer):
    """Receipt confirmation; receivedItems is stored as sent."""
    
    receive_photos = serializers.ListField(
        child=serializers.CharField(),
        required=False,
        default=list
    )
    receivedItems = serializers.JSONField(
        source='received_items',
        required=False,
        allow_null=True
    )


class ReceivedItemsQuerySerializer(serializers.Serializer):
    
    startDate = serializers.DateField(required=False)
    endDate = serializers.DateField(required=False)
    franchiseId = serializers.CharField(required=False, allow_blank=True)


# =============================================================================
# OUTPUT
# =============================================================================

class OrderLineSerializer(serializers.ModelSerializer):
    
    class Meta:
        model = OrderLine
        fields = [
            'id',
            'item_id',
            'item_name',
            'ordered_qty',
            'uom',
            'unit_price',
            'vendor_price',
            'line_total',
            'vendor_cost_line',
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Order with its lines under ``items``."""
    
    items = OrderLineSerializer(source='lines', many=True, read_only=True)
    
    class Meta:
        model = Order
        fields = [
            'id',
            'order_number',
            'franchise_id',
            'franchise_name',
            'vendor_id',
            'vendor_name',
            'status',
            'total_amount',
            'total_vendor_cost',
            'items',
            'created_at',
            'created_by',
            'created_by_name',
            'created_by_role',
            'created_by_employee_id',
            'accepted_at',
            'accepted_by',
            'accepted_by_name',
            'dispatched_at',
            'dispatched_by',
            'dispatched_by_name',
            'dispatch_photos',
            'dispatch_notes',
            'received_at',
            'received_by',
            'received_by_name',
            'receive_photos',
            'received_items',
            'updated_at',
        ]
        read_only_fields = fields


class ReceivedItemSerializer(serializers.Serializer):
    """Flattened order line from the received-items report."""
    
    id = serializers.CharField()
    order_id = serializers.CharField()
    item_id = serializers.CharField()
    item_name = serializers.CharField()
    ordered_qty = serializers.DecimalField(max_digits=12, decimal_places=3)
    uom = serializers.CharField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    vendor_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2)
    vendor_cost_line = serializers.DecimalField(max_digits=12, decimal_places=2)
    order_number = serializers.CharField()
    franchise_name = serializers.CharField()
    received_at = serializers.DateTimeField()
