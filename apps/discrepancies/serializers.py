from decimal import Decimal

from rest_framework import serializers

from .models import Discrepancy


class DiscrepancySerializer(serializers.ModelSerializer):
    
    order_id = serializers.UUIDField(read_only=True)
    
    class Meta:
        model = Discrepancy
        fields = [
            'id',
            'order_id',
            'order_number',
            'franchise_id',
            'franchise_name',
            'item_name',
            'ordered_qty',
            'received_qty',
            'difference',
            'uom',
            'notes',
            'reported_by',
            'created_at',
            'resolved',
            'resolved_by',
            'resolved_at',
            'resolution_notes',
        ]
        read_only_fields = fields


class DiscrepancyCreateSerializer(serializers.Serializer):
    """Serializer for reporting a discrepancy against an order."""
    
    order_id = serializers.UUIDField()
    item_name = serializers.CharField(max_length=200)
    ordered_qty = serializers.DecimalField(
        max_digits=12,
        decimal_places=3,
        min_value=Decimal('0'),
        required=False,
        default=Decimal('0')
    )
    received_qty = serializers.DecimalField(
        max_digits=12,
        decimal_places=3,
        min_value=Decimal('0'),
        required=False,
        default=Decimal('0')
    )
    uom = serializers.CharField(required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class DiscrepancyResolveSerializer(serializers.Serializer):
    
    resolution_notes = serializers.CharField(required=False, allow_blank=True, default='')
